"""Async HTTP client for the Block Palettes website.

Wraps the JSON endpoints under ``/api/palettes/`` and the HTML palette
pages. Every method issues fresh requests; the client only holds the
reusable ``httpx.AsyncClient`` and the base address.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from blockpalettes_client.core.config import Settings, get_settings, normalize_base_url
from blockpalettes_client.lib.blockpalettes.errors import (
    ApiError,
    MalformedResponseError,
    RequestTimeoutError,
    TransportError,
)
from blockpalettes_client.lib.blockpalettes.filtering import merge_block_results
from blockpalettes_client.lib.blockpalettes.models import (
    BlockSearchResponse,
    PaletteDetail,
    PaletteListResult,
    PalettePageExtract,
    PaletteSummary,
    PopularBlock,
    PopularBlocksResponse,
    SimilarPalettesResponse,
    SinglePaletteResponse,
    SortOrder,
)
from blockpalettes_client.lib.blockpalettes.scraper import PalettePageScraper

SEARCH_BLOCKS_PATH = "/api/palettes/search-block.php"
POPULAR_BLOCKS_PATH = "/api/palettes/popular-blocks.php"
ALL_PALETTES_PATH = "/api/palettes/all_palettes.php"
SINGLE_PALETTE_PATH = "/api/palettes/single_palette.php"
SIMILAR_PALETTES_PATH = "/api/palettes/similar_palettes.php"
PALETTE_PAGE_PATH = "/palette/{palette_id}"

DEFAULT_LIMIT = 20

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        msg = f"{name} must be a positive integer, got {value}"
        raise ValueError(msg)


class BlockPalettesClient:
    """Async client for the Block Palettes API and palette pages.

    Use as an async context manager, or call :meth:`close` when done::

        async with BlockPalettesClient() as client:
            popular = await client.popular_blocks()

    Args:
        http_client: Optional pre-configured ``httpx.AsyncClient``. When
            omitted, one is created from settings and closed by :meth:`close`;
            a caller-supplied client is left open.
        base_url: Override for the upstream base address; must be http(s).
        timeout: Override for the per-request timeout in seconds. Ignored
            when ``http_client`` is supplied (its own timeout applies).
        settings: Settings to read defaults from. Loaded from the
            environment when omitted.
        scraper: Page scraper used by :meth:`scrape_palette_page`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
        scraper: PalettePageScraper | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._base_url = normalize_base_url(base_url) if base_url is not None else settings.base_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.timeout,
            headers={"User-Agent": settings.user_agent},
        )
        self._scraper = scraper or PalettePageScraper()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> BlockPalettesClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # JSON endpoints
    # ------------------------------------------------------------------

    async def search_blocks(self, query: str) -> list[str]:
        """Search block names matching ``query``.

        Raises:
            ApiError: If the upstream reports the search failed.
        """
        response = await self._get_json(SEARCH_BLOCKS_PATH, BlockSearchResponse, {"query": query})
        if not response.success:
            raise ApiError("Search failed")
        return response.blocks

    async def popular_blocks(self) -> list[PopularBlock]:
        """Return the most used blocks with their palette counts.

        Raises:
            ApiError: If the upstream reports the request failed.
        """
        response = await self._get_json(POPULAR_BLOCKS_PATH, PopularBlocksResponse)
        if not response.success:
            raise ApiError("Popular blocks request failed")
        return response.blocks

    async def list_palettes(
        self,
        sort: SortOrder | str = SortOrder.RECENT,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        block: str | None = None,
    ) -> PaletteListResult:
        """Fetch one page of palettes, optionally filtered by a single block.

        The upstream response is returned as-is, including its ``success``
        flag.

        Args:
            sort: Sort order.
            page: 1-based page number.
            limit: Palettes per page.
            block: Optional block name the palettes must contain.
        """
        _require_positive("page", page)
        _require_positive("limit", limit)
        params: dict[str, Any] = {
            "sort": SortOrder(sort).value,
            "page": page,
            "limit": limit,
        }
        if block is not None:
            params["blocks"] = block
        return await self._get_json(ALL_PALETTES_PATH, PaletteListResult, params)

    async def get_palettes(
        self,
        blocks: Sequence[str],
        sort: SortOrder | str = SortOrder.RECENT,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
    ) -> PaletteListResult:
        """Fetch palettes that contain every block in ``blocks``.

        With no blocks this is a plain :meth:`list_palettes` call. Otherwise
        one request per block is issued concurrently, the palettes are
        concatenated in ``blocks`` order and filtered to those containing
        all requested blocks.

        ``total_results`` and ``total_pages`` of the returned result come
        from the first per-block response (in ``blocks`` order) reporting
        any results. They are not recomputed after filtering.

        Raises:
            BlockPalettesError: If any per-block request fails. Requests still
                in flight are cancelled and no partial result is returned.
        """
        if not blocks:
            return await self.list_palettes(sort, page, limit)

        sort = SortOrder(sort)
        _require_positive("page", page)
        _require_positive("limit", limit)
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.list_palettes(sort, page, limit, block=block)) for block in blocks]
        except ExceptionGroup as eg:
            # The first failure cancels the remaining requests.
            raise eg.exceptions[0]
        responses = [task.result() for task in tasks]
        result = merge_block_results(blocks, responses)
        logger.info(
            "Multi-block query {} returned {} palettes (upstream total {})",
            list(blocks),
            len(result.palettes or []),
            result.total_results,
        )
        return result

    async def get_palette_details(self, palette_id: int) -> PaletteDetail:
        """Fetch one palette including its creator's username.

        Raises:
            ApiError: If the palette does not exist.
        """
        response = await self._get_json(SINGLE_PALETTE_PATH, SinglePaletteResponse, {"id": palette_id})
        if not response.success:
            raise ApiError("Palette not found")
        if response.palette is None:
            msg = f"Missing palette in successful response for {SINGLE_PALETTE_PATH}"
            raise MalformedResponseError(msg)
        return response.palette

    async def get_similar_palettes(self, palette_id: int) -> list[PaletteSummary]:
        """Fetch palettes the site considers similar to ``palette_id``.

        Raises:
            ApiError: If the upstream reports no similar palettes could be found.
        """
        response = await self._get_json(SIMILAR_PALETTES_PATH, SimilarPalettesResponse, {"palette_id": palette_id})
        if not response.success:
            raise ApiError("Similar palettes not found")
        return response.palettes

    # ------------------------------------------------------------------
    # HTML pages
    # ------------------------------------------------------------------

    async def scrape_palette_page(self, palette_id: int) -> PalettePageExtract:
        """Scrape block names and similar palette ids from a palette page.

        Depends on the site's current markup; elements without usable data
        are skipped.
        """
        response = await self._get(PALETTE_PAGE_PATH.format(palette_id=palette_id))
        extract = self._scraper.extract(response.text)
        logger.debug(
            "Scraped palette {}: {} blocks, {} similar palettes",
            palette_id,
            len(extract.blocks),
            len(extract.similar_palette_ids),
        )
        return extract

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Issue a GET request, mapping httpx failures to TransportError."""
        url = f"{self._base_url}{path}"
        logger.debug("GET {} params={}", url, params)
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("Block Palettes request timed out for {}", path)
            raise RequestTimeoutError(f"Request timed out for {path}") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Block Palettes HTTP error: {} {} for {}",
                exc.response.status_code,
                exc.response.reason_phrase,
                path,
            )
            raise TransportError(
                f"HTTP {exc.response.status_code}: {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Block Palettes request failed: {}", exc)
            raise TransportError(f"Request failed: {exc}") from exc
        return response

    async def _get_json(
        self,
        path: str,
        model: type[ModelT],
        params: dict[str, Any] | None = None,
    ) -> ModelT:
        """GET ``path`` and validate the JSON body into ``model``."""
        response = await self._get(path, params)
        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Block Palettes returned non-JSON response for {}", path)
            raise MalformedResponseError(f"Invalid JSON response for {path}") from exc

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.error("Unexpected response shape for {}: {}", path, exc)
            raise MalformedResponseError(
                f"Unexpected response shape for {path}: {exc.error_count()} validation errors"
            ) from exc

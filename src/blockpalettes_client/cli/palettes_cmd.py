"""CLI commands for querying Block Palettes.

Every command prints its result as JSON on stdout and exits with code 1
when the client raises a BlockPalettesError.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

import typer
from loguru import logger

from blockpalettes_client.lib.blockpalettes import BlockPalettesClient, BlockPalettesError, SortOrder


def _run(action: Callable[[BlockPalettesClient], Awaitable[str]]) -> None:
    """Run ``action`` against a fresh client and echo its JSON output."""

    async def _impl() -> str:
        client = BlockPalettesClient()
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        output = asyncio.run(_impl())
    except BlockPalettesError as exc:
        logger.debug("Command failed: {!r}", exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(output)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2)


def search(
    query: Annotated[str, typer.Argument(help="Partial block name to search for")],
) -> None:
    """Search block names."""

    async def action(client: BlockPalettesClient) -> str:
        return _dumps(await client.search_blocks(query))

    _run(action)


def popular() -> None:
    """List the most used blocks."""

    async def action(client: BlockPalettesClient) -> str:
        blocks = await client.popular_blocks()
        return _dumps([block.model_dump(by_alias=True) for block in blocks])

    _run(action)


def palettes(
    block: Annotated[
        list[str] | None, typer.Option("--block", "-b", help="Required block (repeat for several)")
    ] = None,
    sort: Annotated[SortOrder, typer.Option("--sort", help="Sort order", case_sensitive=False)] = SortOrder.RECENT,
    page: Annotated[int, typer.Option("--page", min=1, help="Page number (1-based)")] = 1,
    limit: Annotated[int, typer.Option("--limit", min=1, help="Palettes per page")] = 20,
) -> None:
    """List palettes containing every given block."""

    async def action(client: BlockPalettesClient) -> str:
        result = await client.get_palettes(list(block or []), sort, page, limit)
        return result.model_dump_json(indent=2, by_alias=True)

    _run(action)


def show(
    palette_id: Annotated[int, typer.Argument(help="Palette id")],
) -> None:
    """Show a single palette with its creator."""

    async def action(client: BlockPalettesClient) -> str:
        detail = await client.get_palette_details(palette_id)
        return _dumps(detail.to_wire())

    _run(action)


def similar(
    palette_id: Annotated[int, typer.Argument(help="Reference palette id")],
) -> None:
    """List palettes similar to a palette."""

    async def action(client: BlockPalettesClient) -> str:
        found = await client.get_similar_palettes(palette_id)
        return _dumps([p.to_wire() for p in found])

    _run(action)


def scrape(
    palette_id: Annotated[int, typer.Argument(help="Palette id")],
) -> None:
    """Scrape blocks and similar palette ids from a palette page."""

    async def action(client: BlockPalettesClient) -> str:
        extract = await client.scrape_palette_page(palette_id)
        return extract.model_dump_json(indent=2)

    _run(action)

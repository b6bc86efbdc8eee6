"""Pydantic models for Block Palettes API responses.

Python attribute names are snake_case; wire names that differ (``blockOne``
through ``blockSix``, ``block``) are mapped with field aliases so payloads can
be validated and dumped back in the exact upstream shape.
"""

from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from blockpalettes_client.lib.blockpalettes.errors import InvalidDateFormatError

PALETTE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _coerce_null_to_str(v: Any) -> Any:
    """Coerce explicit JSON null to empty string."""
    return v if v is not None else ""


def _coerce_null_to_int(v: Any) -> Any:
    """Coerce explicit JSON null to 0."""
    return v if v is not None else 0


class SortOrder(StrEnum):
    """Sort orders accepted by the palette list endpoint."""

    RECENT = "recent"
    POPULAR = "popular"
    OLDEST = "oldest"
    TRENDING = "trending"


class _PaletteFields(BaseModel):
    """Fields shared by the summary and detail palette shapes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    user_id: int
    date: str
    likes: int = 0
    block_one: str = Field(alias="blockOne")
    block_two: str = Field(alias="blockTwo")
    block_three: str = Field(alias="blockThree")
    block_four: str = Field(alias="blockFour")
    block_five: str = Field(alias="blockFive")
    block_six: str = Field(alias="blockSix")
    hidden: bool = False
    featured: bool = False
    time_ago: str = ""

    @field_validator(
        "block_one", "block_two", "block_three", "block_four", "block_five", "block_six", "time_ago", mode="before"
    )
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        return _coerce_null_to_str(v)

    @field_validator("likes", mode="before")
    @classmethod
    def _coerce_likes(cls, v: Any) -> Any:
        return _coerce_null_to_int(v)

    @field_serializer("hidden", "featured")
    def _flag_to_int(self, v: bool) -> int:
        return int(v)

    @property
    def blocks(self) -> list[str]:
        """The six block names in slot order."""
        return [
            self.block_one,
            self.block_two,
            self.block_three,
            self.block_four,
            self.block_five,
            self.block_six,
        ]

    @property
    def block_set(self) -> frozenset[str]:
        """The palette's blocks as an order-independent set."""
        return frozenset(self.blocks)

    def contains_all_blocks(self, blocks: Iterable[str]) -> bool:
        """Check whether every name in ``blocks`` is one of this palette's blocks.

        The comparison is exact and case-sensitive. An empty ``blocks``
        iterable is trivially contained.
        """
        return self.block_set.issuperset(blocks)

    def parse_date(self) -> datetime:
        """Parse ``date`` into a naive datetime.

        Raises:
            InvalidDateFormatError: If ``date`` is not ``YYYY-MM-DD HH:MM:SS``.
        """
        try:
            return datetime.strptime(self.date, PALETTE_DATE_FORMAT)
        except ValueError as exc:
            raise InvalidDateFormatError(self.date) from exc

    def to_wire(self) -> dict[str, Any]:
        """Dump the palette in the upstream JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class PaletteSummary(_PaletteFields):
    """A palette as returned by the list and similar-palettes endpoints."""

    hash: str | None = None


class PaletteDetail(_PaletteFields):
    """A single palette including its creator's display name."""

    hash: str
    username: str


class PopularBlock(BaseModel):
    """A block together with the number of palettes that use it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="block")
    count: int


class PaletteListResult(BaseModel):
    """One page of palette list results.

    When produced by a multi-block query the totals are copied from the
    first upstream response that reported any results; they describe that
    single-block query, not the length of ``palettes``.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    total_results: int = 0
    total_pages: int = 0
    palettes: list[PaletteSummary] | None = None

    @field_validator("total_results", "total_pages", mode="before")
    @classmethod
    def _coerce_totals(cls, v: Any) -> Any:
        return _coerce_null_to_int(v)


class PalettePageExtract(BaseModel):
    """Data scraped from a palette's HTML page."""

    model_config = ConfigDict(frozen=True)

    blocks: list[str] = Field(default_factory=list)
    similar_palette_ids: list[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class BlockSearchResponse(BaseModel):
    """Envelope for ``/api/palettes/search-block.php``."""

    success: bool
    blocks: list[str] = Field(default_factory=list)


class PopularBlocksResponse(BaseModel):
    """Envelope for ``/api/palettes/popular-blocks.php``."""

    success: bool
    blocks: list[PopularBlock] = Field(default_factory=list)


class SinglePaletteResponse(BaseModel):
    """Envelope for ``/api/palettes/single_palette.php``."""

    success: bool
    palette: PaletteDetail | None = None


class SimilarPalettesResponse(BaseModel):
    """Envelope for ``/api/palettes/similar_palettes.php``."""

    success: bool
    palettes: list[PaletteSummary] = Field(default_factory=list)

    @field_validator("palettes", mode="before")
    @classmethod
    def _coerce_palettes(cls, v: Any) -> Any:
        return v if v is not None else []

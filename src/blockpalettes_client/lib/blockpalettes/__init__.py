"""Block Palettes library — typed API client and palette page scraper.

Public API:
    - BlockPalettesClient: Async client for every upstream endpoint
    - PalettePageScraper / extract_palette_page: HTML extraction for palette pages
    - merge_block_results / contains_all_blocks: Multi-block filtering
    - PaletteSummary, PaletteDetail, PopularBlock, PaletteListResult,
      PalettePageExtract, SortOrder: Response models
    - BlockPalettesError and subclasses: Error taxonomy
"""

from blockpalettes_client.lib.blockpalettes.client import BlockPalettesClient
from blockpalettes_client.lib.blockpalettes.errors import (
    ApiError,
    BlockPalettesError,
    InvalidDateFormatError,
    MalformedResponseError,
    RequestTimeoutError,
    SelectorCompileError,
    TransportError,
)
from blockpalettes_client.lib.blockpalettes.filtering import contains_all_blocks, merge_block_results
from blockpalettes_client.lib.blockpalettes.models import (
    PaletteDetail,
    PaletteListResult,
    PalettePageExtract,
    PaletteSummary,
    PopularBlock,
    SortOrder,
)
from blockpalettes_client.lib.blockpalettes.scraper import PalettePageScraper, extract_palette_page

__all__ = [
    "ApiError",
    "BlockPalettesClient",
    "BlockPalettesError",
    "InvalidDateFormatError",
    "MalformedResponseError",
    "PaletteDetail",
    "PaletteListResult",
    "PalettePageExtract",
    "PalettePageScraper",
    "PaletteSummary",
    "PopularBlock",
    "RequestTimeoutError",
    "SelectorCompileError",
    "SortOrder",
    "TransportError",
    "contains_all_blocks",
    "extract_palette_page",
    "merge_block_results",
]

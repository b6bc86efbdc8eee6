"""Client-side multi-block filtering for palette list results.

The upstream list endpoint accepts a single ``blocks`` filter per request,
so a query for several required blocks is answered by one request per
block. The responses are merged here: palettes are concatenated in request
order and only those containing every required block are kept.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from blockpalettes_client.lib.blockpalettes.models import PaletteListResult, PaletteSummary


def contains_all_blocks(palette: PaletteSummary, blocks: Iterable[str]) -> bool:
    """Return True when ``palette`` uses every block in ``blocks``.

    Args:
        palette: Palette to test.
        blocks: Required block names (exact, case-sensitive).

    Returns:
        Whether the palette's block set is a superset of ``blocks``.
    """
    return palette.contains_all_blocks(blocks)


def merge_block_results(blocks: Sequence[str], responses: Sequence[PaletteListResult]) -> PaletteListResult:
    """Merge per-block list responses into one filtered result.

    Palettes are concatenated in ``responses`` order without deduplication,
    then filtered to those containing all of ``blocks``. The totals are
    taken from the first response with a nonzero ``total_results`` and are
    not recomputed from the filtered palettes, so they may exceed
    ``len(result.palettes)``.

    Args:
        blocks: The required block names.
        responses: One list response per block, in the same order as ``blocks``.

    Returns:
        A synthesized, successful PaletteListResult.
    """
    total_results = 0
    total_pages = 0
    combined: list[PaletteSummary] = []

    for response in responses:
        if total_results == 0:
            total_results = response.total_results
            total_pages = response.total_pages
        if response.palettes:
            combined.extend(response.palettes)

    required = frozenset(blocks)
    filtered = [p for p in combined if contains_all_blocks(p, required)]
    logger.debug(
        "Merged {} responses: {} palettes collected, {} contain all of {}",
        len(responses),
        len(combined),
        len(filtered),
        sorted(required),
    )

    return PaletteListResult(
        success=True,
        total_results=total_results,
        total_pages=total_pages,
        palettes=filtered,
    )

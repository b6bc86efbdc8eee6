"""Unit tests for multi-block result merging."""

from blockpalettes_client.lib.blockpalettes.filtering import contains_all_blocks, merge_block_results
from blockpalettes_client.lib.blockpalettes.models import PaletteListResult, PaletteSummary


def _palette(palette_id: int, *blocks: str) -> PaletteSummary:
    slots = [*blocks, *[""] * (6 - len(blocks))]
    return PaletteSummary(
        id=palette_id,
        user_id=1,
        date="2023-01-01 00:00:00",
        block_one=slots[0],
        block_two=slots[1],
        block_three=slots[2],
        block_four=slots[3],
        block_five=slots[4],
        block_six=slots[5],
    )


def _page(total: int, pages: int, *palettes: PaletteSummary) -> PaletteListResult:
    return PaletteListResult(success=True, total_results=total, total_pages=pages, palettes=list(palettes))


class TestContainsAllBlocks:
    def test_delegates_to_block_set(self) -> None:
        palette = _palette(1, "stone", "dirt", "sand")
        assert contains_all_blocks(palette, {"stone", "dirt"})
        assert not contains_all_blocks(palette, {"stone", "glass"})


class TestMergeBlockResults:
    """Tests for merge_block_results()."""

    def test_keeps_only_palettes_with_every_block(self) -> None:
        both = _palette(1, "stone", "dirt", "sand")
        stone_only = _palette(2, "stone", "glass")
        dirt_only = _palette(3, "dirt", "oak_log")
        both_again = _palette(4, "dirt", "stone")

        result = merge_block_results(
            ["stone", "dirt"],
            [
                _page(40, 2, both, stone_only, both_again),
                _page(25, 1, dirt_only, both),
            ],
        )

        assert result.success is True
        assert [p.id for p in result.palettes] == [1, 4, 1]

    def test_duplicates_across_responses_are_kept(self) -> None:
        shared = _palette(7, "stone", "dirt")
        result = merge_block_results(["stone", "dirt"], [_page(1, 1, shared), _page(1, 1, shared)])
        assert [p.id for p in result.palettes] == [7, 7]

    def test_totals_come_from_first_response_not_filtered_count(self) -> None:
        result = merge_block_results(
            ["stone", "dirt"],
            [
                _page(120, 6, _palette(1, "stone", "dirt")),
                _page(80, 4, _palette(2, "dirt")),
            ],
        )
        assert result.total_results == 120
        assert result.total_pages == 6
        assert len(result.palettes) == 1

    def test_totals_skip_leading_zero_responses(self) -> None:
        result = merge_block_results(
            ["glass", "stone", "dirt"],
            [_page(0, 0), _page(55, 3, _palette(1, "stone")), _page(99, 5)],
        )
        assert result.total_results == 55
        assert result.total_pages == 3
        assert result.palettes == []

    def test_all_zero_totals(self) -> None:
        result = merge_block_results(["stone"], [PaletteListResult(success=True)])
        assert result.total_results == 0
        assert result.total_pages == 0
        assert result.palettes == []

    def test_responses_without_palettes_are_tolerated(self) -> None:
        result = merge_block_results(
            ["stone"],
            [PaletteListResult(success=True, total_results=3, total_pages=1, palettes=None)],
        )
        assert result.palettes == []
        assert result.total_results == 3

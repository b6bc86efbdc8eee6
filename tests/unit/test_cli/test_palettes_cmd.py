"""Unit tests for the palette CLI commands."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from blockpalettes_client.cli.app import app
from blockpalettes_client.lib.blockpalettes.errors import ApiError, TransportError
from blockpalettes_client.lib.blockpalettes.models import (
    PaletteDetail,
    PaletteListResult,
    PalettePageExtract,
    PaletteSummary,
    PopularBlock,
    SortOrder,
)

runner = CliRunner()

_CLIENT_PATH = "blockpalettes_client.cli.palettes_cmd.BlockPalettesClient"


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCKPALETTES_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("BLOCKPALETTES_LOG_DIR", raising=False)


@pytest.fixture
def mock_client():
    with patch(_CLIENT_PATH) as mock_cls:
        client = AsyncMock()
        mock_cls.return_value = client
        yield client


class TestSearchCommand:
    def test_prints_block_names(self, mock_client: AsyncMock) -> None:
        mock_client.search_blocks.return_value = ["stone", "stone_bricks"]

        result = runner.invoke(app, ["search", "stone"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == ["stone", "stone_bricks"]
        mock_client.search_blocks.assert_awaited_once_with("stone")
        mock_client.close.assert_awaited_once()

    def test_api_error_exits_non_zero(self, mock_client: AsyncMock) -> None:
        mock_client.search_blocks.side_effect = ApiError("Search failed")

        result = runner.invoke(app, ["search", "zzz"])

        assert result.exit_code == 1
        assert "Error: API error: Search failed" in result.output
        mock_client.close.assert_awaited_once()


class TestPopularCommand:
    def test_prints_wire_shaped_blocks(self, mock_client: AsyncMock) -> None:
        mock_client.popular_blocks.return_value = [PopularBlock(name="stone", count=3)]

        result = runner.invoke(app, ["popular"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"block": "stone", "count": 3}]


class TestPalettesCommand:
    def test_passes_blocks_and_paging(self, mock_client: AsyncMock, palette_wire: dict) -> None:
        mock_client.get_palettes.return_value = PaletteListResult(
            success=True,
            total_results=50,
            total_pages=3,
            palettes=[PaletteSummary.model_validate(palette_wire)],
        )

        result = runner.invoke(
            app,
            ["palettes", "--block", "stone", "-b", "dirt", "--sort", "popular", "--page", "2", "--limit", "5"],
        )

        assert result.exit_code == 0, result.output
        mock_client.get_palettes.assert_awaited_once_with(["stone", "dirt"], SortOrder.POPULAR, 2, 5)
        body = json.loads(result.output)
        assert body["total_results"] == 50
        assert body["palettes"][0]["blockOne"] == "stone"

    def test_without_blocks_sends_empty_list(self, mock_client: AsyncMock) -> None:
        mock_client.get_palettes.return_value = PaletteListResult(success=True)

        result = runner.invoke(app, ["palettes"])

        assert result.exit_code == 0, result.output
        mock_client.get_palettes.assert_awaited_once_with([], SortOrder.RECENT, 1, 20)

    def test_rejects_zero_page(self, mock_client: AsyncMock) -> None:
        result = runner.invoke(app, ["palettes", "--page", "0"])
        assert result.exit_code != 0
        mock_client.get_palettes.assert_not_awaited()


class TestShowCommand:
    def test_prints_detail(self, mock_client: AsyncMock, palette_detail_wire: dict) -> None:
        mock_client.get_palette_details.return_value = PaletteDetail.model_validate(palette_detail_wire)

        result = runner.invoke(app, ["show", "1234"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["username"] == "builder42"
        mock_client.get_palette_details.assert_awaited_once_with(1234)

    def test_transport_error_exits_non_zero(self, mock_client: AsyncMock) -> None:
        mock_client.get_palette_details.side_effect = TransportError("HTTP 503: Service Unavailable", status_code=503)

        result = runner.invoke(app, ["show", "1"])

        assert result.exit_code == 1
        assert "HTTP 503" in result.output


class TestSimilarCommand:
    def test_prints_similar_palettes(self, mock_client: AsyncMock, palette_wire: dict) -> None:
        mock_client.get_similar_palettes.return_value = [PaletteSummary.model_validate(palette_wire)]

        result = runner.invoke(app, ["similar", "9"])

        assert result.exit_code == 0, result.output
        assert [p["id"] for p in json.loads(result.output)] == [1234]


class TestScrapeCommand:
    def test_prints_extract(self, mock_client: AsyncMock) -> None:
        mock_client.scrape_palette_page.return_value = PalettePageExtract(
            blocks=["stone", "dirt"], similar_palette_ids=[42]
        )

        result = runner.invoke(app, ["scrape", "7"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"blocks": ["stone", "dirt"], "similar_palette_ids": [42]}
        mock_client.scrape_palette_page.assert_awaited_once_with(7)

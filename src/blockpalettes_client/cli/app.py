"""Typer CLI root application."""

import typer

from blockpalettes_client.core.config import get_settings
from blockpalettes_client.core.logging import setup_logging

app = typer.Typer(name="blockpalettes", help="Block Palettes API client CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


def _register_commands() -> None:
    """Register all CLI commands."""
    from blockpalettes_client.cli.palettes_cmd import palettes, popular, scrape, search, show, similar

    app.command("search")(search)
    app.command("popular")(popular)
    app.command("palettes")(palettes)
    app.command("show")(show)
    app.command("similar")(similar)
    app.command("scrape")(scrape)


_register_commands()

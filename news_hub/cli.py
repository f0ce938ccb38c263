"""
Command-line interface for the News Hub.

Uses Typer to provide `list` and `show` commands on top of a NewsSession.
Supports loading .env files for the API base URL.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import AppConfig, load_config
from .core.types import SENTIMENTS
from .notify import ConsoleNotifier, LogNotifier, Notifier
from .session import NewsSession
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


def _prepare(
    config: Path | None,
    api_url: str | None,
    log_level: str | None,
    log_dir: Path | None,
) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if api_url:
        cfg.api.base_url = api_url
        cfg.api.base_url_env = ""
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    setup_logging(cfg.logging, log_dir)
    return cfg


def _notifier(quiet: bool) -> Notifier:
    return LogNotifier() if quiet else ConsoleNotifier()


@app.command("list")
def list_news(
    sentiment: str | None = typer.Option(
        None, "--sentiment", "-s", help="Positive, Neutral or Negative."
    ),
    search: str | None = typer.Option(None, "--search", "-q", help="Search text."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    api_url: str | None = typer.Option(None, "--api-url", help="Override the news API base URL."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Write a log file to this directory."),
    quiet: bool = typer.Option(False, "--quiet", help="Send notifications to the log instead of the console."),
):
    """Fetch the listing and print the articles matching the filters."""
    if sentiment and sentiment not in SENTIMENTS:
        raise typer.BadParameter(f"Use one of {', '.join(SENTIMENTS)}.", param_hint="--sentiment")
    cfg = _prepare(config, api_url, log_level, log_dir)
    session = NewsSession(cfg, notifier=_notifier(quiet), console=console)

    async def _run() -> None:
        try:
            await session.show_listing(sentiment, search)
        finally:
            await session.aclose()

    asyncio.run(_run())
    if session.store.error:
        raise typer.Exit(code=1)


@app.command()
def show(
    key: str = typer.Argument(..., help="Article id, or url for articles without an id."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    api_url: str | None = typer.Option(None, "--api-url", help="Override the news API base URL."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Write a log file to this directory."),
    quiet: bool = typer.Option(False, "--quiet", help="Send notifications to the log instead of the console."),
):
    """Open one article: print its preview, then the full detail when it arrives."""
    cfg = _prepare(config, api_url, log_level, log_dir)
    session = NewsSession(cfg, notifier=_notifier(quiet), console=console)

    async def _run():
        try:
            return await session.open_article(key)
        finally:
            await session.aclose()

    selection = asyncio.run(_run())
    if selection is None:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

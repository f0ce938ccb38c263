"""Integration tests for a full session against a mocked news API."""

from __future__ import annotations

import asyncio
import io

import httpx
from rich.console import Console
from typer.testing import CliRunner

from news_hub import cli as cli_module
from news_hub import session as session_module
from news_hub.cli import app
from news_hub.config import ApiConfig, AppConfig
from news_hub.core.disclosure import DETAIL_FAILED_MESSAGE
from news_hub.core.types import DisclosureState
from news_hub.fetch.client import NewsApiClient
from news_hub.notify import LogNotifier
from news_hub.session import NewsSession

LISTING = [
    {
        "id": 10,
        "url": "https://example.com/solar",
        "title": "Solar output hits record",
        "text": "Solar farms produced more power than ever before this week.\n\n"
        "Grid operators said the surge was driven by new capacity in the south.[+1800 chars]",
        "category": "Energy",
        "sentiment": "Positive",
        "confidence": 0.91,
        "source": "Energy Daily",
    },
    {
        "id": 11,
        "url": "https://example.com/rates",
        "title": "Rates unchanged",
        "description": "The central bank left interest rates unchanged for the third month.",
        "sentiment": "Neutral",
    },
    {
        "id": 10,
        "url": "https://example.com/solar",
        "title": "Solar output hits record (updated)",
        "text": "Updated body of the solar story, long enough to be previewed as a paragraph.",
        "category": "Energy",
        "sentiment": "Positive",
    },
]


def _handler(detail_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/news":
            return httpx.Response(200, json=LISTING)
        if request.url.path == "/api/news/10":
            if detail_status != 200:
                return httpx.Response(detail_status, text="error")
            return httpx.Response(
                200,
                json={"content": "<p>Full solar story.</p>", "author": "R. Sun", "readTime": "4 min read"},
            )
        return httpx.Response(404, text="not found")

    return handler


class _RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


def _session(handler, notifier) -> NewsSession:
    cfg = AppConfig(api=ApiConfig(base_url="http://news.test", base_url_env="", retries=0))
    client = NewsApiClient(cfg.api, transport=httpx.MockTransport(handler))
    console = Console(file=io.StringIO(), width=160, color_system=None)
    return NewsSession(cfg, client=client, notifier=notifier, console=console)


def _open(session: NewsSession, key: str):
    async def scenario():
        try:
            return await session.open_article(key)
        finally:
            await session.aclose()

    return asyncio.run(scenario())


def test_open_article_reconciles_detail():
    notifier = _RecordingNotifier()
    session = _session(_handler(), notifier)

    selection = _open(session, "10")

    assert selection is not None
    assert selection.record.title == "Solar output hits record (updated)"
    assert selection.content == "<p>Full solar story.</p>"
    assert selection.record.author == "R. Sun"
    assert session.controller.state == DisclosureState.DETAIL_READY
    assert len(session.store.records) == 2
    output = session.console.file.getvalue()
    assert "Updated body of the solar story" in output
    assert "Full solar story." in output


def test_open_article_keeps_preview_when_detail_fails():
    notifier = _RecordingNotifier()
    session = _session(_handler(detail_status=500), notifier)

    selection = _open(session, "10")

    assert selection.content == selection.preview
    assert session.controller.state == DisclosureState.DETAIL_FAILED
    assert notifier.errors == [DETAIL_FAILED_MESSAGE]


def test_open_unknown_article():
    notifier = _RecordingNotifier()
    session = _session(_handler(), notifier)

    assert _open(session, "999") is None
    assert notifier.errors == ["No article found for '999'."]


def test_cli_list_prints_filtered_view(monkeypatch):
    def fake_client(cfg):
        return NewsApiClient(cfg, transport=httpx.MockTransport(_handler()))

    console = Console(file=io.StringIO(), width=160, color_system=None)
    monkeypatch.setattr(session_module, "NewsApiClient", fake_client)
    monkeypatch.setattr(cli_module, "console", console)
    runner = CliRunner()

    result = runner.invoke(app, ["list", "--sentiment", "Positive", "--log-level", "WARNING"])

    assert result.exit_code == 0, result.output
    output = console.file.getvalue()
    assert "Positive News (1)" in output
    assert "Solar output hits record (updated)" in output


def test_cli_list_rejects_unknown_sentiment():
    runner = CliRunner()

    result = runner.invoke(app, ["list", "--sentiment", "Mixed"])

    assert result.exit_code != 0


def test_cli_show_unknown_article_exits_nonzero(monkeypatch):
    def fake_client(cfg):
        return NewsApiClient(cfg, transport=httpx.MockTransport(_handler()))

    monkeypatch.setattr(session_module, "NewsApiClient", fake_client)
    monkeypatch.setattr(cli_module, "console", Console(file=io.StringIO(), color_system=None))
    runner = CliRunner()

    result = runner.invoke(app, ["show", "999", "--log-level", "WARNING"])

    assert result.exit_code == 1


def test_cli_quiet_sends_notifications_to_log(monkeypatch):
    sessions = []

    def fake_client(cfg):
        return NewsApiClient(cfg, transport=httpx.MockTransport(_handler()))

    def recording_session(*args, **kwargs):
        session = NewsSession(*args, **kwargs)
        sessions.append(session)
        return session

    monkeypatch.setattr(session_module, "NewsApiClient", fake_client)
    monkeypatch.setattr(cli_module, "NewsSession", recording_session)
    monkeypatch.setattr(cli_module, "console", Console(file=io.StringIO(), color_system=None))
    runner = CliRunner()

    result = runner.invoke(app, ["list", "--quiet", "--log-level", "WARNING"])

    assert result.exit_code == 0, result.output
    assert isinstance(sessions[0].notifier, LogNotifier)

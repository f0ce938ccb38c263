"""
Session orchestration for the news hub.

A NewsSession wires together the API client, the record store, the
disclosure controller and a notifier, and drives the two user flows:
1. Load the listing and show the filtered view
2. Open one article: show its preview, then the reconciled detail
"""

from __future__ import annotations

import logging

from rich.console import Console

from .config import AppConfig
from .core.disclosure import DisclosureController
from .core.store import RecordStore
from .core.types import ArticleSelection
from .fetch.client import NewsApiClient
from .notify import ConsoleNotifier, Notifier
from .renderer import render_listing, render_selection
from .utils.logging import log_event

logger = logging.getLogger(__name__)


class NewsSession:
    """One interactive session over the news API.

    Attributes:
        cfg: Application configuration
        client: API client used for listing and detail requests
        notifier: Sink for user notifications
        store: Canonical record set and filter criteria
        controller: Owner of the active article selection
    """

    def __init__(
        self,
        cfg: AppConfig,
        client: NewsApiClient | None = None,
        notifier: Notifier | None = None,
        console: Console | None = None,
    ):
        self.cfg = cfg
        self.console = console or Console()
        self.client = client or NewsApiClient(cfg.api)
        self.notifier = notifier or ConsoleNotifier()
        self.store = RecordStore(cfg.filter.default_sentiment)
        self.controller = DisclosureController(
            self.client, self.notifier, cfg.disclosure, cfg.preview
        )

    async def load(self, sentiment: str | None = None, search: str | None = None) -> bool:
        if sentiment:
            self.store.set_sentiment(sentiment)
        if search is not None:
            self.store.set_search(search)
        return await self.store.refresh(self.client, self.notifier)

    async def show_listing(self, sentiment: str | None = None, search: str | None = None) -> None:
        await self.load(sentiment, search)
        render_listing(self.store, self.console)

    async def open_article(self, key: str) -> ArticleSelection | None:
        """Open the record with the given id or url and wait for its detail.

        The preview is rendered first; once the detail fetch has completed the
        reconciled article is rendered again.

        Returns:
            The final selection, or None if the record is unknown or the
            listing could not be loaded
        """
        if not await self.load():
            render_listing(self.store, self.console)
            return None

        record = self.store.find(key)
        if record is None:
            log_event(logger, "Unknown article", level=logging.WARNING, event="unknown_article", key=key)
            self.notifier.notify_error(f"No article found for {key!r}.")
            return None

        selection = self.controller.select(record)
        render_selection(selection, self.console, loading=self.controller.loading)
        if self.controller.loading:
            await self.controller.wait_for_detail()
            render_selection(selection, self.console)
        return selection

    async def aclose(self) -> None:
        await self.client.aclose()

"""
Progressive disclosure of a selected article.

Selecting a record immediately produces an ArticleSelection whose content is
a synthesized preview. When the record has an id, a detail fetch is started
in the background; its payload is merged into the selection when it arrives.

Every selection is tagged with a generation number drawn from a monotonic
counter. Selecting another record or closing bumps the counter, and a detail
completion is applied only if the generation it was started for is still the
live one. Outstanding fetches are never aborted; their results are dropped
when they arrive.

State transitions:

    select()            -> PREVIEW_READY, or DETAIL_PENDING when the record has an id
    detail success      DETAIL_PENDING -> DETAIL_READY
    detail failure      DETAIL_PENDING -> DETAIL_FAILED (preview kept)
    close()             -> CLOSING, then CLOSED after the grace delay
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from ..config import DisclosureConfig, PreviewConfig
from ..errors import TransportError
from ..notify import Notifier
from ..utils.logging import log_event
from .preview import synthesize_preview
from .types import (
    ArticleSelection,
    DisclosureState,
    RawRecord,
    finite_number,
    string_list,
    to_display_record,
)

logger = logging.getLogger(__name__)

DETAIL_FAILED_MESSAGE = "Failed to load full article content. Displaying brief."


class DetailFetcher(Protocol):
    async def fetch_detail(self, record_id: Any) -> dict[str, Any]: ...


class DisclosureController:
    """Owns the active article selection and reconciles detail payloads into it."""

    def __init__(
        self,
        fetcher: DetailFetcher,
        notifier: Notifier,
        cfg: DisclosureConfig | None = None,
        preview_cfg: PreviewConfig | None = None,
    ):
        self._fetcher = fetcher
        self._notifier = notifier
        self._cfg = cfg or DisclosureConfig()
        self._preview_cfg = preview_cfg or PreviewConfig()
        self._generation = 0
        self._selection: ArticleSelection | None = None
        self._state = DisclosureState.CLOSED
        self._loading = False
        self._detail_task: asyncio.Task | None = None
        self._clear_handle: asyncio.TimerHandle | None = None

    @property
    def selection(self) -> ArticleSelection | None:
        return self._selection

    @property
    def state(self) -> DisclosureState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        return self._generation

    def select(self, record: RawRecord) -> ArticleSelection:
        """Open a record, showing its preview at once.

        If the record has an id, a detail fetch is scheduled on the running
        event loop, so this must then be called from within one.

        Args:
            record: The raw record chosen by the user

        Returns:
            The new selection, with the preview as its content
        """
        display = to_display_record(record, self._cfg)
        # Raises before any state changes when there is no running loop
        loop = asyncio.get_running_loop() if display.id else None

        self._cancel_pending_clear()
        self._generation += 1
        generation = self._generation

        text = record.get("text") if isinstance(record, dict) else None
        description = record.get("description") if isinstance(record, dict) else None
        preview = synthesize_preview(text, description, self._preview_cfg).to_html()

        self._selection = ArticleSelection(
            generation=generation,
            record=display,
            content=preview,
            preview=preview,
        )
        self._state = DisclosureState.PREVIEW_READY
        self._loading = False

        if loop is not None:
            self._state = DisclosureState.DETAIL_PENDING
            self._loading = True
            log_event(
                logger,
                "Detail fetch start",
                level=logging.DEBUG,
                event="detail_fetch_start",
                id=str(display.id),
                generation=generation,
            )
            self._detail_task = loop.create_task(self._load_detail(generation, display.id))
        else:
            self._detail_task = None

        return self._selection

    def close(self) -> None:
        """Start closing the selection.

        The selection becomes inert immediately; it is cleared once the
        configured grace delay has elapsed.
        """
        if self._state in (DisclosureState.CLOSING, DisclosureState.CLOSED):
            return
        grace = self._cfg.close_grace_seconds
        loop = asyncio.get_running_loop() if grace > 0 else None
        self._generation += 1
        generation = self._generation
        self._state = DisclosureState.CLOSING

        if loop is None:
            self._finish_close(generation)
            return
        self._clear_handle = loop.call_later(
            self._cfg.close_grace_seconds, self._finish_close, generation
        )

    async def wait_for_detail(self) -> None:
        """Wait until the most recently started detail fetch has completed."""
        if self._detail_task is not None:
            await self._detail_task

    async def _load_detail(self, generation: int, record_id: Any) -> None:
        try:
            payload = await self._fetcher.fetch_detail(record_id)
        except TransportError as exc:
            if not self._is_current(generation):
                self._log_stale(generation, record_id, outcome="failure")
                return
            self._state = DisclosureState.DETAIL_FAILED
            self._loading = False
            log_event(
                logger,
                "Detail fetch failed",
                level=logging.WARNING,
                event="detail_failed",
                id=str(record_id),
                error=str(exc),
                status_code=exc.status_code,
            )
            self._notifier.notify_error(DETAIL_FAILED_MESSAGE)
            return

        if not self._is_current(generation):
            self._log_stale(generation, record_id, outcome="success")
            return
        replaced = self._apply_detail(payload)
        self._state = DisclosureState.DETAIL_READY
        self._loading = False
        log_event(
            logger,
            "Detail applied",
            level=logging.DEBUG,
            event="detail_applied",
            id=str(record_id),
            content_replaced=replaced,
        )

    def _apply_detail(self, payload: dict[str, Any]) -> bool:
        selection = self._selection
        if selection is None or not isinstance(payload, dict):
            return False

        content = payload.get("content")
        replaced = isinstance(content, str) and bool(content.strip())
        if replaced:
            selection.content = content

        record = selection.record
        author = payload.get("author")
        if isinstance(author, str) and author:
            record.author = author
        read_time = payload.get("readTime")
        if isinstance(read_time, str) and read_time:
            record.read_time = read_time
        tags = string_list(payload.get("tags"))
        if tags:
            record.tags = tags
        confidence = finite_number(payload.get("confidence"))
        if confidence:
            record.confidence = confidence
        return replaced

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self._state not in (
            DisclosureState.CLOSING,
            DisclosureState.CLOSED,
        )

    def _finish_close(self, generation: int) -> None:
        self._clear_handle = None
        if generation != self._generation:
            return
        self._selection = None
        self._loading = False
        self._state = DisclosureState.CLOSED
        log_event(logger, "Selection closed", level=logging.DEBUG, event="selection_closed")

    def _cancel_pending_clear(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    def _log_stale(self, generation: int, record_id: Any, outcome: str) -> None:
        log_event(
            logger,
            "Discarded stale detail result",
            level=logging.DEBUG,
            event="detail_stale",
            id=str(record_id),
            generation=generation,
            live_generation=self._generation,
            outcome=outcome,
        )

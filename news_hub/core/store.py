"""
In-memory record store with sentiment filtering and text search.

The store owns the canonical (deduplicated) record set and the current
FilterCriteria. Its visible subset and per-sentiment counts are recomputed
from scratch whenever the records, the sentiment or the search text change,
so they are always a pure function of those three inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import TYPE_CHECKING, Iterable

from ..errors import TransportError
from ..utils.logging import log_event
from .dedup import dedup_records
from .types import NEUTRAL, SENTIMENTS, FilterCriteria, RawRecord, text_field

if TYPE_CHECKING:
    from ..fetch.client import NewsApiClient
    from ..notify import Notifier

logger = logging.getLogger(__name__)

_SEARCH_FIELDS = ("title", "description", "category")

LIST_LOADED_MESSAGE = "Daily news loaded successfully."
LIST_FAILED_MESSAGE = "Failed to load news articles."
LIST_ERROR_MESSAGE = "Failed to fetch daily news. Check that the news API is reachable and try again."


@dataclass
class FilterResult:
    """Output of filtering the canonical set.

    Attributes:
        visible: Records matching both the sentiment and the search text
        counts: Number of search matches per sentiment
    """

    visible: list[RawRecord] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=lambda: {s: 0 for s in SENTIMENTS})


def matches_search(record: RawRecord, search: str) -> bool:
    """Return True if search occurs, case-insensitively, in title, description or category."""
    if not search:
        return True
    needle = search.lower()
    return any(needle in text_field(record, name).lower() for name in _SEARCH_FIELDS)


def filter_records(records: Iterable[RawRecord], criteria: FilterCriteria) -> FilterResult:
    """Compute the visible subset and per-sentiment counts for the given criteria.

    Counts are taken over the search-filtered pool, so they react to the
    search text but not to the selected sentiment.
    """
    pool = [record for record in records if matches_search(record, criteria.search)]
    counts = {sentiment: 0 for sentiment in SENTIMENTS}
    visible: list[RawRecord] = []
    for record in pool:
        sentiment = text_field(record, "sentiment")
        if sentiment in counts:
            counts[sentiment] += 1
        if sentiment == criteria.sentiment:
            visible.append(record)
    return FilterResult(visible=visible, counts=counts)


class RecordStore:
    """Holds the canonical record set and the user's filter criteria."""

    def __init__(self, default_sentiment: str = NEUTRAL):
        _check_sentiment(default_sentiment)
        self._records: list[RawRecord] = []
        self._criteria = FilterCriteria(sentiment=default_sentiment)
        self._result = FilterResult()
        self.error: str | None = None
        self.loading = False

    @property
    def records(self) -> list[RawRecord]:
        return list(self._records)

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def visible(self) -> list[RawRecord]:
        return list(self._result.visible)

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._result.counts)

    def replace_records(self, raw_records: Iterable[RawRecord]) -> None:
        """Rebuild the canonical set from a freshly fetched list."""
        self._records = dedup_records(raw_records)
        self._recompute()

    def set_sentiment(self, sentiment: str) -> None:
        _check_sentiment(sentiment)
        self._criteria = replace(self._criteria, sentiment=sentiment)
        self._recompute()

    def set_search(self, search: str | None) -> None:
        self._criteria = replace(self._criteria, search=search or "")
        self._recompute()

    def find(self, key: str) -> RawRecord | None:
        """Return the canonical record whose id (compared as text) or url equals key."""
        for record in self._records:
            record_id = record.get("id")
            if record_id and str(record_id) == key:
                return record
            if not record_id and record.get("url") == key:
                return record
        return None

    async def refresh(self, client: NewsApiClient, notifier: Notifier) -> bool:
        """Fetch the listing and replace the canonical set.

        On failure the previous canonical set is kept, error is set to a
        user-facing message and the caller may simply call refresh again.

        Returns:
            True if the listing was loaded, False otherwise
        """
        self.loading = True
        self.error = None
        log_event(logger, "List fetch start", event="list_fetch_start")
        try:
            raw_records = await client.fetch_list()
        except TransportError as exc:
            self.error = LIST_ERROR_MESSAGE
            log_event(
                logger,
                "List fetch failed",
                level=logging.WARNING,
                event="list_fetch_failed",
                error=str(exc),
                status_code=exc.status_code,
                kept=len(self._records),
            )
            notifier.notify_error(LIST_FAILED_MESSAGE)
            return False
        finally:
            self.loading = False

        self.replace_records(raw_records)
        log_event(
            logger,
            "Records replaced",
            event="records_replaced",
            received=len(raw_records),
            canonical=len(self._records),
        )
        notifier.notify_success(LIST_LOADED_MESSAGE)
        return True

    def _recompute(self) -> None:
        self._result = filter_records(self._records, self._criteria)


def _check_sentiment(sentiment: str) -> None:
    if sentiment not in SENTIMENTS:
        raise ValueError(f"Unsupported sentiment: {sentiment!r}. Use one of {', '.join(SENTIMENTS)}.")

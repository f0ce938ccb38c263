"""Tests for the record store, sentiment filtering and search."""

from __future__ import annotations

import asyncio

import pytest

from news_hub.core.store import (
    LIST_ERROR_MESSAGE,
    LIST_FAILED_MESSAGE,
    LIST_LOADED_MESSAGE,
    RecordStore,
    filter_records,
    matches_search,
)
from news_hub.core.types import SENTIMENTS, FilterCriteria
from news_hub.errors import TransportError


class _RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.errors: list[str] = []

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


class _ListClient:
    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload or []
        self.error = error
        self.calls = 0

    async def fetch_list(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


RECORDS = [
    {"id": 1, "title": "Climate deal agreed", "description": "Nations sign", "category": "World", "sentiment": "Positive"},
    {"id": 2, "title": "Markets flat", "description": None, "category": "Business", "sentiment": "Neutral"},
    {"id": 3, "title": "Storm hits coast", "description": "Climate impact grows", "category": None, "sentiment": "Negative"},
    {"id": 4, "title": None, "description": "Quarterly earnings", "category": "CLIMATE", "sentiment": "Neutral"},
    {"id": 5, "title": "Untagged story", "sentiment": "Mixed"},
    {"url": "https://example.com/no-id", "title": "Neutral climate note", "sentiment": "Neutral"},
]


def test_matches_search_is_case_insensitive_across_fields():
    assert matches_search(RECORDS[0], "CLIMATE")
    assert matches_search(RECORDS[2], "impact")
    assert matches_search(RECORDS[3], "climate")
    assert not matches_search(RECORDS[1], "climate")
    assert matches_search(RECORDS[1], "")


def test_matches_search_tolerates_wrong_field_types():
    record = {"title": 12, "description": ["climate"], "category": {"name": "climate"}}

    assert not matches_search(record, "climate")


def test_visible_subset_filters_by_sentiment_and_search():
    store = RecordStore()
    store.replace_records(RECORDS)

    assert [r.get("id") for r in store.visible] == [2, 4, None]

    store.set_search("climate")
    assert [r.get("id") for r in store.visible] == [4, None]

    store.set_sentiment("Positive")
    assert [r["id"] for r in store.visible] == [1]


def test_counts_follow_search_text_not_sentiment():
    store = RecordStore()
    store.replace_records(RECORDS)

    assert store.counts == {"Positive": 1, "Neutral": 3, "Negative": 1}

    store.set_search("climate")
    assert store.counts == {"Positive": 1, "Neutral": 2, "Negative": 1}

    store.set_sentiment("Negative")
    assert store.counts == {"Positive": 1, "Neutral": 2, "Negative": 1}


@pytest.mark.parametrize("search", ["", "climate", "e", "zzz", "MARKETS"])
def test_counts_partition_the_search_pool(search):
    pool = [r for r in RECORDS if matches_search(r, search) and r.get("sentiment") in SENTIMENTS]

    result = filter_records(RECORDS, FilterCriteria(sentiment="Neutral", search=search))

    assert sum(result.counts[s] for s in SENTIMENTS) == len(pool)


def test_filter_is_a_pure_function_of_its_inputs():
    criteria = FilterCriteria(sentiment="Neutral", search="climate")

    assert filter_records(RECORDS, criteria) == filter_records(RECORDS, criteria)


def test_replace_records_rebuilds_wholesale():
    store = RecordStore()
    store.replace_records(RECORDS)
    store.replace_records([{"id": 9, "sentiment": "Neutral"}, {"id": 9, "sentiment": "Neutral", "title": "v2"}])

    assert store.records == [{"id": 9, "sentiment": "Neutral", "title": "v2"}]
    assert store.counts == {"Positive": 0, "Neutral": 1, "Negative": 0}


def test_invalid_sentiment_is_rejected():
    store = RecordStore()

    with pytest.raises(ValueError):
        store.set_sentiment("Mixed")
    with pytest.raises(ValueError):
        RecordStore(default_sentiment="positive")

    assert store.criteria.sentiment == "Neutral"


def test_find_by_id_text_or_url():
    store = RecordStore()
    store.replace_records(RECORDS)

    assert store.find("3")["title"] == "Storm hits coast"
    assert store.find("https://example.com/no-id")["title"] == "Neutral climate note"
    assert store.find("404") is None


def test_refresh_success_replaces_records_and_notifies():
    store = RecordStore()
    notifier = _RecordingNotifier()
    client = _ListClient(payload=RECORDS + [RECORDS[0]])

    loaded = asyncio.run(store.refresh(client, notifier))

    assert loaded is True
    assert len(store.records) == len(RECORDS)
    assert store.error is None
    assert store.loading is False
    assert notifier.successes == [LIST_LOADED_MESSAGE]


def test_refresh_failure_keeps_last_good_records():
    store = RecordStore()
    store.replace_records(RECORDS)
    notifier = _RecordingNotifier()
    client = _ListClient(error=TransportError("HTTP 502", status_code=502))

    loaded = asyncio.run(store.refresh(client, notifier))

    assert loaded is False
    assert store.records == RECORDS
    assert store.error == LIST_ERROR_MESSAGE
    assert store.loading is False
    assert notifier.errors == [LIST_FAILED_MESSAGE]

    client.error = None
    client.payload = [{"id": 1, "sentiment": "Neutral"}]
    assert asyncio.run(store.refresh(client, notifier)) is True
    assert store.error is None
    assert client.calls == 2


def test_non_string_sentiments_count_in_no_bucket():
    store = RecordStore()
    store.replace_records(
        [
            {"id": 1, "sentiment": "Neutral"},
            {"id": 2, "sentiment": ["Neutral"]},
            {"id": 3, "sentiment": {"label": "Positive"}},
        ]
    )

    assert [record["id"] for record in store.visible] == [1]
    assert store.counts == {"Positive": 0, "Neutral": 1, "Negative": 0}

    result = filter_records([{"id": 4, "sentiment": {"label": "Positive"}}], FilterCriteria(sentiment="Positive"))
    assert result.visible == []
    assert sum(result.counts.values()) == 0

"""Tests for identity-key deduplication."""

from news_hub.core.dedup import dedup_records
from news_hub.core.types import identity_key


def test_duplicate_keeps_first_position_and_last_value():
    records = [{"id": 1, "v": "a"}, {"id": 2, "v": "b"}, {"id": 1, "v": "c"}]

    assert dedup_records(records) == [{"id": 1, "v": "c"}, {"id": 2, "v": "b"}]


def test_url_is_used_when_id_is_missing_or_falsy():
    records = [
        {"url": "https://example.com/a", "v": 1},
        {"id": "", "url": "https://example.com/a", "v": 2},
        {"id": 0, "url": "https://example.com/b", "v": 3},
        {"id": None, "url": "https://example.com/b", "v": 4},
    ]

    result = dedup_records(records)

    assert [r["v"] for r in result] == [2, 4]


def test_id_takes_precedence_over_url():
    records = [
        {"id": "x", "url": "https://example.com/same"},
        {"id": "y", "url": "https://example.com/same"},
    ]

    assert len(dedup_records(records)) == 2


def test_records_without_identity_collapse_under_one_key():
    records = [{"title": "first"}, {"id": 5, "title": "keyed"}, {"title": "second"}]

    result = dedup_records(records)

    assert result == [{"title": "second"}, {"id": 5, "title": "keyed"}]
    assert identity_key({"title": "anything"}) is None


def test_non_object_records_are_skipped():
    records = [{"id": 1}, "garbage", None, 42, {"id": 2}]

    assert dedup_records(records) == [{"id": 1}, {"id": 2}]


def test_unhashable_id_does_not_crash():
    records = [{"id": ["a", "b"], "v": 1}, {"id": ["a", "b"], "v": 2}]

    assert dedup_records(records) == [{"id": ["a", "b"], "v": 2}]


def test_empty_input():
    assert dedup_records([]) == []

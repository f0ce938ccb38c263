"""
Core data types for the news hub.

This module defines the data structures shared by the deduplicator, the
record store and the disclosure controller:
- RawRecord: an untrusted record dictionary as delivered by the news API
- DisplayRecord: a fully-defaulted snapshot of a record for presentation
- ArticleSelection: the article currently opened by the user
- FilterCriteria: the sentiment and search text used to filter the listing

Raw records are never trusted. Every field may be missing, null or of an
unexpected type, so all reads go through the helpers below and fall back to
defaults instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import json
import math
from collections.abc import Hashable
from typing import Any

from ..config import DisclosureConfig

RawRecord = dict[str, Any]

POSITIVE = "Positive"
NEUTRAL = "Neutral"
NEGATIVE = "Negative"
SENTIMENTS: tuple[str, ...] = (POSITIVE, NEUTRAL, NEGATIVE)


class DisclosureState(str, Enum):
    """Lifecycle of the active article selection."""

    PREVIEW_READY = "preview_ready"
    DETAIL_PENDING = "detail_pending"
    DETAIL_READY = "detail_ready"
    DETAIL_FAILED = "detail_failed"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(frozen=True)
class FilterCriteria:
    """Sentiment and free-text search applied to the canonical record set.

    Attributes:
        sentiment: One of Positive, Neutral or Negative
        search: Case-insensitive search text; empty disables the text filter
    """

    sentiment: str = NEUTRAL
    search: str = ""


@dataclass
class DisplayRecord:
    """A record with every presentational field resolved to a usable value.

    Attributes:
        key: Identity key of the record (id, else url)
        id: The record id, or None when the record has none
        title: Headline, empty if missing
        url: Link to the original article, empty if missing
        sentiment: Sentiment label, empty if missing
        category: Category label, empty if missing
        source: Publication name, empty if missing
        author: Author, falling back to the source and then a placeholder
        read_time: Read-time estimate
        tags: Tag list, falling back to the category
        confidence: Sentiment confidence, 0 when absent or not a finite number
        published_at: Raw published timestamp (date, else publishedAt)
    """

    key: Hashable
    id: Any
    title: str
    url: str
    sentiment: str
    category: str
    source: str
    author: str
    read_time: str
    tags: list[str] = field(default_factory=list)
    confidence: float = 0.0
    published_at: str | None = None


@dataclass
class ArticleSelection:
    """The article currently opened by the user.

    Attributes:
        generation: Monotonic number identifying this selection
        record: The fully-defaulted display snapshot
        content: HTML body; starts as the preview and may be replaced by detail content
        preview: The preview HTML computed when the selection was made
    """

    generation: int
    record: DisplayRecord
    content: str
    preview: str

    @property
    def key(self) -> Hashable:
        return self.record.key


def text_field(record: Any, name: str) -> str:
    """Read a string field from a raw record, defaulting to an empty string."""
    if not isinstance(record, dict):
        return ""
    value = record.get(name)
    return value if isinstance(value, str) else ""


def finite_number(value: Any) -> float | None:
    """Return value as a float if it is a finite real number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def string_list(value: Any) -> list[str]:
    """Return the non-empty string items of value if it is a list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def identity_key(record: Any) -> Hashable:
    """Return the identity key of a raw record: its id if truthy, else its url.

    Records lacking both collapse under None. Unhashable values (lists, dicts)
    are serialized so that they can still key a mapping.
    """
    if not isinstance(record, dict):
        return None
    key = record.get("id") or record.get("url")
    if isinstance(key, Hashable):
        return key
    return json.dumps(key, sort_keys=True, default=str)


def to_display_record(record: RawRecord, cfg: DisclosureConfig | None = None) -> DisplayRecord:
    """Resolve all display defaults of a raw record in one place."""
    cfg = cfg or DisclosureConfig()
    category = text_field(record, "category")
    tags = string_list(record.get("tags")) if isinstance(record, dict) else []
    if not tags and category:
        tags = [category]
    confidence = finite_number(record.get("confidence")) if isinstance(record, dict) else None
    published = text_field(record, "date") or text_field(record, "publishedAt") or None
    record_id = record.get("id") if isinstance(record, dict) else None

    return DisplayRecord(
        key=identity_key(record),
        id=record_id or None,
        title=text_field(record, "title"),
        url=text_field(record, "url"),
        sentiment=text_field(record, "sentiment"),
        category=category,
        source=text_field(record, "source"),
        author=text_field(record, "author") or text_field(record, "source") or cfg.default_author,
        read_time=text_field(record, "readTime") or cfg.default_read_time,
        tags=tags,
        confidence=confidence if confidence is not None else 0.0,
        published_at=published,
    )

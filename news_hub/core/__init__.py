"""
Core domain models and business logic.

This package contains record deduplication, preview synthesis, filtering and
the article disclosure state machine. None of it performs I/O directly.
"""

from .types import (
    ArticleSelection,
    DisclosureState,
    DisplayRecord,
    FilterCriteria,
    SENTIMENTS,
    to_display_record,
)
from .dedup import dedup_records
from .preview import PreviewContent, synthesize_preview
from .store import FilterResult, RecordStore, filter_records, matches_search
from .disclosure import DisclosureController

__all__ = [
    "ArticleSelection",
    "DisclosureState",
    "DisplayRecord",
    "FilterCriteria",
    "SENTIMENTS",
    "to_display_record",
    "dedup_records",
    "PreviewContent",
    "synthesize_preview",
    "FilterResult",
    "RecordStore",
    "filter_records",
    "matches_search",
    "DisclosureController",
]

"""
News Hub - deduplicated, filterable view of sentiment-tagged news.

This package fetches a news listing from a backend API, deduplicates it,
filters it by sentiment and search text, and opens single articles with an
immediate preview that is later reconciled with the full detail payload.

Main entry point is the CLI via the `news-hub` command.

Example:
    $ news-hub list --sentiment Positive --search climate
    $ news-hub show 42
"""

__all__ = [
    "__version__",
    "dedup_records",
    "synthesize_preview",
    "RecordStore",
    "DisclosureController",
]
__version__ = "0.1.0"

from .core.dedup import dedup_records
from .core.disclosure import DisclosureController
from .core.preview import synthesize_preview
from .core.store import RecordStore

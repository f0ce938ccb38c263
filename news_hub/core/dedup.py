"""
Record deduplication by identity key.

Records are keyed by their id, falling back to their url. The canonical
order is the order in which each key was first seen, while the stored value
is always the most recent record delivered for that key.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable

from .types import RawRecord, identity_key

logger = logging.getLogger(__name__)


def dedup_records(records: Iterable[RawRecord]) -> list[RawRecord]:
    """Collapse records sharing an identity key into one canonical record.

    Later duplicates overwrite the value stored under a key without moving
    the key, so a record keeps the position of its first occurrence but the
    contents of its last one. Records lacking both id and url all collapse
    under the key None.

    Args:
        records: Raw records in delivery order

    Returns:
        Canonical records, one per identity key, in first-seen order

    Examples:
        >>> dedup_records([{"id": 1, "v": "a"}, {"id": 2, "v": "b"}, {"id": 1, "v": "c"}])
        [{'id': 1, 'v': 'c'}, {'id': 2, 'v': 'b'}]
    """
    canonical: dict[Hashable, RawRecord] = {}
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-object record of type %s", type(record).__name__)
            continue
        # Assigning to an existing dict key keeps its insertion position
        canonical[identity_key(record)] = record
    return list(canonical.values())

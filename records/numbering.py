"""
Sequence numbering for new records.

All generators follow one rule: take the highest numeric suffix among the
existing values that match ``<prefix><digits>``, add one, zero-pad to three
digits. Values that do not match the pattern are ignored. An empty
collection starts at 001.
"""

import re
from datetime import date
from typing import Iterable, Optional

from django.utils import timezone

BATCH_PREFIX = 'Batch-'
ORDER_PREFIX = 'SO'
REFERENCE_PREFIX = 'FIN'
SEQUENCE_WIDTH = 3


def next_sequence_number(values: Iterable, prefix: str, width: int = SEQUENCE_WIDTH) -> str:
    pattern = re.compile(rf'^{re.escape(prefix)}(\d+)$')
    numbers = []
    for value in values:
        if not isinstance(value, str):
            continue
        match = pattern.match(value.strip())
        if match:
            numbers.append(int(match.group(1)))

    next_number = max(numbers, default=0) + 1
    return f"{prefix}{next_number:0{width}d}"


def next_batch_number(records) -> str:
    """``Batch-001``, ``Batch-002``, ... across the production collection."""
    return next_sequence_number((r.get('batchNumber') for r in records), BATCH_PREFIX)


def _yearly_prefix(code: str, today: Optional[date]) -> str:
    year = (today or timezone.localdate()).year
    return f"{code}-{year}-"


def next_order_number(records, today: Optional[date] = None) -> str:
    """``SO-<year>-NNN``, numbered within the current year."""
    return next_sequence_number(
        (r.get('orderNumber') for r in records),
        _yearly_prefix(ORDER_PREFIX, today),
    )


def next_reference_number(records, today: Optional[date] = None) -> str:
    """``FIN-<year>-NNN``, numbered within the current year."""
    return next_sequence_number(
        (r.get('reference') for r in records),
        _yearly_prefix(REFERENCE_PREFIX, today),
    )


def next_local_id(records, last_id: int = 0) -> int:
    """
    Identity for local-only collections: one past the highest id ever
    issued. ``last_id`` is the high-water mark, so deleting the current
    maximum never frees its id for reuse.
    """
    ids = [
        r.get('id') for r in records
        if isinstance(r.get('id'), int) and not isinstance(r.get('id'), bool)
    ]
    return max(ids + [last_id], default=0) + 1

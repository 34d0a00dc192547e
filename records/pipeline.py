"""
Derived View Pipeline

Pure functions turning a raw record collection plus the active filter and
sort configuration into the rendered row sequence:

    rows = apply_view(records, record_filter, sort_state, sort_keys)

Filtering is an equality match on one field (``"all"`` disables it).
Sorting is stable in both directions; keys may read a raw field, compute a
value the record does not store, or parse a date before comparing.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from .dates import parse_date

ALL = 'all'

ASCENDING = 'asc'
DESCENDING = 'desc'

TEXT = 'text'
NUMBER = 'number'
DATE = 'date'


def to_number(value) -> float:
    """Numeric sort policy: anything non-numeric or absent counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return 0 if isinstance(value, float) and math.isnan(value) else value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        return 0 if math.isnan(number) else number
    return 0


def to_date(value) -> date:
    return parse_date(value) or date.min


def to_text(value) -> str:
    if value is None:
        return ''
    return str(value).casefold()


_COERCERS = {
    TEXT: to_text,
    NUMBER: to_number,
    DATE: to_date,
}


@dataclass(frozen=True)
class SortKey:
    """
    A sortable column.

    ``accessor`` defaults to reading ``record[name]``; pass one to sort on a
    computed field (e.g. usable eggs).
    """
    name: str
    kind: str = TEXT
    accessor: Optional[Callable[[Dict[str, Any]], Any]] = None

    def value(self, record: Dict[str, Any]):
        raw = self.accessor(record) if self.accessor else record.get(self.name)
        return _COERCERS[self.kind](raw)


@dataclass
class SortState:
    key: Optional[str] = None
    direction: str = ASCENDING

    def toggle(self, key: str) -> 'SortState':
        """Same key flips direction; a new key resets to ascending."""
        if key == self.key:
            self.direction = DESCENDING if self.direction == ASCENDING else ASCENDING
        else:
            self.key = key
            self.direction = ASCENDING
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'direction': self.direction}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SortState':
        data = data or {}
        direction = data.get('direction')
        if direction not in (ASCENDING, DESCENDING):
            direction = ASCENDING
        return cls(key=data.get('key'), direction=direction)


@dataclass
class RecordFilter:
    field: Optional[str] = None
    value: Any = ALL

    @property
    def is_active(self) -> bool:
        return bool(self.field) and self.value != ALL

    def matches(self, record: Dict[str, Any], accessor: Optional[Callable] = None) -> bool:
        if not self.is_active:
            return True
        actual = accessor(record) if accessor else record.get(self.field)
        return _as_text(actual) == _as_text(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {'field': self.field, 'value': self.value}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RecordFilter':
        data = data or {}
        return cls(field=data.get('field'), value=data.get('value', ALL))


def _as_text(value) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def filter_records(records: List[Dict[str, Any]], record_filter: RecordFilter,
                   accessors: Optional[Dict[str, Callable]] = None) -> List[Dict[str, Any]]:
    accessor = (accessors or {}).get(record_filter.field)
    return [r for r in records if record_filter.matches(r, accessor)]


def sort_records(records: List[Dict[str, Any]], sort_state: SortState,
                 sort_keys: Dict[str, SortKey]) -> List[Dict[str, Any]]:
    sort_key = sort_keys.get(sort_state.key) if sort_state.key else None
    if sort_key is None:
        return list(records)
    return sorted(records, key=sort_key.value, reverse=sort_state.direction == DESCENDING)


def apply_view(records: List[Dict[str, Any]], record_filter: RecordFilter, sort_state: SortState,
               sort_keys: Dict[str, SortKey]) -> List[Dict[str, Any]]:
    """Filter, then stable sort. Never mutates ``records``."""
    accessors = {name: key.accessor for name, key in sort_keys.items() if key.accessor}
    return sort_records(filter_records(records, record_filter, accessors), sort_state, sort_keys)

"""
Tests for the derived view pipeline (filter + stable sort).
"""
from datetime import date

from egg_production.services import SORT_KEYS as PRODUCTION_SORT_KEYS
from records.pipeline import (
    ALL, ASCENDING, DATE, DESCENDING, NUMBER, RecordFilter, SortKey, SortState,
    apply_view, sort_records, to_date, to_number,
)

ROWS = [
    {'id': 1, 'name': 'b', 'qty': 5, 'status': 'Pending'},
    {'id': 2, 'name': 'a', 'qty': 5, 'status': 'Completed'},
    {'id': 3, 'name': 'c', 'qty': 1, 'status': 'Pending'},
    {'id': 4, 'name': 'd', 'qty': 5, 'status': 'Pending'},
]

KEYS = {
    'name': SortKey('name'),
    'qty': SortKey('qty', NUMBER),
}


def ids(rows):
    return [r['id'] for r in rows]


class TestCoercion:

    def test_non_numeric_counts_as_zero(self):
        assert to_number('abc') == 0
        assert to_number(None) == 0
        assert to_number(True) == 0
        assert to_number('12.5') == 12.5

    def test_unparseable_date_is_earliest(self):
        assert to_date('not a date') == date.min
        assert to_date('15/08/25') == date(2025, 8, 15)
        assert to_date('01/08/2025') == date(2025, 8, 1)
        assert to_date('2024-01-15') == date(2024, 1, 15)


class TestSortState:

    def test_new_key_starts_ascending(self):
        state = SortState().toggle('qty')
        assert (state.key, state.direction) == ('qty', ASCENDING)

    def test_same_key_flips_direction(self):
        state = SortState().toggle('qty').toggle('qty')
        assert state.direction == DESCENDING

    def test_switching_key_resets_direction(self):
        state = SortState(key='qty', direction=DESCENDING).toggle('name')
        assert (state.key, state.direction) == ('name', ASCENDING)

    def test_session_round_trip_sanitizes_direction(self):
        assert SortState.from_dict({'key': 'qty', 'direction': 'sideways'}).direction == ASCENDING


class TestSort:

    def test_equal_keys_keep_input_order_ascending(self):
        rows = sort_records(ROWS, SortState(key='qty'), KEYS)
        assert ids(rows) == [3, 1, 2, 4]

    def test_equal_keys_keep_input_order_descending(self):
        rows = sort_records(ROWS, SortState(key='qty', direction=DESCENDING), KEYS)
        assert ids(rows) == [1, 2, 4, 3]

    def test_toggling_twice_restores_ascending_order(self):
        state = SortState().toggle('name')
        ascending = ids(sort_records(ROWS, state, KEYS))
        state.toggle('name')
        state.toggle('name')
        assert ids(sort_records(ROWS, state, KEYS)) == ascending

    def test_unknown_key_keeps_order(self):
        assert ids(sort_records(ROWS, SortState(key='missing'), KEYS)) == [1, 2, 3, 4]

    def test_does_not_mutate_input(self):
        rows = list(ROWS)
        sort_records(rows, SortState(key='name'), KEYS)
        assert ids(rows) == [1, 2, 3, 4]

    def test_text_sort_ignores_case(self):
        rows = [{'id': 1, 'name': 'beta'}, {'id': 2, 'name': 'Alpha'}]
        assert ids(sort_records(rows, SortState(key='name'), KEYS)) == [2, 1]

    def test_date_sort_puts_unparseable_first(self):
        keys = {'date': SortKey('date', DATE)}
        rows = [
            {'id': 1, 'date': '15/08/2025'},
            {'id': 2, 'date': 'someday'},
            {'id': 3, 'date': '01/08/2025'},
        ]
        assert ids(sort_records(rows, SortState(key='date'), keys)) == [2, 3, 1]

    def test_computed_key_sorts_on_derived_value(self):
        rows = [
            {'id': 1, 'eggsCollected': 100, 'damagedEggs': 90},
            {'id': 2, 'eggsCollected': 50, 'damagedEggs': 0},
            {'id': 3, 'eggsCollected': 10, 'damagedEggs': 20},
        ]
        state = SortState(key='usableEggs')
        assert ids(sort_records(rows, state, PRODUCTION_SORT_KEYS)) == [3, 1, 2]


class TestFilter:

    def test_all_returns_full_sorted_sequence(self):
        rows = apply_view(ROWS, RecordFilter(field='status', value=ALL), SortState(key='name'), KEYS)
        assert ids(rows) == [2, 1, 3, 4]

    def test_equality_filter_then_sort(self):
        rows = apply_view(ROWS, RecordFilter(field='status', value='Pending'),
                          SortState(key='name', direction=DESCENDING), KEYS)
        assert ids(rows) == [4, 3, 1]

    def test_filter_compares_textual_values(self):
        rows = apply_view(ROWS, RecordFilter(field='qty', value='5'), SortState(), KEYS)
        assert ids(rows) == [1, 2, 4]

"""
Tests for sequence numbering.
"""
from datetime import date

from records.numbering import (
    next_batch_number, next_local_id, next_order_number, next_reference_number,
)


class TestBatchNumbers:

    def test_empty_collection_starts_at_one(self):
        assert next_batch_number([]) == 'Batch-001'

    def test_follows_highest_suffix(self):
        records = [{'batchNumber': 'Batch-003'}, {'batchNumber': 'Batch-007'}, {'batchNumber': 'Batch-002'}]
        assert next_batch_number(records) == 'Batch-008'

    def test_ignores_non_conforming_values(self):
        records = [{'batchNumber': 'B001'}, {'batchNumber': 'Batch-X'}, {'batchNumber': None}, {}]
        assert next_batch_number(records) == 'Batch-001'

    def test_grows_past_padding(self):
        assert next_batch_number([{'batchNumber': 'Batch-999'}]) == 'Batch-1000'


class TestYearlyNumbers:

    def test_order_numbers_are_scoped_to_year(self):
        records = [{'orderNumber': 'SO-2025-014'}, {'orderNumber': 'SO-2026-002'}]
        assert next_order_number(records, today=date(2026, 3, 1)) == 'SO-2026-003'

    def test_new_year_restarts_sequence(self):
        records = [{'orderNumber': 'SO-2025-014'}]
        assert next_order_number(records, today=date(2026, 1, 1)) == 'SO-2026-001'

    def test_reference_numbers_skip_manual_references(self):
        records = [{'reference': 'INV-001'}, {'reference': 'FIN-2026-004'}]
        assert next_reference_number(records, today=date(2026, 5, 1)) == 'FIN-2026-005'


class TestLocalIds:

    def test_empty_collection(self):
        assert next_local_id([]) == 1

    def test_max_plus_one(self):
        assert next_local_id([{'id': 1}, {'id': 5}, {'id': 3}]) == 6

    def test_high_water_mark_wins_over_current_maximum(self):
        assert next_local_id([{'id': 1}, {'id': 2}], last_id=5) == 6

    def test_current_maximum_wins_over_stale_mark(self):
        assert next_local_id([{'id': 7}], last_id=3) == 8

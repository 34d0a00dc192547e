"""
Tests for the create/edit modal controller.
"""
import pytest

from core.exceptions import ModalStateError, RecordValidationError
from egg_production.services import ProductionModal
from records.modal import CLOSED, CREATING, EDITING
from records.stores import LocalRecordStore
from egg_production.serializers import ProductionRecordSerializer

RECORD = {
    'id': 1,
    'date': '01/08/2025',
    'batchNumber': 'Batch-001',
    'birds': 500,
    'eggsCollected': 450,
    'damagedEggs': 5,
    'notes': '',
}


@pytest.fixture
def store():
    return LocalRecordStore([RECORD], serializer_class=ProductionRecordSerializer, label='production record')


class TestTransitions:

    def test_open_create_precomputes_batch_number(self, store):
        modal = ProductionModal()
        fields = modal.open_create(store.records)

        assert modal.state == CREATING
        assert fields['batchNumber'] == 'Batch-002'
        assert modal.read_only_fields == ('batchNumber',)

    def test_open_edit_converts_date_for_input(self):
        modal = ProductionModal()
        fields = modal.open_edit(RECORD)

        assert modal.state == EDITING
        assert modal.record_id == 1
        assert fields['date'] == '2025-08-01'
        assert fields['birds'] == '500'
        assert modal.read_only_fields == ()

    def test_opening_twice_is_rejected(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        with pytest.raises(ModalStateError):
            modal.open_edit(RECORD)
        assert modal.state == CREATING

    def test_cancel_closes(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)
        modal.cancel()

        assert modal.state == CLOSED
        assert modal.fields == {}

    def test_submit_while_closed_is_rejected(self, store):
        with pytest.raises(ModalStateError):
            ProductionModal().submit({}, store)


class TestSubmit:

    def test_create_stores_display_date_and_closes(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        record = modal.submit({
            'date': '2025-08-02',
            'birds': '480',
            'eggsCollected': '430',
            'damagedEggs': '3',
        }, store)

        assert record['id'] == 2
        assert record['date'] == '02/08/2025'
        assert record['batchNumber'] == 'Batch-002'
        assert modal.state == CLOSED

    def test_read_only_batch_number_cannot_be_overridden(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        record = modal.submit({
            'date': '2025-08-02', 'batchNumber': 'Batch-900',
            'birds': '1', 'eggsCollected': '1', 'damagedEggs': '0',
        }, store)

        assert record['batchNumber'] == 'Batch-002'

    def test_edit_replaces_record(self, store):
        modal = ProductionModal()
        modal.open_edit(RECORD)

        record = modal.submit({'eggsCollected': '460'}, store)

        assert record['id'] == 1
        assert store.records[0]['eggsCollected'] == 460
        assert store.records[0]['date'] == '01/08/2025'

    def test_failure_keeps_modal_open_with_input(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        with pytest.raises(RecordValidationError):
            modal.submit({'date': '2025-08-02', 'birds': 'lots', 'eggsCollected': '1'}, store)

        assert modal.state == CREATING
        assert modal.fields['birds'] == 'lots'
        assert modal.error
        assert len(store.records) == 1

    def test_invalid_date_is_reported(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        with pytest.raises(RecordValidationError) as exc:
            modal.submit({'date': '02/08/2025', 'birds': '1', 'eggsCollected': '1'}, store)

        assert 'date' in exc.value.errors


class TestSessionRoundTrip:

    def test_state_survives_serialization(self, store):
        modal = ProductionModal()
        modal.open_create(store.records)

        restored = ProductionModal.from_session(modal.to_session())

        assert restored.state == CREATING
        assert restored.fields == modal.fields
        assert restored.to_dict()['title'] == 'Add Production Record'

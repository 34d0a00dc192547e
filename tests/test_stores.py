"""
Tests for record stores.
"""
import pytest

from core.api_client import CollectionResource, FarmApiClient
from core.exceptions import HttpError, RecordNotFound, RecordValidationError
from records.stores import LocalRecordStore, RemoteRecordStore, SessionRecordStore
from sales_orders.serializers import SalesOrderSerializer
from sales_orders.services import SEED_ORDERS
from task_scheduling.serializers import TaskSerializer

NEW_ORDER = {
    'customer': 'Nimal Perera',
    'product': 'Fresh Eggs',
    'quantity': 20,
    'price': 100,
    'status': 'Pending',
    'date': '2024-02-01',
}


@pytest.fixture
def local_store():
    return LocalRecordStore(SEED_ORDERS, serializer_class=SalesOrderSerializer, label='order')


class TestLocalRecordStore:

    def test_create_assigns_next_id(self, local_store):
        record = local_store.create(NEW_ORDER)

        assert record['id'] == 4
        assert local_store.records[-1] == record

    def test_deleted_maximum_id_is_not_reused(self, local_store):
        local_store.remove(3, confirm=lambda: True)
        record = local_store.create(NEW_ORDER)

        assert record['id'] == 4
        assert [r['id'] for r in local_store.records] == [1, 2, 4]

    def test_ids_stay_unique_across_delete_and_create(self, local_store):
        local_store.remove(3, confirm=lambda: True)
        local_store.create(NEW_ORDER)
        local_store.remove(4, confirm=lambda: True)
        local_store.create(NEW_ORDER)

        ids = [r['id'] for r in local_store.records]
        assert ids == [1, 2, 5]
        assert len(set(ids)) == len(ids)

    def test_create_validates_schema(self, local_store):
        with pytest.raises(RecordValidationError):
            local_store.create({**NEW_ORDER, 'product': 'Duck Eggs'})
        assert len(local_store.records) == 3

    def test_update_replaces_record_in_place(self, local_store):
        updated = local_store.update(2, {**NEW_ORDER, 'status': 'Completed'})

        assert updated['id'] == 2
        assert local_store.records[1]['customer'] == 'Nimal Perera'
        assert [r['id'] for r in local_store.records] == [1, 2, 3]

    def test_update_missing_id_raises(self, local_store):
        with pytest.raises(RecordNotFound):
            local_store.update(99, NEW_ORDER)

    def test_cancelled_delete_leaves_collection_unchanged(self, local_store):
        before = [dict(r) for r in local_store.records]

        assert local_store.remove(2, confirm=lambda: False) is False
        assert local_store.records == before

    def test_confirmed_delete_removes_record(self, local_store):
        assert local_store.remove('2', confirm=lambda: True) is True
        assert [r['id'] for r in local_store.records] == [1, 3]

    def test_delete_missing_id_raises(self, local_store):
        with pytest.raises(RecordNotFound):
            local_store.remove(42, confirm=lambda: True)


class TestSessionRecordStore:

    def test_seeds_session_once(self):
        session = {}
        store = SessionRecordStore(session, 'records:tasks', seed=[{'id': 1, 'date': '12/08/25'}],
                                   serializer_class=TaskSerializer)

        assert store.records == [{'id': 1, 'date': '12/08/25'}]
        assert session['records:tasks'] == [{'id': 1, 'date': '12/08/25'}]

    def test_mutations_are_written_back(self):
        class Session(dict):
            modified = False

        session = Session()
        store = SessionRecordStore(session, 'records:orders', seed=SEED_ORDERS,
                                   serializer_class=SalesOrderSerializer)
        store.create(NEW_ORDER)

        assert session.modified is True
        assert len(session['records:orders']) == 4
        assert len(SEED_ORDERS) == 3

        reopened = SessionRecordStore(session, 'records:orders', seed=SEED_ORDERS)
        assert [r['id'] for r in reopened.records] == [1, 2, 3, 4]

    def test_high_water_mark_survives_reopen(self):
        class Session(dict):
            modified = False

        session = Session()
        store = SessionRecordStore(session, 'records:orders', seed=SEED_ORDERS,
                                   serializer_class=SalesOrderSerializer)
        store.remove(3, confirm=lambda: True)

        assert session['records:orders:last_id'] == 3

        reopened = SessionRecordStore(session, 'records:orders', seed=SEED_ORDERS,
                                      serializer_class=SalesOrderSerializer)
        assert reopened.create(NEW_ORDER)['id'] == 4
        assert session['records:orders:last_id'] == 4


class TestRemoteRecordStore:

    @pytest.fixture
    def store(self, farm_api):
        return RemoteRecordStore(CollectionResource(FarmApiClient(), 'sales-orders', SalesOrderSerializer))

    def test_create_refetches_and_server_order_wins(self, store, farm_api):
        farm_api.on('GET', '/sales-orders', {'success': True, 'data': []})
        store.load()
        farm_api.on('POST', '/sales-orders', {'success': True, 'data': {**NEW_ORDER, '_id': 'a1'}})
        farm_api.on('GET', '/sales-orders', {'success': True, 'data': [
            {**NEW_ORDER, '_id': 'z9', 'customer': 'Older'},
            {**NEW_ORDER, '_id': 'a1'},
        ]})

        store.create(NEW_ORDER)

        assert [r['id'] for r in store.records] == ['z9', 'a1']
        assert [c[0] for c in farm_api.calls] == ['GET', 'POST', 'GET']

    def test_failed_refetch_keeps_optimistic_list(self, store, farm_api):
        farm_api.on('GET', '/sales-orders', {'success': True, 'data': []})
        store.load()
        farm_api.on('POST', '/sales-orders', {'success': True, 'data': {**NEW_ORDER, '_id': 'a1'}})
        farm_api.fail('GET', '/sales-orders')

        store.create(NEW_ORDER)

        assert [r['id'] for r in store.records] == ['a1']

    def test_server_error_propagates(self, store, farm_api):
        farm_api.on('GET', '/sales-orders', {'success': True, 'data': [{**NEW_ORDER, '_id': 'a1'}]})
        store.load()
        farm_api.on('DELETE', '/sales-orders/a1', {'success': False, 'message': 'Locked'}, status_code=409)

        with pytest.raises(HttpError):
            store.remove('a1', confirm=lambda: True)
        assert len(store.records) == 1

    def test_cancelled_delete_never_calls_server(self, store, farm_api):
        farm_api.on('GET', '/sales-orders', {'success': True, 'data': [{**NEW_ORDER, '_id': 'a1'}]})
        store.load()

        assert store.remove('a1', confirm=lambda: False) is False
        assert [c[0] for c in farm_api.calls] == ['GET']

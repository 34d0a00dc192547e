"""
Tests for the farm Resource Client.
"""
import pytest
import requests

from core.api_client import CollectionResource, FarmApiClient, normalize_record
from core.exceptions import HttpError, RecordValidationError, TransportError
from egg_production.serializers import ProductionRecordSerializer

PRODUCTION_DOC = {
    '_id': '66b1f0c2',
    'date': '01/08/2025',
    'batchNumber': 'Batch-001',
    'birds': 500,
    'eggsCollected': 450,
    'damagedEggs': 5,
    'notes': '',
}


@pytest.fixture
def resource(farm_api):
    return CollectionResource(FarmApiClient(), 'egg-production', ProductionRecordSerializer)


class TestNormalizeRecord:

    def test_renames_backend_id(self):
        record = normalize_record({'_id': 42, 'name': 'x'})
        assert record == {'id': '42', 'name': 'x'}

    def test_leaves_records_without_backend_id(self):
        assert normalize_record({'id': 3}) == {'id': 3}


class TestFarmApiClient:

    def test_returns_parsed_body(self, farm_api):
        farm_api.on('GET', '/health', {'status': 'OK', 'message': 'running'})

        assert FarmApiClient().health()['status'] == 'OK'
        assert farm_api.calls == [('GET', '/health', None)]

    def test_error_uses_server_message(self, farm_api):
        farm_api.on('POST', '/contact', {'success': False, 'message': 'Mail relay down'}, status_code=503)

        with pytest.raises(HttpError) as exc:
            FarmApiClient().send_contact({'name': 'A'})

        assert exc.value.status_code == 503
        assert exc.value.message == 'Mail relay down'
        assert exc.value.code == 'HTTP_ERROR'

    def test_error_without_message_is_generic(self, farm_api):
        farm_api.on('GET', '/contact/test', None, status_code=500)

        with pytest.raises(HttpError) as exc:
            FarmApiClient().test_contact()

        assert exc.value.message == 'Request failed'

    def test_connection_failure_raises_transport_error(self, farm_api):
        farm_api.fail('GET', '/health')

        with pytest.raises(TransportError) as exc:
            FarmApiClient().health()

        assert exc.value.code == 'CONNECTION_ERROR'

    def test_every_request_carries_a_timeout(self, farm_api):
        farm_api.on('GET', '/health', {'status': 'OK'})

        FarmApiClient().health()

        assert farm_api.options[-1]['timeout'] == 30

    def test_slow_server_raises_timeout(self, farm_api):
        farm_api.fail('GET', '/health', requests.exceptions.ReadTimeout('Read timed out'))

        with pytest.raises(TransportError) as exc:
            FarmApiClient().health()

        assert exc.value.code == 'TIMEOUT'
        assert exc.value.details['timeout'] == 30

    def test_unreadable_success_body_raises_transport_error(self, farm_api):
        farm_api.on('GET', '/health', None)

        with pytest.raises(TransportError) as exc:
            FarmApiClient().health()

        assert exc.value.code == 'INVALID_RESPONSE'


class TestCollectionResource:

    def test_list_normalizes_and_validates(self, resource, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': [PRODUCTION_DOC]})

        records = resource.list()

        assert len(records) == 1
        assert records[0]['id'] == '66b1f0c2'
        assert records[0]['eggsCollected'] == 450
        assert '_id' not in records[0]

    def test_list_rejects_malformed_records(self, resource, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': [{'_id': '1', 'birds': 'many'}]})

        with pytest.raises(RecordValidationError):
            resource.list()

    def test_create_sends_validated_body_without_id(self, resource, farm_api):
        created = {**PRODUCTION_DOC, '_id': 'new'}
        farm_api.on('POST', '/egg-production', {'success': True, 'data': created})

        draft = {k: v for k, v in PRODUCTION_DOC.items() if k != '_id'}
        record = resource.create({**draft, 'id': 'ignored', 'birds': '500'})

        method, path, body = farm_api.calls[0]
        assert (method, path) == ('POST', '/egg-production')
        assert 'id' not in body
        assert body['birds'] == 500
        assert record['id'] == 'new'

    def test_create_rejects_invalid_draft_without_calling_server(self, resource, farm_api):
        with pytest.raises(RecordValidationError) as exc:
            resource.create({'date': '01/08/2025', 'batchNumber': 'Batch-002', 'birds': -1,
                             'eggsCollected': 1, 'damagedEggs': 0})

        assert 'birds' in exc.value.errors
        assert farm_api.calls == []

    def test_update_puts_to_record_path(self, resource, farm_api):
        farm_api.on('PUT', '/egg-production/66b1f0c2', {'success': True, 'message': 'Updated'})

        draft = {k: v for k, v in PRODUCTION_DOC.items() if k != '_id'}
        record = resource.update('66b1f0c2', draft)

        assert farm_api.calls[0][1] == '/egg-production/66b1f0c2'
        assert record['id'] == '66b1f0c2'

    def test_summary_returns_data(self, resource, farm_api):
        farm_api.on('GET', '/egg-production/summary', {'success': True, 'data': {'totalEggs': 10}})

        assert resource.summary() == {'totalEggs': 10}

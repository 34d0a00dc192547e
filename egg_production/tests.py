"""
Tests for egg production: derived fields, the backend-wired page and the
home summary aggregator.
"""
import pytest
from rest_framework import status

from egg_production.services import (
    production_rate, project_record, summarize_production, usable_eggs,
)

BASE = '/egg-production/'

DOCS = [
    {'_id': 'a1', 'date': '01/08/2025', 'batchNumber': 'Batch-001', 'birds': 500,
     'eggsCollected': 450, 'damagedEggs': 10, 'notes': ''},
    {'_id': 'a2', 'date': '02/08/2025', 'batchNumber': 'Batch-002', 'birds': 400,
     'eggsCollected': 300, 'damagedEggs': 20, 'eggProductionRate': '76.5'},
]

RECORDS = [
    {'id': 'a1', 'birds': 500, 'eggsCollected': 450, 'damagedEggs': 10},
    {'id': 'a2', 'birds': 400, 'eggsCollected': 300, 'damagedEggs': 20},
]


class TestDerivedFields:

    def test_usable_eggs_is_not_clamped(self):
        assert usable_eggs({'eggsCollected': 10, 'damagedEggs': 15}) == -5

    def test_rate_computed_from_birds(self):
        assert production_rate({'birds': 300, 'eggsCollected': 200}) == 66.67

    def test_rate_prefers_backend_value(self):
        assert production_rate({'birds': 300, 'eggsCollected': 200, 'eggProductionRate': '80'}) == 80

    def test_rate_with_no_birds(self):
        assert production_rate({'birds': 0, 'eggsCollected': 20}) == 0

    def test_projection_keeps_stored_fields(self):
        row = project_record({'id': 1, 'eggsCollected': 5, 'damagedEggs': 1, 'birds': 10})
        assert row['id'] == 1
        assert row['usableEggs'] == 4
        assert row['productionRate'] == 50


class TestSummarizeProduction:

    def test_with_sales(self):
        summary = summarize_production(RECORDS, [{'quantity': 100}, {'quantity': 20}])

        assert summary['totalRecords'] == 2
        assert summary['totalBirds'] == 900
        assert summary['totalEggs'] == 750
        assert summary['totalDamagedEggs'] == 30
        assert summary['usableEggs'] == 720
        assert summary['eggsSold'] == 120
        assert summary['eggsInStock'] == 600
        assert summary['degraded'] is False

    def test_stock_is_clamped_when_oversold(self):
        summary = summarize_production(RECORDS, [{'quantity': 5000}])
        assert summary['eggsInStock'] == 0

    def test_sales_failure_falls_back(self):
        summary = summarize_production(RECORDS, None)

        assert summary['eggsSold'] == 0
        assert summary['eggsInStock'] == summary['totalEggs'] - summary['totalDamagedEggs']
        assert summary['totalEggs'] == 750
        assert summary['degraded'] is True

    def test_production_failure_zeroes_everything(self):
        summary = summarize_production(None, [{'quantity': 10}])

        assert summary['totalEggs'] == 0
        assert summary['eggsSold'] == 0
        assert summary['eggsInStock'] == 0
        assert summary['averageProduction'] == 0


class TestProductionPage:

    def test_rows_carry_derived_fields(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})

        response = api_client.get(BASE)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['local'] is False
        first, second = response.data['rows']
        assert first['id'] == 'a1'
        assert first['usableEggs'] == 440
        assert first['productionRate'] == 90
        assert second['productionRate'] == 76.5
        assert response.data['summary']['totalEggs'] == 750

    def test_read_failure_renders_empty_page(self, api_client, farm_api):
        farm_api.fail('GET', '/egg-production')

        response = api_client.get(BASE)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['rows'] == []
        assert response.data['summary']['totalRecords'] == 0

    def test_sort_on_computed_column(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})

        response = api_client.post(f'{BASE}sort/', {'key': 'usableEggs'})

        assert [r['id'] for r in response.data['rows']] == ['a2', 'a1']

    def test_create_numbers_batch_and_refetches(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})
        response = api_client.post(f'{BASE}modal/create/')
        assert response.data['modal']['fields']['batchNumber'] == 'Batch-003'
        assert response.data['modal']['readOnly'] == ['batchNumber']

        created = {'_id': 'a3', 'date': '03/08/2025', 'batchNumber': 'Batch-003', 'birds': 450,
                   'eggsCollected': 400, 'damagedEggs': 0}
        farm_api.on('POST', '/egg-production', {'success': True, 'data': created})
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS + [created]})

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'date': '2025-08-03', 'birds': '450', 'eggsCollected': '400', 'damagedEggs': '0',
        }})

        assert response.status_code == status.HTTP_201_CREATED
        post_body = next(body for method, path, body in farm_api.calls if method == 'POST')
        assert post_body['date'] == '03/08/2025'
        assert post_body['batchNumber'] == 'Batch-003'
        assert [r['id'] for r in response.data['rows']] == ['a1', 'a2', 'a3']

    def test_upstream_failure_on_submit_is_reported(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})
        farm_api.on('PUT', '/egg-production/a1', {'success': False, 'message': 'Database offline'},
                    status_code=500)
        api_client.post(f'{BASE}modal/a1/edit/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {'eggsCollected': '451'}})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['alert'] == 'Database offline'
        assert response.data['modal']['state'] == 'editing'
        assert response.data['modal']['fields']['eggsCollected'] == '451'

    def test_create_refuses_to_number_without_the_collection(self, api_client, farm_api):
        farm_api.fail('GET', '/egg-production')

        response = api_client.post(f'{BASE}modal/create/')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['success'] is False
        assert response.data['code'] == 'CONNECTION_ERROR'
        assert response.data['modal']['state'] == 'closed'
        assert api_client.get(BASE).data['modal']['state'] == 'closed'

    def test_backend_rejection_keeps_its_status(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})
        farm_api.on('POST', '/egg-production',
                    {'success': False, 'message': 'Batch number already exists'}, status_code=400)
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'date': '2025-08-03', 'birds': '450', 'eggsCollected': '400',
        }})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['alert'] == 'Batch number already exists'
        assert response.data['modal']['state'] == 'creating'

    def test_confirmed_delete_calls_backend(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', {'success': True, 'data': DOCS})
        farm_api.on('DELETE', '/egg-production/a2', {'success': True, 'message': 'Deleted'})

        response = api_client.post(f'{BASE}records/a2/delete/', {'confirm': True})

        assert response.data['success'] is True
        assert ('DELETE', '/egg-production/a2', None) in farm_api.calls


@pytest.mark.parametrize('field', ['birds', 'eggsCollected', 'damagedEggs'])
def test_negative_counts_are_rejected(field):
    from egg_production.serializers import ProductionRecordSerializer

    payload = {'date': '01/08/2025', 'batchNumber': 'Batch-001', 'birds': 1,
               'eggsCollected': 1, 'damagedEggs': 0, field: -1}
    assert not ProductionRecordSerializer(data=payload).is_valid()

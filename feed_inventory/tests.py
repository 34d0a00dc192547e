"""
Tests for feed inventory.
"""
from datetime import date

from rest_framework import status

from feed_inventory.services import add_months, is_low_stock, project_item, reduce_summary

BASE = '/feed-inventory/'

ITEMS = [
    {'_id': 'f1', 'type': 'Layer Feed', 'quantity': 500, 'unit': 'KG', 'supplier': 'Prima',
     'costPerUnit': 120, 'lastRestocked': '2025-08-01', 'expiryDate': '2026-02-01',
     'minimumThreshold': 100, 'location': 'Main Storage'},
    {'_id': 'f2', 'type': 'Chick Starter', 'quantity': 80, 'unit': 'KG', 'supplier': 'Prima',
     'costPerUnit': 150, 'lastRestocked': '2025-07-20', 'expiryDate': '2026-01-20'},
]


class TestDerivedFields:

    def test_total_cost_and_low_stock(self):
        row = project_item({'quantity': 80, 'costPerUnit': 150, 'minimumThreshold': 100})
        assert row['totalCost'] == 12000
        assert row['isLowStock'] is True

    def test_threshold_is_inclusive(self):
        assert is_low_stock({'quantity': 100, 'minimumThreshold': 100}) is True
        assert is_low_stock({'quantity': 101}) is False

    def test_add_months_clamps_day(self):
        assert add_months(date(2025, 8, 31), 6) == date(2026, 2, 28)


class TestReduceSummary:

    def test_local_reduction(self):
        summary = reduce_summary([
            {'type': 'Layer Feed', 'quantity': 500, 'costPerUnit': 120, 'minimumThreshold': 100},
            {'type': 'Chick Starter', 'quantity': 80, 'costPerUnit': 150},
        ])

        assert summary['totalItems'] == 2
        assert summary['totalQuantity'] == 580
        assert summary['totalValue'] == 72000
        assert summary['lowStockItems'] == 1
        assert summary['daysWillLast'] == 1
        assert [t['type'] for t in summary['inventoryByType']] == ['Layer Feed', 'Chick Starter']


class TestFeedPage:

    def test_server_summary_preferred(self, api_client, farm_api):
        farm_api.on('GET', '/feed-inventory', {'success': True, 'data': ITEMS})
        farm_api.on('GET', '/feed-inventory/summary', {'success': True, 'data': {'totalItems': 2, 'daysWillLast': 1}})

        response = api_client.get(BASE)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['summary']['source'] == 'server'
        assert response.data['rows'][1]['isLowStock'] is True
        assert response.data['rows'][1]['minimumThreshold'] == 100
        assert response.data['rows'][1]['location'] == 'Main Storage'

    def test_summary_falls_back_to_local_reduction(self, api_client, farm_api):
        farm_api.on('GET', '/feed-inventory', {'success': True, 'data': ITEMS})
        farm_api.fail('GET', '/feed-inventory/summary')

        summary = api_client.get(BASE).data['summary']

        assert summary['source'] == 'local'
        assert summary['totalQuantity'] == 580

    def test_create_form_defaults(self, api_client, farm_api):
        farm_api.on('GET', '/feed-inventory', {'success': True, 'data': []})

        fields = api_client.post(f'{BASE}modal/create/').data['modal']['fields']

        assert fields['unit'] == 'KG'
        assert fields['minimumThreshold'] == '100'
        assert fields['location'] == 'Main Storage'
        assert fields['expiryDate'] > fields['lastRestocked']


USAGE_FIELDS = {
    'feedType': 'Layer Feed',
    'date': '2025-08-14',
    'quantityUsed': 45,
    'recordedBy': 'Saman Kumara',
}

USAGE_DOC = {
    '_id': 'u1', 'feedType': 'Layer Feed', 'date': '2025-08-14', 'quantityUsed': 45,
    'totalBirds': 200, 'feedingTime': 'Full Day', 'wastePercentage': 0, 'location': 'Main Coop',
    'recordedBy': 'Saman Kumara', 'feedPerBird': '0.225', 'costAnalysis': {'costPerKg': 120},
}

DASHBOARD = {
    'summary': {'totalStock': 955, 'totalValue': 114600, 'lowStockItems': 1, 'activeStockTypes': 2},
    'inventoryByType': [{'feedType': 'Layer Feed', 'quantity': 875, 'percentage': '91.6'}],
    'alerts': {'lowStock': [{'_id': 's2', 'feedType': 'Chick Starter', 'currentQuantity': 80}]},
}


class TestFeedUsage:

    def test_record_usage_relays_validated_entry(self, api_client, farm_api):
        farm_api.on('POST', '/feed-usage', {
            'success': True,
            'message': 'Feed usage recorded successfully',
            'data': {'usage': USAGE_DOC, 'remainingStock': 830},
        }, status_code=201)
        farm_api.on('GET', '/feed-stock/dashboard', {'success': True, 'data': DASHBOARD})

        response = api_client.post(f'{BASE}usage/', {'fields': USAGE_FIELDS})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['usage']['id'] == 'u1'
        assert response.data['remainingStock'] == 830
        assert response.data['dashboard']['summary']['totalStock'] == 955

        body = next(body for method, path, body in farm_api.calls if method == 'POST')
        assert body['totalBirds'] == 200
        assert body['feedingTime'] == 'Full Day'
        assert body['location'] == 'Main Coop'
        assert 'id' not in body

    def test_invalid_entry_is_not_relayed(self, api_client, farm_api):
        response = api_client.post(f'{BASE}usage/', {'fields': {**USAGE_FIELDS, 'quantityUsed': 0}})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantityUsed' in response.data['fields']
        assert farm_api.calls == []

    def test_backend_rejection_is_passed_through(self, api_client, farm_api):
        farm_api.on('POST', '/feed-usage', {
            'success': False,
            'message': 'Cannot use 45 KG. Only 30 KG available in stock.',
        }, status_code=400)

        response = api_client.post(f'{BASE}usage/', {'fields': USAGE_FIELDS})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['alert'] == 'Cannot use 45 KG. Only 30 KG available in stock.'

    def test_recent_usage(self, api_client, farm_api):
        farm_api.on('GET', '/feed-usage?limit=20', {'success': True, 'data': [USAGE_DOC]})

        response = api_client.get(f'{BASE}usage/')

        assert response.data['count'] == 1
        assert response.data['usage'][0]['id'] == 'u1'

    def test_recent_usage_degrades_to_empty(self, api_client, farm_api):
        farm_api.fail('GET', '/feed-usage?limit=20')

        response = api_client.get(f'{BASE}usage/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['usage'] == []


class TestFeedStock:

    def test_deduct_posts_to_stock_item(self, api_client, farm_api):
        farm_api.on('POST', '/feed-stock/s1/deduct', {
            'success': True,
            'data': {'_id': 's1', 'feedType': 'Layer Feed', 'currentQuantity': 830},
        })

        response = api_client.post(f'{BASE}stock/s1/deduct/', {'quantityUsed': 45})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stock']['id'] == 's1'
        assert response.data['stock']['currentQuantity'] == 830
        assert ('POST', '/feed-stock/s1/deduct', {'quantityUsed': 45.0}) in farm_api.calls

    def test_deduct_rejects_non_positive_quantity(self, api_client, farm_api):
        response = api_client.post(f'{BASE}stock/s1/deduct/', {'quantityUsed': -5})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert farm_api.calls == []

    def test_deduct_unknown_stock(self, api_client, farm_api):
        farm_api.on('POST', '/feed-stock/zz/deduct', {'success': False, 'message': 'Feed stock not found'},
                    status_code=404)

        response = api_client.post(f'{BASE}stock/zz/deduct/', {'quantityUsed': 10})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['alert'] == 'Feed stock not found'

    def test_dashboard_fills_missing_figures(self, api_client, farm_api):
        farm_api.on('GET', '/feed-stock/dashboard', {'success': True, 'data': DASHBOARD})

        data = api_client.get(f'{BASE}stock/dashboard/').data

        assert data['degraded'] is False
        assert data['summary']['totalStock'] == 955
        assert data['summary']['criticalItems'] == 0
        assert data['alerts']['lowStock'][0]['id'] == 's2'
        assert data['alerts']['expiring'] == []

    def test_dashboard_degrades_silently(self, api_client, farm_api):
        farm_api.fail('GET', '/feed-stock/dashboard')

        response = api_client.get(f'{BASE}stock/dashboard/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['degraded'] is True
        assert response.data['summary']['totalStock'] == 0
        assert response.data['inventoryByType'] == []


class TestUsageAnalytics:

    def test_query_is_forwarded(self, api_client, farm_api):
        farm_api.on('GET', '/feed-usage/analytics?feedType=Layer+Feed&period=weekly', {
            'success': True,
            'data': {'summary': {'totalRecords': 4, 'totalUsage': 180}, 'consumptionTrends': [{'_id': 1}]},
        })

        data = api_client.get(f'{BASE}usage/analytics/', {'feedType': 'Layer Feed', 'period': 'weekly'}).data

        assert data['summary']['totalUsage'] == 180
        assert data['summary']['totalCost'] == 0
        assert data['consumptionTrends'] == [{'_id': 1}]

    def test_unknown_period(self, api_client, farm_api):
        response = api_client.get(f'{BASE}usage/analytics/', {'period': 'hourly'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_analytics_degrade_to_zero(self, api_client, farm_api):
        farm_api.fail('GET', '/feed-usage/analytics?period=daily')

        data = api_client.get(f'{BASE}usage/analytics/').data

        assert data['degraded'] is True
        assert data['summary'] == {
            'totalRecords': 0, 'totalUsage': 0, 'totalCost': 0, 'averageDailyUsage': 0,
        }

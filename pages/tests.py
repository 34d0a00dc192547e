"""
Tests for the page shell: home dashboard, static pages, search and health.
"""
from rest_framework import status

PRODUCTION = {'success': True, 'data': [
    {'_id': 'p1', 'date': '01/08/2025', 'batchNumber': 'Batch-001', 'birds': 500,
     'eggsCollected': 450, 'damagedEggs': 10},
    {'_id': 'p2', 'date': '02/08/2025', 'batchNumber': 'Batch-002', 'birds': 500,
     'eggsCollected': 400, 'damagedEggs': 40, 'notes': 'Heat wave'},
]}

SALES = {'success': True, 'data': [
    {'_id': 's1', 'customer': 'John Smith', 'product': 'Fresh Eggs', 'quantity': 300,
     'price': 1500, 'status': 'Completed', 'date': '2025-08-02'},
]}


class TestHomeDashboard:

    def test_combines_production_with_local_sales(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', PRODUCTION)

        response = api_client.get('/')

        summary = response.data['summary']
        assert response.status_code == status.HTTP_200_OK
        assert summary['totalEggs'] == 850
        assert summary['usableEggs'] == 800
        # Seeded session orders: 50 + 30 + 75
        assert summary['eggsSold'] == 155
        assert summary['eggsInStock'] == 645
        assert summary['degraded'] is False
        assert response.data['navigation'][0]['path'] == '/'

    def test_remote_sales(self, api_client, farm_api, settings):
        settings.FARM_LOCAL_COLLECTIONS = []
        farm_api.on('GET', '/egg-production', PRODUCTION)
        farm_api.on('GET', '/sales-orders', SALES)

        summary = api_client.get('/').data['summary']

        assert summary['eggsSold'] == 300
        assert summary['eggsInStock'] == 500

    def test_sales_failure_uses_fallback(self, api_client, farm_api, settings):
        settings.FARM_LOCAL_COLLECTIONS = []
        farm_api.on('GET', '/egg-production', PRODUCTION)
        farm_api.fail('GET', '/sales-orders')

        response = api_client.get('/')

        summary = response.data['summary']
        assert response.status_code == status.HTTP_200_OK
        assert summary['eggsSold'] == 0
        assert summary['eggsInStock'] == 850 - 50
        assert summary['totalBirds'] == 1000
        assert summary['degraded'] is True

    def test_production_failure_shows_zeroes(self, api_client, farm_api):
        farm_api.fail('GET', '/egg-production')

        summary = api_client.get('/').data['summary']

        assert summary['totalEggs'] == 0
        assert summary['eggsSold'] == 0
        assert summary['degraded'] is True


class TestStaticPages:

    def test_about(self, api_client):
        response = api_client.get('/about/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'].startswith('About')

    def test_services(self, api_client):
        response = api_client.get('/services/')
        assert any(s['heading'] == 'Organic Eggs' for s in response.data['sections'])

    def test_navigation(self, api_client):
        paths = [entry['path'] for entry in api_client.get('/navigation/').data['navigation']]
        assert '/financial-records/' in paths


class TestSearch:

    def test_matches_across_collections(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', PRODUCTION)
        farm_api.on('GET', '/feed-inventory', {'success': True, 'data': []})

        response = api_client.get('/search/', {'q': 'heat'})

        assert [r['id'] for r in response.data['results']['egg-production']] == ['p2']
        assert response.data['total'] == 1

    def test_failing_collection_yields_empty_list(self, api_client, farm_api):
        farm_api.on('GET', '/egg-production', PRODUCTION)
        farm_api.fail('GET', '/feed-inventory')

        response = api_client.get('/search/', {'q': 'pending'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results']['feed-inventory'] == []
        assert len(response.data['results']['sales-orders']) == 1
        assert len(response.data['results']['task-scheduling']) == 2

    def test_blank_query_returns_nothing(self, api_client, farm_api):
        response = api_client.get('/search/', {'q': '  '})

        assert response.data['total'] == 0
        assert farm_api.calls == []


class TestHealth:

    def test_reports_upstream(self, api_client, farm_api):
        farm_api.on('GET', '/health', {'status': 'OK', 'message': 'Server is running'})

        response = api_client.get('/health/')

        assert response.data['status'] == 'OK'
        assert response.data['upstream']['status'] == 'OK'

    def test_unreachable_upstream_is_not_an_error(self, api_client, farm_api):
        farm_api.fail('GET', '/health')

        response = api_client.get('/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upstream']['status'] == 'unreachable'

"""
Tests for sales orders.
"""
from datetime import date
from unittest.mock import patch

from rest_framework import status

from sales_orders.services import SEED_ORDERS, summarize_sales

BASE = '/sales-orders/'


class TestSalesSummary:

    def test_seed_summary(self):
        summary = summarize_sales(list(SEED_ORDERS))

        assert summary['totalOrders'] == 3
        assert summary['totalRevenue'] == 805
        assert summary['pendingOrders'] == 1
        assert summary['processingOrders'] == 1
        assert summary['completedOrders'] == 1

    def test_top_products_by_quantity(self):
        orders = [
            {'product': 'Fresh Eggs', 'quantity': 10, 'price': 50},
            {'product': 'Organic Eggs', 'quantity': 40, 'price': 240},
            {'product': 'Fresh Eggs', 'quantity': 20, 'price': 100},
        ]

        top = summarize_sales(orders)['topProducts']

        assert [p['product'] for p in top] == ['Organic Eggs', 'Fresh Eggs']
        assert top[1] == {'product': 'Fresh Eggs', 'quantity': 30, 'revenue': 150}

    def test_empty(self):
        summary = summarize_sales([])
        assert summary['totalRevenue'] == 0
        assert summary['topProducts'] == []


class TestSalesPage:

    def test_order_number_precomputed_for_current_year(self, api_client):
        with patch('records.numbering.timezone.localdate', return_value=date(2026, 4, 2)):
            response = api_client.post(f'{BASE}modal/create/')

        assert response.data['modal']['fields']['orderNumber'] == 'SO-2026-001'

    def test_create_order(self, api_client):
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'customer': 'Kamal Dias',
            'product': 'Organic Eggs',
            'quantity': '12',
            'price': '72.50',
            'date': '2024-01-16',
        }})

        assert response.status_code == status.HTTP_201_CREATED
        created = response.data['rows'][-1]
        assert created['id'] == 4
        assert created['quantity'] == 12
        assert created['orderNumber'].startswith('SO-')
        assert response.data['summary']['totalOrders'] == 4

    def test_invalid_product_rejected(self, api_client):
        api_client.post(f'{BASE}modal/create/')

        response = api_client.post(f'{BASE}modal/submit/', {'fields': {
            'customer': 'Kamal Dias', 'product': 'Duck Eggs', 'quantity': '1',
            'price': '5', 'date': '2024-01-16',
        }})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'product' in response.data['fields']

    def test_filter_by_status(self, api_client):
        response = api_client.post(f'{BASE}filter/', {'field': 'status', 'value': 'Completed'})

        assert [r['customer'] for r in response.data['rows']] == ['Mary Johnson']

    def test_sessions_are_isolated(self, api_client):
        from rest_framework.test import APIClient

        api_client.post(f'{BASE}records/1/delete/', {'confirm': True})

        assert len(api_client.get(BASE).data['rows']) == 2
        assert len(APIClient().get(BASE).data['rows']) == 3

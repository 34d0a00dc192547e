"""
Tests for financial records: totals, reports and the ledger page.
"""
from datetime import date

import pytest
from rest_framework import status

from financial_records.serializers import FinancialRecordSerializer
from financial_records.services import (
    FinancialRecordModal, SEED_RECORDS, build_report, format_rupees, summarize_financial,
)
from records.stores import LocalRecordStore

TODAY = date(2024, 1, 20)

INCOME_45000 = {
    'id': 1, 'date': '2024-01-15', 'description': 'Egg Sales Revenue', 'category': 'Income',
    'amount': 45000, 'paymentMethod': 'Cash', 'reference': 'INV-001',
}
EXPENSE_12000 = {
    'id': 2, 'date': '2024-01-14', 'description': 'Feed Purchase', 'category': 'Expense',
    'amount': 12000, 'paymentMethod': 'Bank Transfer', 'reference': 'PO-002',
}


class TestFormatRupees:

    def test_whole_amounts(self):
        assert format_rupees(46000) == 'Rs. 46,000'
        assert format_rupees(0) == 'Rs. 0'

    def test_fractional_amounts(self):
        assert format_rupees(1234.5) == 'Rs. 1,234.50'


class TestSummary:

    def test_seed_totals(self):
        summary = summarize_financial(list(SEED_RECORDS), today=TODAY)

        assert summary['totalIncome'] == 83000
        assert summary['totalExpenses'] == 26000
        assert summary['netProfit'] == 57000
        assert summary['monthlyIncome'] == 83000
        assert summary['paymentMethods']['Cash'] == 45000 + 38000 + 2500

    def test_other_months_excluded_from_monthly_figures(self):
        summary = summarize_financial(list(SEED_RECORDS), today=date(2024, 2, 1))

        assert summary['monthlyIncome'] == 0
        assert summary['monthlyNet'] == 0
        assert summary['totalIncome'] == 83000

    def test_new_income_updates_totals_immediately(self):
        store = LocalRecordStore([INCOME_45000, EXPENSE_12000], serializer_class=FinancialRecordSerializer)
        assert summarize_financial(store.records, today=TODAY)['display']['totalIncome'] == 'Rs. 45,000'

        modal = FinancialRecordModal()
        modal.open_create(store.records)
        modal.submit({
            'date': '2024-01-18', 'description': 'Tray sales', 'category': 'Income',
            'amount': '1000', 'paymentMethod': 'Cash',
        }, store)

        summary = summarize_financial(store.records, today=TODAY)
        assert summary['totalIncome'] == 46000
        assert summary['display']['totalIncome'] == 'Rs. 46,000'
        assert summary['netProfit'] == 34000


class TestReport:

    def test_monthly_breakdown_uses_other_buckets(self):
        records = list(SEED_RECORDS) + [
            {'id': 7, 'date': '2024-01-16', 'description': 'Manure', 'category': 'Income',
             'subcategory': 'By-products', 'amount': 500, 'paymentMethod': 'Cash', 'reference': 'X'},
        ]

        report = build_report(records, 'monthly', today=TODAY)

        assert report['incomeBreakdown'] == {'Other Income': 83000, 'By-products': 500}
        assert report['expenseBreakdown'] == {'Other Expenses': 26000}
        assert report['netProfit'] == 57500

    def test_yearly_excludes_other_years(self):
        report = build_report(list(SEED_RECORDS), 'yearly', today=date(2025, 6, 1))
        assert report['recordCount'] == 0

    def test_all_time(self):
        report = build_report(list(SEED_RECORDS), 'all', today=date(2030, 1, 1))
        assert report['recordCount'] == 6

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            build_report([], 'weekly')


class TestFinancialPage:

    def test_reference_is_read_only_on_create(self, api_client):
        response = api_client.post('/financial-records/modal/create/')

        modal = response.data['modal']
        assert modal['fields']['reference'].startswith('FIN-')
        assert modal['readOnly'] == ['reference']

    def test_report_endpoint(self, api_client):
        response = api_client.get('/financial-records/report/', {'period': 'all'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totalIncome'] == 83000
        assert response.data['display']['netProfit'] == 'Rs. 57,000'

    def test_report_rejects_unknown_period(self, api_client):
        response = api_client.get('/financial-records/report/', {'period': 'weekly'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_payment_method_filter(self, api_client):
        response = api_client.post('/financial-records/filter/', {'field': 'paymentMethod', 'value': 'Cheque'})

        assert [r['reference'] for r in response.data['rows']] == ['MAINT-003']

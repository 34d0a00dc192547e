"""
Financial Records Service

Income and expense ledger for the farm:
- Sample entries for the session-held collection
- Reference-numbered entry form
- Running totals, current-month figures and payment-method totals
- Period reports broken down by subcategory
"""

from datetime import date
from typing import Any, Dict, List, Optional

from django.utils import timezone

from records.dates import parse_date
from records.modal import ModalController
from records.numbering import next_reference_number
from records.pages import RecordPage
from records.pipeline import DATE, NUMBER, TEXT, SortKey, to_number
from records.serializers import choice_values

from .serializers import (
    CATEGORY_CHOICES,
    EXPENSE,
    INCOME,
    PAYMENT_METHOD_CHOICES,
    FinancialRecordSerializer,
)

MONTHLY = 'monthly'
YEARLY = 'yearly'
ALL_TIME = 'all'
REPORT_PERIODS = (MONTHLY, YEARLY, ALL_TIME)

OTHER_INCOME = 'Other Income'
OTHER_EXPENSES = 'Other Expenses'

SEED_RECORDS = (
    {'id': 1, 'date': '2024-01-15', 'description': 'Egg Sales Revenue', 'category': INCOME,
     'amount': 45000, 'paymentMethod': 'Cash', 'reference': 'INV-001'},
    {'id': 2, 'date': '2024-01-14', 'description': 'Feed Purchase', 'category': EXPENSE,
     'amount': 12000, 'paymentMethod': 'Bank Transfer', 'reference': 'PO-002'},
    {'id': 3, 'date': '2024-01-13', 'description': 'Equipment Maintenance', 'category': EXPENSE,
     'amount': 3500, 'paymentMethod': 'Cheque', 'reference': 'MAINT-003'},
    {'id': 4, 'date': '2024-01-12', 'description': 'Chick Purchase', 'category': EXPENSE,
     'amount': 8000, 'paymentMethod': 'Bank Transfer', 'reference': 'CHICK-004'},
    {'id': 5, 'date': '2024-01-11', 'description': 'Egg Sales Revenue', 'category': INCOME,
     'amount': 38000, 'paymentMethod': 'Cash', 'reference': 'INV-005'},
    {'id': 6, 'date': '2024-01-10', 'description': 'Veterinary Services', 'category': EXPENSE,
     'amount': 2500, 'paymentMethod': 'Cash', 'reference': 'VET-006'},
)


def format_rupees(amount) -> str:
    """``46000`` -> ``Rs. 46,000``; fractional amounts keep two decimals."""
    value = to_number(amount)
    if float(value).is_integer():
        return f"Rs. {int(value):,}"
    return f"Rs. {value:,.2f}"


class FinancialRecordModal(ModalController):
    default_fields = {
        'date': lambda: timezone.localdate().isoformat(),
        'description': '',
        'category': '',
        'subcategory': '',
        'amount': '',
        'paymentMethod': '',
        'reference': '',
        'notes': '',
    }
    auto_numbered_fields = ('reference',)
    create_title = 'Add Financial Record'
    edit_title = 'Edit Financial Record'

    def auto_fields(self, records):
        return {'reference': next_reference_number(records)}


def _total(records, category) -> float:
    return sum(to_number(r.get('amount')) for r in records if r.get('category') == category)


def _in_period(record: Dict[str, Any], period: str, today: date) -> bool:
    if period == ALL_TIME:
        return True
    day = parse_date(record.get('date'))
    if day is None:
        return False
    if period == YEARLY:
        return day.year == today.year
    return (day.year, day.month) == (today.year, today.month)


def _payment_method_totals(records) -> Dict[str, float]:
    totals = {method: 0 for method in choice_values(PAYMENT_METHOD_CHOICES)}
    for record in records:
        method = record.get('paymentMethod')
        if method in totals:
            totals[method] += to_number(record.get('amount'))
    return totals


def summarize_financial(records: List[Dict[str, Any]], store=None,
                        today: Optional[date] = None) -> Dict[str, Any]:
    today = today or timezone.localdate()
    total_income = _total(records, INCOME)
    total_expenses = _total(records, EXPENSE)

    this_month = [r for r in records if _in_period(r, MONTHLY, today)]
    monthly_income = _total(this_month, INCOME)
    monthly_expenses = _total(this_month, EXPENSE)

    return {
        'totalRecords': len(records),
        'totalIncome': total_income,
        'totalExpenses': total_expenses,
        'netProfit': total_income - total_expenses,
        'monthlyIncome': monthly_income,
        'monthlyExpenses': monthly_expenses,
        'monthlyNet': monthly_income - monthly_expenses,
        'paymentMethods': _payment_method_totals(records),
        'display': {
            'totalIncome': format_rupees(total_income),
            'totalExpenses': format_rupees(total_expenses),
            'netProfit': format_rupees(total_income - total_expenses),
        },
    }


def build_report(records: List[Dict[str, Any]], period: str = MONTHLY,
                 today: Optional[date] = None) -> Dict[str, Any]:
    """
    Income statement for the given period.

    Args:
        records: financial records
        period: ``monthly`` (current month), ``yearly`` (current year) or ``all``
        today: reference date, defaults to the local date

    Returns:
        dict with totals, subcategory breakdowns and payment-method totals
    """
    if period not in REPORT_PERIODS:
        raise ValueError(f"Unknown report period: {period}")

    today = today or timezone.localdate()
    selected = [r for r in records if _in_period(r, period, today)]

    income_breakdown: Dict[str, float] = {}
    expense_breakdown: Dict[str, float] = {}
    for record in selected:
        amount = to_number(record.get('amount'))
        if record.get('category') == INCOME:
            key = record.get('subcategory') or OTHER_INCOME
            income_breakdown[key] = income_breakdown.get(key, 0) + amount
        elif record.get('category') == EXPENSE:
            key = record.get('subcategory') or OTHER_EXPENSES
            expense_breakdown[key] = expense_breakdown.get(key, 0) + amount

    total_income = _total(selected, INCOME)
    total_expenses = _total(selected, EXPENSE)

    return {
        'period': period,
        'generatedOn': today.isoformat(),
        'recordCount': len(selected),
        'totalIncome': total_income,
        'totalExpenses': total_expenses,
        'netProfit': total_income - total_expenses,
        'incomeBreakdown': income_breakdown,
        'expenseBreakdown': expense_breakdown,
        'paymentMethods': _payment_method_totals(selected),
    }


SORT_KEYS = {
    'date': SortKey('date', DATE),
    'description': SortKey('description', TEXT),
    'category': SortKey('category', TEXT),
    'amount': SortKey('amount', NUMBER),
    'paymentMethod': SortKey('paymentMethod', TEXT),
    'reference': SortKey('reference', TEXT),
}

FINANCIAL_PAGE = RecordPage(
    collection='financial-records',
    title='Financial Records',
    serializer_class=FinancialRecordSerializer,
    modal_class=FinancialRecordModal,
    sort_keys=SORT_KEYS,
    filter_fields=('category', 'paymentMethod'),
    summarize=summarize_financial,
    seed=SEED_RECORDS,
    choices={
        'category': choice_values(CATEGORY_CHOICES),
        'paymentMethod': choice_values(PAYMENT_METHOD_CHOICES),
    },
    record_label='financial record',
)

"""
Sales Orders Service

Sample orders for the session-held collection, the order form and the
sales summary (revenue, status counts and top products).
"""

from typing import Any, Dict, List

from django.utils import timezone

from records.modal import ModalController
from records.numbering import next_order_number
from records.pages import RecordPage
from records.pipeline import DATE, NUMBER, TEXT, SortKey, to_number
from records.serializers import choice_values

from .serializers import PRODUCT_CHOICES, STATUS_CHOICES, SalesOrderSerializer

TOP_PRODUCTS_LIMIT = 5

SEED_ORDERS = (
    {'id': 1, 'customer': 'John Smith', 'product': 'Fresh Eggs', 'quantity': 50,
     'price': 250.00, 'status': 'Pending', 'date': '2024-01-15'},
    {'id': 2, 'customer': 'Mary Johnson', 'product': 'Organic Eggs', 'quantity': 30,
     'price': 180.00, 'status': 'Completed', 'date': '2024-01-14'},
    {'id': 3, 'customer': 'David Brown', 'product': 'Free Range Eggs', 'quantity': 75,
     'price': 375.00, 'status': 'Processing', 'date': '2024-01-13'},
)


class SalesOrderModal(ModalController):
    default_fields = {
        'orderNumber': '',
        'customer': '',
        'product': 'Fresh Eggs',
        'quantity': '',
        'price': '',
        'status': 'Pending',
        'date': lambda: timezone.localdate().isoformat(),
        'notes': '',
    }
    auto_numbered_fields = ('orderNumber',)
    create_title = 'New Sales Order'
    edit_title = 'Edit Sales Order'

    def auto_fields(self, records):
        return {'orderNumber': next_order_number(records)}


def summarize_sales(records: List[Dict[str, Any]], store=None) -> Dict[str, Any]:
    status_counts = {value: 0 for value in choice_values(STATUS_CHOICES)}
    products: Dict[str, Dict[str, Any]] = {}

    for order in records:
        status = order.get('status')
        if status in status_counts:
            status_counts[status] += 1

        name = order.get('product') or 'Unknown'
        entry = products.setdefault(name, {'product': name, 'quantity': 0, 'revenue': 0})
        entry['quantity'] += to_number(order.get('quantity'))
        entry['revenue'] += to_number(order.get('price'))

    top_products = sorted(products.values(), key=lambda p: p['quantity'], reverse=True)

    return {
        'totalOrders': len(records),
        'totalRevenue': round(sum(to_number(o.get('price')) for o in records), 2),
        'pendingOrders': status_counts['Pending'],
        'processingOrders': status_counts['Processing'],
        'completedOrders': status_counts['Completed'],
        'topProducts': top_products[:TOP_PRODUCTS_LIMIT],
    }


SORT_KEYS = {
    'orderNumber': SortKey('orderNumber', TEXT),
    'customer': SortKey('customer', TEXT),
    'product': SortKey('product', TEXT),
    'quantity': SortKey('quantity', NUMBER),
    'price': SortKey('price', NUMBER),
    'status': SortKey('status', TEXT),
    'date': SortKey('date', DATE),
}

SALES_PAGE = RecordPage(
    collection='sales-orders',
    title='Sales Orders',
    serializer_class=SalesOrderSerializer,
    modal_class=SalesOrderModal,
    sort_keys=SORT_KEYS,
    filter_fields=('status', 'product'),
    summarize=summarize_sales,
    seed=SEED_ORDERS,
    choices={
        'product': choice_values(PRODUCT_CHOICES),
        'status': choice_values(STATUS_CHOICES),
    },
    record_label='order',
)

"""
Feed Inventory Service

Stock items with value and low-stock flags, and the inventory summary.
The summary comes from the backend's summary endpoint when it answers and
is otherwise reduced locally from the loaded items.

Monthly feed stock and daily usage tracking:
- Recording a day's usage (the backend draws it down from the active stock)
- Deducting an ad hoc quantity from one stock item
- Stock dashboard and usage analytics, both read-only and degrading to
  empty figures when the backend does not answer
"""

import logging
from calendar import monthrange
from datetime import date
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from django.utils import timezone

from core.api_client import CollectionResource, FarmApiClient, normalize_record, validate_payload
from core.exceptions import FarmApiError
from records.modal import ModalController
from records.pages import RecordPage
from records.pipeline import DATE, NUMBER, TEXT, SortKey, to_number
from records.serializers import choice_values
from records.stores import RemoteRecordStore

from .serializers import (
    DEFAULT_LOCATION,
    DEFAULT_MINIMUM_THRESHOLD,
    FEED_TYPE_CHOICES,
    UNIT_CHOICES,
    FeedDeductionSerializer,
    FeedInventoryItemSerializer,
    FeedStockSerializer,
    FeedUsageSerializer,
)

logger = logging.getLogger(__name__)

DAILY_CONSUMPTION = 300
SHELF_LIFE_MONTHS = 6


def total_cost(item: Dict[str, Any]) -> float:
    return round(to_number(item.get('quantity')) * to_number(item.get('costPerUnit')), 2)


def is_low_stock(item: Dict[str, Any]) -> bool:
    threshold = item.get('minimumThreshold')
    if threshold in (None, ''):
        threshold = DEFAULT_MINIMUM_THRESHOLD
    return to_number(item.get('quantity')) <= to_number(threshold)


def project_item(item: Dict[str, Any]) -> Dict[str, Any]:
    return {**item, 'totalCost': total_cost(item), 'isLowStock': is_low_stock(item)}


def add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def _default_expiry() -> str:
    return add_months(timezone.localdate(), SHELF_LIFE_MONTHS).isoformat()


class FeedItemModal(ModalController):
    default_fields = {
        'type': 'Layer Feed',
        'quantity': '',
        'unit': 'KG',
        'supplier': '',
        'supplierContact': '',
        'costPerUnit': '',
        'lastRestocked': lambda: timezone.localdate().isoformat(),
        'expiryDate': _default_expiry,
        'minimumThreshold': DEFAULT_MINIMUM_THRESHOLD,
        'location': DEFAULT_LOCATION,
        'notes': '',
    }
    create_title = 'Add Feed Item'
    edit_title = 'Edit Feed Item'


def reduce_summary(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    total_quantity = sum(to_number(i.get('quantity')) for i in items)
    by_type: Dict[str, Dict[str, Any]] = {}
    for item in items:
        name = item.get('type') or 'Unknown'
        entry = by_type.setdefault(name, {'type': name, 'quantity': 0, 'value': 0, 'items': 0})
        entry['quantity'] += to_number(item.get('quantity'))
        entry['value'] += total_cost(item)
        entry['items'] += 1

    return {
        'totalItems': len(items),
        'totalQuantity': total_quantity,
        'totalValue': round(sum(total_cost(i) for i in items), 2),
        'lowStockItems': sum(1 for i in items if is_low_stock(i)),
        'dailyConsumption': DAILY_CONSUMPTION,
        'daysWillLast': int(total_quantity // DAILY_CONSUMPTION),
        'inventoryByType': list(by_type.values()),
    }


def summarize_feed(items: List[Dict[str, Any]], store=None) -> Dict[str, Any]:
    if isinstance(store, RemoteRecordStore):
        try:
            summary = store.resource.summary()
        except FarmApiError as e:
            logger.warning(f"Feed summary endpoint failed, reducing locally: {e.message}")
        else:
            if summary:
                return {**summary, 'source': 'server'}

    return {**reduce_summary(items), 'source': 'local'}


SORT_KEYS = {
    'type': SortKey('type', TEXT),
    'quantity': SortKey('quantity', NUMBER),
    'supplier': SortKey('supplier', TEXT),
    'costPerUnit': SortKey('costPerUnit', NUMBER),
    'totalCost': SortKey('totalCost', NUMBER, accessor=total_cost),
    'lastRestocked': SortKey('lastRestocked', DATE),
    'expiryDate': SortKey('expiryDate', DATE),
    'location': SortKey('location', TEXT),
}

FEED_PAGE = RecordPage(
    collection='feed-inventory',
    title='Feed Inventory',
    serializer_class=FeedInventoryItemSerializer,
    modal_class=FeedItemModal,
    sort_keys=SORT_KEYS,
    filter_fields=('type', 'unit', 'location'),
    project=project_item,
    summarize=summarize_feed,
    choices={
        'type': choice_values(FEED_TYPE_CHOICES),
        'unit': choice_values(UNIT_CHOICES),
    },
    record_label='feed item',
)


# Stock and usage tracking

RECENT_USAGE_LIMIT = 20

EMPTY_DASHBOARD_SUMMARY = {
    'totalStock': 0,
    'totalValue': 0,
    'lowStockItems': 0,
    'criticalItems': 0,
    'expiringItems': 0,
    'totalDailyConsumption': 0,
    'overallDaysRemaining': 0,
    'activeStockTypes': 0,
}

EMPTY_ANALYTICS_SUMMARY = {
    'totalRecords': 0,
    'totalUsage': 0,
    'totalCost': 0,
    'averageDailyUsage': 0,
}


class FeedStockResource(CollectionResource):
    """``/feed-stock`` plus its dashboard and deduction endpoints."""

    def __init__(self, client: FarmApiClient):
        super().__init__(client, 'feed-stock', FeedStockSerializer)

    def deduct(self, stock_id, quantity) -> Dict[str, Any]:
        body = validate_payload(FeedDeductionSerializer, {'quantityUsed': quantity})
        result = self.client.post(f"{self._record_path(stock_id)}/deduct", body)
        return normalize_record(result.get('data') or {})

    def dashboard(self) -> Dict[str, Any]:
        result = self.client.get(f"{self.path}/dashboard")
        return result.get('data') or {}


class FeedUsageResource(CollectionResource):
    """``/feed-usage`` plus its analytics endpoint."""

    def __init__(self, client: FarmApiClient):
        super().__init__(client, 'feed-usage', FeedUsageSerializer)

    def recent(self, limit: int = RECENT_USAGE_LIMIT) -> List[Dict[str, Any]]:
        result = self.client.get(f"{self.path}?{urlencode({'limit': limit})}")
        return [self._to_record(doc) for doc in result.get('data') or []]

    def record(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        """
        Record one day's usage.

        Returns:
            ``{'usage': record, 'remainingStock': number or None}``
        """
        body = self._to_body(draft)
        result = self.client.post(self.path, body)
        data = result.get('data') or {}
        usage = data.get('usage')
        return {
            'usage': self._to_record(usage) if usage else body,
            'remainingStock': data.get('remainingStock'),
        }

    def analytics(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        query = {k: v for k, v in (params or {}).items() if v not in (None, '')}
        path = f"{self.path}/analytics"
        if query:
            path = f"{path}?{urlencode(query)}"
        result = self.client.get(path)
        return result.get('data') or {}


def record_usage(draft: Dict[str, Any], client: Optional[FarmApiClient] = None) -> Dict[str, Any]:
    """Validate and relay a usage entry; errors propagate to the caller."""
    recorded = FeedUsageResource(client or FarmApiClient()).record(draft)
    logger.info(f"Recorded {recorded['usage'].get('quantityUsed')} of {recorded['usage'].get('feedType')}")
    return recorded


def deduct_stock(stock_id, quantity, client: Optional[FarmApiClient] = None) -> Dict[str, Any]:
    stock = FeedStockResource(client or FarmApiClient()).deduct(stock_id, quantity)
    logger.info(f"Deducted {quantity} from feed stock {stock_id}")
    return stock


def load_recent_usage(client: Optional[FarmApiClient] = None) -> List[Dict[str, Any]]:
    try:
        return FeedUsageResource(client or FarmApiClient()).recent()
    except FarmApiError as e:
        logger.error(f"Loading feed usage failed: {e.message}")
        return []


def load_dashboard(client: Optional[FarmApiClient] = None) -> Dict[str, Any]:
    """Stock dashboard; missing figures read as 0 and a failed fetch shows an empty board."""
    try:
        data = FeedStockResource(client or FarmApiClient()).dashboard()
    except FarmApiError as e:
        logger.error(f"Feed stock dashboard failed: {e.message}")
        data, degraded = {}, True
    else:
        degraded = False

    alerts = data.get('alerts') or {}
    return {
        'summary': {**EMPTY_DASHBOARD_SUMMARY, **(data.get('summary') or {})},
        'inventoryByType': data.get('inventoryByType') or [],
        'topConsumers': data.get('topConsumers') or [],
        'monthlyTrends': data.get('monthlyTrends') or [],
        'alerts': {
            'lowStock': [normalize_record(i) for i in alerts.get('lowStock') or []],
            'critical': [normalize_record(i) for i in alerts.get('critical') or []],
            'expiring': [normalize_record(i) for i in alerts.get('expiring') or []],
        },
        'degraded': degraded,
    }


def load_usage_analytics(params: Optional[Dict[str, Any]] = None,
                         client: Optional[FarmApiClient] = None) -> Dict[str, Any]:
    try:
        data = FeedUsageResource(client or FarmApiClient()).analytics(params)
    except FarmApiError as e:
        logger.error(f"Feed usage analytics failed: {e.message}")
        data, degraded = {}, True
    else:
        degraded = False

    return {
        'summary': {**EMPTY_ANALYTICS_SUMMARY, **(data.get('summary') or {})},
        'consumptionTrends': data.get('consumptionTrends') or [],
        'efficiencyMetrics': data.get('efficiencyMetrics') or [],
        'costAnalysis': data.get('costAnalysis') or [],
        'degraded': degraded,
    }

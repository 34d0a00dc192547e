"""
Page Shell Service

Navigation, static page content, the home dashboard summary and
cross-collection search.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from core.exceptions import FarmApiError
from egg_production.services import PRODUCTION_PAGE, summarize_production
from feed_inventory.services import FEED_PAGE
from sales_orders.services import SALES_PAGE
from task_scheduling.services import TASK_PAGE

logger = logging.getLogger(__name__)

NAVIGATION = [
    {'label': 'Home', 'path': '/'},
    {'label': 'Egg Production', 'path': '/egg-production/'},
    {'label': 'Sales Orders', 'path': '/sales-orders/'},
    {'label': 'Feed Inventory', 'path': '/feed-inventory/'},
    {'label': 'Task Scheduling', 'path': '/task-scheduling/'},
    {'label': 'Financial Records', 'path': '/financial-records/'},
    {'label': 'About', 'path': '/about/'},
    {'label': 'Services', 'path': '/services/'},
    {'label': 'Contact', 'path': '/contact/'},
]

STATIC_PAGES = {
    'about': {
        'title': 'About Abeyarathna Egg Farm',
        'sections': [
            {
                'heading': 'Who we are',
                'body': 'A family-run poultry farm producing fresh, organic and free range eggs.',
            },
            {
                'heading': 'How we work',
                'body': 'Every batch is tracked from collection to sale so quality can be traced.',
            },
        ],
    },
    'services': {
        'title': 'Our Services',
        'sections': [
            {'heading': 'Fresh Eggs', 'body': 'Daily collected eggs for homes and retailers.'},
            {'heading': 'Organic Eggs', 'body': 'Eggs from hens raised on certified organic feed.'},
            {'heading': 'Free Range Eggs', 'body': 'Eggs from hens with open outdoor access.'},
            {'heading': 'Bulk Orders', 'body': 'Scheduled deliveries for hotels, bakeries and shops.'},
        ],
    },
}

# Fields matched by the search box, per page
SEARCH_FIELDS = {
    PRODUCTION_PAGE: ('batchNumber', 'notes', 'date'),
    SALES_PAGE: ('orderNumber', 'customer', 'status'),
    FEED_PAGE: ('type', 'supplier', 'unit'),
    TASK_PAGE: ('taskDescription', 'status', 'category'),
}


def _load_or_none(store) -> Optional[List[Dict[str, Any]]]:
    try:
        return store.load()
    except FarmApiError as e:
        logger.error(f"Loading {store.label} failed: {e.message}")
        return None


def load_home_summary(request) -> Dict[str, Any]:
    """
    Fetch production and sales side by side and merge once both settle.

    Each fetch writes its own result; a failed fetch is passed on as None
    so the aggregator can apply its fallback.
    """
    production_store = PRODUCTION_PAGE.build_store(request)
    sales_store = SALES_PAGE.build_store(request)

    with ThreadPoolExecutor(max_workers=2) as executor:
        production_future = executor.submit(_load_or_none, production_store)
        sales_future = executor.submit(_load_or_none, sales_store)
        production = production_future.result()
        sales = sales_future.result()

    summary = summarize_production(production, sales)
    if production is None:
        logger.warning("Home summary shown without production data")
    return summary


def _matches(record: Dict[str, Any], fields, needle: str) -> bool:
    return any(needle in str(record.get(name) or '').casefold() for name in fields)


def search_collections(request, query: str) -> Dict[str, List[Dict[str, Any]]]:
    """Case-insensitive substring search; a collection that fails to load yields no hits."""
    needle = (query or '').strip().casefold()
    stores = {page: page.build_store(request) for page in SEARCH_FIELDS}

    if not needle:
        return {page.collection: [] for page in stores}

    with ThreadPoolExecutor(max_workers=len(stores)) as executor:
        futures = {page: executor.submit(_load_or_none, store) for page, store in stores.items()}
        loaded = {page: future.result() or [] for page, future in futures.items()}

    return {
        page.collection: [
            page.project(record) for record in records
            if _matches(record, SEARCH_FIELDS[page], needle)
        ]
        for page, records in loaded.items()
    }

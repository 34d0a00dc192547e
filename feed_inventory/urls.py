"""
Feed Inventory URL Configuration
"""

from django.urls import path

from records.urls import page_urlpatterns

from .services import FEED_PAGE
from .views import (
    FeedStockDashboardView,
    FeedStockDeductView,
    FeedUsageAnalyticsView,
    FeedUsageView,
)

app_name = 'feed_inventory'

urlpatterns = [
    path('stock/dashboard/', FeedStockDashboardView.as_view(), name='stock-dashboard'),
    path('stock/<str:stock_id>/deduct/', FeedStockDeductView.as_view(), name='stock-deduct'),
    path('usage/', FeedUsageView.as_view(), name='usage'),
    path('usage/analytics/', FeedUsageAnalyticsView.as_view(), name='usage-analytics'),
] + page_urlpatterns(FEED_PAGE)

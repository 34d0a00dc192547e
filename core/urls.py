"""
URL configuration for the farm console.

Each record page is mounted under its collection name; the page shell
(home, navigation, static pages, search, health) sits at the root.
"""
from django.urls import path, include

urlpatterns = [
    path('egg-production/', include('egg_production.urls')),  # Backend-wired
    path('feed-inventory/', include('feed_inventory.urls')),  # Backend-wired
    path('sales-orders/', include('sales_orders.urls')),
    path('task-scheduling/', include('task_scheduling.urls')),
    path('financial-records/', include('financial_records.urls')),
    path('contact/', include('contact.urls')),  # Relayed to the backend mail endpoint
    path('', include('pages.urls')),
]

"""
Sales Orders URL Configuration
"""

from records.urls import page_urlpatterns

from .services import SALES_PAGE

app_name = 'sales_orders'

urlpatterns = page_urlpatterns(SALES_PAGE)

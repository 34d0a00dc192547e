"""
Financial Records URL Configuration
"""

from django.urls import path

from records.urls import page_urlpatterns

from .services import FINANCIAL_PAGE
from .views import FinancialReportView

app_name = 'financial_records'

urlpatterns = [
    path('report/', FinancialReportView.as_view(), name='report'),
] + page_urlpatterns(FINANCIAL_PAGE)

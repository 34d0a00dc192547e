from django.apps import AppConfig


class FinancialRecordsConfig(AppConfig):
    name = 'financial_records'
    verbose_name = 'Financial Records'

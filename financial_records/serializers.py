"""
Financial Records Serializers
"""

from rest_framework import serializers

from records.dates import parse_date
from records.serializers import RecordSerializer

INCOME = 'Income'
EXPENSE = 'Expense'

CATEGORY_CHOICES = [
    (INCOME, 'Income'),
    (EXPENSE, 'Expense'),
]

PAYMENT_METHOD_CHOICES = [
    ('Cash', 'Cash'),
    ('Bank Transfer', 'Bank Transfer'),
    ('Cheque', 'Cheque'),
    ('Credit Card', 'Credit Card'),
    ('Debit Card', 'Debit Card'),
    ('Digital Wallet', 'Digital Wallet'),
]


class FinancialRecordSerializer(RecordSerializer):
    date = serializers.CharField(max_length=32)
    description = serializers.CharField(max_length=300)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    subcategory = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    amount = serializers.FloatField(min_value=0)
    paymentMethod = serializers.ChoiceField(choices=PAYMENT_METHOD_CHOICES)
    reference = serializers.CharField(max_length=64)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)

    def validate_date(self, value):
        if parse_date(value) is None:
            raise serializers.ValidationError("Enter a valid date (YYYY-MM-DD).")
        return value


class ReportQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=['monthly', 'yearly', 'all'], default='monthly')

"""
Sales Order Serializers
"""

from rest_framework import serializers

from records.dates import parse_date
from records.serializers import RecordSerializer

PRODUCT_CHOICES = [
    ('Fresh Eggs', 'Fresh Eggs'),
    ('Organic Eggs', 'Organic Eggs'),
    ('Free Range Eggs', 'Free Range Eggs'),
]

STATUS_CHOICES = [
    ('Pending', 'Pending'),
    ('Processing', 'Processing'),
    ('Completed', 'Completed'),
]


class SalesOrderSerializer(RecordSerializer):
    customer = serializers.CharField(max_length=200)
    product = serializers.ChoiceField(choices=PRODUCT_CHOICES)
    quantity = serializers.IntegerField(min_value=0)
    price = serializers.FloatField(min_value=0)
    status = serializers.ChoiceField(choices=STATUS_CHOICES)
    date = serializers.CharField(max_length=32)
    orderNumber = serializers.CharField(required=False, allow_blank=True, max_length=32)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)

    def validate_date(self, value):
        if parse_date(value) is None:
            raise serializers.ValidationError("Enter a valid date (YYYY-MM-DD).")
        return value

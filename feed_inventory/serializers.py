"""
Feed Inventory Serializers
"""

from rest_framework import serializers

from records.serializers import RecordSerializer

FEED_TYPE_CHOICES = [
    ('Layer Feed', 'Layer Feed'),
    ('Chick Starter', 'Chick Starter'),
    ('Grower Feed', 'Grower Feed'),
    ('Medicated Feed', 'Medicated Feed'),
    ('Organic Feed', 'Organic Feed'),
]

UNIT_CHOICES = [
    ('KG', 'Kilograms'),
    ('LBS', 'Pounds'),
    ('TONS', 'Tons'),
]

DEFAULT_MINIMUM_THRESHOLD = 100
DEFAULT_LOCATION = 'Main Storage'


class FeedInventoryItemSerializer(RecordSerializer):
    type = serializers.ChoiceField(choices=FEED_TYPE_CHOICES)
    quantity = serializers.FloatField(min_value=0)
    unit = serializers.ChoiceField(choices=UNIT_CHOICES, default='KG')
    supplier = serializers.CharField(max_length=200)
    supplierContact = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    costPerUnit = serializers.FloatField(min_value=0, default=0)
    lastRestocked = serializers.CharField(max_length=32)
    expiryDate = serializers.CharField(max_length=32)
    minimumThreshold = serializers.FloatField(min_value=0, default=DEFAULT_MINIMUM_THRESHOLD)
    location = serializers.CharField(max_length=100, default=DEFAULT_LOCATION)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


# Stock and usage tracking

STOCK_FEED_TYPE_CHOICES = FEED_TYPE_CHOICES + [
    ('Finisher Feed', 'Finisher Feed'),
]

STOCK_STATUS_CHOICES = [
    ('Active', 'Active'),
    ('Depleted', 'Depleted'),
    ('Expired', 'Expired'),
    ('Reserved', 'Reserved'),
]

FEEDING_TIME_CHOICES = [
    ('Morning', 'Morning'),
    ('Afternoon', 'Afternoon'),
    ('Evening', 'Evening'),
    ('Full Day', 'Full Day'),
]

WEATHER_CHOICES = [
    ('Sunny', 'Sunny'),
    ('Rainy', 'Rainy'),
    ('Cloudy', 'Cloudy'),
    ('Hot', 'Hot'),
    ('Cold', 'Cold'),
]

DEFAULT_TOTAL_BIRDS = 200
DEFAULT_USAGE_LOCATION = 'Main Coop'


class FeedStockSerializer(RecordSerializer):
    """Monthly stock of one feed type; the backend keeps ``currentQuantity`` as it is drawn down."""
    type = serializers.ChoiceField(choices=STOCK_FEED_TYPE_CHOICES)
    feedType = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    quantity = serializers.FloatField(min_value=0)
    currentQuantity = serializers.FloatField(required=False, allow_null=True, min_value=0)
    unit = serializers.ChoiceField(choices=UNIT_CHOICES, default='KG')
    supplier = serializers.CharField(max_length=200)
    costPerUnit = serializers.FloatField(min_value=0, default=0)
    minimumThreshold = serializers.FloatField(min_value=0, default=DEFAULT_MINIMUM_THRESHOLD)
    expiryDate = serializers.CharField(max_length=32)
    location = serializers.CharField(max_length=100, default=DEFAULT_LOCATION)
    status = serializers.ChoiceField(choices=STOCK_STATUS_CHOICES, default='Active')
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)


class FeedUsageSerializer(RecordSerializer):
    """One day's consumption of a feed type."""
    feedType = serializers.ChoiceField(choices=STOCK_FEED_TYPE_CHOICES)
    date = serializers.RegexField(r'^\d{4}-\d{2}-\d{2}$', max_length=10,
                                  error_messages={'invalid': 'Date must be YYYY-MM-DD.'})
    quantityUsed = serializers.FloatField(min_value=0)
    totalBirds = serializers.IntegerField(min_value=1, default=DEFAULT_TOTAL_BIRDS)
    feedingTime = serializers.ChoiceField(choices=FEEDING_TIME_CHOICES, default='Full Day')
    weather = serializers.ChoiceField(choices=WEATHER_CHOICES, required=False, allow_blank=True)
    wastePercentage = serializers.FloatField(min_value=0, max_value=100, default=0)
    location = serializers.CharField(max_length=100, default=DEFAULT_USAGE_LOCATION)
    recordedBy = serializers.CharField(max_length=100)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)

    def validate_quantityUsed(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity used must be a positive number.')
        return value


class FeedDeductionSerializer(serializers.Serializer):
    quantityUsed = serializers.FloatField()

    def validate_quantityUsed(self, value):
        if value <= 0:
            raise serializers.ValidationError('Quantity used must be a positive number.')
        return value


class UsageAnalyticsQuerySerializer(serializers.Serializer):
    feedType = serializers.CharField(required=False, max_length=50)
    startDate = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])
    endDate = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])
    period = serializers.ChoiceField(choices=['daily', 'weekly', 'monthly'], default='daily')

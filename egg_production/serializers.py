"""
Egg Production Serializers
"""

from rest_framework import serializers

from records.serializers import RecordSerializer


class ProductionRecordSerializer(RecordSerializer):
    """
    One day's collection for a batch.

    ``damagedEggs`` is deliberately not checked against ``eggsCollected``;
    usable eggs may go negative.
    """

    date = serializers.CharField(max_length=32)
    batchNumber = serializers.CharField(max_length=32)
    birds = serializers.IntegerField(min_value=0)
    eggsCollected = serializers.IntegerField(min_value=0)
    damagedEggs = serializers.IntegerField(min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=1000)
    eggProductionRate = serializers.FloatField(required=False, allow_null=True, min_value=0)

"""
Task Scheduling Serializers
"""

from rest_framework import serializers

from records.serializers import RecordSerializer

CATEGORY_CHOICES = [
    ('Bird Care', 'Bird Care'),
    ('Egg Collection', 'Egg Collection'),
    ('Cleaning & Maintenance', 'Cleaning & Maintenance'),
    ('Feed Management', 'Feed Management'),
    ('Inventory', 'Inventory'),
]

STATUS_CHOICES = [
    ('Pending', 'Pending'),
    ('In Progress', 'In Progress'),
    ('Completed', 'Completed'),
]


class TaskSerializer(RecordSerializer):
    """Dates and times are free-form text, shown as entered (DD/MM/YY, HH:MM AM)."""

    date = serializers.CharField(max_length=32)
    taskDescription = serializers.CharField(max_length=300)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    assignedTo = serializers.CharField(max_length=200)
    time = serializers.CharField(max_length=32)
    status = serializers.ChoiceField(choices=STATUS_CHOICES)

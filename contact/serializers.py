"""
Contact Form Serializers

Validates and sanitizes the public contact form before it is relayed to
the farm backend's mail endpoint.
"""
from rest_framework import serializers
from django.utils.html import strip_tags


class ContactFormSubmitSerializer(serializers.Serializer):
    """
    Public contact form submission serializer.
    """

    name = serializers.CharField(
        max_length=100,
        required=True,
        help_text="Name of the person contacting the farm"
    )

    email = serializers.EmailField(
        max_length=255,
        required=True,
        help_text="Valid email address for follow-up"
    )

    subject = serializers.CharField(
        max_length=200,
        required=False,
        allow_blank=True,
        help_text="Optional subject line"
    )

    message = serializers.CharField(
        max_length=2000,
        required=True,
        help_text="Message content"
    )

    def validate_name(self, value):
        """Sanitize name field."""
        return strip_tags(value).strip()

    def validate_subject(self, value):
        return strip_tags(value).strip()

    def validate_message(self, value):
        """Sanitize message field."""
        value = strip_tags(value).strip()
        if not value:
            raise serializers.ValidationError("Message cannot be empty")
        return value

    def validate_email(self, value):
        return value.lower()

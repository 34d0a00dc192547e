"""
Record Schema Base

Every collection declares one explicit schema. Field names mirror the
upstream JSON (camelCase) so validated records can be sent back as-is.
"""
from rest_framework import serializers


class RecordIdField(serializers.Field):
    """
    Record identity: integers for local-only collections, strings for
    backend ids.
    """

    default_error_messages = {
        'invalid': 'Record id must be an integer or a string.',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, str)):
            self.fail('invalid')
        return data

    def to_representation(self, value):
        return value


class RecordSerializer(serializers.Serializer):
    """Base schema: optional identity, assigned on insert."""

    id = RecordIdField(required=False)


def choice_values(choices):
    return [value for value, _label in choices]

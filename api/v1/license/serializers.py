"""
Serializers for License API endpoints.

Field names follow the camelCase JSON the client software already sends.
"""

from rest_framework import serializers


class OperatorRequestSerializer(serializers.Serializer):
    """Serializer for operator-only requests carrying the shared secret."""

    secret = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    email = serializers.CharField(required=False, allow_blank=True, max_length=320)


class LicenseKeyResponseSerializer(serializers.Serializer):
    """Serializer for a returned license key."""

    licenseKey = serializers.CharField()


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """Serializer for verify license request."""

    licenseKey = serializers.CharField(required=False, allow_blank=True, max_length=100)


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Serializer for verify license response."""

    valid = serializers.BooleanField()
    email = serializers.CharField(required=False)
    reason = serializers.CharField(required=False)

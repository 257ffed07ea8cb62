"""
Service wiring for the HTTP layer.

Views receive their collaborators through these factories, or through
``as_view(license_service=...)`` when a caller wants to inject its own.
"""
import secrets

from django.conf import settings

from core.infrastructure.store_adapters import get_key_value_store
from licenses.application.services.license_service import LicenseService
from licenses.infrastructure.repositories.kv_license_repository import (
    KeyValueLicenseRepository,
)
from payments.infrastructure.stripe_event_adapter import StripeEventAdapter


def get_license_service() -> LicenseService:
    """Build a LicenseService over the configured store."""
    return LicenseService(KeyValueLicenseRepository(get_key_value_store()))


def get_stripe_event_adapter() -> StripeEventAdapter:
    """Build the Stripe adapter from settings."""
    return StripeEventAdapter(
        webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        tolerance=settings.STRIPE_WEBHOOK_TOLERANCE,
    )


def is_operator_secret(provided) -> bool:
    """
    Check a caller-supplied secret against GENERATION_SECRET_KEY.

    An unset operator secret matches nothing.
    """
    expected = settings.GENERATION_SECRET_KEY
    if not expected or not isinstance(provided, str) or not provided:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())

"""
Pytest configuration and shared fixtures.
"""

import hashlib
import hmac
import json
import time

import fakeredis
import pytest

from core.domain.exceptions import StorageError
from core.infrastructure.key_value_store import KeyValueStore
from core.infrastructure.store_adapters import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    get_key_value_store,
    reset_key_value_store,
)
from licenses.application.services.license_service import LicenseService
from licenses.infrastructure.repositories.kv_license_repository import (
    KeyValueLicenseRepository,
)

OPERATOR_SECRET = "test-operator-secret"
STRIPE_SECRET = "whsec_test_secret"


@pytest.fixture(autouse=True)
def configured_store():
    """Give every test a fresh store built from settings.KEY_VALUE_STORE."""
    reset_key_value_store()
    yield get_key_value_store()
    reset_key_value_store()


@pytest.fixture
def store():
    """Fixture for an isolated InMemoryKeyValueStore."""
    return InMemoryKeyValueStore()


@pytest.fixture
def redis_store():
    """Fixture for RedisKeyValueStore backed by an isolated fakeredis server."""
    store = RedisKeyValueStore("redis://localhost:6379/0")
    store._client = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield store
    store.close()


@pytest.fixture
def license_repository(store):
    """Fixture for KeyValueLicenseRepository."""
    return KeyValueLicenseRepository(store)


@pytest.fixture
def license_service(license_repository):
    """Fixture for LicenseService."""
    return LicenseService(license_repository)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


def sign_stripe_payload(payload: str, secret: str = STRIPE_SECRET, timestamp: int = None) -> str:
    """Build a Stripe-Signature header for a payload."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode()
    signature = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def checkout_event(
    email="b@example.com",
    payment_status="paid",
    event_type="checkout.session.completed",
    use_customer_details=True,
) -> str:
    """Build a Stripe checkout event payload."""
    session = {
        "id": "cs_test_123",
        "object": "checkout.session",
        "payment_status": payment_status,
    }
    if email is not None:
        if use_customer_details:
            session["customer_details"] = {"email": email}
        else:
            session["customer_email"] = email
    return json.dumps(
        {
            "id": "evt_test_123",
            "object": "event",
            "type": event_type,
            "data": {"object": session},
        }
    )


@pytest.fixture
def stripe_signature():
    """Fixture returning the Stripe-Signature header builder."""
    return sign_stripe_payload


@pytest.fixture
def make_checkout_event():
    """Fixture returning the checkout event payload builder."""
    return checkout_event


class UnavailableStore(KeyValueStore):
    """Store whose every operation fails."""

    async def get(self, key):
        raise StorageError("Store read failed")

    async def set(self, key, value):
        raise StorageError("Store write failed")

    async def write_batch(self, items, if_absent=None):
        raise StorageError("Store batch write failed")


@pytest.fixture
def unavailable_store(monkeypatch):
    """Route the HTTP layer to a store that is down."""
    store = UnavailableStore()
    monkeypatch.setattr("api.dependencies.get_key_value_store", lambda: store)
    return store

"""
Test settings for DevlogLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use in-memory store for tests
KEY_VALUE_STORE = {
    "BACKEND": "core.infrastructure.store_adapters.InMemoryKeyValueStore",
}

GENERATION_SECRET_KEY = "test-operator-secret"
STRIPE_WEBHOOK_SECRET = "whsec_test_secret"
STRIPE_WEBHOOK_TOLERANCE = 300

# Disable logging during tests
LOGGING_CONFIG = None

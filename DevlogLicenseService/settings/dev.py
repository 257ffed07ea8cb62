"""
Development settings for DevlogLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Key-value store - Redis from docker-compose, or in-process with STORE_BACKEND=memory
if os.environ.get("STORE_BACKEND") == "memory":
    KEY_VALUE_STORE = {
        "BACKEND": "core.infrastructure.store_adapters.InMemoryKeyValueStore",
    }

GENERATION_SECRET_KEY = os.environ.get("GENERATION_SECRET_KEY", "dev-secret")

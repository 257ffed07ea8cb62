"""
Production settings for DevlogLicenseService.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "true").lower() == "true"
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# Redis in production
KEY_VALUE_STORE = {
    "BACKEND": "core.infrastructure.store_adapters.RedisKeyValueStore",
    "LOCATION": os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/0"),
    "OPTIONS": {
        "socket_connect_timeout": int(os.environ.get("REDIS_CONNECT_TIMEOUT", "5")),
        "socket_timeout": int(os.environ.get("REDIS_TIMEOUT", "5")),
    },
}

# Logging in production
LOGGING = get_logging_config("production")

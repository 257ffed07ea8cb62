"""
Base Django settings for DevlogLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-devlog-license-local-only")

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

# Application definition
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "DevlogLicenseService.apps.DevlogLicenseServiceConfig",
    "core",
    "licenses",
    "payments",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
]

ROOT_URLCONF = "DevlogLicenseService.urls"

WSGI_APPLICATION = "DevlogLicenseService.wsgi.application"

# All license state lives in the key-value store
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "DEVLOG License Service API",
    "DESCRIPTION": (
        "Issues and verifies DEVLOG license keys. Licenses are issued by an "
        "operator or automatically when a Stripe checkout is paid."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "TAGS": [
        {"name": "License API", "description": "License issuance and verification"},
        {"name": "Payments", "description": "Payment provider webhooks"},
    ],
}

# Key-value store holding license records and the email index
REDIS_URL = os.environ.get("REDIS_URL", "redis://127.0.0.1:6379/0")

KEY_VALUE_STORE = {
    "BACKEND": "core.infrastructure.store_adapters.RedisKeyValueStore",
    "LOCATION": REDIS_URL,
    "OPTIONS": {
        "socket_connect_timeout": 5,
        "socket_timeout": 5,
    },
}

# Operator secret for /api/generate-license and /api/find-license
GENERATION_SECRET_KEY = os.environ.get("GENERATION_SECRET_KEY", "")

# Stripe webhook signing
STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET", "")
STRIPE_WEBHOOK_TOLERANCE = int(os.environ.get("STRIPE_WEBHOOK_TOLERANCE", "300"))

# Observability
LOGGING = get_logging_config(ENVIRONMENT)

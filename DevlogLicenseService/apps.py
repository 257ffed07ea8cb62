"""
App configuration for the DEVLOG license server.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class DevlogLicenseServiceConfig(AppConfig):
    """App configuration for DevlogLicenseService."""

    name = "DevlogLicenseService"
    verbose_name = "DEVLOG License Service"

    def ready(self):
        """Called when Django starts."""
        if not settings.GENERATION_SECRET_KEY:
            logger.warning("GENERATION_SECRET_KEY is not set; operator endpoints reject all calls")
        if not settings.STRIPE_WEBHOOK_SECRET:
            logger.warning("STRIPE_WEBHOOK_SECRET is not set; Stripe webhooks are rejected")

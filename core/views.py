"""
Core views for health checks, readiness and metrics.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from core.domain.exceptions import StorageError
from core.infrastructure.store_adapters import get_key_value_store

logger = logging.getLogger(__name__)


def _store_reachable() -> bool:
    try:
        return async_to_sync(get_key_value_store().ping)()
    except StorageError as e:
        logger.warning("Store health check failed: %s", e)
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "license-service"})


@method_decorator(csrf_exempt, name="dispatch")
class HealthStoreView(View):
    """Key-value store health check endpoint."""

    def get(self, _request):
        """Check store connectivity."""
        if _store_reachable():
            return JsonResponse({"status": "healthy", "store": "connected"})
        return JsonResponse({"status": "unhealthy", "store": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "store": _store_reachable(),
            "operator_secret": bool(settings.GENERATION_SECRET_KEY),
            "stripe_webhook_secret": bool(settings.STRIPE_WEBHOOK_SECRET),
        }

        # Missing secrets disable routes but do not take the service down
        ready = checks["store"]
        return JsonResponse(
            {
                "status": "ready" if ready else "not_ready",
                "checks": checks,
            },
            status=200 if ready else 503,
        )


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)

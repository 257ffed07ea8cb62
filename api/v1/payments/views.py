"""
Payment provider webhook views.

Stripe posts signed events here. Only a verified, paid checkout reaches
the LicenseService; everything else is acknowledged and logged.
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import get_stripe_event_adapter
from api.v1.license.views import LicenseServiceMixin
from core.domain.value_objects import LicenseSource, mask_email, mask_key
from core.metrics import stripe_webhook_events_total
from payments.infrastructure.stripe_event_adapter import StripeEventAdapter

logger = logging.getLogger(__name__)


class StripeWebhookView(LicenseServiceMixin, APIView):
    """View receiving Stripe webhook events."""

    # Set through as_view(event_adapter=...) to inject an adapter
    event_adapter = None

    def get_event_adapter(self) -> StripeEventAdapter:
        return self.event_adapter or get_stripe_event_adapter()

    @extend_schema(
        operation_id="stripe_webhook",
        summary="Stripe Webhook",
        description=(
            "Receive a signed Stripe event. A paid checkout session issues a "
            "license for the customer email. Every authenticated event is "
            "acknowledged so Stripe does not redeliver it."
        ),
        tags=["Payments"],
        parameters=[
            OpenApiParameter(
                name="Stripe-Signature",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Stripe webhook signature header",
            ),
        ],
        request=None,
        responses={
            200: {"description": "Event received"},
            400: {"description": "Invalid signature or payload"},
            500: {"description": "Issuance failed; Stripe will retry"},
        },
    )
    def post(self, request: Request) -> Response:
        """Handle a Stripe webhook delivery."""
        # Signature covers the exact bytes received; read before any parsing
        payload = request.body
        sig_header = request.META.get("HTTP_STRIPE_SIGNATURE", "")
        return async_to_sync(self._handle_webhook)(payload, sig_header)

    async def _handle_webhook(self, payload: bytes, sig_header: str) -> Response:
        """Async handler for Stripe webhook."""
        event = self.get_event_adapter().parse(payload, sig_header)

        if not event.is_purchase:
            logger.info("Ignoring Stripe event %s (%s)", event.event_id, event.event_type)
            stripe_webhook_events_total.labels(
                event_type=event.event_type, outcome="ignored"
            ).inc()
            return Response({"received": True}, status=status.HTTP_200_OK)

        if not event.email:
            logger.warning(
                "Paid Stripe event %s carries no customer email; no license issued",
                event.event_id,
            )
            stripe_webhook_events_total.labels(
                event_type=event.event_type, outcome="missing_email"
            ).inc()
            return Response({"received": True}, status=status.HTTP_200_OK)

        result = await self.get_license_service().issue_license(
            event.email, LicenseSource.STRIPE
        )
        logger.info(
            "Stripe event %s: license %s for %s (new=%s)",
            event.event_id,
            mask_key(result.license_key),
            mask_email(event.email),
            result.is_new,
        )
        stripe_webhook_events_total.labels(
            event_type=event.event_type, outcome="issued" if result.is_new else "existing"
        ).inc()
        return Response({"received": True}, status=status.HTTP_200_OK)

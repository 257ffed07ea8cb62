"""
Stripe webhook adapter.

Verifies the Stripe-Signature header against the raw request body and
turns checkout events into license purchases. The license core never sees
an unverified payload.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe

from core.domain.exceptions import InvalidSignatureError, ValidationError
from core.domain.value_objects import normalize_email

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
ASYNC_PAYMENT_SUCCEEDED = "checkout.session.async_payment_succeeded"
PURCHASE_EVENTS = (CHECKOUT_COMPLETED, ASYNC_PAYMENT_SUCCEEDED)


@dataclass(frozen=True)
class PaymentEvent:
    """Verified Stripe event reduced to what issuance needs."""

    event_id: str
    event_type: str
    payment_status: Optional[str]
    email: Optional[str]

    @property
    def is_purchase(self) -> bool:
        """True for a checkout session that has been paid."""
        return self.event_type in PURCHASE_EVENTS and self.payment_status == "paid"


class StripeEventAdapter:
    """Adapter for authenticating and parsing Stripe webhook deliveries."""

    def __init__(self, webhook_secret: str, tolerance: int = 300):
        """
        Initialize adapter.

        Args:
            webhook_secret: Endpoint signing secret (whsec_...)
            tolerance: Maximum age of a signature timestamp in seconds
        """
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    def parse(self, payload: bytes, sig_header: str) -> PaymentEvent:
        """
        Verify and parse a webhook delivery.

        Args:
            payload: Raw request body, exactly as received
            sig_header: Value of the Stripe-Signature header

        Returns:
            PaymentEvent

        Raises:
            InvalidSignatureError: If no secret is configured or the
                signature does not verify
            ValidationError: If a verified payload is not a JSON event
        """
        if not self.webhook_secret:
            logger.error("Stripe webhook secret is not configured; rejecting event")
            raise InvalidSignatureError("Webhook secret not configured")
        if not sig_header:
            raise InvalidSignatureError("Missing signature header")

        try:
            text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        except UnicodeDecodeError as e:
            # Stripe always sends UTF-8 JSON; anything else cannot carry a valid signature
            logger.warning("Rejected Stripe webhook body that is not UTF-8")
            raise InvalidSignatureError() from e
        try:
            stripe.WebhookSignature.verify_header(
                text, sig_header, self.webhook_secret, self.tolerance
            )
        except stripe.SignatureVerificationError as e:
            logger.warning("Stripe signature verification failed: %s", e)
            raise InvalidSignatureError() from e

        try:
            event = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError("Invalid JSON payload") from e
        if not isinstance(event, dict):
            raise ValidationError("Invalid event payload")

        return self._to_payment_event(event)

    @staticmethod
    def _to_payment_event(event: Dict[str, Any]) -> PaymentEvent:
        """Reduce a Stripe event document to a PaymentEvent."""
        data = event.get("data")
        session = data.get("object") if isinstance(data, dict) else None
        if not isinstance(session, dict):
            # Not a checkout session; reported with no payment status
            session = {}
        customer_details = session.get("customer_details")
        if not isinstance(customer_details, dict):
            customer_details = {}
        email = normalize_email(
            customer_details.get("email") or session.get("customer_email")
        )
        return PaymentEvent(
            event_id=str(event.get("id", "")),
            event_type=str(event.get("type", "")),
            payment_status=session.get("payment_status"),
            email=email or None,
        )

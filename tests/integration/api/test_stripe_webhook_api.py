"""
Integration tests for the Stripe webhook endpoint.
"""

import json

import pytest
from django.test import override_settings
from django.urls import reverse


@pytest.fixture
def post_event(api_client, stripe_signature):
    """Post a payload to the webhook, signed unless a header is given."""

    def _post(payload, signature=None):
        header = stripe_signature(payload) if signature is None else signature
        return api_client.post(
            reverse("payments:stripe-webhook"),
            payload,
            content_type="application/json",
            HTTP_STRIPE_SIGNATURE=header,
        )

    return _post


@pytest.mark.integration
class TestStripeWebhookAPI:
    """Integration tests for POST /api/stripe-webhook."""

    def test_url(self):
        assert reverse("payments:stripe-webhook") == "/api/stripe-webhook"

    def test_paid_checkout_issues_license(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event(email="b@example.com"))

        assert response.status_code == 200
        assert response.json() == {"received": True}
        data = configured_store.snapshot()
        license_key = data["email:b@example.com"]
        record = json.loads(data[license_key])
        assert record["source"] == "stripe"
        assert record["status"] == "active"

    def test_issued_license_verifies(self, api_client, post_event, make_checkout_event, configured_store):
        post_event(make_checkout_event(email="b@example.com"))
        license_key = configured_store.snapshot()["email:b@example.com"]

        response = api_client.post(
            reverse("license:verify-license"), {"licenseKey": license_key}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {"valid": True, "email": "b@example.com"}

    def test_redelivery_is_idempotent(self, post_event, make_checkout_event, configured_store):
        payload = make_checkout_event(email="b@example.com")

        post_event(payload)
        first = configured_store.snapshot()
        response = post_event(payload)

        assert response.status_code == 200
        assert configured_store.snapshot() == first

    def test_webhook_after_manual_issue_keeps_manual_key(
        self, api_client, post_event, make_checkout_event, configured_store
    ):
        manual = api_client.post(
            reverse("license:generate-license"),
            {"secret": "test-operator-secret", "email": "b@example.com"},
            format="json",
        ).json()["licenseKey"]

        post_event(make_checkout_event(email="b@example.com"))

        data = configured_store.snapshot()
        assert data["email:b@example.com"] == manual
        assert len(data) == 2

    def test_async_payment_succeeded_issues_license(
        self, post_event, make_checkout_event, configured_store
    ):
        post_event(make_checkout_event(event_type="checkout.session.async_payment_succeeded"))

        assert "email:b@example.com" in configured_store.snapshot()

    def test_invalid_signature_is_rejected(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event(), signature="t=1,v1=deadbeef")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"
        assert configured_store.snapshot() == {}

    def test_non_utf8_body_is_rejected(self, post_event, configured_store):
        response = post_event(b"\xff\xfe{}", signature="t=1,v1=deadbeef")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"
        assert configured_store.snapshot() == {}

    def test_signed_event_without_session_object_is_acknowledged(
        self, post_event, configured_store
    ):
        payload = json.dumps(
            {"id": "evt_test_123", "type": "checkout.session.completed", "data": "oops"}
        )

        response = post_event(payload)

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert configured_store.snapshot() == {}

    def test_missing_signature_is_rejected(self, api_client, make_checkout_event, configured_store):
        response = api_client.post(
            reverse("payments:stripe-webhook"),
            make_checkout_event(),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert configured_store.snapshot() == {}

    def test_wrong_secret_is_rejected(self, post_event, make_checkout_event, stripe_signature):
        payload = make_checkout_event()

        response = post_event(payload, signature=stripe_signature(payload, secret="whsec_other"))

        assert response.status_code == 400

    @override_settings(STRIPE_WEBHOOK_SECRET="")
    def test_unconfigured_secret_rejects_events(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event())

        assert response.status_code == 400
        assert configured_store.snapshot() == {}

    def test_unpaid_checkout_is_acknowledged(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event(payment_status="unpaid"))

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert configured_store.snapshot() == {}

    def test_other_event_is_acknowledged(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event(event_type="invoice.paid"))

        assert response.status_code == 200
        assert configured_store.snapshot() == {}

    def test_missing_email_is_acknowledged(self, post_event, make_checkout_event, configured_store):
        response = post_event(make_checkout_event(email=None))

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert configured_store.snapshot() == {}

    def test_store_failure_asks_for_retry(self, post_event, make_checkout_event, unavailable_store):
        response = post_event(make_checkout_event())

        assert response.status_code == 500

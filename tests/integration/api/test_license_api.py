"""
Integration tests for License API endpoints.
"""

import json
import logging

import pytest
from asgiref.sync import async_to_sync
from django.test import override_settings
from django.urls import reverse

OPERATOR_SECRET = "test-operator-secret"


def _generate(api_client, email="a@example.com", secret=OPERATOR_SECRET):
    return api_client.post(
        reverse("license:generate-license"),
        {"secret": secret, "email": email},
        format="json",
    )


def _verify(api_client, license_key):
    return api_client.post(
        reverse("license:verify-license"), {"licenseKey": license_key}, format="json"
    )


@pytest.mark.integration
class TestGenerateLicenseAPI:
    """Integration tests for POST /api/generate-license."""

    def test_url(self):
        assert reverse("license:generate-license") == "/api/generate-license"

    def test_generate_license_success(self, api_client, configured_store):
        response = _generate(api_client)

        assert response.status_code == 200
        license_key = response.json()["licenseKey"]
        assert license_key.startswith("DEVLOG-")
        data = configured_store.snapshot()
        assert data["email:a@example.com"] == license_key
        assert json.loads(data[license_key])["source"] == "manual"

    def test_generate_license_is_idempotent(self, api_client, configured_store):
        first = _generate(api_client).json()["licenseKey"]
        second = _generate(api_client).json()["licenseKey"]

        assert first == second
        assert len(configured_store.snapshot()) == 2

    @pytest.mark.parametrize("secret", ["", "wrong-secret", None])
    def test_bad_secret_is_rejected_before_store_access(
        self, api_client, configured_store, secret
    ):
        body = {"email": "a@example.com"}
        if secret is not None:
            body["secret"] = secret

        response = api_client.post(reverse("license:generate-license"), body, format="json")

        assert response.status_code == 401
        assert response.json() == {
            "error": {"code": "UNAUTHORIZED", "message": "Unauthorized"}
        }
        assert configured_store.snapshot() == {}

    def test_bad_secret_with_store_down_is_still_401(self, api_client, unavailable_store):
        response = _generate(api_client, secret="wrong-secret")

        assert response.status_code == 401

    @pytest.mark.parametrize("email", ["", "   "])
    def test_missing_email(self, api_client, configured_store, email):
        response = _generate(api_client, email=email)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert configured_store.snapshot() == {}

    def test_email_omitted(self, api_client):
        response = api_client.post(
            reverse("license:generate-license"), {"secret": OPERATOR_SECRET}, format="json"
        )

        assert response.status_code == 400

    def test_store_failure_is_generic_500(self, api_client, unavailable_store):
        response = _generate(api_client)

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}
        }

    @override_settings(GENERATION_SECRET_KEY="")
    def test_unset_operator_secret_disables_route(self, api_client, configured_store):
        response = _generate(api_client, secret="")

        assert response.status_code == 401
        assert configured_store.snapshot() == {}

    def test_correlation_id_is_echoed(self, api_client):
        response = api_client.post(
            reverse("license:generate-license"),
            {"secret": OPERATOR_SECRET, "email": "a@example.com"},
            format="json",
            HTTP_X_CORRELATION_ID="corr-123",
        )

        assert response["X-Correlation-ID"] == "corr-123"


@pytest.mark.integration
class TestVerifyLicenseAPI:
    """Integration tests for POST /api/verify-license."""

    def test_verify_active_license(self, api_client):
        license_key = _generate(api_client).json()["licenseKey"]

        response = _verify(api_client, license_key)

        assert response.status_code == 200
        assert response.json() == {"valid": True, "email": "a@example.com"}

    def test_verify_unknown_key(self, api_client, configured_store):
        response = _verify(api_client, "DEVLOG-00000000-0000-4000-8000-000000000000")

        assert response.status_code == 404
        assert response.json() == {"valid": False, "reason": "not found"}
        assert configured_store.snapshot() == {}

    def test_verify_suspended_license(self, api_client, configured_store):
        license_key = _generate(api_client).json()["licenseKey"]
        record = json.loads(configured_store.snapshot()[license_key])
        record["status"] = "suspended"
        async_to_sync(configured_store.set)(license_key, json.dumps(record))

        response = _verify(api_client, license_key)

        assert response.status_code == 403
        assert response.json() == {"valid": False, "reason": "license is suspended"}

    @pytest.mark.parametrize("body", [{}, {"licenseKey": ""}, {"licenseKey": "   "}])
    def test_verify_missing_key(self, api_client, body):
        response = api_client.post(reverse("license:verify-license"), body, format="json")

        assert response.status_code == 400

    def test_verify_needs_no_secret(self, api_client):
        license_key = _generate(api_client).json()["licenseKey"]

        response = api_client.post(
            reverse("license:verify-license"),
            {"licenseKey": license_key, "secret": "anything"},
            format="json",
        )

        assert response.status_code == 200

    def test_verify_corrupt_record_is_500(self, api_client, configured_store):
        async_to_sync(configured_store.set)("DEVLOG-BROKEN", "{not json")

        response = _verify(api_client, "DEVLOG-BROKEN")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    def test_verify_store_failure_is_500(self, api_client, unavailable_store):
        response = _verify(api_client, "DEVLOG-ANY")

        assert response.status_code == 500

    def test_verify_email_index_key_is_not_found(self, api_client):
        _generate(api_client, email="victim@example.com")

        for key in ("email:victim@example.com", "email:nobody@example.com"):
            response = _verify(api_client, key)

            assert response.status_code == 404
            assert response.json() == {"valid": False, "reason": "not found"}

    def test_denial_log_masks_malformed_keys(self, api_client, caplog):
        with caplog.at_level(logging.INFO, logger="api.v1.license.views"):
            _verify(api_client, "email:victim@example.com")

        assert "<malformed key>" in caplog.text
        assert "victim@example.com" not in caplog.text


@pytest.mark.integration
class TestFindLicenseAPI:
    """Integration tests for POST /api/find-license."""

    def test_find_issued_license(self, api_client):
        license_key = _generate(api_client).json()["licenseKey"]

        response = api_client.post(
            reverse("license:find-license"),
            {"secret": OPERATOR_SECRET, "email": "A@Example.com"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json() == {"licenseKey": license_key}

    def test_find_missing_license(self, api_client):
        response = api_client.post(
            reverse("license:find-license"),
            {"secret": OPERATOR_SECRET, "email": "nobody@example.com"},
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_find_requires_secret(self, api_client):
        response = api_client.post(
            reverse("license:find-license"), {"email": "a@example.com"}, format="json"
        )

        assert response.status_code == 401

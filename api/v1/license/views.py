"""
License API views.

These endpoints are used by:
- Operators, to issue and look up licenses (shared-secret protected)
- The licensed software, to verify a key
"""

import logging

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.dependencies import get_license_service, is_operator_secret
from api.v1.license.serializers import (
    LicenseKeyResponseSerializer,
    OperatorRequestSerializer,
    VerifyLicenseRequestSerializer,
    VerifyLicenseResponseSerializer,
)
from core.domain.exceptions import UnauthorizedError
from core.domain.value_objects import LicenseSource, mask_key
from licenses.application.services.license_service import LicenseService
from licenses.domain.license_key import is_license_key

logger = logging.getLogger(__name__)


class LicenseServiceMixin:
    """Resolves the LicenseService a view talks to."""

    # Set through as_view(license_service=...) to inject a service
    license_service = None

    def get_license_service(self) -> LicenseService:
        return self.license_service or get_license_service()


def _validated_operator_request(request: Request) -> dict:
    """Check the shared secret, then validate the operator request body."""
    data = request.data if isinstance(request.data, dict) else {}
    if not is_operator_secret(data.get("secret")):
        logger.warning("Rejected operator request with invalid secret")
        raise UnauthorizedError()
    serializer = OperatorRequestSerializer(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class GenerateLicenseView(LicenseServiceMixin, APIView):
    """View for issuing licenses by an operator."""

    @extend_schema(
        operation_id="generate_license",
        summary="Generate License",
        description=(
            "Issue a license key for a customer email, or return the key already "
            "issued to that email. Requires the operator secret in the body."
        ),
        tags=["License API"],
        request=OperatorRequestSerializer,
        responses={
            200: LicenseKeyResponseSerializer,
            400: {"description": "Email is required"},
            401: {"description": "Unauthorized - Missing or invalid secret"},
            500: {"description": "Internal server error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Issue a license."""
        return async_to_sync(self._handle_generate_license)(request)

    async def _handle_generate_license(self, request: Request) -> Response:
        """Async handler for generate license."""
        data = _validated_operator_request(request)

        result = await self.get_license_service().issue_license(
            data.get("email", ""), LicenseSource.MANUAL
        )

        response_serializer = LicenseKeyResponseSerializer({"licenseKey": result.license_key})
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class FindLicenseView(LicenseServiceMixin, APIView):
    """View for looking up the license issued to an email."""

    @extend_schema(
        operation_id="find_license",
        summary="Find License by Email",
        description="Return the license key issued to a customer email.",
        tags=["License API"],
        request=OperatorRequestSerializer,
        responses={
            200: LicenseKeyResponseSerializer,
            400: {"description": "Email is required"},
            401: {"description": "Unauthorized - Missing or invalid secret"},
            404: {"description": "No license issued for this email"},
        },
    )
    def post(self, request: Request) -> Response:
        """Find a license by email."""
        return async_to_sync(self._handle_find_license)(request)

    async def _handle_find_license(self, request: Request) -> Response:
        """Async handler for find license."""
        data = _validated_operator_request(request)

        license_key = await self.get_license_service().find_license(data.get("email", ""))

        response_serializer = LicenseKeyResponseSerializer({"licenseKey": license_key})
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class VerifyLicenseView(LicenseServiceMixin, APIView):
    """View for verifying a license key."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check whether a license key is authorized. Only active licenses "
            "are authorized; the reason names any other status."
        ),
        tags=["License API"],
        request=VerifyLicenseRequestSerializer,
        responses={
            200: VerifyLicenseResponseSerializer,
            400: {"description": "License key is required"},
            403: VerifyLicenseResponseSerializer,
            404: VerifyLicenseResponseSerializer,
            500: {"description": "Internal server error"},
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license key."""
        return async_to_sync(self._handle_verify_license)(request)

    async def _handle_verify_license(self, request: Request) -> Response:
        """Async handler for verify license."""
        serializer = VerifyLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        license_key = serializer.validated_data.get("licenseKey", "")

        result = await self.get_license_service().verify_license(license_key)

        if result.is_authorized:
            body = {"valid": True, "email": result.email}
            status_code = status.HTTP_200_OK
        else:
            body = {"valid": False, "reason": result.reason}
            status_code = (
                status.HTTP_404_NOT_FOUND if result.is_not_found else status.HTTP_403_FORBIDDEN
            )
            # Arbitrary client input stays out of the logs
            shown = mask_key(license_key) if is_license_key(license_key) else "<malformed key>"
            logger.info("License %s denied: %s", shown, result.reason)

        return Response(VerifyLicenseResponseSerializer(body).data, status=status_code)

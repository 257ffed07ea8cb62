"""
License application service.

Orchestrates issuance (administrative and payment-triggered), lookup and
verification on top of a LicenseRepository.
"""

import logging
import time

from core.domain.exceptions import LicenseNotFoundError, ValidationError
from core.domain.value_objects import LicenseSource, mask_email, normalize_email
from core.metrics import (
    license_verifications_total,
    licenses_issued_total,
    store_operation_duration_seconds,
)
from licenses.domain.license import IssueResult
from licenses.domain.services import LicenseVerifier, VerificationResult
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class LicenseService:
    """Application service for license issuance and verification."""

    def __init__(self, repository: LicenseRepository):
        """Initialize service with its repository."""
        self.repository = repository

    async def issue_license(
        self, email: str, source: LicenseSource = LicenseSource.MANUAL
    ) -> IssueResult:
        """
        Issue a license for an email, or return the one already issued.

        Args:
            email: Customer email
            source: Issuance origin

        Returns:
            IssueResult with the license key and whether it is new

        Raises:
            ValidationError: If email is empty
            StorageError: If the store fails
        """
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationError("Email is required")

        started = time.monotonic()
        result = await self.repository.issue(normalized, source)
        store_operation_duration_seconds.labels(operation="issue").observe(
            time.monotonic() - started
        )

        licenses_issued_total.labels(
            source=source.value, outcome="new" if result.is_new else "existing"
        ).inc()
        return result

    async def verify_license(self, license_key: str) -> VerificationResult:
        """
        Decide whether a license key authorizes its holder.

        Args:
            license_key: Key presented by the client software

        Returns:
            Authorized(email) or Denied(reason)

        Raises:
            ValidationError: If the key is empty
            StorageError: If the store fails or the record is corrupt
        """
        key = license_key.strip() if isinstance(license_key, str) else ""
        if not key:
            raise ValidationError("License key is required")

        started = time.monotonic()
        record = await self.repository.get_record(key)
        store_operation_duration_seconds.labels(operation="get_record").observe(
            time.monotonic() - started
        )

        result = LicenseVerifier.decide(record)
        if result.is_authorized:
            outcome = "authorized"
        elif record is None:
            outcome = "not_found"
        else:
            outcome = "denied"
        license_verifications_total.labels(outcome=outcome).inc()
        return result

    async def find_license(self, email: str) -> str:
        """
        Return the license key issued to an email.

        Raises:
            ValidationError: If email is empty
            LicenseNotFoundError: If no license was issued for the email
        """
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationError("Email is required")

        license_key = await self.repository.find_key_by_email(normalized)
        if not license_key:
            logger.info("No license issued for %s", mask_email(normalized))
            raise LicenseNotFoundError(f"No license issued for {normalized}")
        return license_key

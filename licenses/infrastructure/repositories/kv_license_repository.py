"""
Key-value implementation of LicenseRepository port.

Two indexes live in the store:

- ``<license key>`` -> JSON license record
- ``email:<email>`` -> license key

The email index is the idempotency anchor. A new issuance writes both
entries in one batch that only commits while the index entry is absent,
so concurrent issuers for the same email agree on a single winner.
"""
import logging
from typing import Callable, Optional

from core.domain.exceptions import CorruptRecordError, StorageError
from core.domain.value_objects import LicenseSource, mask_email, mask_key
from core.infrastructure.key_value_store import KeyValueStore
from licenses.domain.license import IssueResult, LicenseRecord
from licenses.domain.license_key import generate_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

EMAIL_INDEX_PREFIX = "email:"


def email_index_key(email: str) -> str:
    """Store key of the email index entry."""
    return f"{EMAIL_INDEX_PREFIX}{email}"


class KeyValueLicenseRepository(LicenseRepository):
    """
    KeyValueStore implementation of LicenseRepository.

    This adapter:
    1. Serializes LicenseRecord entities to the stored JSON format
    2. Maintains the email index alongside each record
    3. Resolves concurrent issuance with a conditional batch write
    """

    def __init__(
        self,
        store: KeyValueStore,
        key_generator: Callable[[], str] = generate_license_key,
    ):
        """
        Initialize repository.

        Args:
            store: Key-value store the records live in
            key_generator: License key factory
        """
        self.store = store
        self.key_generator = key_generator

    async def find_key_by_email(self, email: str) -> Optional[str]:
        return await self.store.get(email_index_key(email))

    async def get_record(self, license_key: str) -> Optional[LicenseRecord]:
        # Index entries share the keyspace; they are never license records
        if license_key.startswith(EMAIL_INDEX_PREFIX):
            return None
        raw = await self.store.get(license_key)
        if raw is None:
            return None
        try:
            return LicenseRecord.from_json(raw)
        except CorruptRecordError:
            logger.error("Corrupt license record under %s", mask_key(license_key))
            raise

    async def issue(self, email: str, source: LicenseSource) -> IssueResult:
        """
        Issue a license for an email, at most once.

        Args:
            email: Customer email
            source: Issuance origin

        Returns:
            IssueResult; ``is_new`` is False when a license already existed
            or a concurrent call issued it first

        Raises:
            StorageError: If the batch could not be written
        """
        existing = await self.find_key_by_email(email)
        if existing:
            logger.info(
                "License already issued for %s: %s", mask_email(email), mask_key(existing)
            )
            return IssueResult(license_key=existing, is_new=False)

        license_key = self.key_generator()
        record = LicenseRecord.create(email=email, source=source)
        index_key = email_index_key(email)

        committed = await self.store.write_batch(
            {license_key: record.to_json(), index_key: license_key},
            if_absent=index_key,
        )
        if committed:
            logger.info(
                "Issued license %s for %s (source=%s)",
                mask_key(license_key),
                mask_email(email),
                source.value,
            )
            return IssueResult(license_key=license_key, is_new=True)

        # Lost the race: another issuer claimed the index first
        winner = await self.find_key_by_email(email)
        if not winner:
            raise StorageError("Email index missing after conditional write was rejected")
        logger.info(
            "Concurrent issuance for %s resolved to %s", mask_email(email), mask_key(winner)
        )
        return IssueResult(license_key=winner, is_new=False)

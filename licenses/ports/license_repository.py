"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional

from core.domain.value_objects import LicenseSource
from licenses.domain.license import IssueResult, LicenseRecord


class LicenseRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_key_by_email(self, email: str) -> Optional[str]:
        """
        Find the license key issued to an email.

        Args:
            email: Customer email

        Returns:
            License key or None if no license was issued
        """
        pass

    @abstractmethod
    async def get_record(self, license_key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by key.

        Args:
            license_key: License key string

        Returns:
            LicenseRecord or None if not found

        Raises:
            StorageError: If the store cannot be reached
            CorruptRecordError: If the stored record cannot be parsed
        """
        pass

    @abstractmethod
    async def issue(self, email: str, source: LicenseSource) -> IssueResult:
        """
        Issue a license for an email, at most once.

        Args:
            email: Customer email
            source: Issuance origin

        Returns:
            IssueResult with the key and whether it was created by this call
        """
        pass

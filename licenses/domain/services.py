"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from dataclasses import dataclass
from typing import Optional, Union

from licenses.domain.license import LicenseRecord

NOT_FOUND_REASON = "not found"


@dataclass(frozen=True)
class Authorized:
    """Verification passed; the license belongs to ``email``."""

    email: str

    @property
    def is_authorized(self) -> bool:
        return True


@dataclass(frozen=True)
class Denied:
    """Verification failed for ``reason``."""

    reason: str

    @property
    def is_authorized(self) -> bool:
        return False

    @property
    def is_not_found(self) -> bool:
        return self.reason == NOT_FOUND_REASON


VerificationResult = Union[Authorized, Denied]


class LicenseVerifier:
    """Domain service for the license authorization decision."""

    @staticmethod
    def decide(record: Optional[LicenseRecord]) -> VerificationResult:
        """
        Decide whether a license authorizes its holder.

        Only an active status authorizes. Any other status, including one
        this service does not recognize, is denied and named in the reason.

        Args:
            record: Stored record, or None when the key is unknown

        Returns:
            Authorized or Denied
        """
        if record is None:
            return Denied(reason=NOT_FOUND_REASON)
        if record.is_active():
            return Authorized(email=record.email)
        return Denied(reason=f"license is {record.status_label}")

"""
LicenseRecord domain entity.

This is the core domain entity representing an issued license.
It contains the record codec and is independent of infrastructure.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import CorruptRecordError
from core.domain.value_objects import LicenseSource, LicenseStatus


@dataclass(frozen=True)
class IssueResult:
    """Outcome of an issuance: the key and whether it was just created."""

    license_key: str
    is_new: bool


@dataclass(frozen=True)
class LicenseRecord:
    """
    LicenseRecord domain entity.

    Stored under its license key. Records are created once and never
    mutated here; status changes happen outside this service.
    """

    email: str
    created_at: datetime
    status: LicenseStatus
    source: LicenseSource
    raw_status: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate license record."""
        if not self.email:
            raise ValueError("License email cannot be empty")

    @classmethod
    def create(cls, email: str, source: LicenseSource) -> "LicenseRecord":
        """
        Create a new active LicenseRecord.

        Args:
            email: Customer email (already normalized)
            source: Issuance origin

        Returns:
            LicenseRecord entity instance
        """
        return cls(
            email=email,
            created_at=datetime.now(timezone.utc),
            status=LicenseStatus.ACTIVE,
            source=source,
        )

    @property
    def status_label(self) -> str:
        """Status as stored, including unrecognized values."""
        if self.status == LicenseStatus.UNKNOWN and self.raw_status:
            return self.raw_status
        return self.status.value

    def is_active(self) -> bool:
        return self.status == LicenseStatus.ACTIVE

    def to_json(self) -> str:
        """Serialize to the stored JSON document."""
        return json.dumps(
            {
                "email": self.email,
                "createdAt": self.created_at.isoformat(),
                "status": self.status_label,
                "source": self.source.value,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "LicenseRecord":
        """
        Parse a stored JSON document.

        Args:
            raw: Stored value

        Returns:
            LicenseRecord entity

        Raises:
            CorruptRecordError: If the document is not a valid record
        """
        try:
            data = json.loads(raw)
            status = str(data["status"])
            created_at = datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00"))
            record = cls(
                email=data["email"],
                created_at=created_at,
                status=LicenseStatus.parse(status),
                # Records written before the source field existed were manual
                source=LicenseSource.parse(data.get("source", LicenseSource.MANUAL.value)),
                raw_status=status,
            )
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise CorruptRecordError(f"Cannot parse license record: {e}") from e
        return record

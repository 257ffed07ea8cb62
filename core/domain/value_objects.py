"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. License status and source are closed
enumerations; values read back from storage that are not recognized map to
an explicit UNKNOWN member instead of raising.
"""
from enum import Enum


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    REVOKED = "revoked"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "LicenseStatus":
        """
        Map a stored status string to a member.

        Args:
            value: Raw status string

        Returns:
            Matching member, or UNKNOWN for anything unrecognized
        """
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class LicenseSource(Enum):
    """How a license came to be issued."""

    MANUAL = "manual"
    STRIPE = "stripe"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "LicenseSource":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


def normalize_email(value) -> str:
    """Strip and lower-case an email; returns '' for missing input."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def mask_email(email: str) -> str:
    """Mask email for logs: 'john@example.com' -> 'j***@example.com'."""
    if not email or "@" not in email:
        return ""
    local, domain = email.rsplit("@", 1)
    masked = local[0] + "***" if len(local) > 1 else "***"
    return f"{masked}@{domain}"


def mask_key(key: str) -> str:
    """Mask license key for logs: keep the prefix and the last four chars."""
    if not key or len(key) < 12:
        return "****"
    return key[:11] + "..." + key[-4:]

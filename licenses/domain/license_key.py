"""
License key generation.

A license key is the public identifier a customer pastes into the
software. Uniqueness comes from UUID4 entropy; the store is not consulted.
"""

import re
import uuid

LICENSE_KEY_PREFIX = "DEVLOG"

_LICENSE_KEY_RE = re.compile(
    r"^DEVLOG-[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$"
)


def generate_license_key() -> str:
    """
    Generate a license key in format: DEVLOG-XXXXXXXX-XXXX-4XXX-XXXX-XXXXXXXXXXXX.

    Returns:
        Generated license key string
    """
    return f"{LICENSE_KEY_PREFIX}-{str(uuid.uuid4()).upper()}"


def is_license_key(value: str) -> bool:
    """Check whether a string has the shape of a generated license key."""
    return bool(value and _LICENSE_KEY_RE.match(value))

"""
Unit tests for license key generation.
"""
import uuid

from licenses.domain.license_key import generate_license_key, is_license_key


class TestGenerateLicenseKey:
    """Tests for generate_license_key."""

    def test_format(self):
        """Test key is DEVLOG- followed by an uppercase UUID4."""
        key = generate_license_key()

        assert key.startswith("DEVLOG-")
        body = key[len("DEVLOG-"):]
        assert len(body) == 36
        assert body == body.upper()
        assert uuid.UUID(body).version == 4
        assert is_license_key(key)

    def test_keys_are_unique(self):
        keys = {generate_license_key() for _ in range(1000)}
        assert len(keys) == 1000


class TestIsLicenseKey:
    """Tests for is_license_key."""

    def test_rejects_lowercase(self):
        assert not is_license_key("DEVLOG-" + str(uuid.uuid4()))

    def test_rejects_other_prefix(self):
        assert not is_license_key("OTHER-" + str(uuid.uuid4()).upper())

    def test_rejects_empty(self):
        assert not is_license_key("")

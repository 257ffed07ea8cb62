"""
Licenses module - License key issuance and verification.

This module handles:
- License key generation
- LicenseRecord entity and its stored format
- Idempotent issuance against the email index
- The verification decision
"""

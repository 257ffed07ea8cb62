"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when client input is missing or malformed."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, code="VALIDATION_ERROR")


class UnauthorizedError(DomainException):
    """Raised when a caller fails authentication."""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(message, code=code)


class InvalidSignatureError(UnauthorizedError):
    """Raised when a payment event signature does not verify."""

    def __init__(self, message: str = "Invalid signature"):
        super().__init__(message, code="INVALID_SIGNATURE")


class NotFoundError(DomainException):
    """Base exception for negative lookups."""

    pass


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class StorageError(DomainException):
    """Raised when the key-value store is unreachable or times out."""

    def __init__(self, message: str = "Storage unavailable", code: str = "STORAGE_ERROR"):
        super().__init__(message, code=code)


class CorruptRecordError(StorageError):
    """Raised when a stored license record cannot be parsed."""

    def __init__(self, message: str = "Stored license record is corrupt"):
        super().__init__(message, code="CORRUPT_RECORD")

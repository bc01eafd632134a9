"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.

Categories map onto caller behaviour:
- ValidationError: malformed input, rejected before any storage mutation
- NotFoundError: referenced key or tenant does not exist
- ConflictError: key already consumed, or a concurrent write won
- ExhaustionError: key generation ran out of retry budget
- StorageError: the persistence layer failed
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
    """Base exception for caller-fixable input errors."""

    pass


class NotFoundError(DomainException):
    """Base exception for missing keys or tenants."""

    pass


class ConflictError(DomainException):
    """Base exception for state conflicts."""

    pass


class ExhaustionError(DomainException):
    """Base exception for exhausted retry budgets."""

    pass


class StorageError(DomainException):
    """Raised when the underlying persistence call fails."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, code="STORAGE_ERROR")


class InvalidKeyFormatError(ValidationError):
    """Raised when a license key string is malformed."""

    def __init__(self, message: str = "Invalid license key format"):
        super().__init__(message, code="INVALID_KEY_FORMAT")


class InvalidDurationError(ValidationError):
    """Raised when a license duration is out of range."""

    def __init__(self, message: str = "Duration must be between 1 and 365 days"):
        super().__init__(message, code="INVALID_DURATION")


class InvalidQuantityError(ValidationError):
    """Raised when a key batch size is out of range."""

    def __init__(self, message: str = "Quantity must be between 1 and 100"):
        super().__init__(message, code="INVALID_QUANTITY")


class InvalidQueryError(ValidationError):
    """Raised when list or dashboard parameters are out of range."""

    def __init__(self, message: str = "Invalid query parameters"):
        super().__init__(message, code="INVALID_QUERY")


class LicenseKeyNotFoundError(NotFoundError):
    """Raised when a license key is not found."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message, code="KEY_NOT_FOUND")


class TenantNotFoundError(NotFoundError):
    """Raised when a tenant is not found."""

    def __init__(self, message: str = "Restaurant not found"):
        super().__init__(message, code="TENANT_NOT_FOUND")


class KeyAlreadyUsedError(ConflictError):
    """Raised when a license key has already been consumed or revoked."""

    def __init__(self, message: str = "License key has already been used"):
        super().__init__(message, code="KEY_ALREADY_USED")


class ConcurrentActivationError(ConflictError):
    """Raised when another activation for the same tenant committed first."""

    def __init__(self, message: str = "Another license activation is in progress for this tenant"):
        super().__init__(message, code="CONCURRENT_ACTIVATION")


class KeyGenerationExhaustedError(ExhaustionError):
    """Raised when no unique key code could be drawn within the retry budget."""

    def __init__(self, message: str = "Failed to generate a unique license key"):
        super().__init__(message, code="GENERATION_EXHAUSTED")

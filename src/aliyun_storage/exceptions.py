"""Custom exceptions for the OSS storage adapter."""


class StorageError(Exception):
    """Base class for all storage adapter errors."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ConfigurationError(StorageError):
    """Raised when a required configuration field is missing or invalid."""

    def __init__(self, field: str, reason: str, cause: Exception | None = None):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid storage configuration '{field}': {reason}", cause)


class NotFoundError(StorageError):
    """Raised when a requested object does not exist."""

    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        super().__init__(f"Object '{key}' not found in storage", cause)


class TransportError(StorageError):
    """Raised when the storage SDK or the network fails."""

    def __init__(self, operation: str, key: str, cause: Exception | None = None):
        self.operation = operation
        self.key = key
        super().__init__(f"Storage {operation} failed for '{key}'", cause)


class SigningError(StorageError):
    """Raised when request signing fails because of malformed key material."""

    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        super().__init__(f"Failed to sign upload request for '{key}'", cause)

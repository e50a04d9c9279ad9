"""Storage signing exceptions."""
from typing import Optional


class StorageError(Exception):
    """Base storage exception."""
    pass


class ConfigurationError(StorageError):
    """Signing configuration is incomplete or invalid."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        super().__init__(message)
        # Field names only; values are never attached
        self.missing = list(missing or [])


class ValidationError(StorageError):
    """Sign request rejected before any cryptographic work."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class SigningError(StorageError):
    """Signature computation failed; no partial URL is produced."""
    pass

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    VALIDATION = "validation"
    STORAGE = "storage"
    CORRUPT = "corrupt"


class VaultError(Exception):
    """Base class for vault errors."""


class ValidationError(VaultError):
    """A required field was empty after trimming."""


class StorageError(VaultError, OSError):
    """The vault file could not be read or written."""


class CorruptStateError(VaultError):
    """The vault file exists but cannot be decoded."""

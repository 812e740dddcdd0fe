"""
Shared error types for the casbin ArangoDB adapter.

python-arango errors are not wrapped; only failures the adapter detects
itself are raised as AdapterError.
"""

from typing import Dict, Any, Optional


class AdapterError(Exception):
    """Base exception for adapter errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TooManyArgumentsError(AdapterError):
    """Policy rule has more values than the field mapping can hold."""

    def __init__(self, message: str = "policy has too many arguments", details: Optional[Dict[str, Any]] = None):
        super().__init__("TOO_MANY_ARGUMENTS", message, details)


class EmptyValueError(AdapterError):
    """Policy rule has an empty value, which would not survive a reload."""

    def __init__(self, message: str = "policy has an empty value", details: Optional[Dict[str, Any]] = None):
        super().__init__("EMPTY_VALUE", message, details)


class TooManyFieldsError(AdapterError):
    """Filter references fields outside the field mapping."""

    def __init__(self, message: str = "unmapped values in remove request", details: Optional[Dict[str, Any]] = None):
        super().__init__("TOO_MANY_FIELDS", message, details)


class InvalidDocumentError(AdapterError):
    """Stored document does not describe a valid policy rule."""

    def __init__(self, message: str = "db document does not match valid policy", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_DOCUMENT", message, details)


class InvalidFieldMappingError(AdapterError):
    """Field mapping cannot be used to store policy rules."""

    def __init__(self, message: str = "invalid field mapping", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_FIELD_MAPPING", message, details)

"""
Error types for the typed cache.
"""

from typing import Dict, Any, Optional


class CacheException(Exception):
    """Base exception for cache failures."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_log_fields(self) -> Dict[str, Any]:
        """Flatten into structured log fields."""
        fields = {"error_code": self.code, "error": self.message}
        fields.update(self.details)
        return fields


class BackendError(CacheException):
    """Transport or availability failure reported by the cache store."""

    def __init__(self, message: str = "Cache backend error", details: Optional[Dict[str, Any]] = None):
        super().__init__("BACKEND_ERROR", message, details)


class SerializationError(CacheException):
    """Value could not be encoded into a cache payload."""

    def __init__(self, message: str = "Serialization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("SERIALIZATION_ERROR", message, details)


class DeserializationError(CacheException):
    """Payload is malformed or does not match the requested type."""

    def __init__(self, message: str = "Deserialization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("DESERIALIZATION_ERROR", message, details)

"""
MenuRelay Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the two error tiers of the relay.
How:   Each exception class carries a user-facing message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return structured responses with the right HTTP status.
Who:   Raised by services, adapters and middleware; caught by global handlers.

Exception Hierarchy:
    RelayError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── PayloadTooLargeError     → 413 Payload Too Large
    ├── FaceDetectionError       → 500 Internal Server Error
    └── StorageError             → 500 Internal Server Error
        └── MenuUnavailableError → 500, plaintext body

Upstream errors always carry a fixed message. The upstream detail goes into
`context`, which is logged server-side and never returned to the caller.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """
    Base exception for all MenuRelay application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RelayError):
    """
    Raised when a required client input is missing.

    When:    A required payload field is absent or empty.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "No imageBase64 provided",
            "details": {"field": "imageBase64"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class PayloadTooLargeError(RelayError):
    """
    Raised when a request body exceeds the configured ceiling.

    HTTP:    413 Payload Too Large
    """

    def __init__(
        self,
        max_size: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        max_mb = max_size / (1024 * 1024)
        message = f"Request body exceeds maximum of {max_mb:.0f}MB."
        ctx = context or {}
        ctx["max_size"] = max_size
        super().__init__(message=message, context=ctx)
        self.max_size = max_size


class FaceDetectionError(RelayError):
    """
    Raised when the face-detection service call fails.

    When:    SDK raised, transport failed, or the per-image response carried
             an error status.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Vision call failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(RelayError):
    """
    Raised when an object-storage operation fails.

    When:    Write, read or URL signing failed, or the bucket is not configured.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MenuUnavailableError(StorageError):
    """
    Raised when the current menu document cannot be served.

    The menu endpoint returns a binary body on success, so its failure body is
    plaintext rather than the JSON error format.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Could not load menu",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

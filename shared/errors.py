"""
Shared error handling for the Coolify access client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class AccessClientError(Exception):
    """Base exception for the Coolify access client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class Unauthorized(AccessClientError):
    """Invalid or missing API token (401)."""

    def __init__(self, message: str = "unauthenticated: invalid or missing token (401)", details: Optional[Dict[str, Any]] = None):
        super().__init__("UNAUTHORIZED", message, details)


class BadRequest(AccessClientError):
    """Upstream rejected the request (400)."""

    def __init__(self, message: str = "invalid token (400)", details: Optional[Dict[str, Any]] = None):
        super().__init__("BAD_REQUEST", message, details)


class NotFound(AccessClientError):
    """Resource or route not found (404).

    The version-fallback executor treats this as "this API version does not
    know the route" and moves on to the next candidate version.
    """

    def __init__(self, body: str = "", details: Optional[Dict[str, Any]] = None):
        self.body = body
        message = f"resource not found (404): {body}" if body else "resource not found (404)"
        super().__init__("NOT_FOUND", message, details)


class TransportFailure(AccessClientError):
    """Network, DNS or timeout failure before a response was received."""

    def __init__(self, message: str = "Transport failure", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_FAILURE", message, details)


class UnexpectedStatus(AccessClientError):
    """Any other non-2xx response."""

    def __init__(self, status_code: int, body: str = "", reason: str = "", details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.body = body
        status = f"{status_code} {reason}".strip()
        merged = {"status_code": status_code, "body": body}
        merged.update(details or {})
        super().__init__("UNEXPECTED_STATUS", f"unexpected response: {status} ({body})", merged)


class DecodeFailure(AccessClientError):
    """Response body did not match any known shape."""

    def __init__(self, message: str = "Response could not be decoded", details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODE_FAILURE", message, details)


class ConfigurationError(AccessClientError):
    """Client settings are incomplete."""

    def __init__(self, message: str = "API_URL and API_TOKEN must be set", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)

"""
Structured Error Module for AC Digest.

Provides consistent error handling and response formatting.
Pipeline, storage and command errors all derive from APIError.
"""

from typing import Optional, Dict, Any
from enum import Enum
from dataclasses import dataclass
from datetime import datetime


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    RUN_IN_PROGRESS = "RUN_IN_PROGRESS"

    # Server errors (5xx)
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    NOTIFICATION_ERROR = "NOTIFICATION_ERROR"
    CONFIG_IO_ERROR = "CONFIG_IO_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class ErrorResponse:
    """Structured error response for API endpoints."""

    error: bool
    code: str
    message: str
    detail: Optional[str] = None
    timestamp: str = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.utcnow().isoformat() + "Z"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result = {
            "error": self.error,
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp
        }
        if self.detail:
            result["detail"] = self.detail
        return result


class APIError(Exception):
    """Base exception for errors with structured response."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 400,
        detail: Optional[str] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to ErrorResponse."""
        return ErrorResponse(
            error=True,
            code=self.code.value,
            message=self.message,
            detail=self.detail
        )


class NotConfiguredError(APIError):
    """Raised when a run is triggered before a destination channel is set."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NOT_CONFIGURED,
            message="Notification channel is not configured",
            status_code=409,
            detail="Set a channel with POST /channel before running the digest"
        )


class UpstreamError(APIError):
    """Raised when the judge data endpoints fail or return garbage."""

    def __init__(self, message: str = "AtCoder Problems API error", detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.UPSTREAM_ERROR,
            message=message,
            status_code=502,
            detail=detail
        )


class ConfigNotFoundError(APIError):
    """Raised when no persisted config exists yet."""

    def __init__(self, path: str):
        super().__init__(
            code=ErrorCode.CONFIG_NOT_FOUND,
            message=f"No saved config at '{path}'",
            status_code=404
        )


class ConfigIOError(APIError):
    """Raised when the persisted config cannot be read or written."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.CONFIG_IO_ERROR,
            message=message,
            status_code=500,
            detail=detail
        )


class RunInProgressError(APIError):
    """Raised when a digest run is triggered while another is in flight."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.RUN_IN_PROGRESS,
            message="A digest run is already in progress",
            status_code=409,
            detail="Wait for the current run to finish and try again."
        )


class NotificationError(APIError):
    """Raised when the chat API rejects a message."""

    def __init__(self, message: str = "Failed to deliver notification", detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.NOTIFICATION_ERROR,
            message=message,
            status_code=502,
            detail=detail
        )


class ValidationError(APIError):
    """Raised for request validation failures."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            detail=detail
        )


def success_response(data: Any, message: Optional[str] = None) -> Dict[str, Any]:
    """Create a standard success response."""
    response = {
        "error": False,
        "data": data,
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }
    if message:
        response["message"] = message
    return response

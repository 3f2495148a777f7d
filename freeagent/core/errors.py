"""Error types raised by the FreeAgent client.

Every HTTP failure surfaces as a ``FreeAgentError`` subclass carrying a
machine-readable ``ErrorCode``, the HTTP status (when there was one) and a
suggested action for the user. The cache layer never raises these itself; it
only lets them pass through from the fetch/mutate callables.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for the client."""

    CONNECTION_ERROR = "FREEAGENT_CONNECTION_ERROR"
    AUTH_ERROR = "FREEAGENT_AUTH_ERROR"
    FORBIDDEN = "FREEAGENT_FORBIDDEN"
    NOT_FOUND = "FREEAGENT_NOT_FOUND"
    VALIDATION_ERROR = "FREEAGENT_VALIDATION_ERROR"
    RATE_LIMITED = "FREEAGENT_RATE_LIMITED"
    SERVER_ERROR = "FREEAGENT_SERVER_ERROR"
    INVALID_RESPONSE = "FREEAGENT_INVALID_RESPONSE"
    API_ERROR = "FREEAGENT_API_ERROR"


class ErrorResponse(BaseModel):
    """Serializable description of a client error.

    Attributes:
        error_code: Machine-readable error code
        message: Human-readable error message
        status_code: HTTP status returned by FreeAgent, if any
        details: Additional error details
        retry_after: Seconds to wait before retrying (for rate limits)
        suggested_action: Actionable suggestion for the user
        is_retryable: Whether the operation can be retried
    """
    error_code: str
    message: str
    status_code: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    retry_after: Optional[int] = None
    suggested_action: Optional[str] = None
    is_retryable: bool = False


SUGGESTED_ACTIONS = {
    ErrorCode.CONNECTION_ERROR: "Cannot connect to FreeAgent. Please check your network connection and the API base URL.",
    ErrorCode.AUTH_ERROR: "FreeAgent rejected the access token. Please obtain a new token and try again.",
    ErrorCode.FORBIDDEN: "The FreeAgent user lacks the access level required for this resource.",
    ErrorCode.NOT_FOUND: "The requested resource was not found in FreeAgent.",
    ErrorCode.VALIDATION_ERROR: "The data submitted to FreeAgent was invalid. Please review and correct it.",
    ErrorCode.RATE_LIMITED: "Too many requests to FreeAgent. Please wait a moment and try again.",
    ErrorCode.SERVER_ERROR: "FreeAgent server error. Please try again later.",
    ErrorCode.INVALID_RESPONSE: "FreeAgent returned a response in an unexpected format.",
    ErrorCode.API_ERROR: "FreeAgent returned an error.",
}

RETRYABLE_ERRORS = {
    ErrorCode.CONNECTION_ERROR,
    ErrorCode.RATE_LIMITED,
    ErrorCode.SERVER_ERROR,
}


class FreeAgentError(Exception):
    """Base exception for FreeAgent API errors."""

    error_code = ErrorCode.API_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    @property
    def is_retryable(self) -> bool:
        return self.error_code in RETRYABLE_ERRORS

    def to_response(self) -> ErrorResponse:
        """Build a standardized error response for this exception."""
        return ErrorResponse(
            error_code=self.error_code.value,
            message=self.message,
            status_code=self.status_code,
            details=self.details,
            retry_after=getattr(self, "retry_after", None),
            suggested_action=SUGGESTED_ACTIONS.get(self.error_code),
            is_retryable=self.is_retryable,
        )


class FreeAgentConnectionError(FreeAgentError):
    """Raised when connection to FreeAgent fails or times out."""
    error_code = ErrorCode.CONNECTION_ERROR


class FreeAgentAuthenticationError(FreeAgentError):
    """Raised when authentication fails (401)."""
    error_code = ErrorCode.AUTH_ERROR


class FreeAgentForbiddenError(FreeAgentError):
    """Raised when access is forbidden (403)."""
    error_code = ErrorCode.FORBIDDEN


class FreeAgentNotFoundError(FreeAgentError):
    """Raised when resource is not found (404)."""
    error_code = ErrorCode.NOT_FOUND


class FreeAgentValidationError(FreeAgentError):
    """Raised when request validation fails (422 or bad arguments)."""
    error_code = ErrorCode.VALIDATION_ERROR


class FreeAgentRateLimitError(FreeAgentError):
    """Raised when rate limited (429)."""

    error_code = ErrorCode.RATE_LIMITED

    def __init__(
        self,
        message: str,
        retry_after: Optional[int] = None,
        status_code: Optional[int] = 429,
    ):
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class FreeAgentServerError(FreeAgentError):
    """Raised when server returns 5xx error."""
    error_code = ErrorCode.SERVER_ERROR


class FreeAgentResponseError(FreeAgentError):
    """Raised when a successful response does not have the expected shape."""
    error_code = ErrorCode.INVALID_RESPONSE

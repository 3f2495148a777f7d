"""Core client modules."""

from freeagent.core.config import FreeAgentSettings, settings
from freeagent.core.errors import (
    ErrorCode,
    ErrorResponse,
    FreeAgentAuthenticationError,
    FreeAgentConnectionError,
    FreeAgentError,
    FreeAgentForbiddenError,
    FreeAgentNotFoundError,
    FreeAgentRateLimitError,
    FreeAgentResponseError,
    FreeAgentServerError,
    FreeAgentValidationError,
)
from freeagent.core.logging import LoggerAdapter, get_logger, setup_logging

__all__ = [
    "settings",
    "FreeAgentSettings",
    "ErrorCode",
    "ErrorResponse",
    "FreeAgentError",
    "FreeAgentConnectionError",
    "FreeAgentAuthenticationError",
    "FreeAgentForbiddenError",
    "FreeAgentNotFoundError",
    "FreeAgentValidationError",
    "FreeAgentRateLimitError",
    "FreeAgentServerError",
    "FreeAgentResponseError",
    "get_logger",
    "setup_logging",
    "LoggerAdapter",
]

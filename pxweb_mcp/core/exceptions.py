"""
Custom exceptions for PxWeb MCP.

This module provides a hierarchy of custom exceptions for the service.
All exceptions inherit from PxWebMCPException and include error codes for
consistent error handling and logging.

Upstream failures (HTTP status, connection, parsing) are caught at the tool
boundary and turned into error results; validation and lookup failures are
raised by the executor before any handler runs.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """Error codes for PxWeb MCP exceptions."""

    PXWEB_MCP_ERROR = "PXWEB_MCP_ERROR"
    UPSTREAM_HTTP_ERROR = "UPSTREAM_HTTP_ERROR"
    UPSTREAM_CONNECTION_ERROR = "UPSTREAM_CONNECTION_ERROR"
    RESPONSE_PARSE_ERROR = "RESPONSE_PARSE_ERROR"
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class PxWebMCPException(Exception):
    """
    Base exception for all PxWeb MCP errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.PXWEB_MCP_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# Upstream Errors
# =============================================================================


class UpstreamHTTPError(PxWebMCPException):
    """
    Raised when the PxWeb API answers with a status outside 200-299.

    The message is always "HTTP <status>: <body>" so the caller sees the
    upstream diagnostic text verbatim.

    Attributes:
        status_code: HTTP status code returned by the upstream API.
        body: Full response body text.
    """

    def __init__(
        self,
        status_code: int,
        body: str,
        error_code: str = ErrorCode.UPSTREAM_HTTP_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(f"HTTP {status_code}: {body}", error_code, **kwargs)
        self.status_code = status_code
        self.body = body


class UpstreamConnectionError(PxWebMCPException):
    """
    Raised when the request never produced a response (DNS, timeout, reset).

    Attributes:
        url: The URL that was being fetched.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        error_code: str = ErrorCode.UPSTREAM_CONNECTION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.url = url


class ResponseParseError(PxWebMCPException):
    """Raised when a response expected to be JSON cannot be interpreted."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.RESPONSE_PARSE_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


# =============================================================================
# Tool Errors
# =============================================================================


class ToolExecutionError(PxWebMCPException):
    """
    Exception for tool dispatch failures.

    Raised when a tool cannot be run at all, e.g. the name is not registered.

    Attributes:
        tool_name: Name of the tool that failed.
        tool_call_id: ID of the tool call (for correlation).
    """

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        tool_call_id: Optional[str] = None,
        error_code: str = ErrorCode.TOOL_EXECUTION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.tool_name = tool_name
        self.tool_call_id = tool_call_id


class ToolValidationError(ToolExecutionError):
    """
    Raised when tool arguments do not conform to the tool's input schema.

    Attributes:
        field: Name of the field that failed validation.
        value: The invalid value.
    """

    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        field: Optional[str] = None,
        value: Any = None,
        error_code: str = ErrorCode.VALIDATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, tool_name=tool_name, error_code=error_code, **kwargs)
        self.field = field
        self.value = value

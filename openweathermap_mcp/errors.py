"""
Error kinds surfaced to MCP callers.
"""

from __future__ import annotations

from enum import Enum

from fastmcp.exceptions import ToolError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class ErrorKind(Enum):
    INVALID_PARAMS = ("InvalidParams", INVALID_PARAMS)
    METHOD_NOT_FOUND = ("MethodNotFound", METHOD_NOT_FOUND)
    INTERNAL_ERROR = ("InternalError", INTERNAL_ERROR)

    def __init__(self, label: str, code: int) -> None:
        self.label = label
        self.code = code


class ToolInvocationError(ToolError):
    """Raised when a tool call fails; carries the error kind."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(f"{kind.label}: {message}")
        self.kind = kind
        self.message = message


def invalid_params(message: str) -> ToolInvocationError:
    return ToolInvocationError(ErrorKind.INVALID_PARAMS, message)


def method_not_found(message: str) -> ToolInvocationError:
    return ToolInvocationError(ErrorKind.METHOD_NOT_FOUND, message)


def internal_error(message: str) -> ToolInvocationError:
    return ToolInvocationError(ErrorKind.INTERNAL_ERROR, message)


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""


__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "ToolInvocationError",
    "internal_error",
    "invalid_params",
    "method_not_found",
]

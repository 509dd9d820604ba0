"""
Error taxonomy for the text validation toolkit.

This module defines the structured exception hierarchy shared by the string
validator, the widget bindings and the central error handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error type categories."""

    VALIDATION = "validation"
    CONFIG = "config"
    SYSTEM = "system"


class ErrorCode(Enum):
    """Specific error codes."""

    # Validation errors
    INVALID_INPUT = "INVALID_INPUT"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_PATTERN = "INVALID_PATTERN"

    # System errors
    OS_ERROR = "OS_ERROR"
    MEMORY_ERROR = "MEMORY_ERROR"

    UNKNOWN = "UNKNOWN"


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class BaseAppError(Exception):
    """
    Root of all toolkit errors.

    Carries a category, a code, a message suitable for display and an optional
    technical message plus free-form context for logs.
    """

    type: ErrorType
    code: ErrorCode
    user_message: str
    technical_message: str | None = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.user_message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type.value}, code={self.code.value}, message='{self.user_message}')"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "type": self.type.value,
            "code": self.code.value,
            "user_message": self.user_message,
            "technical_message": self.technical_message,
            "severity": self.severity.value,
            "context": self.context,
        }


class ValidationError(BaseAppError):
    """A field value failed validation."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        field: str | None = None,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        context: dict[str, Any] | None = None,
    ):
        context = context or {}
        if field:
            context["field"] = field

        super().__init__(
            type=ErrorType.VALIDATION,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context,
        )

    @property
    def field(self) -> str | None:
        """Name of the field that failed, if known."""
        return self.context.get("field")


class ConfigError(BaseAppError):
    """
    A validator was given constraints it cannot work with.

    Raised synchronously from the point where the configuration is set so a
    broken pattern never degrades into "always valid" or "always invalid".
    """

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.CONFIG,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context or {},
        )


class SystemError(BaseAppError):
    """Unexpected runtime failures, including user callbacks that raised."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_message: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(
            type=ErrorType.SYSTEM,
            code=code,
            user_message=user_message,
            technical_message=technical_message,
            severity=severity,
            context=context or {},
        )


_EXCEPTION_MAPPING: dict[type[Exception], tuple[type[BaseAppError], ErrorCode, str]] = {
    ValueError: (ValidationError, ErrorCode.INVALID_INPUT, "Invalid input provided"),
    TypeError: (ConfigError, ErrorCode.CONFIG_INVALID, "Invalid configuration"),
    OSError: (SystemError, ErrorCode.OS_ERROR, "System error occurred"),
    MemoryError: (SystemError, ErrorCode.MEMORY_ERROR, "Insufficient memory"),
}


def map_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """
    Map any exception onto the toolkit hierarchy.

    Args:
        exc: The exception to map
        context: Optional context information

    Returns:
        The exception itself if it already is a BaseAppError, otherwise a new
        error wrapping it
    """
    context = context or {}

    if isinstance(exc, BaseAppError):
        return exc

    exc_type = type(exc)
    if exc_type in _EXCEPTION_MAPPING:
        error_class, error_code, default_message = _EXCEPTION_MAPPING[exc_type]
        return error_class(
            code=error_code,
            user_message=str(exc) or default_message,
            technical_message=f"{exc_type.__name__}: {exc}",
            context=context,
        )

    logger.warning(f"Unknown exception type: {exc_type.__name__}: {exc}")
    return SystemError(
        code=ErrorCode.UNKNOWN,
        user_message="An unexpected error occurred",
        technical_message=f"{exc_type.__name__}: {exc}",
        context=context,
    )


def from_exception(exc: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
    """Alias of map_exception."""
    return map_exception(exc, context)

"""
Centralized error handling and logging for the text validation toolkit.

Provides a singleton ErrorHandler that normalizes exceptions into
BaseAppError instances, writes them to a rotating log file and announces
them through a Qt signal so widgets can react.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from typing import Any, ClassVar

from PySide6.QtCore import QObject, Signal

from .config import (
    ERROR_LOG_FORMAT,
    LOG_BACKUP_COUNT,
    LOG_DATE_FORMAT,
    LOG_FILE_NAME,
    LOG_FORMAT,
    LOG_MAX_BYTES,
    get_log_dir,
    get_log_level,
)
from .errors import BaseAppError, from_exception

ERROR_LOGGER_NAME = "text_validation.errors"

_SENSITIVE_KEYS = ("password", "token", "secret")
_MAX_CONTEXT_ITEMS = 20
_MAX_CONTEXT_VALUE_LENGTH = 200


class ErrorHandler(QObject):
    """
    Singleton error handler.

    Captures exceptions, logs them with their error code and emits
    errorOccurred with the normalized BaseAppError.
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = threading.excepthook

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception into a BaseAppError.

        Args:
            exception: The exception to capture
            context: Optional context information, sanitized before use

        Returns:
            BaseAppError with a technical message and traceback in its context
        """
        sanitized = self._sanitize_context(context or {})
        app_error = from_exception(exception, sanitized)

        # from_exception returns app errors as-is; the error's own keys win
        if isinstance(exception, BaseAppError):
            for key, value in sanitized.items():
                app_error.context.setdefault(key, value)

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            if exception.__traceback__ is not None:
                tb_str = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            else:
                tb_str = f"{type(exception).__name__}: {exception}\n"
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and announce an exception.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            The normalized BaseAppError
        """
        app_error = self.capture(exception, context)

        if self._logger:
            self._logger.error(
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                    "severity": app_error.severity.value,
                },
                exc_info=exception,
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def _setup_logging(self) -> None:
        """Attach a rotating file handler under the app data directory."""
        ErrorHandler._logger = logging.getLogger(ERROR_LOGGER_NAME)
        ErrorHandler._logger.setLevel(logging.DEBUG)
        ErrorHandler._logger.propagate = False

        if ErrorHandler._logger.handlers:
            return

        formatter = logging.Formatter(ERROR_LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        try:
            logs_dir = get_log_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                logs_dir / LOG_FILE_NAME,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            ErrorHandler._logger.addHandler(file_handler)
        except OSError as e:
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")

        if __debug__:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            console_handler.setLevel(logging.WARNING)
            ErrorHandler._logger.addHandler(console_handler)

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """
        Bound the size of a context dict and redact sensitive keys.

        Args:
            context: Raw context dictionary

        Returns:
            A new dictionary with string values truncated and secrets redacted
        """
        safe_context: dict[str, Any] = {}

        for index, (key, value) in enumerate(context.items()):
            if index >= _MAX_CONTEXT_ITEMS:
                safe_context["..."] = f"({len(context) - _MAX_CONTEXT_ITEMS} more items truncated)"
                break

            if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
                safe_context[key] = "[REDACTED]"
            elif isinstance(value, str):
                if len(value) > _MAX_CONTEXT_VALUE_LENGTH:
                    value = value[:_MAX_CONTEXT_VALUE_LENGTH] + "..."
                safe_context[key] = value
            else:
                safe_context[key] = repr(value)[:_MAX_CONTEXT_VALUE_LENGTH]

        return safe_context

    def install_hooks(self) -> None:
        """Route unhandled exceptions from sys and threading hooks through handle()."""

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return
            self.handle(exc_value, {"source": "sys.excepthook"})

        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            if not isinstance(args.exc_value, Exception):
                self._original_threading_excepthook(args)
                return
            self.handle(
                args.exc_value,
                {"source": "threading.excepthook", "thread": args.thread.name if args.thread else "unknown"},
            )

        sys.excepthook = exception_hook
        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore the exception hooks that were active before install_hooks()."""
        sys.excepthook = self._original_excepthook
        threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Return the singleton ErrorHandler."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling.

    Call once during application startup.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging() -> None:
    """
    Configure root logging and create the error handler.

    The root level comes from core.config.get_log_level().
    """
    get_error_handler()

    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

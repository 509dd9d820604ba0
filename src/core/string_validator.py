"""
Length and pattern validation with edge-triggered validity callbacks.

StringValidator checks strings against an optional minimum length, an
optional maximum length and an optional regular expression. Strings submitted
through update() change the stored validity state; the test methods only
answer queries.

Validity is tracked as three booleans (length, regex and their conjunction)
that are exposed as read-only properties and announced through Qt signals
when they change. The on_valid and on_invalid callbacks fire only when the
combined validity flips, and once immediately on assignment if the current
state already matches.

Before the first update() the validator is considered valid on every facet:
no string has been submitted, so nothing has failed yet.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QRegularExpression, Signal

from .errors import ConfigError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)

StringValidatorCallback = Callable[["StringValidator"], None]


def _check_length(name: str, value: Any) -> int | None:
    """Return value if it is a usable length bound, raise ConfigError otherwise."""
    if value is None:
        return None

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"{name} must be an integer or None",
            technical_message=f"{name}={value!r} ({type(value).__name__})",
            context={"parameter": name, "value": value},
        )

    if value < 0:
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message=f"{name} must not be negative",
            technical_message=f"{name}={value}",
            context={"parameter": name, "value": value},
        )

    return value


def compile_pattern(pattern: str | None) -> QRegularExpression | None:
    """
    Compile a pattern for whole-string matching.

    Args:
        pattern: Regular expression source, or None for no pattern

    Returns:
        An anchored QRegularExpression, or None when pattern is None

    Raises:
        ConfigError: If the pattern is not a string or Qt rejects it
    """
    if pattern is None:
        return None

    if not isinstance(pattern, str):
        raise ConfigError(
            code=ErrorCode.CONFIG_INVALID,
            user_message="regex_pattern must be a string or None",
            technical_message=f"regex_pattern={pattern!r} ({type(pattern).__name__})",
            context={"parameter": "regex_pattern"},
        )

    # Checked unanchored so the reported offset points into the caller's pattern
    raw = QRegularExpression(pattern)
    if not raw.isValid():
        message = raw.errorString()
        offset = raw.patternErrorOffset()
        logger.warning(f"Rejected regular expression {pattern!r}: {message} at offset {offset}")
        raise ConfigError(
            code=ErrorCode.INVALID_PATTERN,
            user_message=f"Invalid regular expression: {message}",
            technical_message=f"QRegularExpression rejected {pattern!r} at offset {offset}: {message}",
            context={"pattern": pattern, "offset": offset},
        )

    return QRegularExpression(QRegularExpression.anchoredPattern(pattern))


class StringValidator(QObject):
    """
    Tracks whether submitted strings satisfy length and pattern constraints.

    Signals carry the new value of the facet that changed and are emitted
    only on actual changes.
    """

    validityChanged = Signal(bool)
    lengthValidityChanged = Signal(bool)
    regexValidityChanged = Signal(bool)

    def __init__(
        self,
        min_length: int | None = None,
        max_length: int | None = None,
        regex_pattern: str | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._min_length: int | None = None
        self._max_length: int | None = None
        self._regex_pattern: str | None = None
        self._regex: QRegularExpression | None = None

        self._is_valid = True
        self._is_length_valid = True
        self._is_regex_valid = True

        self._on_valid: StringValidatorCallback | None = None
        self._on_invalid: StringValidatorCallback | None = None

        self.set_validation(min_length, max_length, regex_pattern)

    # Configuration

    def set_validation(
        self,
        min_length: int | None = None,
        max_length: int | None = None,
        regex_pattern: str | None = None,
    ) -> None:
        """
        Replace all three constraints at once.

        Nothing is re-evaluated; the stored validity stays as it was until the
        next update(). If any argument is rejected the previous configuration
        is left untouched.

        Args:
            min_length: Minimum accepted length, or None for no lower bound
            max_length: Maximum accepted length, or None for no upper bound
            regex_pattern: Pattern the whole string must match, or None

        Raises:
            ConfigError: If a length is negative or not an integer, or the
                pattern cannot be compiled
        """
        checked_min = _check_length("min_length", min_length)
        checked_max = _check_length("max_length", max_length)
        regex = compile_pattern(regex_pattern)

        if checked_min is not None and checked_max is not None and checked_min > checked_max:
            logger.debug(f"Inverted length range {checked_min} > {checked_max}; no string can satisfy it")

        self._min_length = checked_min
        self._max_length = checked_max
        self._regex_pattern = regex_pattern
        self._regex = regex

    @property
    def min_length(self) -> int | None:
        return self._min_length

    @min_length.setter
    def min_length(self, value: int | None) -> None:
        self.set_validation(value, self._max_length, self._regex_pattern)

    @property
    def max_length(self) -> int | None:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int | None) -> None:
        self.set_validation(self._min_length, value, self._regex_pattern)

    @property
    def regex_pattern(self) -> str | None:
        return self._regex_pattern

    @regex_pattern.setter
    def regex_pattern(self, value: str | None) -> None:
        self.set_validation(self._min_length, self._max_length, value)

    # State

    @property
    def is_valid(self) -> bool:
        """Whether the last string passed to update() satisfied every constraint."""
        return self._is_valid

    @property
    def is_length_valid(self) -> bool:
        """
        Whether the last string passed to update() was within the length bounds.

        Only min_length and max_length count here; a pattern that limits
        length on its own shows up in is_regex_valid instead.
        """
        return self._is_length_valid

    @property
    def is_regex_valid(self) -> bool:
        """Whether the last string passed to update() matched regex_pattern."""
        return self._is_regex_valid

    def validity_summary(self) -> dict[str, bool]:
        """Current state of all three facets."""
        return {
            "is_valid": self._is_valid,
            "is_length_valid": self._is_length_valid,
            "is_regex_valid": self._is_regex_valid,
        }

    # Callbacks

    @property
    def on_valid(self) -> StringValidatorCallback | None:
        """
        Called with this validator when validity flips from invalid to valid.

        Assigning a callback while the validator is valid calls it once
        straight away.
        """
        return self._on_valid

    @on_valid.setter
    def on_valid(self, callback: StringValidatorCallback | None) -> None:
        self._on_valid = callback
        if callback is not None and self._is_valid:
            callback(self)

    @property
    def on_invalid(self) -> StringValidatorCallback | None:
        """
        Called with this validator when validity flips from valid to invalid.

        Assigning a callback while the validator is invalid calls it once
        straight away.
        """
        return self._on_invalid

    @on_invalid.setter
    def on_invalid(self, callback: StringValidatorCallback | None) -> None:
        self._on_invalid = callback
        if callback is not None and not self._is_valid:
            callback(self)

    # Queries

    def test_length(self, text: str) -> bool:
        """
        Check text against the length bounds without touching stored state.

        Length is len(text), the number of code points.
        """
        length = len(text)
        if self._min_length is not None and length < self._min_length:
            return False
        if self._max_length is not None and length > self._max_length:
            return False
        return True

    def test_regex(self, text: str) -> bool:
        """Check that the whole of text matches regex_pattern, without touching stored state."""
        if self._regex is None:
            return True
        return self._regex.match(text).hasMatch()

    def test(self, text: str) -> bool:
        """Check text against every constraint without touching stored state."""
        return self.test_length(text) and self.test_regex(text)

    # Update

    def update(self, text: str) -> None:
        """
        Validate text and store the result.

        Facet signals are emitted for facets whose value changed. When the
        combined validity flips, validityChanged is emitted and then exactly one
        of on_valid or on_invalid is called. Exceptions raised by a callback
        propagate to the caller.

        Args:
            text: Candidate string; it is not retained
        """
        length_valid = self.test_length(text)
        regex_valid = self.test_regex(text)
        valid = length_valid and regex_valid

        length_changed = length_valid != self._is_length_valid
        regex_changed = regex_valid != self._is_regex_valid
        flipped = valid != self._is_valid

        # All three are committed before anything is announced
        self._is_length_valid = length_valid
        self._is_regex_valid = regex_valid
        self._is_valid = valid

        if length_changed:
            self.lengthValidityChanged.emit(length_valid)
        if regex_changed:
            self.regexValidityChanged.emit(regex_valid)

        if not flipped:
            return

        logger.debug(f"{self!r} became {'valid' if valid else 'invalid'}")
        self.validityChanged.emit(valid)

        callback = self._on_valid if valid else self._on_invalid
        if callback is not None:
            callback(self)

    def __repr__(self) -> str:
        return (
            f"StringValidator(min_length={self._min_length}, max_length={self._max_length}, "
            f"regex_pattern={self._regex_pattern!r}, is_valid={self._is_valid})"
        )


def _length_requirement(min_length: int | None, max_length: int | None) -> str:
    if min_length is not None and max_length is not None:
        return f"Must be between {min_length} and {max_length} characters"
    if min_length is not None:
        return f"Must be at least {min_length} characters"
    if max_length is not None:
        return f"Must be at most {max_length} characters"
    # State from an update made before the bounds were cleared
    return "Length is not within the allowed range"


def describe_failure(validator: StringValidator, field: str | None = None) -> ValidationError | None:
    """
    Explain why the validator's last update() failed.

    Args:
        validator: Validator to inspect
        field: Optional field name recorded on the error

    Returns:
        ValidationError for the first failing facet (length before pattern),
        or None if the validator is currently valid
    """
    if validator.is_valid:
        return None

    if not validator.is_length_valid:
        return ValidationError(
            code=ErrorCode.VALUE_OUT_OF_RANGE,
            user_message=_length_requirement(validator.min_length, validator.max_length),
            field=field,
            context={"min_length": validator.min_length, "max_length": validator.max_length},
        )

    return ValidationError(
        code=ErrorCode.PATTERN_MISMATCH,
        user_message="Does not match the required format",
        field=field,
        technical_message=f"Full match failed against {validator.regex_pattern!r}",
        context={"pattern": validator.regex_pattern},
    )

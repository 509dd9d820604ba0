"""
Tests for StringValidator's edge-triggered on_valid / on_invalid callbacks.
"""

from unittest.mock import Mock

import pytest

from core.string_validator import StringValidator


class TestCallbackOnAssign:
    """Test that assigning a callback announces the current state."""

    def test_on_valid_fires_immediately_when_valid(self):
        validator = StringValidator()
        on_valid = Mock()

        validator.on_valid = on_valid

        on_valid.assert_called_once_with(validator)

    def test_on_invalid_not_fired_when_valid(self):
        validator = StringValidator()
        on_invalid = Mock()

        validator.on_invalid = on_invalid

        on_invalid.assert_not_called()

    def test_on_invalid_fires_immediately_when_invalid(self):
        validator = StringValidator(min_length=3)
        validator.update("a")
        on_invalid = Mock()
        on_valid = Mock()

        validator.on_invalid = on_invalid
        validator.on_valid = on_valid

        on_invalid.assert_called_once_with(validator)
        on_valid.assert_not_called()

    def test_reassigning_fires_again(self):
        validator = StringValidator()
        on_valid = Mock()

        validator.on_valid = on_valid
        validator.on_valid = on_valid

        assert on_valid.call_count == 2

    def test_clearing_callback(self):
        validator = StringValidator(min_length=3)
        on_invalid = Mock()
        validator.on_invalid = on_invalid

        validator.on_invalid = None
        validator.update("a")

        assert validator.on_invalid is None
        on_invalid.assert_not_called()

    def test_callbacks_are_readable(self):
        validator = StringValidator()
        on_valid = Mock()
        validator.on_valid = on_valid
        assert validator.on_valid is on_valid
        assert validator.on_invalid is None


class TestEdgeTriggering:
    """Test that callbacks fire only on validity flips."""

    def setup_method(self):
        self.validator = StringValidator(min_length=3, max_length=5)
        self.on_valid = Mock()
        self.on_invalid = Mock()
        self.validator.on_valid = self.on_valid
        self.validator.on_invalid = self.on_invalid
        # Assignment announced the initial valid state
        self.on_valid.reset_mock()

    def test_end_to_end_scenario(self):
        self.validator.update("ab")
        assert self.validator.is_length_valid is False
        assert self.validator.is_valid is False
        self.on_invalid.assert_called_once_with(self.validator)
        self.on_valid.assert_not_called()

        self.validator.update("abcd")
        assert self.validator.is_length_valid is True
        assert self.validator.is_valid is True
        self.on_valid.assert_called_once_with(self.validator)

        self.validator.update("abcde")
        assert self.validator.is_valid is True
        assert self.on_valid.call_count == 1
        assert self.on_invalid.call_count == 1

        self.validator.update("abcdef")
        assert self.validator.is_length_valid is False
        assert self.validator.is_valid is False
        assert self.on_invalid.call_count == 2
        assert self.on_valid.call_count == 1

    @pytest.mark.parametrize(
        "sequence",
        [
            ["abc", "abcd", "abcde"],
            ["a", "ab", "abc", "abcdef", "abcdefg", "abcd"],
            ["a", "abc", "a", "abc", "a", "abc"],
            [],
        ],
    )
    def test_fire_count_equals_transition_count(self, sequence):
        previous = self.validator.is_valid
        transitions = 0
        for text in sequence:
            self.validator.update(text)
            if self.validator.is_valid != previous:
                transitions += 1
                previous = self.validator.is_valid

        assert self.on_valid.call_count + self.on_invalid.call_count == transitions

    def test_repeated_invalid_updates_fire_once(self):
        for text in ["a", "ab", "", "abcdefgh"]:
            self.validator.update(text)

        assert self.on_invalid.call_count == 1
        self.on_valid.assert_not_called()

    def test_facet_change_without_flip_does_not_fire(self):
        validator = StringValidator(min_length=3, regex_pattern=r"[a-z]+")
        on_invalid = Mock()
        validator.update("ab")
        validator.on_invalid = on_invalid
        on_invalid.reset_mock()

        validator.update("ab1")

        assert validator.is_length_valid is True
        assert validator.is_regex_valid is False
        on_invalid.assert_not_called()

    def test_set_validation_does_not_fire(self):
        self.validator.set_validation(min_length=100)

        self.on_valid.assert_not_called()
        self.on_invalid.assert_not_called()
        assert self.validator.is_valid is True


class TestCallbackOrdering:
    """Test what a callback observes when it runs."""

    def test_state_is_updated_before_callback(self):
        validator = StringValidator(max_length=2)
        seen = []
        validator.on_invalid = lambda v: seen.append(v.validity_summary())

        validator.update("abc")

        assert seen == [{"is_valid": False, "is_length_valid": False, "is_regex_valid": True}]

    def test_validity_signal_precedes_callback(self):
        validator = StringValidator(max_length=2)
        order = []
        validator.validityChanged.connect(lambda valid: order.append(("signal", valid)))
        validator.on_invalid = lambda v: order.append(("callback", v.is_valid))

        validator.update("abc")

        assert order == [("signal", False), ("callback", False)]

    def test_shared_callback_receives_originating_validator(self):
        first = StringValidator(min_length=2)
        second = StringValidator(min_length=2)
        received = []

        def on_invalid(v):
            received.append(v)

        first.on_invalid = on_invalid
        second.on_invalid = on_invalid

        second.update("a")
        first.update("a")

        assert received == [second, first]


class TestCallbackErrors:
    """Test exception propagation out of callbacks."""

    def test_exception_propagates_from_update(self):
        validator = StringValidator(min_length=3)
        validator.on_invalid = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError, match="boom"):
            validator.update("a")

        # State was committed before the callback ran
        assert validator.is_valid is False

    def test_exception_propagates_from_assignment(self):
        validator = StringValidator()

        with pytest.raises(ValueError):
            validator.on_valid = Mock(side_effect=ValueError("bad"))

        assert validator.on_valid is not None

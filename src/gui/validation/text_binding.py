"""
Bindings that keep a StringValidator in sync with a text widget.

A binding is a QObject child of the widget it watches, so the widget owns it
and destroys it along with itself. The binding holds a strong reference to
its validator, which therefore lives at least as long as the widget it is
bound to. Each widget carries at most one binding; it is found again with
QObject.findChild by its object name.
"""

from __future__ import annotations

import logging
from typing import cast

from PySide6.QtCore import QObject, Qt, SignalInstance
from PySide6.QtWidgets import QLineEdit, QWidget

from core.error_handler import get_error_handler
from core.string_validator import StringValidator
from gui.widgets.observable_label import ObservableLabel

BINDING_OBJECT_NAME = "stringValidatorBinding"


class TextValidationBinding(QObject):
    """
    Forwards a widget's text changes into a StringValidator.

    Subclasses expose the widget's text-changed signal and current text. On
    construction the widget's current text is submitted once so the
    validator starts out describing what the widget shows.
    """

    def __init__(self, widget: QWidget, validator: StringValidator):
        super().__init__(widget)
        self.setObjectName(BINDING_OBJECT_NAME)
        self._logger = logging.getLogger(__name__)
        self._widget = widget
        self._validator = validator

        self.text_signal().connect(self._on_text_changed)
        self._validator.update(self.current_text())

    @property
    def widget(self) -> QWidget:
        return self._widget

    @property
    def validator(self) -> StringValidator:
        return self._validator

    def text_signal(self) -> SignalInstance:
        raise NotImplementedError

    def current_text(self) -> str:
        raise NotImplementedError

    def detach(self) -> None:
        """Stop forwarding text changes and release the widget's ownership of this binding."""
        self.text_signal().disconnect(self._on_text_changed)
        self.setParent(None)
        self.deleteLater()

    def _on_text_changed(self, text: str) -> None:
        # Runs from the event loop, which has no caller to propagate to
        try:
            self._validator.update(text)
        except Exception as e:
            self._logger.error(f"Validity callback failed for {self._describe_widget()}: {e}")
            get_error_handler().handle(e, {"source": "textChanged", "widget": self._describe_widget()})

    def _describe_widget(self) -> str:
        return self._widget.objectName() or type(self._widget).__name__


class LineEditValidationBinding(TextValidationBinding):
    """Binding for QLineEdit."""

    def __init__(self, widget: QLineEdit, validator: StringValidator):
        super().__init__(widget, validator)

    @property
    def widget(self) -> QLineEdit:
        return cast(QLineEdit, self._widget)

    def text_signal(self) -> SignalInstance:
        return self.widget.textChanged

    def current_text(self) -> str:
        return self.widget.text()


class LabelValidationBinding(TextValidationBinding):
    """Binding for ObservableLabel."""

    def __init__(self, widget: ObservableLabel, validator: StringValidator):
        super().__init__(widget, validator)

    @property
    def widget(self) -> ObservableLabel:
        return cast(ObservableLabel, self._widget)

    def text_signal(self) -> SignalInstance:
        return self.widget.textChanged

    def current_text(self) -> str:
        return self.widget.text()


def _binding_class_for(widget: QWidget) -> type[TextValidationBinding]:
    if isinstance(widget, QLineEdit):
        return LineEditValidationBinding
    if isinstance(widget, ObservableLabel):
        return LabelValidationBinding
    raise TypeError(
        f"Cannot bind a string validator to {type(widget).__name__}; expected QLineEdit or ObservableLabel"
    )


def get_binding(widget: QWidget) -> TextValidationBinding | None:
    """Return the binding attached to widget, if any."""
    child = widget.findChild(QObject, BINDING_OBJECT_NAME, Qt.FindChildOption.FindDirectChildrenOnly)
    if isinstance(child, TextValidationBinding):
        return child
    return None


def string_validator(widget: QWidget) -> StringValidator | None:
    """Return the validator bound to widget, if any."""
    binding = get_binding(widget)
    return binding.validator if binding is not None else None


def set_string_validator(widget: QWidget, validator: StringValidator | None) -> TextValidationBinding | None:
    """
    Bind validator to widget, replacing any existing binding.

    Args:
        widget: QLineEdit or ObservableLabel
        validator: Validator to keep in sync, or None to only remove the
            current binding

    Returns:
        The new binding, or None when validator is None

    Raises:
        TypeError: If widget offers no text-changed notification
    """
    # Resolved before detaching so an unsupported widget keeps its old binding
    binding_class = _binding_class_for(widget) if validator is not None else None

    previous = get_binding(widget)
    if previous is not None:
        previous.detach()

    if binding_class is None:
        return None

    return binding_class(widget, validator)  # type: ignore[arg-type]

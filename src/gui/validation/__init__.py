"""
Live validation of text widgets.

Binds StringValidator instances to QLineEdit and ObservableLabel widgets so
validity follows the text they display.
"""

from .text_binding import (
    LabelValidationBinding,
    LineEditValidationBinding,
    TextValidationBinding,
    get_binding,
    set_string_validator,
    string_validator,
)

__all__ = [
    "LabelValidationBinding",
    "LineEditValidationBinding",
    "TextValidationBinding",
    "get_binding",
    "set_string_validator",
    "string_validator",
]

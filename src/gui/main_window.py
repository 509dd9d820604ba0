"""
Demo window for the text validation toolkit.

Shows a form whose fields are validated live through StringValidator
bindings, with a status line and submit button driven by the validity
callbacks.
"""

import logging

from PySide6.QtWidgets import (
    QFormLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.string_validator import StringValidator, describe_failure
from gui.validation import set_string_validator
from gui.widgets.observable_label import ObservableLabel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 16
USERNAME_PATTERN = r"[a-z0-9_]+"
PREVIEW_MAX_LENGTH = 12


class MainWindow(QMainWindow):
    """
    Main application window.

    The username field accepts 3-16 lowercase letters, digits or underscores.
    The preview label mirrors the trimmed username and is limited to 12
    characters so it fits the header it would be shown in.
    """

    def __init__(self) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.setWindowTitle("Text Validation Demo")

        self.username_validator = StringValidator(USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH, USERNAME_PATTERN, self)
        self.preview_validator = StringValidator(max_length=PREVIEW_MAX_LENGTH, parent=self)

        self._setup_ui()
        self._connect_validation()

    def _setup_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)

        form = QFormLayout()
        self.username_edit = QLineEdit()
        self.username_edit.setObjectName("usernameEdit")
        self.username_edit.setPlaceholderText("lowercase letters, digits, _")
        form.addRow("Username:", self.username_edit)

        self.preview_label = ObservableLabel()
        self.preview_label.setObjectName("previewLabel")
        form.addRow("Preview:", self.preview_label)
        layout.addLayout(form)

        self.status_label = QLabel()
        self.status_label.setObjectName("statusLabel")
        self.status_label.setAccessibleName("Validation status")
        layout.addWidget(self.status_label)

        self.submit_button = QPushButton("Submit")
        self.submit_button.setObjectName("submitButton")
        layout.addWidget(self.submit_button)

        self.setCentralWidget(central)

    def _connect_validation(self) -> None:
        self.username_edit.textChanged.connect(lambda text: self.preview_label.setText(text.strip()))

        for validator in (self.username_validator, self.preview_validator):
            validator.on_valid = self._on_field_valid
            validator.on_invalid = self._on_field_invalid
            # The failing facet can change without validity flipping
            validator.lengthValidityChanged.connect(self._on_facet_changed)
            validator.regexValidityChanged.connect(self._on_facet_changed)

        set_string_validator(self.username_edit, self.username_validator)
        set_string_validator(self.preview_label, self.preview_validator)

        self._refresh()

    def _on_field_valid(self, validator: StringValidator) -> None:
        self._logger.debug(f"Field became valid: {validator!r}")
        self._refresh()

    def _on_field_invalid(self, validator: StringValidator) -> None:
        self._logger.debug(f"Field became invalid: {validator!r}")
        self._refresh()

    def _on_facet_changed(self, _valid: bool) -> None:
        self._refresh()

    def _refresh(self) -> None:
        """Update status text and submit button from the current validity."""
        failure = describe_failure(self.username_validator, "username") or describe_failure(
            self.preview_validator, "preview"
        )
        if failure is None:
            self.status_label.setText("Ready")
        else:
            self.status_label.setText(f"{failure.field}: {failure.user_message}")

        self.submit_button.setEnabled(failure is None)

    def is_form_valid(self) -> bool:
        return self.username_validator.is_valid and self.preview_validator.is_valid

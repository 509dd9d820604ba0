"""
Shared test configuration.
"""

import os

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PySide6.QtCore import QStandardPaths  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from core.error_handler import ErrorHandler  # noqa: E402

# Keep log files out of the real user directories
QStandardPaths.setTestModeEnabled(True)


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Create QApplication for all tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def fresh_error_handler():
    """Drop the ErrorHandler singleton before and after a test."""
    ErrorHandler._instance = None
    yield
    ErrorHandler._instance = None

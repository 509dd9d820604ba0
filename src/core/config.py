"""
Application configuration for the text validation toolkit.

Holds the Qt application identifiers, logging defaults and the helpers that
resolve the per-user directories used for log files.
"""

import os
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings and QStandardPaths
APP_ORGANIZATION = "TextValidation"
APP_NAME = "Demo"

# Logging defaults
LOG_LEVEL_ENV_VAR = "TEXT_VALIDATION_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
ERROR_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "app.log"
LOG_MAX_BYTES = 5_242_880  # 5MB
LOG_BACKUP_COUNT = 5


def get_log_level() -> str:
    """
    Resolve the root log level.

    Returns:
        The level named by the TEXT_VALIDATION_LOG_LEVEL environment variable
        when it holds a known level, DEFAULT_LOG_LEVEL otherwise
    """
    level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


def get_app_data_dir() -> Path:
    """
    Get the writable per-user data directory for this application.

    Falls back to the config location when Qt reports no app data location.
    """
    location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
    if location:
        return Path(location)

    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_log_dir() -> Path:
    """Directory holding the rotating error log."""
    return get_app_data_dir() / "logs"


def setup_qsettings() -> None:
    """
    Register the application identifiers with Qt.

    Call early during startup so QSettings and QStandardPaths resolve to
    this application's directories.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)

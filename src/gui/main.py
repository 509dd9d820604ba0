"""
Main entry point for the text validation demo application.
"""

import sys

from PySide6.QtWidgets import QApplication

from core.config import setup_qsettings
from core.error_handler import init_logging, setup_error_handling
from gui.main_window import MainWindow


def main() -> int:
    """Main application entry point."""
    app = QApplication(sys.argv)
    setup_qsettings()
    init_logging()
    setup_error_handling()

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

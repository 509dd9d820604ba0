"""
Development runner for the text validation demo.
Runs the application from the source tree without installation.
"""

import os
import sys

# Add src directory to Python path for local development
sys.path.insert(0, os.path.abspath("src"))

from gui.main import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())

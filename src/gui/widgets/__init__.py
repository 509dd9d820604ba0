"""
Reusable widgets for the text validation toolkit.
"""

from .observable_label import ObservableLabel

__all__ = ["ObservableLabel"]

"""
QLabel that announces text changes.
"""

from PySide6.QtCore import Signal
from PySide6.QtGui import QMovie, QPicture, QPixmap
from PySide6.QtWidgets import QLabel, QWidget


class ObservableLabel(QLabel):
    """
    QLabel emitting textChanged whenever its displayed text changes.

    Plain QLabel has no change notification, so labels that should be
    validated live must be ObservableLabel instances. Setting a pixmap,
    picture or movie clears the text and is announced as "".
    """

    textChanged = Signal(str)

    def __init__(self, text: str = "", parent: QWidget | None = None) -> None:
        super().__init__(text, parent)

    def setText(self, text: str) -> None:  # noqa: N802
        previous = self.text()
        super().setText(text)
        self._announce_if_changed(previous)

    def setNum(self, num: int | float) -> None:  # noqa: N802
        previous = self.text()
        super().setNum(num)
        self._announce_if_changed(previous)

    def setPixmap(self, pixmap: QPixmap) -> None:  # noqa: N802
        previous = self.text()
        super().setPixmap(pixmap)
        self._announce_if_changed(previous)

    def setPicture(self, picture: QPicture) -> None:  # noqa: N802
        previous = self.text()
        super().setPicture(picture)
        self._announce_if_changed(previous)

    def setMovie(self, movie: QMovie) -> None:  # noqa: N802
        previous = self.text()
        super().setMovie(movie)
        self._announce_if_changed(previous)

    def clear(self) -> None:
        previous = self.text()
        super().clear()
        self._announce_if_changed(previous)

    def _announce_if_changed(self, previous: str) -> None:
        if self.text() != previous:
            self.textChanged.emit(self.text())

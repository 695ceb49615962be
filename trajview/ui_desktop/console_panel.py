"""Console widget: scrollback view plus a command input line."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtWidgets import QLineEdit, QPlainTextEdit, QVBoxLayout, QWidget

from trajview.core.console import Console

CONSOLE_TOGGLE_KEY = Qt.Key.Key_QuoteLeft.value

KeyHandler = Callable[[int, bool], None]


class ConsolePanel(QWidget):
    """Binds a ``Console`` model to a read-only log view and an input line."""

    def __init__(self, console: Console, key_handler: KeyHandler | None = None) -> None:
        super().__init__()
        self.console = console
        self.key_handler = key_handler

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.output = QPlainTextEdit()
        self.output.setReadOnly(True)
        self.input = QLineEdit()
        self.input.setPlaceholderText("Your command...")
        layout.addWidget(self.output)
        layout.addWidget(self.input)

        self.input.returnPressed.connect(self._submit)
        self.input.installEventFilter(self)
        self._rendered_lines: list[str] = []

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self.input and event.type() == QEvent.Type.KeyPress:
            if event.key() == Qt.Key.Key_Up.value:
                self._show_history(self.console.history_prev())
                return True
            if event.key() == Qt.Key.Key_Down.value:
                self._show_history(self.console.history_next())
                return True
            if event.key() == CONSOLE_TOGGLE_KEY:
                if self.key_handler is not None:
                    self.key_handler(event.key(), event.isAutoRepeat())
                return True
        return super().eventFilter(watched, event)

    def refresh(self) -> None:
        if self.console.lines == self._rendered_lines:
            return
        self._rendered_lines = list(self.console.lines)
        self.output.setPlainText("\n".join(self._rendered_lines))
        scrollbar = self.output.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())

    def _show_history(self, entry: str | None) -> None:
        if entry is not None:
            self.input.setText(entry)

    def _submit(self) -> None:
        self.console.submit(self.input.text())
        self.input.clear()
        self.refresh()

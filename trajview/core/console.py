"""Command console model: input history, output log and command dispatch."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable

from trajview.core.session import ReplaySession

LOGGER = logging.getLogger(__name__)

MAX_CONSOLE_LINES = 0x1000
PROMPT = "> "

CommandHandler = Callable[[list[str]], None]


class Console:
    """UI-independent console state shared by the desktop panel and tests."""

    def __init__(self, max_lines: int = MAX_CONSOLE_LINES) -> None:
        self.max_lines = max(1, max_lines)
        self.lines: list[str] = []
        self.history: list[str] = []
        self.commands: dict[str, CommandHandler] = {}
        self.quit_requested = False
        self._history_index: int | None = None

    def register_command(self, name: str, handler: CommandHandler) -> None:
        self.commands[name] = handler

    def log(self, message: str) -> None:
        self.lines.append(message)
        if len(self.lines) > self.max_lines:
            del self.lines[: len(self.lines) - self.max_lines]

    def clear(self) -> None:
        self.lines.clear()

    def submit(self, line: str) -> None:
        """Echo, record and execute one line of user input."""
        text = line.strip()
        self._history_index = None
        if not text:
            return
        self.log(f"{PROMPT}{text}")
        if not self.history or self.history[-1] != text:
            self.history.append(text)
        self.exec_line(text)

    def exec_line(self, line: str) -> None:
        tokens = line.strip().split()
        if not tokens:
            return
        name, args = tokens[0], tokens[1:]
        handler = self.commands.get(name)
        if handler is None:
            self.log(f'Unknown command "{name}"')
            return
        handler(args)

    def history_prev(self) -> str | None:
        if not self.history:
            return None
        if self._history_index is None:
            self._history_index = len(self.history) - 1
        elif self._history_index > 0:
            self._history_index -= 1
        return self.history[self._history_index]

    def history_next(self) -> str | None:
        """Step forward through history; ``""`` once past the newest entry."""
        if self._history_index is None:
            return None
        if self._history_index < len(self.history) - 1:
            self._history_index += 1
            return self.history[self._history_index]
        self._history_index = None
        return ""


def _format_ms(value: timedelta) -> str:
    return f"{value.total_seconds() * 1000.0:.0f} ms"


def register_session_commands(console: Console, session: ReplaySession) -> None:
    """Install the viewer commands that operate on ``session``."""

    def cmd_help(_args: list[str]) -> None:
        for name in sorted(console.commands):
            console.log(name)

    def cmd_clear(_args: list[str]) -> None:
        console.clear()

    def cmd_quit(_args: list[str]) -> None:
        console.quit_requested = True

    def cmd_open(args: list[str]) -> None:
        if not args:
            console.log("Usage: open <path>")
            return
        path = " ".join(args).strip("\"'")
        try:
            replay = session.open_file(path)
        except OSError as exc:
            LOGGER.warning("Cannot open %s: %s", path, exc)
            console.log(f"Cannot open '{path}': {exc.strerror or exc}")
            return
        console.log(f"Opened '{path}' ({replay.frame_count()} frames)")

    def cmd_close(_args: list[str]) -> None:
        session.close()
        console.log("Closed")

    def cmd_info(_args: list[str]) -> None:
        replay = session.replay
        if replay is None:
            console.log("No trajectory loaded")
            return
        area = replay.area()
        console.log(f"source: {session.source_path}")
        console.log(f"frames: {replay.frame_count()}")
        console.log(f"positions: {replay.trajectory.position_count()}")
        if area.is_empty:
            console.log("area: no data")
        else:
            console.log(
                f"area: x=[{area.x_min:g}, {area.x_max:g}] y=[{area.y_min:g}, {area.y_max:g}]"
            )
        console.log(f"frame duration: {_format_ms(replay.frame_duration)}")
        console.log(f"elapsed: {_format_ms(replay.elapsed)} / {_format_ms(replay.total_duration)}")
        console.log(f"current frame: {replay.current_frame_index}")

    console.register_command("help", cmd_help)
    console.register_command("clear", cmd_clear)
    console.register_command("quit", cmd_quit)
    console.register_command("open", cmd_open)
    console.register_command("close", cmd_close)
    console.register_command("info", cmd_info)

"""Per-frame keyboard state for the desktop host loop."""

from __future__ import annotations


class KeyMap:
    """Collects keys pressed since the last ``begin_frame`` call."""

    def __init__(self) -> None:
        self.pressed_keys: list[int] = []

    def begin_frame(self) -> None:
        self.pressed_keys.clear()

    def handle_key(self, key: int, is_auto_repeat: bool = False) -> None:
        if is_auto_repeat:
            return
        self.pressed_keys.append(int(key))

    def was_pressed(self, key: int) -> bool:
        return int(key) in self.pressed_keys

from __future__ import annotations

from typing import List


class OutputPanel:
    """Scrollable line buffer shared by file views and command output.

    Content is kept as a structured list of lines and only rendered at draw
    time. ``scroll_offset`` always stays within ``[0, max_offset]``.
    """

    def __init__(self, height: int = 20, width: int = 80) -> None:
        self._lines: List[str] = []
        self._offset = 0
        self._height = max(0, int(height))
        self._width = max(0, int(width))

    # ---- State ----
    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def content(self) -> str:
        return "\n".join(self._lines)

    @property
    def scroll_offset(self) -> int:
        return self._offset

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def max_offset(self) -> int:
        return max(0, len(self._lines) - self._height)

    @property
    def at_bottom(self) -> bool:
        return self._offset == self.max_offset

    def __len__(self) -> int:
        return len(self._lines)

    def visible_lines(self) -> List[str]:
        return self._lines[self._offset:self._offset + self._height]

    # ---- Mutations ----
    def set_content(self, text: str) -> None:
        self._lines = text.split("\n") if text else []
        self._clamp()

    def append(self, text: str) -> None:
        # Same visible result as set_content(content + "\n" + text), minus the
        # separator when the panel is still empty.
        self._lines.extend((text or "").split("\n"))
        self._clamp()

    def clear(self) -> None:
        self._lines = []
        self._clamp()

    def scroll_by(self, delta: int) -> None:
        self._offset += int(delta)
        self._clamp()

    def scroll_to_top(self) -> None:
        self._offset = 0
        self._clamp()

    def scroll_to_bottom(self) -> None:
        self._offset = self.max_offset
        self._clamp()

    def resize(self, height: int, width: int) -> None:
        self._height = max(0, int(height))
        self._width = max(0, int(width))
        self._clamp()

    def _clamp(self) -> None:
        self._offset = max(0, min(self._offset, self.max_offset))

from __future__ import annotations

from typing import List, Tuple

from rich.style import Style
from rich.text import Text

from .listing import KIND_DIR, KIND_EXEC
from .navigator import TreeNavigator
from .output import OutputPanel
from .session import CommandLine


DIR_STYLE = Style(color="color(12)", bold=True)
FILE_STYLE = Style(color="color(110)")
EXEC_STYLE = Style(color="color(46)", italic=True)
CURSOR_STYLE = Style(bold=True, underline=True)
PLACEHOLDER_STYLE = Style(dim=True, italic=True)

INSTRUCTIONS = (
    "use arrow keys to navigate",
    "use enter to open a directory",
    "use left/ESC to go back",
    "use right to enter commands",
    "use Ctrl+C to exit.",
)

_KIND_STYLE = {KIND_DIR: DIR_STYLE, KIND_EXEC: EXEC_STYLE}
_KIND_PREFIX = {KIND_DIR: "|--"}


def visible_window(total: int, cursor: int, height: int) -> Tuple[int, int]:
    """Return the ``[start, end)`` slice of rows that keeps ``cursor`` in view."""
    if height <= 0 or total <= 0:
        return 0, 0
    if total <= height:
        return 0, total
    cursor = max(0, min(cursor, total - 1))
    start = max(0, cursor - height // 2)
    start = min(start, total - height)
    return start, start + height


def tree_rows(navigator: TreeNavigator) -> List[Text]:
    rows: List[Text] = []
    for index, name in enumerate(navigator.items()):
        kind = navigator.kind_at(index)
        style = _KIND_STYLE.get(kind, FILE_STYLE)
        if index == navigator.cursor:
            style = style + CURSOR_STYLE
        row = Text(_KIND_PREFIX.get(kind, "|-"))
        row.append(name, style=style)
        rows.append(row)
    return rows


def render_tree(navigator: TreeNavigator, height: int = 0) -> Text:
    """Render the instructions, the current path and the listing rows.

    With a positive ``height`` only the rows around the cursor that fit are
    included.
    """
    out = Text("\n".join(INSTRUCTIONS))
    out.append("\n\n")
    out.append(navigator.path, style="bold")
    out.append("\n")
    rows = tree_rows(navigator)
    if height > 0:
        room = max(1, height - len(INSTRUCTIONS) - 2)
        start, end = visible_window(len(rows), navigator.cursor, room)
        rows = rows[start:end]
    if not rows:
        out.append("(empty)", style=PLACEHOLDER_STYLE)
        return out
    out.append(Text("\n").join(rows))
    return out


def render_output(panel: OutputPanel) -> Text:
    text = Text("\n".join(panel.visible_lines()), no_wrap=True, overflow="crop")
    return text


def render_command_line(line: CommandLine, focused: bool = False) -> Text:
    out = Text("> ", style="bold" if focused else "dim")
    if line.text:
        out.append(line.text)
    else:
        out.append(line.placeholder, style=PLACEHOLDER_STYLE)
    if focused:
        out.append("█", style=Style(blink=True))
    return out

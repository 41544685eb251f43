from __future__ import annotations

from typing import Optional

from textual import events
from textual.widgets import Static

from .debug import get_logger
from .navigator import TreeNavigator
from .output import OutputPanel
from .render import render_command_line, render_output, render_tree
from .session import CommandLine


class TreePane(Static):
    """Listing of the navigator's current directory with the cursor row marked."""

    def __init__(self, navigator: TreeNavigator, *, id: Optional[str] = None) -> None:
        super().__init__("", id=id)
        self.navigator = navigator
        self.can_focus = False

    def refresh_view(self) -> None:
        height = getattr(self.content_size, "height", 0) or 0
        self.update(render_tree(self.navigator, height=height))

    def on_resize(self, event: events.Resize) -> None:
        self.refresh_view()


class OutputPane(Static):
    """Viewport onto an :class:`OutputPanel`.

    The panel owns the scroll offset; this widget only paints the visible
    slice and reports its size back.
    """

    def __init__(self, panel: OutputPanel, *, id: Optional[str] = None) -> None:
        super().__init__("", id=id)
        self.panel = panel
        self.can_focus = False
        self._logr = get_logger("pane")

    def refresh_view(self) -> None:
        self.update(render_output(self.panel))

    def on_resize(self, event: events.Resize) -> None:
        size = self.content_size
        self.panel.resize(size.height, size.width)
        self._logr.debug("output.resize: h=%s w=%s offset=%s", size.height, size.width, self.panel.scroll_offset)
        self.refresh_view()


class CommandLinePane(Static):
    def __init__(self, line: CommandLine, *, id: Optional[str] = None) -> None:
        super().__init__("", id=id)
        self.line = line
        self.active = True
        self.can_focus = False

    def refresh_view(self) -> None:
        self.update(render_command_line(self.line, focused=self.active))

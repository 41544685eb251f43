from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from .config import ExplorerSettings
from .debug import get_logger
from .errors import ExplorerError, IOFailure
from .keymap import (
    BACKSPACE_KEYS,
    KEY_END,
    KEY_HOME,
    KEY_LEFT,
    KEY_PAGE_DOWN,
    KEY_PAGE_UP,
    KEY_QUIT,
    KEY_RIGHT,
    KEY_SELECT,
)
from .navigator import FileOpened, QuitRequested, TreeNavigator
from .output import OutputPanel
from .runner import CommandResult


class Mode(Enum):
    COMMAND_ENTRY = "command"
    TREE_NAVIGATION = "tree"


# Key that leaves each mode, and the mode it leads to.
MODE_SWITCH: Dict[Mode, tuple] = {
    Mode.COMMAND_ENTRY: (KEY_LEFT, Mode.TREE_NAVIGATION),
    Mode.TREE_NAVIGATION: (KEY_RIGHT, Mode.COMMAND_ENTRY),
}

Dispatcher = Callable[[str, int], None]


class CommandLine:
    """Single-line edit buffer for the pending shell command."""

    def __init__(self, char_limit: int = 256, placeholder: str = "") -> None:
        self.text = ""
        self.char_limit = char_limit
        self.placeholder = placeholder

    def insert(self, ch: str) -> bool:
        if not ch or len(self.text) + len(ch) > self.char_limit:
            return False
        self.text += ch
        return True

    def backspace(self) -> None:
        self.text = self.text[:-1]

    def reset(self) -> None:
        self.text = ""

    def is_blank(self) -> bool:
        return not self.text.strip()


def is_printable(ch: Optional[str]) -> bool:
    return isinstance(ch, str) and len(ch) == 1 and ch.isprintable()


class SessionController:
    """Two-mode input state machine over a navigator and an output panel.

    Commands are handed to ``dispatch(command, request_id)``; whoever runs
    them calls :meth:`on_command_result` when they finish. Results are shown
    in arrival order.
    """

    def __init__(
        self,
        navigator: TreeNavigator,
        panel: OutputPanel,
        dispatch: Dispatcher,
        settings: Optional[ExplorerSettings] = None,
    ) -> None:
        self.settings = settings or navigator.settings
        self.navigator = navigator
        self.panel = panel
        self.command_line = CommandLine(
            char_limit=self.settings.command_char_limit,
            placeholder=self.settings.command_placeholder,
        )
        self.mode = Mode.COMMAND_ENTRY
        self.quit_requested = False
        self.pending_commands = 0
        self._dispatch = dispatch
        self._next_request_id = 0
        self.logr = get_logger("session")
        self._mode_handlers: Dict[Mode, Callable[[str, Optional[str]], None]] = {
            Mode.COMMAND_ENTRY: self._handle_command_key,
            Mode.TREE_NAVIGATION: self._handle_tree_key,
        }

    # ---- Input ----
    def handle_key(self, key: str, character: Optional[str] = None) -> None:
        if self.quit_requested:
            return
        if key == KEY_QUIT:
            self.request_quit("ctrl+c")
            return
        if self._handle_scroll_key(key):
            return
        switch_key, next_mode = MODE_SWITCH[self.mode]
        if key == switch_key:
            self.set_mode(next_mode)
            return
        self._mode_handlers[self.mode](key, character)

    def set_mode(self, mode: Mode) -> None:
        if mode is not self.mode:
            self.logr.debug("mode: %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    def request_quit(self, reason: str) -> None:
        self.logr.debug("quit: %s", reason)
        self.quit_requested = True

    def _handle_scroll_key(self, key: str) -> bool:
        panel = self.panel
        if key == KEY_PAGE_UP:
            panel.scroll_by(-panel.height)
        elif key == KEY_PAGE_DOWN:
            panel.scroll_by(panel.height)
        elif key == KEY_HOME:
            panel.scroll_to_top()
        elif key == KEY_END:
            panel.scroll_to_bottom()
        else:
            return False
        return True

    # ---- Command entry ----
    def _handle_command_key(self, key: str, character: Optional[str]) -> None:
        if key == KEY_SELECT:
            self.submit()
        elif key in BACKSPACE_KEYS:
            self.command_line.backspace()
        elif is_printable(character):
            self.command_line.insert(character)

    def submit(self) -> Optional[int]:
        """Send the pending command; returns its request id, or None when blank."""
        line = self.command_line
        if line.is_blank():
            line.reset()
            return None
        command = line.text
        line.reset()
        self._next_request_id += 1
        request_id = self._next_request_id
        self.panel.append("\n> " + command)
        self.panel.scroll_to_bottom()
        self.pending_commands += 1
        self.logr.debug("dispatch[%s]: %s", request_id, command)
        self._dispatch(command, request_id)
        return request_id

    def on_command_result(self, result: CommandResult) -> None:
        self.pending_commands = max(0, self.pending_commands - 1)
        if result.error is not None:
            self.logr.info("command[%s] failed: %s", result.request_id, result.error)
            self._append_error(result.error)
        else:
            output = result.output.rstrip("\n")
            if output:
                self.panel.append(output)
        self.panel.scroll_to_bottom()

    # ---- Tree navigation ----
    def _handle_tree_key(self, key: str, character: Optional[str]) -> None:
        try:
            event = self.navigator.handle_key(key)
        except ExplorerError as exc:
            self.logr.info("navigation error: %s", exc)
            self._append_error(str(exc))
            return
        if isinstance(event, QuitRequested):
            self.request_quit(event.reason)
        elif isinstance(event, FileOpened):
            self.show_file(event)

    def show_file(self, event: FileOpened) -> None:
        try:
            with open(event.materialized, "r", encoding="utf-8", errors="replace") as fh:
                content = fh.read()
        except OSError as exc:
            error = IOFailure(f"cannot read {event.materialized}: {exc.strerror or exc}", event.materialized)
            self.logr.info("open failed: %s", error)
            self._append_error(str(error))
            return
        self.panel.set_content(content)
        self.panel.scroll_to_bottom()

    def _append_error(self, message: str) -> None:
        self.panel.append("Error: " + message)
        self.panel.scroll_to_bottom()

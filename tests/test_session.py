"""
Tests for the SessionController mode state machine.
"""

import pytest

from explorer.config import ExplorerSettings
from explorer.listing import DirectoryLister, KIND_DIR, ListingCache
from explorer.navigator import TreeNavigator
from explorer.output import OutputPanel
from explorer.runner import CommandResult, CommandRunner
from explorer.session import CommandLine, Mode, SessionController


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, command, request_id):
        self.calls.append((command, request_id))


@pytest.fixture
def dispatched():
    return Recorder()


@pytest.fixture
def controller(sample_tree, settings, dispatched):
    nav = TreeNavigator(DirectoryLister(ListingCache()), str(sample_tree), settings)
    return SessionController(nav, OutputPanel(height=4), dispatched, settings)


def type_text(controller, text):
    for ch in text:
        controller.handle_key("space" if ch == " " else ch, ch)


class TestModes:
    def test_starts_in_command_entry(self, controller):
        assert controller.mode is Mode.COMMAND_ENTRY

    def test_left_and_right_switch_modes(self, controller):
        type_text(controller, "ls")
        controller.handle_key("left")
        assert controller.mode is Mode.TREE_NAVIGATION
        controller.handle_key("right")
        assert controller.mode is Mode.COMMAND_ENTRY
        assert controller.command_line.text == "ls"

    def test_right_in_command_mode_is_ignored(self, controller):
        controller.handle_key("right")
        assert controller.mode is Mode.COMMAND_ENTRY

    def test_tree_keys_route_to_navigator(self, controller):
        controller.handle_key("left")
        controller.handle_key("down")
        controller.handle_key("down")
        assert controller.navigator.cursor == 2
        # Arrow keys never edit the command buffer.
        assert controller.command_line.text == ""

    def test_ctrl_c_quits_from_either_mode(self, controller):
        controller.handle_key("ctrl+c")
        assert controller.quit_requested

    def test_ascend_at_root_quits(self, controller):
        controller.handle_key("left")
        controller.handle_key("left")
        assert controller.quit_requested

    def test_keys_after_quit_are_ignored(self, controller):
        controller.handle_key("ctrl+c")
        controller.handle_key("x", "x")
        assert controller.command_line.text == ""


class TestCommandEntry:
    def test_submit_echoes_and_dispatches(self, controller, dispatched):
        type_text(controller, "echo hi")
        controller.handle_key("enter")

        assert dispatched.calls == [("echo hi", 1)]
        assert controller.panel.lines[-1] == "> echo hi"
        assert controller.command_line.text == ""
        assert controller.pending_commands == 1
        assert controller.mode is Mode.COMMAND_ENTRY

    def test_result_appends_output_and_lands_at_bottom(self, controller):
        type_text(controller, "echo hi")
        controller.handle_key("enter")
        controller.on_command_result(CommandResult(request_id=1, input="echo hi", output="hi\n"))

        assert controller.panel.lines[-1] == "hi"
        assert controller.panel.lines[-2] == "> echo hi"
        assert controller.panel.at_bottom
        assert controller.pending_commands == 0

    def test_error_result_is_prefixed(self, controller):
        controller.on_command_result(CommandResult(request_id=1, input="nope", error="exit status 127"))
        assert controller.panel.lines[-1] == "Error: exit status 127"

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_submit_is_a_no_op(self, controller, dispatched, text):
        type_text(controller, text)
        controller.handle_key("enter")

        assert dispatched.calls == []
        assert controller.panel.lines == []
        assert controller.command_line.text == ""

    def test_request_ids_increase(self, controller, dispatched):
        for cmd in ("a", "b"):
            type_text(controller, cmd)
            controller.handle_key("enter")
        assert [rid for _, rid in dispatched.calls] == [1, 2]
        assert controller.pending_commands == 2

    def test_backspace_edits_buffer(self, controller):
        type_text(controller, "lss")
        controller.handle_key("backspace")
        assert controller.command_line.text == "ls"

    def test_non_printable_keys_ignored(self, controller):
        controller.handle_key("tab", "\t")
        controller.handle_key("f1", None)
        assert controller.command_line.text == ""

    def test_char_limit(self):
        line = CommandLine(char_limit=3)
        for ch in "abcd":
            line.insert(ch)
        assert line.text == "abc"


class TestScrolling:
    def _fill(self, controller, n=12):
        controller.panel.set_content("\n".join(str(i) for i in range(n)))

    def test_page_keys_scroll_by_viewport(self, controller):
        self._fill(controller)
        controller.handle_key("pagedown")
        assert controller.panel.scroll_offset == 4
        controller.handle_key("pagedown")
        controller.handle_key("pagedown")
        assert controller.panel.scroll_offset == 8
        controller.handle_key("pageup")
        assert controller.panel.scroll_offset == 4

    def test_home_end_in_tree_mode(self, controller):
        self._fill(controller)
        controller.handle_key("left")
        controller.handle_key("end")
        assert controller.panel.scroll_offset == 8
        controller.handle_key("home")
        assert controller.panel.scroll_offset == 0
        assert controller.navigator.cursor == 0


class TestTreeNavigation:
    def test_open_file_replaces_output(self, controller):
        controller.panel.set_content("previous\noutput")
        controller.handle_key("left")
        controller.handle_key("down")
        controller.handle_key("down")
        controller.handle_key("enter")

        assert controller.panel.content == "hello"
        assert controller.panel.at_bottom

    def test_open_file_shows_text_exactly(self, controller, sample_tree):
        (sample_tree / "readme.txt").write_bytes(b"page1\x0cpage2\n\n")
        controller.handle_key("left")
        controller.navigator.cursor = 2
        controller.handle_key("enter")

        assert controller.panel.content == "page1\x0cpage2\n\n"

    def test_descend_error_is_appended(self, dispatched):
        def reader(path):
            if path == "/r":
                return [("locked", KIND_DIR)]
            raise PermissionError(13, "Permission denied", path)

        nav = TreeNavigator(DirectoryLister(ListingCache(), reader=reader), "/r")
        controller = SessionController(nav, OutputPanel(), dispatched)

        controller.handle_key("left")
        controller.handle_key("enter")

        assert nav.current is nav.root
        assert controller.panel.lines == ["Error: Error reading directory /r/locked: Permission denied"]
        assert controller.mode is Mode.TREE_NAVIGATION

    def test_too_large_file_is_reported(self, sample_tree, dispatched):
        settings = ExplorerSettings(root_path=str(sample_tree), max_file_size=3)
        nav = TreeNavigator(DirectoryLister(ListingCache()), str(sample_tree), settings)
        controller = SessionController(nav, OutputPanel(), dispatched, settings)
        controller.panel.set_content("kept")

        controller.handle_key("left")
        nav.cursor = 2
        controller.handle_key("enter")

        assert controller.panel.lines == [
            "kept",
            "Error: file too large (5 bytes), maximum allowed is 3 bytes",
        ]
        assert not controller.quit_requested


class TestWithRunner:
    @pytest.mark.asyncio
    async def test_echo_round_trip(self, sample_tree, settings):
        runner = CommandRunner()
        pending = []
        nav = TreeNavigator(DirectoryLister(ListingCache()), str(sample_tree), settings)
        controller = SessionController(
            nav, OutputPanel(height=3), lambda cmd, rid: pending.append(runner.run(cmd, rid)), settings
        )

        type_text(controller, "echo hi")
        controller.handle_key("enter")
        assert controller.panel.lines[-1] == "> echo hi"

        controller.on_command_result(await pending.pop())

        assert controller.panel.lines[-2:] == ["> echo hi", "hi"]
        assert controller.panel.at_bottom

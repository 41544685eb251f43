from __future__ import annotations

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from .config import ExplorerSettings
from .debug import get_logger
from .keymap import app_bindings
from .listing import DirectoryLister, ListingCache
from .navigator import TreeNavigator
from .output import OutputPanel
from .runner import CommandRunner
from .session import Mode, SessionController
from .tips import command_tips, tree_tips
from .version import __version__
from .widgets import CommandLinePane, OutputPane, TreePane


class ExplorerApp(App):
    TITLE = "Explorer"
    SUB_TITLE = f"v{__version__} - File Browser"

    CSS = """
    #main { height: 1fr; width: 1fr; }

    #tree-pane {
        width: 40%;
        padding: 1 2 0 2;
        border: round steelblue;
        overflow: hidden;
    }
    #right-column { width: 1fr; }
    #output-pane {
        height: 1fr;
        padding: 0 1;
        border: solid steelblue;
        overflow: hidden;
    }
    #command-line {
        height: 3;
        padding: 0 1;
        border: solid steelblue;
    }

    /* The active side carries the highlighted border */
    .mode-tree #tree-pane { border: thick yellow; }
    .mode-command #output-pane { border: thick yellow; }
    .mode-command #command-line { border: thick yellow; }
    """

    BINDINGS = app_bindings()

    def __init__(
        self,
        settings: Optional[ExplorerSettings] = None,
        *,
        lister: Optional[DirectoryLister] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        super().__init__()
        self.logr = get_logger("app")
        self.settings = settings or ExplorerSettings()
        self.lister = lister or DirectoryLister(ListingCache(ttl=self.settings.cache_ttl))
        self.runner = runner or CommandRunner()
        # Raises IOFailure when the root cannot be listed; the CLI reports it.
        navigator = TreeNavigator(self.lister, self.settings.root_path, self.settings)
        self.panel = OutputPanel(self.settings.output_height, self.settings.output_width)
        self.controller = SessionController(navigator, self.panel, self._dispatch_command, self.settings)

    def compose(self) -> ComposeResult:
        yield Header()
        self.tree_pane = TreePane(self.controller.navigator, id="tree-pane")
        self.output_pane = OutputPane(self.panel, id="output-pane")
        self.command_pane = CommandLinePane(self.controller.command_line, id="command-line")
        self.main_panel = Horizontal(
            self.tree_pane,
            Vertical(self.output_pane, self.command_pane, id="right-column"),
            id="main",
        )
        yield self.main_panel
        self.tips = Static("", id="tips")
        yield self.tips
        yield Footer()

    def on_mount(self) -> None:
        self.logr.debug("on_mount: root=%s", self.controller.navigator.path)
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        self.controller.handle_key(event.key, event.character)
        event.stop()
        event.prevent_default()
        if self.controller.quit_requested:
            self.exit()
            return
        self._refresh_view()

    # ---- Commands ----
    def _dispatch_command(self, command: str, request_id: int) -> None:
        self.run_worker(
            self._run_command(command, request_id),
            name=f"command-{request_id}",
            group="commands",
            exclusive=False,
        )

    async def _run_command(self, command: str, request_id: int) -> None:
        result = await self.runner.run(command, request_id)
        self.controller.on_command_result(result)
        self._refresh_view()

    # ---- View ----
    def _refresh_view(self) -> None:
        tree_mode = self.controller.mode is Mode.TREE_NAVIGATION
        self.main_panel.set_class(tree_mode, "mode-tree")
        self.main_panel.set_class(not tree_mode, "mode-command")
        self.command_pane.active = not tree_mode
        self.tree_pane.refresh_view()
        self.output_pane.refresh_view()
        self.command_pane.refresh_view()
        pending = self.controller.pending_commands
        self.tips.update(tree_tips(pending) if tree_mode else command_tips(pending))

    def action_help_quit(self) -> None:
        # Newer Textual maps ctrl+c to a "press ctrl+q" hint; here it quits.
        self.controller.request_quit("ctrl+c")
        self.exit()

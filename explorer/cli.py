import os

import click
from rich.console import Console

from .app import ExplorerApp
from .config import ExplorerSettings
from .debug import DEFAULT_LOG_FILE, get_logger, reset_logger
from .errors import ExplorerError


@click.command()
@click.option(
    '--root',
    'root_path',
    default='/',
    show_default=True,
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory the browser starts in.",
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help=f'Enable verbose debug logging to {DEFAULT_LOG_FILE}',
    show_default=True,
)
def main(root_path, debug):
    """
    Browse directories, view files and run shell commands in one terminal screen.
    """
    console = Console()

    if debug:
        os.environ['EXPLORER_DEBUG'] = '1'
        reset_logger()
        console.print(f'[dim]Debug logging enabled -> {DEFAULT_LOG_FILE}[/dim]')
    log = get_logger("main")
    log.debug("start: root=%s", root_path)

    settings = ExplorerSettings(root_path=root_path)
    try:
        app = ExplorerApp(settings)
    except ExplorerError as e:
        log.error("startup failed: %s", e)
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise SystemExit(1)

    app.run()
    log.debug("exit: last path=%s", app.controller.navigator.path)


if __name__ == "__main__":
    main()

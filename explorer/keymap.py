from textual.binding import Binding


# Key names as reported by Textual's ``events.Key.key``.
KEY_UP = "up"
KEY_DOWN = "down"
KEY_SELECT = "enter"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_ESCAPE = "escape"
KEY_QUIT = "ctrl+c"
KEY_BACKSPACE = "backspace"
KEY_PAGE_UP = "pageup"
KEY_PAGE_DOWN = "pagedown"
KEY_HOME = "home"
KEY_END = "end"

ASCEND_KEYS = (KEY_LEFT, KEY_ESCAPE)
BACKSPACE_KEYS = (KEY_BACKSPACE, "ctrl+h")


def app_bindings() -> list[Binding]:
    """Bindings owned by the App itself; all other keys go through ``on_key``."""
    return [
        Binding(KEY_QUIT, "quit", "Quit", priority=True),
    ]

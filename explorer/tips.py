def tree_tips(pending: int = 0) -> str:
    """Format the tips line for tree navigation mode."""
    base = "Tips: ↑/↓=move, Enter=open, Left/Esc=back, Right=command, PgUp/PgDn/Home/End=scroll, Ctrl+C=quit"
    return base + _pending_hint(pending)


def command_tips(pending: int = 0) -> str:
    base = "Tips: Enter=run, Left=tree, PgUp/PgDn/Home/End=scroll, Ctrl+C=quit"
    return base + _pending_hint(pending)


def _pending_hint(pending: int) -> str:
    if pending <= 0:
        return ""
    noun = "command" if pending == 1 else "commands"
    return f" | Running: {pending} {noun}"

from __future__ import annotations

import os
import tempfile
import weakref
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .config import ExplorerSettings
from .debug import get_logger
from .errors import FileTooLarge, IOFailure
from .keymap import ASCEND_KEYS, KEY_DOWN, KEY_SELECT, KEY_UP
from .listing import DirectoryLister, DirectoryListing, KIND_DIR, KIND_EXEC, KIND_FILE


@dataclass(frozen=True)
class FileOpened:
    """A file was copied to ``materialized`` and is ready to be shown."""

    source: str
    materialized: str
    size: int


@dataclass(frozen=True)
class QuitRequested:
    reason: str = "quit"


NavigatorEvent = Union[FileOpened, QuitRequested]


@dataclass(eq=False)
class TreeNode:
    """One visited directory.

    Children are owned through ``children``; the parent is only a weak
    back-reference used to ascend.
    """

    listing: DirectoryListing
    name: str
    _parent: Optional["weakref.ReferenceType[TreeNode]"] = field(default=None, repr=False)
    children: Dict[str, "TreeNode"] = field(default_factory=dict, repr=False)

    @property
    def parent(self) -> Optional["TreeNode"]:
        return self._parent() if self._parent is not None else None

    @property
    def is_root(self) -> bool:
        return self._parent is None

    def attach(self, child_name: str, listing: DirectoryListing) -> "TreeNode":
        child = TreeNode(listing=listing, name=listing.path, _parent=weakref.ref(self))
        self.children[child_name] = child
        return child


class TreeNavigator:
    """Cursor over a lazily expanded tree of :class:`TreeNode`.

    Every operation either completes or raises before touching the current
    node or cursor.
    """

    def __init__(self, lister: DirectoryLister, root_path: str, settings: Optional[ExplorerSettings] = None) -> None:
        self.lister = lister
        self.settings = settings or ExplorerSettings()
        self.logr = get_logger("navigator")
        listing = lister.list(root_path)
        self.root = TreeNode(listing=listing, name=listing.path)
        self.current = self.root
        self.cursor = 0

    # ---- Read-only helpers ----
    @property
    def path(self) -> str:
        return self.current.name

    def items(self) -> List[str]:
        return self.current.listing.items()

    def total(self) -> int:
        return self.current.listing.regions()[2]

    def kind_at(self, index: int) -> Optional[str]:
        dirs_end, files_end, total = self.current.listing.regions()
        if index < 0 or index >= total:
            return None
        if index < dirs_end:
            return KIND_DIR
        if index < files_end:
            return KIND_FILE
        return KIND_EXEC

    def selected_kind(self) -> Optional[str]:
        return self.kind_at(self.cursor)

    def selected_name(self) -> Optional[str]:
        items = self.items()
        if 0 <= self.cursor < len(items):
            return items[self.cursor]
        return None

    # ---- Cursor ----
    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        total = self.total()
        if total > 0 and self.cursor < total - 1:
            self.cursor += 1

    # ---- Tree movement ----
    def descend(self, name: str) -> TreeNode:
        child_path = os.path.join(self.current.name, name)
        existing = self.current.children.get(name)
        # Raises IOFailure before any state change.
        listing = self.lister.list(child_path)
        if existing is not None:
            existing.listing = listing
            target = existing
            self.logr.debug("descend: reuse %s", target.name)
        else:
            target = self.current.attach(name, listing)
            self.logr.debug("descend: expand %s", target.name)
        self.current = target
        self.cursor = 0
        return target

    def ascend(self) -> Optional[QuitRequested]:
        parent = self.current.parent
        if parent is None:
            self.logr.debug("ascend at root: quit requested")
            return QuitRequested("ascend at root")
        self.current = parent
        self.cursor = 0
        self.logr.debug("ascend: %s", parent.name)
        return None

    def select(self) -> Optional[NavigatorEvent]:
        kind = self.selected_kind()
        name = self.selected_name()
        if kind is None or name is None:
            return None
        if kind == KIND_DIR:
            self.descend(name)
            return None
        return self.open_file(name)

    # ---- File open ----
    def open_file(self, name: str) -> FileOpened:
        source = os.path.join(self.current.name, name)
        limit = self.settings.max_file_size
        try:
            size = os.stat(source).st_size
        except OSError as exc:
            raise IOFailure(f"cannot stat {source}: {exc.strerror or exc}", source) from exc
        if size > limit:
            self.logr.info("open refused, %s is %s bytes (limit %s)", source, size, limit)
            raise FileTooLarge(source, size, limit)

        try:
            with open(source, "rb") as fh:
                content = fh.read()
        except OSError as exc:
            raise IOFailure(f"cannot read {source}: {exc.strerror or exc}", source) from exc

        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                prefix=self.settings.temp_prefix,
                suffix=self.settings.temp_suffix,
                dir=self.settings.resolved_temp_dir(),
                delete=False,
            ) as tmp:
                tmp.write(content)
                materialized = tmp.name
        except OSError as exc:
            raise IOFailure(f"cannot create temp file: {exc.strerror or exc}", source) from exc

        self.logr.debug("opened %s -> %s (%s bytes)", source, materialized, len(content))
        return FileOpened(source=source, materialized=materialized, size=len(content))

    # ---- Key dispatch ----
    def handle_key(self, key: str) -> Optional[NavigatorEvent]:
        if key == KEY_UP:
            self.move_up()
        elif key == KEY_DOWN:
            self.move_down()
        elif key == KEY_SELECT:
            return self.select()
        elif key in ASCEND_KEYS:
            return self.ascend()
        return None

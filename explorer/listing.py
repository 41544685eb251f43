from __future__ import annotations

import os
import stat
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import CACHE_TTL_SECONDS
from .debug import get_logger
from .errors import IOFailure


# Entry kinds produced by the disk layer.
KIND_DIR = "dir"
KIND_FILE = "file"
KIND_EXEC = "exec"

EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

Entry = Tuple[str, str]  # (name, kind)


@dataclass(frozen=True)
class DirectoryListing:
    """Classified contents of one directory at one point in time."""

    path: str
    subdirs: Tuple[str, ...] = ()
    files: Tuple[str, ...] = ()
    executables: Tuple[str, ...] = ()

    def regions(self) -> Tuple[int, int, int]:
        """Return running prefix sums (dirs_end, files_end, total)."""
        dirs_end = len(self.subdirs)
        files_end = dirs_end + len(self.files)
        return dirs_end, files_end, files_end + len(self.executables)

    def items(self) -> List[str]:
        return [*self.subdirs, *self.files, *self.executables]

    def __len__(self) -> int:
        return self.regions()[2]


@dataclass
class CacheEntry:
    listing: DirectoryListing
    fetched_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.fetched_at < ttl


@dataclass
class ListingCache:
    """Path-keyed listing cache with a read-time TTL check.

    Stale entries are only ever overwritten, never purged.
    """

    ttl: float = CACHE_TTL_SECONDS
    entries: Dict[str, CacheEntry] = field(default_factory=dict)

    def get(self, path: str, now: float) -> Optional[DirectoryListing]:
        entry = self.entries.get(path)
        if entry is None or not entry.is_fresh(now, self.ttl):
            return None
        return entry.listing

    def put(self, listing: DirectoryListing, now: float) -> None:
        self.entries[listing.path] = CacheEntry(listing=listing, fetched_at=now)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def normalize_path(path: str) -> str:
    if not path:
        raise IOFailure("Empty path provided", path)
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))


def scan_directory(path: str) -> List[Entry]:
    """Read ``path`` and return ``(name, kind)`` pairs sorted by name.

    Raises OSError when the directory itself cannot be read.
    """
    logr = get_logger("listing")
    out: List[Entry] = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                if entry.is_dir():
                    out.append((entry.name, KIND_DIR))
                    continue
                is_exec = entry.is_file() and bool(entry.stat().st_mode & EXEC_BITS)
            except OSError as exc:
                logr.debug("stat failed for %s: %s", entry.path, exc)
                is_exec = False
            out.append((entry.name, KIND_EXEC if is_exec else KIND_FILE))
    out.sort(key=lambda item: item[0])
    return out


def classify(path: str, entries: Iterable[Entry]) -> DirectoryListing:
    dirs: List[str] = []
    files: List[str] = []
    execs: List[str] = []
    seen = set()
    for name, kind in entries:
        if name in seen:
            continue
        seen.add(name)
        if kind == KIND_DIR:
            dirs.append(name)
        elif kind == KIND_EXEC:
            execs.append(name)
        else:
            files.append(name)
    return DirectoryListing(path=path, subdirs=tuple(dirs), files=tuple(files), executables=tuple(execs))


class DirectoryLister:
    """Lists directories through a :class:`ListingCache`.

    Within the TTL window a cached listing is returned as-is, so external
    changes made during that window are not visible.
    """

    def __init__(
        self,
        cache: Optional[ListingCache] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        reader: Callable[[str], Iterable[Entry]] = scan_directory,
    ) -> None:
        self.cache = cache if cache is not None else ListingCache()
        self._clock = clock
        self._reader = reader
        self.logr = get_logger("listing")

    def list(self, path: str) -> DirectoryListing:
        path = normalize_path(path)
        now = self._clock()
        cached = self.cache.get(path, now)
        if cached is not None:
            self.logr.debug("cache hit: %s", path)
            return cached

        self.logr.debug("cache miss: %s", path)
        try:
            entries = list(self._reader(path))
        except OSError as exc:
            self.logr.error("Error reading directory %s: %s", path, exc)
            raise IOFailure(f"Error reading directory {path}: {exc.strerror or exc}", path) from exc

        listing = classify(path, entries)
        self.cache.put(listing, now)
        self.logr.debug(
            "listed %s: dirs=%s files=%s execs=%s",
            path,
            len(listing.subdirs),
            len(listing.files),
            len(listing.executables),
        )
        return listing

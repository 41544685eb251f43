import os

import pytest

from explorer.config import ExplorerSettings
from explorer.listing import DirectoryLister, ListingCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_tree(tmp_path):
    """Directory with subdirs [a, b], files [readme.txt], executables [run.sh]."""
    root = tmp_path / "x"
    (root / "a" / "inner").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "readme.txt").write_text("hello")
    script = root / "run.sh"
    script.write_text("#!/bin/sh\necho run\n")
    os.chmod(script, 0o755)
    (root / "a" / "notes.md").write_text("# notes\n")
    return root


@pytest.fixture
def settings(sample_tree, tmp_path):
    temp_dir = tmp_path / "materialized"
    temp_dir.mkdir()
    return ExplorerSettings(root_path=str(sample_tree), temp_dir=str(temp_dir))


@pytest.fixture
def lister(clock):
    return DirectoryLister(ListingCache(), clock=clock)

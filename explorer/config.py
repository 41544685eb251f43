from __future__ import annotations

import tempfile
from dataclasses import dataclass
from typing import Optional


MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB
CACHE_TTL_SECONDS = 5.0


@dataclass
class ExplorerSettings:
    """Runtime settings for one browser session.

    Nothing here is persisted; the CLI fills it from its options and tests
    build it directly.
    """

    root_path: str = "/"
    cache_ttl: float = CACHE_TTL_SECONDS
    max_file_size: int = MAX_FILE_SIZE
    temp_dir: Optional[str] = None
    temp_prefix: str = "explorer-"
    temp_suffix: str = ".txt"
    command_char_limit: int = 256
    command_placeholder: str = "Enter command..."
    output_height: int = 20
    output_width: int = 80

    def resolved_temp_dir(self) -> str:
        return self.temp_dir or tempfile.gettempdir()

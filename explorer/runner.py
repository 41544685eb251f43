from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from .debug import get_logger
from .errors import CommandFailure


@dataclass(frozen=True)
class CommandResult:
    request_id: int
    input: str
    output: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failure(self) -> Optional[CommandFailure]:
        if self.error is None:
            return None
        return CommandFailure(self.error, self.input)


class CommandRunner:
    """Runs one shell command per call and captures its output.

    Failures come back on the result instead of being raised. There is no
    timeout and no cancellation.
    """

    def __init__(self, cwd: Optional[str] = None, shell: Optional[str] = None) -> None:
        self.cwd = cwd
        self.shell = shell
        self.logr = get_logger("runner")

    async def run(self, command: str, request_id: int = 0) -> CommandResult:
        command = (command or "").strip()
        if not command:
            return CommandResult(request_id=request_id, input=command)

        self.logr.debug("run[%s]: %s", request_id, command)
        kwargs = {}
        if self.shell:
            kwargs["executable"] = self.shell
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                cwd=self.cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **kwargs,
            )
            stdout, stderr = await proc.communicate()
        except OSError as exc:
            self.logr.error("run[%s]: spawn failed: %s", request_id, exc)
            return CommandResult(request_id=request_id, input=command, error=str(exc))

        out_text = (stdout or b"").decode(errors="replace")
        if proc.returncode != 0:
            err_text = (stderr or b"").decode(errors="replace").strip()
            message = err_text or f"exit status {proc.returncode}"
            self.logr.info("run[%s]: exit=%s", request_id, proc.returncode)
            return CommandResult(request_id=request_id, input=command, output=out_text, error=message)

        self.logr.debug("run[%s]: ok, %s bytes", request_id, len(out_text))
        return CommandResult(request_id=request_id, input=command, output=out_text)

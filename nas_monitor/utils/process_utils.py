"""Subprocess helpers shared by probes, mounters and notifiers."""

import asyncio
import logging
import shutil
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def command_available(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None


async def run_command(cmd: Sequence[str], timeout: float) -> Optional[CommandResult]:
    """
    Run a command and capture its output.

    Returns None when the executable cannot be started or the command
    does not finish within timeout (the process is killed in that case).
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        logging.debug(f"Could not start {cmd[0]}: {e}")
        return None

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logging.warning(f"Command timed out after {timeout}s: {' '.join(cmd)}")
        process.kill()
        await process.wait()
        return None

    return CommandResult(
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode(errors="replace") if stdout else "",
        stderr=stderr.decode(errors="replace") if stderr else "",
    )

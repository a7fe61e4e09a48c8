"""Subprocess helpers for running the adb client."""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one finished process.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Non-empty streams joined by a newline, each stripped.

        ``adb shell`` forwards errors of the remote command on stdout,
        so failure messages may be on either stream.
        """
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run a process to completion and capture its text output.

    A non-zero exit status is not an error here; callers inspect
    ``CommandResult.success``.

    Raises:
        subprocess.TimeoutExpired: If the process outlives ``timeout`` seconds.
        FileNotFoundError: If the executable does not exist.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether ``name`` resolves to an executable on PATH (or is one)."""
    return shutil.which(name) is not None

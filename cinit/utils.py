"""Shared utility functions for cinit.

Provides async command execution and Rich-based console reporting.  Helpers
here never terminate the process: failures are raised as exceptions and the
CLI entry point decides how to report them.
"""

from __future__ import annotations

import asyncio

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)

SEPARATOR = "-" * 50


class CommandError(Exception):
    """Raised when a command exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed (exit {returncode}): {command}")


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(cmd: str, timeout: float | None = None) -> tuple[int, str, str]:
    """Run a shell command asynchronously and capture its output.

    Args:
        cmd: Shell command string.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for the command however long it takes.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  Stdout is returned as
        written by the command; stderr is stripped.
    """
    process = await asyncio.create_subprocess_shell(
        cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {cmd}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace")
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


async def run_checked(cmd: str, timeout: float | None = None) -> str:
    """Run a shell command and return its stdout.

    Raises:
        CommandError: If the command exits non-zero or times out.  The
            captured stderr is kept on the exception for the caller to show.
    """
    print_info(f"Running command [green]{escape(cmd)}[/green]", markup=True)

    returncode, stdout, stderr = await run_command(cmd, timeout=timeout)
    if returncode != 0:
        raise CommandError(cmd, returncode, stderr)
    return stdout


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_info(message: str, *, markup: bool = False) -> None:
    """Print an ``[INFO]`` line.  *message* is escaped unless *markup* is set."""
    body = message if markup else escape(message)
    console.print(f"[bold cyan]\\[INFO][/bold cyan] {body}", highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message to stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)


def print_error(message: str) -> None:
    """Print a red ``[ERROR]`` line to stderr."""
    err_console.print(
        f"[bold red]\\[ERROR][/bold red] {escape(message)}", highlight=False
    )


def print_separator() -> None:
    """Print the fixed-width separator framing captured program output."""
    console.out(SEPARATOR, highlight=False)

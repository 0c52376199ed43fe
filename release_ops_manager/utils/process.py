"""Async subprocess execution for git and build tool commands.

Commands are awaited to completion one at a time. A failed command is reported
through its `CommandResult` instead of an exception so callers can decide
whether the failure is fatal.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

MISSING_EXECUTABLE_RETURN_CODE = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished subprocess."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Whether the command exited with status zero."""
        return self.returncode == 0


async def run_command(*args: str, cwd: Path | str | None = None) -> CommandResult:
    """Run a command and capture its decoded stdout and stderr."""
    logger.debug("Running command", command=" ".join(args), cwd=str(cwd) if cwd else None)
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        logger.warning("Executable not found", command=args[0], error=str(exc))
        return CommandResult(args=tuple(args), returncode=MISSING_EXECUTABLE_RETURN_CODE, stdout="", stderr=str(exc))

    stdout, stderr = await process.communicate()
    result = CommandResult(
        args=tuple(args),
        returncode=process.returncode if process.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
    if not result.ok:
        logger.debug("Command exited with non-zero status", command=" ".join(args), returncode=result.returncode, stderr=result.stderr.strip())
    return result

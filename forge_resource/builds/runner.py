"""Build runner for executing resource build commands.

This module handles:
- Running the configured shell command synchronously
- Capturing stdout/stderr
- Turning failures into BuildCommandError with exit code and stderr

Builds are never retried; a failure aborts the calling lifecycle step.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from forge_resource.diagnostics import DiagnosticLogger
from forge_resource.errors import BuildCommandError

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a successful build command.

    Attributes:
        command: The command that was executed.
        exit_code: Process exit code.
        stdout: Captured standard output.
        stderr: Captured standard error.
        started_at: Build start time.
        finished_at: Build finish time.
    """

    command: str
    exit_code: int
    stdout: str
    stderr: str
    started_at: datetime
    finished_at: datetime

    @property
    def duration(self) -> float:
        """Wall-clock duration in seconds."""
        return (self.finished_at - self.started_at).total_seconds()


def _as_text(output: str | bytes | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def run_build(
    command: str,
    cwd: Path | None = None,
    timeout: int | None = None,
    shell: str | None = None,
    verbose: bool = False,
) -> BuildResult:
    """Execute a build command through the shell and wait for it.

    Args:
        command: Shell command line.
        cwd: Working directory for the command (inherited if None).
        timeout: Timeout in seconds (None = no timeout).
        shell: Shell executable (system default if None).
        verbose: Emit diagnostic log lines.

    Returns:
        BuildResult with captured output.

    Raises:
        BuildCommandError: If the command exits non-zero, times out or
            cannot be launched.
    """
    log = DiagnosticLogger(logger, verbose)
    log.diag("Build using: '%s'", command)
    if cwd is not None:
        log.diag("Working directory: %s", cwd)

    started_at = datetime.now(timezone.utc)
    try:
        result = subprocess.run(
            command,
            shell=True,
            executable=shell,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        error_message = f"Build command timed out after {timeout} seconds: {command}"
        logger.error(error_message)
        raise BuildCommandError(
            error_message,
            exit_code=-1,
            stderr=_as_text(e.stderr),
        ) from e
    except OSError as e:
        error_message = f"Failed to execute build command: {e}"
        logger.error(error_message)
        raise BuildCommandError(error_message, exit_code=None, stderr=str(e)) from e

    finished_at = datetime.now(timezone.utc)

    if result.returncode != 0:
        error_message = (
            f"Build command failed with exit code {result.returncode}: {command}"
        )
        logger.error("%s\n%s", error_message, result.stderr.rstrip())
        raise BuildCommandError(
            error_message,
            exit_code=result.returncode,
            stderr=result.stderr,
        )

    build_result = BuildResult(
        command=command,
        exit_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        started_at=started_at,
        finished_at=finished_at,
    )
    log.diag("Build complete in %.1fs", build_result.duration)
    return build_result


__all__ = ["BuildResult", "run_build"]

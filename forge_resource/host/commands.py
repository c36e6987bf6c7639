"""Run mode detection from the host's argument vector."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from forge_resource.types import RunMode

PACKAGE_COMMANDS = frozenset({"make", "package", "publish"})
DEV_COMMANDS = frozenset({"start"})

# Everything after this token belongs to the launched application
END_OF_OPTIONS = "--"


def _is_script_path(arg: str) -> bool:
    return "/" in arg or "\\" in arg


def detect_run_mode(argv: Sequence[str] | None = None) -> RunMode | None:
    """Find which host subcommand is running.

    The first positional argument after the program name decides. Options
    and script paths (``node /path/to/cli make``) are skipped, and scanning
    stops at ``--``.

    Args:
        argv: Host argument vector (``sys.argv`` if None).

    Returns:
        RunMode.PACKAGE, RunMode.DEV, or None for an unknown subcommand.
    """
    if argv is None:
        argv = sys.argv
    for arg in argv[1:]:
        if arg == END_OF_OPTIONS:
            return None
        if arg.startswith("-") or _is_script_path(arg):
            continue
        if arg in PACKAGE_COMMANDS:
            return RunMode.PACKAGE
        if arg in DEV_COMMANDS:
            return RunMode.DEV
        return None
    return None


__all__ = ["DEV_COMMANDS", "END_OF_OPTIONS", "PACKAGE_COMMANDS", "detect_run_mode"]

"""Staleness decisions for build targets.

A target is stale when it is missing, when its sources ask for an
unconditional rebuild, or when any declared source file is strictly newer
than it. Source directories are scanned one level deep only.
"""

from __future__ import annotations

import stat
from pathlib import Path

from forge_resource.diagnostics import DiagnosticLogger, get_diagnostic_logger
from forge_resource.errors import InvalidSourceTypeError, SourceNotFoundError
from forge_resource.types import ResourceSpec, SourceKind


def resolve_path(path: Path, base_dir: Path | None = None) -> Path:
    """Resolve a possibly relative path against base_dir."""
    if base_dir is None or path.is_absolute():
        return path
    return base_dir / path


def needs_rebuild(spec: ResourceSpec, base_dir: Path | None = None) -> bool:
    """Decide whether the target of spec must be rebuilt.

    Args:
        spec: Resource to check.
        base_dir: Directory that relative paths are resolved against
            (current working directory if None).

    Returns:
        True if the target must be rebuilt.

    Raises:
        SourceNotFoundError: If a declared source path does not exist.
        InvalidSourceTypeError: If a declared source is neither a file
            nor a directory.
    """
    log = get_diagnostic_logger(__name__, spec.verbose)
    target = resolve_path(spec.target_path, base_dir)

    if not target.exists():
        log.diag("Need to build because it does not exist: '%s'", spec.target_path)
        return True

    sources = spec.source_spec
    if sources.kind is SourceKind.ALWAYS:
        log.diag("Need to build because sources specify '{always: true}'")
        return True

    if sources.kind is SourceKind.PATHS:
        target_mtime = target.stat().st_mtime_ns
        for source in sources.paths:
            log.diag("Checking date of %s", source)
            path = resolve_path(source, base_dir)
            if _source_is_newer(path, source, target_mtime, log):
                return True

    log.diag("Not rebuilding: '%s'", spec.target_path)
    return False


def _source_is_newer(
    path: Path, declared: Path, target_mtime: int, log: DiagnosticLogger
) -> bool:
    if not path.exists():
        raise SourceNotFoundError(declared)

    st = path.stat()
    if stat.S_ISREG(st.st_mode):
        return _is_newer(path, st.st_mtime_ns, target_mtime, log)

    if stat.S_ISDIR(st.st_mode):
        for entry in sorted(path.iterdir()):
            try:
                entry_st = entry.stat()
            except OSError:
                log.diag("Cannot stat(%s)", entry)
                continue
            if stat.S_ISREG(entry_st.st_mode) and _is_newer(
                entry, entry_st.st_mtime_ns, target_mtime, log
            ):
                return True
        return False

    # device, fifo, socket
    raise InvalidSourceTypeError(declared)


def _is_newer(
    path: Path, mtime: int, target_mtime: int, log: DiagnosticLogger
) -> bool:
    # Equal timestamps count as fresh
    if mtime > target_mtime:
        log.diag("Need to build because source file is newer: '%s'", path)
        return True
    return False


__all__ = ["needs_rebuild", "resolve_path"]

"""Staging of built artifacts into scratch directories.

This module handles:
- Locating the scratch directory for a named staging area
- Destructively resetting it before each copy
- Copying a single file or a whole directory tree into it

The scratch directory is what gets bundled as an extra resource when the
resource is packaged.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from forge_resource.errors import StagingError

# Parent of every scratch staging directory under the temp root
SCRATCH_PARENT = "forge-resource-plugin"


def scratch_directory(dirname: str, tmp_root: Path | None = None) -> Path:
    """Return the scratch directory for a staging area name.

    Args:
        dirname: Staging area name.
        tmp_root: Root temp directory (system default if None).

    Returns:
        Path of the scratch directory (not created).
    """
    root = tmp_root if tmp_root is not None else Path(tempfile.gettempdir())
    return root / SCRATCH_PARENT / dirname


def reset_directory(directory: Path) -> None:
    """Remove directory and its contents, then recreate it empty.

    Raises:
        StagingError: If removal or creation fails.
    """
    try:
        if directory.is_symlink() or directory.is_file():
            directory.unlink()
        elif directory.exists():
            shutil.rmtree(directory)
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StagingError(f"Failed to reset staging directory {directory}: {e}") from e


def stage_file(source: Path, dest_dir: Path) -> Path:
    """Copy a single file into dest_dir, keeping its name.

    Returns:
        Path of the copied file.

    Raises:
        StagingError: If the copy fails.
    """
    dest = dest_dir / source.name
    try:
        shutil.copy2(source, dest)
    except OSError as e:
        raise StagingError(f"Failed to stage file {source} -> {dest}: {e}") from e
    return dest


def stage_directory(source_dir: Path, dest_dir: Path) -> Path:
    """Copy the contents of source_dir recursively into dest_dir.

    Symlinks are copied as symlinks.

    Returns:
        dest_dir.

    Raises:
        StagingError: If the copy fails.
    """
    try:
        shutil.copytree(source_dir, dest_dir, symlinks=True, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise StagingError(
            f"Failed to stage directory {source_dir} -> {dest_dir}: {e}"
        ) from e
    return dest_dir


def stage_artifact(source: Path, scratch_dir: Path, as_directory: bool) -> Path:
    """Reset scratch_dir and copy source into it.

    Args:
        source: Parent directory to copy the contents of (directory mode),
            or the target itself (file mode). A target that is a directory
            is copied as a tree under its own name.
        scratch_dir: Scratch directory, cleared before copying.
        as_directory: Copy source as a directory tree.

    Returns:
        Path of the staged copy.
    """
    reset_directory(scratch_dir)
    if as_directory:
        return stage_directory(source, scratch_dir)
    if source.is_dir():
        return stage_directory(source, scratch_dir / source.name)
    return stage_file(source, scratch_dir)


__all__ = [
    "SCRATCH_PARENT",
    "reset_directory",
    "scratch_directory",
    "stage_artifact",
    "stage_directory",
    "stage_file",
]

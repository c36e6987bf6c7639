"""Shared type definitions for forge_resource.

This module contains enums and dataclasses shared across subpackages
to avoid circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RunMode(str, Enum):
    """Which consumption mode the host is running in."""

    DEV = "dev"
    PACKAGE = "package"


class LifecycleState(str, Enum):
    """Progress of a coordinator through the host lifecycle."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    CONFIG_RESOLVED = "config_resolved"
    ASSETS_READY = "assets_ready"
    STAGED = "staged"


class SourceKind(str, Enum):
    """How freshness of the target is decided."""

    NONE = "none"
    ALWAYS = "always"
    PATHS = "paths"


@dataclass(frozen=True)
class SourceSpec:
    """Declared staleness inputs for a target.

    Attributes:
        kind: Which variant this is.
        paths: Source files or directories, only used for SourceKind.PATHS.
    """

    kind: SourceKind = SourceKind.NONE
    paths: tuple[Path, ...] = ()

    @classmethod
    def none(cls) -> SourceSpec:
        return cls(SourceKind.NONE)

    @classmethod
    def always(cls) -> SourceSpec:
        return cls(SourceKind.ALWAYS)

    @classmethod
    def of_paths(cls, *paths: str | Path) -> SourceSpec:
        return cls(SourceKind.PATHS, tuple(Path(p) for p in paths))


@dataclass(frozen=True)
class ResourceSpec:
    """Validated, immutable description of one staged resource.

    Attributes:
        binding_name: Key under which the resolved location is published.
        target_path: File or directory that must exist and be fresh.
        build_command: Shell command that produces target_path.
        source_spec: What "fresh" means for target_path.
        stage_as_directory: Stage the target's parent directory instead of
            the target itself.
        staging_dir_name: Scratch subdirectory name; None stages in place.
        verbose: Emit diagnostic log lines.
        configured_path: target_path exactly as the user wrote it.
    """

    binding_name: str
    target_path: Path
    build_command: str | None = None
    source_spec: SourceSpec = field(default_factory=SourceSpec.none)
    stage_as_directory: bool = False
    staging_dir_name: str | None = None
    verbose: bool = False
    configured_path: str | None = None

    @property
    def configured_target(self) -> str:
        """The target path as configured, without path normalization."""
        return self.configured_path or str(self.target_path)

    @property
    def staged_source(self) -> Path:
        """The unit copied into staging: the parent directory or the target."""
        return self.target_path.parent if self.stage_as_directory else self.target_path


@dataclass
class PublicationState:
    """Tracks whether the binding was injected into the downstream config.

    Once published the flag never reverts for the lifetime of the instance.
    """

    published: bool = False

    def mark_published(self) -> None:
        self.published = True


__all__ = [
    "LifecycleState",
    "PublicationState",
    "ResourceSpec",
    "RunMode",
    "SourceKind",
    "SourceSpec",
]

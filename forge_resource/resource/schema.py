"""Pydantic models for resource configuration validation.

This module defines the user-facing configuration of a staged resource,
as written in a project's plugin configuration, and converts it into the
immutable ResourceSpec used by the rest of the package.
"""

import re
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forge_resource.types import ResourceSpec, SourceSpec

# Binding names are published as environment variables and bundler defines
BINDING_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class AlwaysSourcesSchema(BaseModel):
    """Schema for the ``{always: bool}`` form of build sources."""

    model_config = ConfigDict(extra="forbid")

    always: bool = Field(description="Rebuild on every run when true")


class BuildSchema(BaseModel):
    """Schema for the build section.

    Attributes:
        command: Shell command that produces the target path.
        sources: Path, list of paths, or ``{always: bool}``.
    """

    model_config = ConfigDict(extra="forbid")

    command: str | None = Field(default=None, description="Rebuild command")
    sources: str | list[str] | AlwaysSourcesSchema | None = Field(
        default=None, description="Staleness inputs"
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str | None) -> str | None:
        """Validate command is not blank."""
        if v is not None and not v.strip():
            raise ValueError("command must not be blank")
        return v

    @field_validator("sources")
    @classmethod
    def validate_sources(
        cls, v: str | list[str] | AlwaysSourcesSchema | None
    ) -> str | list[str] | AlwaysSourcesSchema | None:
        """Validate source paths are not empty strings."""
        paths = [v] if isinstance(v, str) else v if isinstance(v, list) else []
        if any(not p for p in paths):
            raise ValueError("source paths must not be empty")
        return v


class PackageSchema(BaseModel):
    """Schema for the package section.

    Attributes:
        dirname: Name of the scratch subdirectory to stage into.
        copydir: Stage the target's whole parent directory.
    """

    model_config = ConfigDict(extra="forbid")

    dirname: str | None = Field(default=None, description="Scratch subdirectory")
    copydir: bool | None = Field(default=None, description="Copy parent directory")

    @field_validator("dirname")
    @classmethod
    def validate_dirname(cls, v: str | None) -> str | None:
        """Validate dirname is a single plain path component."""
        if v is None:
            return v
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"dirname must be a plain directory name, got '{v}'")
        return v


class ResourcePluginConfig(BaseModel):
    """Complete resource plugin configuration.

    Attributes:
        env: Binding name to publish the resolved location under.
        path: Target file produced by the build.
        build: Optional build section.
        package: Optional packaging section.
        verbose: Emit diagnostics.
    """

    model_config = ConfigDict(extra="forbid")

    env: Annotated[str, Field(description="Binding name", min_length=1, max_length=255)]
    path: Annotated[str, Field(description="Target path", min_length=1)]
    build: BuildSchema | None = Field(default=None, description="Build settings")
    package: PackageSchema | None = Field(default=None, description="Package settings")
    verbose: bool = Field(default=False, description="Emit diagnostics")

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate env is usable as a variable name."""
        if not BINDING_NAME_PATTERN.match(v):
            raise ValueError(
                f"env must contain only letters, digits and underscores, got '{v}'"
            )
        return v

    def source_spec(self) -> SourceSpec:
        """Convert the build sources into a SourceSpec."""
        sources = self.build.sources if self.build else None
        if sources is None:
            return SourceSpec.none()
        if isinstance(sources, AlwaysSourcesSchema):
            return SourceSpec.always() if sources.always else SourceSpec.none()
        if isinstance(sources, str):
            return SourceSpec.of_paths(sources)
        return SourceSpec.of_paths(*sources)

    def to_spec(self) -> ResourceSpec:
        """Build the immutable ResourceSpec.

        ``copydir`` defaults to true when a ``dirname`` is configured.
        """
        dirname = self.package.dirname if self.package else None
        copydir = self.package.copydir if self.package else None
        return ResourceSpec(
            binding_name=self.env,
            target_path=Path(self.path),
            build_command=self.build.command if self.build else None,
            source_spec=self.source_spec(),
            stage_as_directory=copydir if copydir is not None else bool(dirname),
            staging_dir_name=dirname,
            verbose=self.verbose,
            configured_path=self.path,
        )


__all__ = [
    "BINDING_NAME_PATTERN",
    "AlwaysSourcesSchema",
    "BuildSchema",
    "PackageSchema",
    "ResourcePluginConfig",
]

"""Error definitions for forge_resource.

Every error carries a stable ``code`` that the CLI surfaces alongside the
message. All of them abort the current lifecycle step; none is retried.
"""

from __future__ import annotations

from pathlib import Path

# Error code constants
INVALID_CONFIG = "invalid_config"
SOURCE_NOT_FOUND = "source_not_found"
INVALID_SOURCE_TYPE = "invalid_source_type"
MISSING_BUILD_COMMAND = "missing_build_command"
BUILD_COMMAND_FAILED = "build_command_failed"
BUILD_STILL_STALE = "build_still_stale"
UNEXPECTED_CONFIG_SHAPE = "unexpected_config_shape"
STAGING_ERROR = "staging_error"


class ResourcePluginError(Exception):
    """Base class for all forge_resource errors."""

    default_code = "resource_plugin_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code


class ResourceConfigError(ResourcePluginError):
    """Raised when a resource configuration file cannot be loaded or validated."""

    default_code = INVALID_CONFIG


class SourceNotFoundError(ResourcePluginError):
    """Raised when a declared source path does not exist."""

    default_code = SOURCE_NOT_FOUND

    def __init__(self, source: str | Path) -> None:
        super().__init__(f"Source path not found: {source}")
        self.source = source


class InvalidSourceTypeError(ResourcePluginError):
    """Raised when a declared source is neither a file nor a directory."""

    default_code = INVALID_SOURCE_TYPE

    def __init__(self, source: str | Path) -> None:
        super().__init__(f"Source is neither a file nor a directory: {source}")
        self.source = source


class MissingBuildCommandError(ResourcePluginError):
    """Raised when the target is stale and no build command is configured."""

    default_code = MISSING_BUILD_COMMAND

    def __init__(self, target: str | Path) -> None:
        super().__init__(
            f"Target '{target}' needs building but the build command is not specified"
        )
        self.target = target


class BuildCommandError(ResourcePluginError):
    """Raised when the build command exits non-zero or cannot be launched."""

    default_code = BUILD_COMMAND_FAILED

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class BuildStillStaleError(ResourcePluginError):
    """Raised when the build command succeeded but the target is still stale."""

    default_code = BUILD_STILL_STALE

    def __init__(self, target: str | Path) -> None:
        super().__init__(
            f"Target '{target}' still needs building after the build command has been run"
        )
        self.target = target


class UnexpectedConfigShapeError(ResourcePluginError):
    """Raised when a downstream configuration field has an unknown shape."""

    default_code = UNEXPECTED_CONFIG_SHAPE


class StagingError(ResourcePluginError):
    """Raised when copying into the scratch directory fails."""

    default_code = STAGING_ERROR


__all__ = [
    "BUILD_COMMAND_FAILED",
    "BUILD_STILL_STALE",
    "INVALID_CONFIG",
    "INVALID_SOURCE_TYPE",
    "MISSING_BUILD_COMMAND",
    "SOURCE_NOT_FOUND",
    "STAGING_ERROR",
    "UNEXPECTED_CONFIG_SHAPE",
    "BuildCommandError",
    "BuildStillStaleError",
    "InvalidSourceTypeError",
    "MissingBuildCommandError",
    "ResourceConfigError",
    "ResourcePluginError",
    "SourceNotFoundError",
    "StagingError",
    "UnexpectedConfigShapeError",
]

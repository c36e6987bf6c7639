"""Lifecycle coordination for a staged resource.

The host calls the coordinator at fixed points, in this order:

1. ``initialize`` records the project working directory.
2. ``resolve_configuration`` registers the staging path as an extra
   resource and, when the run mode is known, injects the binding into the
   bundler configuration.
3. ``generate_assets`` rebuilds the target if stale and publishes the
   development binding.
4. ``pre_package`` copies the artifact into its scratch directory and
   publishes the packaged binding.

The environment binding is only written while the bundler injection has
not succeeded.
"""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping, Sequence
from pathlib import Path
from typing import Any

from forge_resource.builds.runner import run_build
from forge_resource.builds.staging import scratch_directory, stage_artifact
from forge_resource.builds.staleness import needs_rebuild, resolve_path
from forge_resource.config import Settings, get_settings
from forge_resource.diagnostics import DiagnosticLogger
from forge_resource.errors import BuildStillStaleError, MissingBuildCommandError
from forge_resource.host.commands import detect_run_mode
from forge_resource.host.downstream import (
    ForgeConfig,
    add_define,
    add_extra_resource,
    classify_extra_resource,
)
from forge_resource.types import LifecycleState, PublicationState, ResourceSpec, RunMode

logger = logging.getLogger(__name__)

# Root of the packaged application's resources
PACKAGED_RESOURCES_DIR = "resources"


class StageCoordinator:
    """Drives staleness checks, builds, staging and publication for one resource."""

    def __init__(
        self,
        spec: ResourceSpec,
        settings: Settings | None = None,
        argv: Sequence[str] | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()
        self.spec = spec
        self.settings = settings
        self.publication = PublicationState()
        self.state = LifecycleState.UNINITIALIZED
        self.working_dir: Path | None = None
        self.staging_dir: Path | None = (
            scratch_directory(spec.staging_dir_name, settings.tmp_dir)
            if spec.staging_dir_name
            else None
        )
        self._argv = argv
        self._environ = environ if environ is not None else os.environ
        self.log = DiagnosticLogger(logger, spec.verbose)
        self.log.diag("%s", spec)

    def initialize(self, working_dir: str | Path) -> None:
        self.log.diag("init(%s)", working_dir)
        self.working_dir = Path(working_dir)
        self.state = LifecycleState.READY

    @property
    def staging_path(self) -> Path:
        """Path registered with the packager: scratch dir or the artifact in place."""
        return self.staging_dir or self.spec.staged_source

    def binding_value(self, mode: RunMode) -> str:
        """Resolve the published location of the target for a run mode.

        In development the target is addressed where it was built. When
        packaged it sits under the resources directory, nested under the
        staging name or, in directory mode, its parent directory's name.
        """
        target = self.spec.target_path
        if mode is RunMode.DEV:
            return self.spec.configured_target
        dirname = self.spec.staging_dir_name
        if dirname is None and self.spec.stage_as_directory:
            dirname = target.parent.name
        if dirname:
            return str(Path(PACKAGED_RESOURCES_DIR, dirname, target.name))
        return str(Path(PACKAGED_RESOURCES_DIR, target.name))

    def resolve_configuration(self, forge_config: ForgeConfig) -> ForgeConfig:
        """Register the staging path and try to inject the binding.

        Args:
            forge_config: The host's configuration, edited in place.

        Returns:
            The same configuration object.

        Raises:
            UnexpectedConfigShapeError: If an edited field has an unknown shape.
        """
        self.log.diag("resolveConfiguration")

        # Shape errors must surface before either field is edited
        classify_extra_resource(forge_config.packager_config.extra_resource)

        mode = detect_run_mode(self._argv)
        if mode is None:
            self.log.diag("unknown host command, binding left to the environment")
        elif add_define(
            forge_config,
            self.spec.binding_name,
            self.binding_value(mode),
            self.log.diag,
        ):
            self.publication.mark_published()

        extra_resource = add_extra_resource(forge_config, str(self.staging_path))
        self.log.diag("setting extraResource=%s", extra_resource)

        self.state = LifecycleState.CONFIG_RESOLVED
        return forge_config

    def generate_assets(self, *host_args: Any) -> None:
        """Rebuild the target if stale and publish the development binding.

        Raises:
            MissingBuildCommandError: If the target is stale and no build
                command is configured.
            BuildCommandError: If the build command fails.
            BuildStillStaleError: If the target is still stale after building.
        """
        self.log.diag("generateAssets")

        if self.needs_rebuild():
            command = self.spec.build_command
            if not command:
                raise MissingBuildCommandError(self.spec.target_path)
            run_build(
                command,
                cwd=self.working_dir,
                timeout=self.settings.build_timeout,
                shell=self.settings.shell,
                verbose=self.spec.verbose,
            )
            if self.needs_rebuild():
                raise BuildStillStaleError(self.spec.target_path)

        self.state = LifecycleState.ASSETS_READY
        self.publish(self.binding_value(RunMode.DEV))

    def pre_package(self, *host_args: Any) -> None:
        """Copy the artifact into its scratch directory and publish the packaged binding.

        Raises:
            StagingError: If resetting or copying into the scratch dir fails.
        """
        self.log.diag("prePackage")

        if self.staging_dir is not None:
            source = resolve_path(self.spec.staged_source, self.working_dir)
            self.log.diag('cp("%s", "%s")', source, self.staging_dir)
            stage_artifact(source, self.staging_dir, self.spec.stage_as_directory)

        self.state = LifecycleState.STAGED
        self.publish(self.binding_value(RunMode.PACKAGE))

    def needs_rebuild(self) -> bool:
        return needs_rebuild(self.spec, self.working_dir)

    def publish(self, value: str) -> None:
        """Set the environment binding unless the bundler already carries it."""
        name = self.spec.binding_name
        if self.publication.published:
            self.log.diag("binding %s already injected, not setting environment", name)
            return
        self.log.diag("setting 'environ[%s] = %s'", name, value)
        self._environ[name] = value


__all__ = ["PACKAGED_RESOURCES_DIR", "StageCoordinator"]

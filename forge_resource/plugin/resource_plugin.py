"""The plugin value handed to the host.

The host looks plugins up by ``name``, calls ``init`` with the project
directory, and then asks for a handler per lifecycle point.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

from forge_resource.config import Settings
from forge_resource.plugin.coordinator import StageCoordinator
from forge_resource.resource.io import parse_resource_config
from forge_resource.resource.schema import ResourcePluginConfig

RESOLVE_CONFIGURATION = "resolveConfiguration"
GENERATE_ASSETS = "generateAssets"
PRE_PACKAGE = "prePackage"

# Older hosts name the configuration hook after themselves
HOOK_ALIASES = {"resolveForgeConfig": RESOLVE_CONFIGURATION}


class ResourcePlugin:
    """Stages one external build artifact for the host."""

    name = "resource"
    is_forge_plugin = True

    def __init__(
        self,
        config: ResourcePluginConfig | Mapping[str, Any],
        settings: Settings | None = None,
        argv: Sequence[str] | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        if not isinstance(config, ResourcePluginConfig):
            config = parse_resource_config(dict(config))
        self.config = config
        self.coordinator = StageCoordinator(
            config.to_spec(), settings=settings, argv=argv, environ=environ
        )
        self.hooks: Mapping[str, Callable[..., Any]] = MappingProxyType(
            {
                RESOLVE_CONFIGURATION: self.coordinator.resolve_configuration,
                GENERATE_ASSETS: self.coordinator.generate_assets,
                PRE_PACKAGE: self.coordinator.pre_package,
            }
        )

    def init(self, working_dir: str | Path) -> None:
        self.coordinator.initialize(working_dir)

    def get_hook(self, hook_name: str) -> Callable[..., Any] | None:
        """Return the handler for a lifecycle point, or None if not handled."""
        self.coordinator.log.diag("getHook(%s)", hook_name)
        return self.hooks.get(HOOK_ALIASES.get(hook_name, hook_name))


__all__ = [
    "GENERATE_ASSETS",
    "HOOK_ALIASES",
    "PRE_PACKAGE",
    "RESOLVE_CONFIGURATION",
    "ResourcePlugin",
]

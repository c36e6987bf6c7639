"""Downstream configuration shapes and the edits made to them.

The host hands the plugin a mutable configuration object. Two fields of it
are touched here: the packager's extra-resource list and the bundler's
main configuration, where a define entry carries the binding. Each field
is classified into a closed set of known shapes; anything else is a fatal
UnexpectedConfigShapeError rather than a silent coercion.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from forge_resource.errors import UnexpectedConfigShapeError

# Name of the host plugin entry that owns the bundler configuration
BUNDLER_PLUGIN_NAME = "webpack"


@dataclass
class DefinePlugin:
    """Bundler plugin that substitutes identifiers with code literals."""

    definitions: dict[str, str] = field(default_factory=dict)


@dataclass
class BundlerConfig:
    """An instantiated bundler configuration document."""

    plugins: list[Any] | None = None
    entry: str | None = None


@dataclass
class BundlerPluginConfig:
    """Configuration of the host's bundler plugin.

    ``main_config`` may still be a path, a list of paths or a factory
    until the bundler plugin instantiates it into a BundlerConfig or a
    plain configuration mapping.
    """

    main_config: Any = None


@dataclass
class HostPlugin:
    """A plugin instantiated by the host."""

    name: str
    config: Any = None
    is_forge_plugin: bool = True


@dataclass
class PackagerConfig:
    """Packager options; only ``extra_resource`` is read or written here."""

    extra_resource: Any = None


@dataclass
class ForgeConfig:
    """The host's resolved configuration object."""

    packager_config: PackagerConfig = field(default_factory=PackagerConfig)
    plugins: list[Any] = field(default_factory=list)


class ResourceListShape(str, Enum):
    """Known shapes of the extra-resource field."""

    ABSENT = "absent"
    SINGLE = "single"
    MANY = "many"


class MainConfigShape(str, Enum):
    """Known shapes of the bundler's main configuration."""

    ABSENT = "absent"
    PATH = "path"
    PATHS = "paths"
    FACTORY = "factory"
    INSTANTIATED = "instantiated"


def classify_extra_resource(value: Any) -> ResourceListShape:
    """Classify the extra-resource field.

    Raises:
        UnexpectedConfigShapeError: If value is not None, a string or a
            list of strings.
    """
    if value is None:
        return ResourceListShape.ABSENT
    if isinstance(value, str):
        return ResourceListShape.SINGLE
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ResourceListShape.MANY
    raise UnexpectedConfigShapeError(f"Unexpected extraResource value {value!r}")


def _add_to_absent(value: None, resource: str) -> str:
    return resource


def _add_to_single(value: str, resource: str) -> str | list[str]:
    if value == resource:
        return value
    return [value, resource]


def _add_to_many(value: list[str], resource: str) -> list[str]:
    if resource not in value:
        value.append(resource)
    return value


_RESOURCE_MERGERS: dict[ResourceListShape, Callable[[Any, str], Any]] = {
    ResourceListShape.ABSENT: _add_to_absent,
    ResourceListShape.SINGLE: _add_to_single,
    ResourceListShape.MANY: _add_to_many,
}


def merge_extra_resource(value: Any, resource: str) -> str | list[str]:
    """Add resource to an extra-resource value, at most once.

    Lists are extended in place.

    Args:
        value: Current field value.
        resource: Path to add.

    Returns:
        The new field value.

    Raises:
        UnexpectedConfigShapeError: If value has an unknown shape.
    """
    return _RESOURCE_MERGERS[classify_extra_resource(value)](value, resource)


def add_extra_resource(forge_config: ForgeConfig, resource: str) -> str | list[str]:
    """Add resource to the packager's extra-resource field."""
    packager_config = forge_config.packager_config
    packager_config.extra_resource = merge_extra_resource(
        packager_config.extra_resource, resource
    )
    return packager_config.extra_resource


def classify_main_config(value: Any) -> MainConfigShape:
    """Classify the bundler plugin's main configuration.

    Raises:
        UnexpectedConfigShapeError: If value matches no known shape.
    """
    if value is None:
        return MainConfigShape.ABSENT
    if isinstance(value, (BundlerConfig, MutableMapping)):
        return MainConfigShape.INSTANTIATED
    if isinstance(value, str):
        return MainConfigShape.PATH
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return MainConfigShape.PATHS
    if callable(value):
        return MainConfigShape.FACTORY
    raise UnexpectedConfigShapeError(f"Unexpected bundler mainConfig value {value!r}")


def _bundler_plugins(main_config: BundlerConfig | MutableMapping[str, Any]) -> list[Any]:
    """Return the plugin list of an instantiated main configuration, creating it if absent.

    Raises:
        UnexpectedConfigShapeError: If the existing plugins value is not a list.
    """
    if isinstance(main_config, BundlerConfig):
        if main_config.plugins is None:
            main_config.plugins = []
        plugins = main_config.plugins
    else:
        if main_config.get("plugins") is None:
            main_config["plugins"] = []
        plugins = main_config["plugins"]
    if not isinstance(plugins, list):
        raise UnexpectedConfigShapeError(f"Unexpected bundler plugins value {plugins!r}")
    return plugins


def find_plugin(forge_config: ForgeConfig, name: str) -> Any | None:
    """Find a plugin entry by name.

    Entries may be instantiated plugins or unresolved ``{"name": ...}``
    mappings.
    """
    for plugin in forge_config.plugins:
        plugin_name = plugin.get("name") if isinstance(plugin, Mapping) else getattr(
            plugin, "name", None
        )
        if plugin_name == name:
            return plugin
    return None


def is_host_plugin(plugin: Any) -> bool:
    """Return whether plugin has been instantiated by the host."""
    return not isinstance(plugin, Mapping) and bool(
        getattr(plugin, "is_forge_plugin", False)
    )


def add_define(
    forge_config: ForgeConfig,
    define_key: str,
    define_value: str,
    log: Callable[[str], None],
) -> bool:
    """Inject a define into the bundler's main configuration.

    The value is JSON-encoded since the define plugin treats strings as
    code. An identical define already present is not added again.

    Args:
        forge_config: Host configuration to edit.
        define_key: Identifier to define.
        define_value: String value for the identifier.
        log: Diagnostic sink.

    Returns:
        True if the define is present in the bundler configuration,
        False if the bundler configuration is unavailable.

    Raises:
        UnexpectedConfigShapeError: If mainConfig has an unknown shape.
    """
    bundler_plugin = find_plugin(forge_config, BUNDLER_PLUGIN_NAME)
    if bundler_plugin is None:
        log("add_define - bundler plugin is not configured")
        return False
    if not is_host_plugin(bundler_plugin):
        log("add_define - bundler plugin is not instantiated")
        return False

    main_config = getattr(bundler_plugin.config, "main_config", None)
    if classify_main_config(main_config) is not MainConfigShape.INSTANTIATED:
        log("add_define - mainConfig is not instantiated")
        return False

    definitions = {define_key: json.dumps(define_value)}
    plugins = _bundler_plugins(main_config)
    for plugin in plugins:
        if isinstance(plugin, DefinePlugin) and plugin.definitions == definitions:
            log(f"add_define - already in bundler configuration: {json.dumps(definitions)}")
            return True

    plugins.append(DefinePlugin(definitions))
    log(f"add_define - added to bundler configuration: {json.dumps(definitions)}")
    return True


__all__ = [
    "BUNDLER_PLUGIN_NAME",
    "BundlerConfig",
    "BundlerPluginConfig",
    "DefinePlugin",
    "ForgeConfig",
    "HostPlugin",
    "MainConfigShape",
    "PackagerConfig",
    "ResourceListShape",
    "add_define",
    "add_extra_resource",
    "classify_extra_resource",
    "classify_main_config",
    "find_plugin",
    "is_host_plugin",
    "merge_extra_resource",
]

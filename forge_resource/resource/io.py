"""Resource configuration loading.

Resource configurations can live in a standalone YAML/JSON file or inside
a ``package.json``-style document under the ``resourcePlugin`` key.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from forge_resource.errors import ResourceConfigError
from forge_resource.resource.schema import ResourcePluginConfig

# Key under which a resource config is embedded in a larger project document
EMBEDDED_CONFIG_KEY = "resourcePlugin"

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed JSON content as a dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document is not an object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_resource_config(data: dict[str, Any]) -> ResourcePluginConfig:
    """Parse and validate resource configuration data.

    Args:
        data: Either the resource config itself or a document embedding it
            under ``resourcePlugin``.

    Returns:
        Validated ResourcePluginConfig instance.

    Raises:
        ResourceConfigError: If the data does not match the schema.
    """
    embedded = data.get(EMBEDDED_CONFIG_KEY)
    if isinstance(embedded, dict):
        data = embedded
    try:
        return ResourcePluginConfig.model_validate(data)
    except ValidationError as e:
        raise ResourceConfigError(f"Invalid resource configuration: {e}") from e


def load_resource_config(path: Path) -> ResourcePluginConfig:
    """Load and validate a resource configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated ResourcePluginConfig instance.

    Raises:
        ResourceConfigError: If the file is missing, unreadable, has an
            unsupported suffix, or does not validate.
    """
    suffix = path.suffix.lower()
    try:
        if suffix in YAML_SUFFIXES:
            data = load_yaml(path)
        elif suffix in JSON_SUFFIXES:
            data = load_json(path)
        else:
            raise ResourceConfigError(
                f"Unsupported config file type '{suffix}': {path}"
            )
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ResourceConfigError(f"Failed to load {path}: {e}") from e
    return parse_resource_config(data)


__all__ = [
    "EMBEDDED_CONFIG_KEY",
    "load_json",
    "load_resource_config",
    "load_yaml",
    "parse_resource_config",
]

"""Resource configuration module.

This module handles:
- Validating user-supplied resource configuration
- Loading configuration from YAML/JSON files
- Converting configuration into an immutable ResourceSpec
"""

from forge_resource.resource.io import load_resource_config, parse_resource_config
from forge_resource.resource.schema import ResourcePluginConfig

__all__ = ["ResourcePluginConfig", "load_resource_config", "parse_resource_config"]

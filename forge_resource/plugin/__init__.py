"""Host plugin module.

This module handles:
- Coordinating the resolve/generate/pre-package lifecycle
- Exposing lifecycle handlers to the host by name
"""

from forge_resource.plugin.coordinator import StageCoordinator
from forge_resource.plugin.resource_plugin import ResourcePlugin

__all__ = ["ResourcePlugin", "StageCoordinator"]

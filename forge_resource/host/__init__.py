"""Host framework interfaces.

This module handles:
- The downstream configuration shapes the plugin reads and edits
- Detecting the run mode from the host's argument vector
"""

from forge_resource.host.commands import detect_run_mode
from forge_resource.host.downstream import ForgeConfig

__all__ = ["ForgeConfig", "detect_run_mode"]

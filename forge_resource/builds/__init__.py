"""Build orchestration module.

This module handles:
- Staleness decisions for the target artifact
- Running the build command
- Staging the artifact into scratch directories
"""

from forge_resource.builds.runner import BuildResult, run_build
from forge_resource.builds.staleness import needs_rebuild

__all__ = ["BuildResult", "needs_rebuild", "run_build"]

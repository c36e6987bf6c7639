"""Forge Resource - build, stage and publish an external artifact at packaging time.

This package decides whether a declared artifact is stale, rebuilds it with
an external command when needed, stages it for development runs or packaged
distributions, and publishes its resolved location to the downstream bundler.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

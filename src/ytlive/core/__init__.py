"""Core infrastructure modules."""

from .global_paths import GlobalPath

__all__ = ["GlobalPath"]

# Config is imported from its module to avoid a cycle with util.log:
# from ytlive.core.config import ConfigManager

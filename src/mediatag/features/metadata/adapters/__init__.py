"""
Summary: Package marker for metadata adapters.
Why: Keep adapter exports together for easy discovery.
"""

from .plugin_registry import BUILTIN_SOURCES, ENTRY_POINT_GROUP, PluginRegistry

__all__ = ["BUILTIN_SOURCES", "ENTRY_POINT_GROUP", "PluginRegistry"]

"""
Summary: Package exports for metadata use case helpers.
Why: Provide a stable namespace for the extraction helpers and ports.
"""

from . import extraction, ports

__all__ = ["extraction", "ports"]

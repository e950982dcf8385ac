"""Display management for CLI interface."""

from mediatag.ui.cli.display.result import ResultDisplay

__all__ = ["ResultDisplay"]

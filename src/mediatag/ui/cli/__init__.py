"""Command line interface package."""

from mediatag.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]

"""Command execution package for CLI."""

from mediatag.ui.cli.commands.inspect import InspectCommand
from mediatag.ui.cli.commands.write import WriteCommand

__all__ = ["InspectCommand", "WriteCommand"]

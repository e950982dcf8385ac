"""Command line argument handling."""

from mediatag.ui.cli.args.options import CLIArgs, InspectArgs, WriteArgs
from mediatag.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "InspectArgs", "WriteArgs"]

"""Command line interface for mediatag."""

import sys
from typing import final

from mediatag.platform.logging import logger
from mediatag.ui.cli.args import ArgumentParser
from mediatag.ui.cli.args.options import CLIArgs, InspectArgs, WriteArgs
from mediatag.ui.cli.commands import InspectCommand, WriteCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, InspectArgs):
                results = InspectCommand(args).execute()
                if any(not result.success for result in results):
                    sys.exit(1)
                return

            assert isinstance(args, WriteArgs)
            if not WriteCommand(args).execute():
                logger.error("Tags were not written to %s", args.file_path)
                sys.exit(1)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0

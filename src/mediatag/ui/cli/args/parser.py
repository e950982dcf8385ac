"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import cast, final

from mediatag.config.config import Config
from mediatag.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from mediatag.ui.cli.args.options import CLIArgs, GatherType, InspectArgs, WriteArgs

GATHER_TYPES: tuple[GatherType, ...] = ("music", "clip", "movie", "tvshow")


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="mediatag",
            description="mediatag - read, clean and merge the tags of media files.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            help="Configuration file to use instead of the default one",
            metavar="CONFIG",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        inspect_parser = subparsers.add_parser(
            "inspect",
            help="Show the merged metadata of media files or directories",
        )
        _ = inspect_parser.add_argument(
            "paths",
            type=str,
            nargs="+",
            help="Media files or directories to inspect",
            metavar="PATH",
        )
        _ = inspect_parser.add_argument(
            "--gather",
            choices=GATHER_TYPES,
            action="append",
            help="Catalog type of the files (repeatable, defaults to music)",
        )
        _ = inspect_parser.add_argument(
            "--dir-pattern",
            type=str,
            default="",
            help="Directory pattern such as '%%a/%%A' used by the filename source",
        )
        _ = inspect_parser.add_argument(
            "--file-pattern",
            type=str,
            default="",
            help="File pattern such as '%%T - %%t' used by the filename source",
        )
        _ = inspect_parser.add_argument(
            "--json",
            action="store_true",
            help="Print records as JSON",
        )
        _ = inspect_parser.add_argument(
            "--raw",
            action="store_true",
            help="Also show the cleaned fields of each tag container",
        )
        ArgumentParser._add_verbosity(inspect_parser)

        write_parser = subparsers.add_parser(
            "write",
            help="Overwrite the tags of a media file",
        )
        _ = write_parser.add_argument(
            "file_path",
            type=str,
            help="Media file to write (mp3, flac, oga, ogg)",
            metavar="FILE",
        )
        _ = write_parser.add_argument(
            "--set",
            dest="values",
            action="append",
            default=[],
            help="Field value as key=value (repeatable)",
            metavar="KEY=VALUE",
        )
        _ = write_parser.add_argument(
            "--text",
            action="append",
            default=[],
            help="User-defined text frame as description=value (repeatable)",
            metavar="DESC=VALUE",
        )
        ArgumentParser._add_verbosity(write_parser)

        return parser

    @staticmethod
    def _add_verbosity(parser: argparse.ArgumentParser) -> None:
        group = parser.add_mutually_exclusive_group()
        _ = group.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = group.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        config_path = Path(parsed_args.config) if parsed_args.config else None
        configuration = Config.load(config_path)
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "inspect":
            return ArgumentParser._process_inspect(parsed_args, config_path)

        if command == "write":
            return ArgumentParser._process_write(parsed_args, config_path)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_inspect(parsed_args: argparse.Namespace, config_path: Path | None) -> InspectArgs:
        paths = [Path(item) for item in parsed_args.paths]
        missing = [path for path in paths if not path.exists()]
        if missing:
            for path in missing:
                logger.error("Path does not exist: %s", path)
            sys.exit(1)

        gather_types = cast(list[GatherType], parsed_args.gather or ["music"])

        return InspectArgs(
            command="inspect",
            paths=paths,
            gather_types=list(dict.fromkeys(gather_types)),
            dir_pattern=parsed_args.dir_pattern,
            file_pattern=parsed_args.file_pattern,
            as_json=parsed_args.json,
            show_raw=parsed_args.raw,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            config_path=config_path,
        )

    @staticmethod
    def _process_write(parsed_args: argparse.Namespace, config_path: Path | None) -> WriteArgs:
        file_path = Path(parsed_args.file_path)
        if not file_path.is_file():
            logger.error("File does not exist: %s", file_path)
            sys.exit(1)

        values: dict[str, list[str]] = {}
        for item in parsed_args.values:
            key, value = ArgumentParser._split_assignment(item, "--set")
            values.setdefault(key, []).append(value)

        text: dict[str, str] = {}
        for item in parsed_args.text:
            description, value = ArgumentParser._split_assignment(item, "--text")
            text[description] = value

        if not values and not text:
            logger.error("Nothing to write: pass --set or --text")
            sys.exit(1)

        return WriteArgs(
            command="write",
            file_path=file_path,
            values=values,
            text=text,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            config_path=config_path,
        )

    @staticmethod
    def _split_assignment(item: str, option: str) -> tuple[str, str]:
        key, separator, value = item.partition("=")
        if not separator or not key.strip():
            logger.error("Invalid %s value %r; expected name=value", option, item)
            sys.exit(2)
        return key.strip(), value

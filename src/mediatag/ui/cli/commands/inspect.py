"""src/mediatag/ui/cli/commands/inspect.py
What: Gather and display merged metadata for files and directory trees.
Why: Give users a read-only view of what every tag source contributes.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from mediatag.config.config import Config
from mediatag.features.metadata import MediaInfo, PluginRegistry, RawTagReaderPort
from mediatag.platform.logging import logger
from mediatag.ui.cli.args.options import InspectArgs
from mediatag.ui.cli.display.result import ResultDisplay
from mediatag.ui.cli.models import InspectResult


class InspectCommand:
    """Command for inspecting media files."""

    SUPPORTED_EXTENSIONS: ClassVar[frozenset[str]] = frozenset(
        {
            ".aac", ".aif", ".aiff", ".ape", ".asf", ".dsf", ".flac", ".m4a",
            ".m4b", ".m4v", ".mp2", ".mp3", ".mp4", ".mpc", ".oga", ".ogg",
            ".ogv", ".opus", ".spx", ".tta", ".wav", ".wma", ".wmv", ".wv",
        }
    )

    def __init__(
        self,
        args: InspectArgs,
        *,
        config: Config | None = None,
        reader: RawTagReaderPort | None = None,
        plugins: PluginRegistry | None = None,
        display: ResultDisplay | None = None,
    ) -> None:
        """Initialize the command.

        Args:
            args: Command line arguments.
            config: Configuration override (loaded from ``args.config_path`` otherwise).
            reader: Raw tag reader override, mainly for tests.
            plugins: Plugin registry override; installed plugins are discovered otherwise.
            display: Result display override.
        """
        self.args = args
        self.config = config or Config.load(args.config_path)
        self.reader = reader
        self.plugins = plugins if plugins is not None else PluginRegistry.discover()
        self.display = display or ResultDisplay()

    def execute(self) -> list[InspectResult]:
        """Inspect every requested file.

        Returns:
            List of per-file results.
        """
        results: list[InspectResult] = []
        for root in self.args.paths:
            if root.is_dir():
                results.extend(self._inspect_directory(root))
            else:
                results.append(self._inspect_file(root, base=root.parent))

        for result in results:
            self.display.show_result(
                result, as_json=self.args.as_json, show_raw=self.args.show_raw
            )
        if len(results) > 1 and not self.args.as_json:
            self.display.show_summary(results, quiet=self.args.quiet)
        return results

    def iter_media_files(self, directory: Path) -> Iterator[Path]:
        """Yield supported media files below ``directory`` in sorted order."""
        for candidate in sorted(directory.rglob("*")):
            if candidate.is_file() and candidate.suffix.lower() in self.SUPPORTED_EXTENSIONS:
                yield candidate

    def _inspect_directory(self, directory: Path) -> list[InspectResult]:
        files = list(self.iter_media_files(directory))
        logger.info(
            "Scanning %s",
            directory,
            extra={
                "scan_event": "scan.directory.start",
                "directory": str(directory),
                "total_files": len(files),
            },
        )
        started = time.perf_counter()
        results = [
            self._inspect_file(path, base=directory, sequence=index, total=len(files))
            for index, path in enumerate(files, start=1)
        ]
        logger.info(
            "Scan of %s complete",
            directory,
            extra={
                "scan_event": "scan.directory.complete",
                "directory": str(directory),
                "processed": len(results),
                "broken": sum(1 for result in results if result.broken),
                "failed": sum(1 for result in results if result.error_message),
                "duration_seconds": time.perf_counter() - started,
            },
        )
        return results

    def _inspect_file(
        self,
        path: Path,
        *,
        base: Path,
        sequence: int = 0,
        total: int = 0,
    ) -> InspectResult:
        event = {
            "source_path": str(path),
            "base_path": str(base),
            "sequence": sequence,
            "total_files": total,
        }
        logger.debug("Reading %s", path, extra={"scan_event": "scan.file.start", **event})

        result = InspectResult(source_path=path)
        try:
            info = MediaInfo(
                path,
                self.args.gather_types,
                config=self.config,
                reader=self.reader,
                plugins=self.plugins,
                dir_pattern=self.args.dir_pattern,
                file_pattern=self.args.file_pattern,
            )
            _ = info.get_info()
            record = info.merged()
            result.record = record
            result.file_type = info.type
            result.sources = dict(info.sources)
            result.broken = info.broken
        except Exception as exc:
            result.error_message = str(exc)
            logger.error(
                "Failed to inspect %s: %s",
                path,
                exc,
                extra={"scan_event": "scan.file.error", "error_message": str(exc), **event},
            )
            return result

        if result.broken:
            logger.warning("Broken file %s", path, extra={"scan_event": "scan.file.broken", **event})
        else:
            logger.info(
                "Read %s",
                path,
                extra={
                    "scan_event": "scan.file.success",
                    "artist": record.artist,
                    "title": record.title,
                    **event,
                },
            )
        return result

"""src/mediatag/ui/cli/display/result.py
What: Render merged records, container details and run summaries.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from mediatag.ui.cli.models import InspectResult


def _format_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, Mapping):
        return ", ".join(f"{key}: {item}" for key, item in value.items())
    return str(value)


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_result(self, result: InspectResult, *, as_json: bool = False, show_raw: bool = False) -> None:
        """Display one inspected file.

        Args:
            result: Outcome of inspecting the file.
            as_json: Print a JSON document instead of a table.
            show_raw: Include the cleaned fields of every tag container.
        """
        if as_json:
            self.console.print_json(json.dumps(self.to_json(result, show_raw=show_raw), default=str))
            return

        if result.error_message is not None:
            self.console.print(
                f"[red]{escape(str(result.source_path))}: {escape(result.error_message)}[/red]"
            )
            return

        title = escape(str(result.source_path))
        if result.file_type:
            title = f"{title} ({result.file_type})"
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        record = result.record.to_dict(include_empty=False) if result.record else {}
        for name, value in record.items():
            table.add_row(name, Text(_format_value(value)))
        self.console.print(table)

        if not show_raw:
            return
        for container, fields in result.sources.items():
            raw_table = Table(title=escape(container), show_header=False)
            raw_table.add_column("Field", style="dim")
            raw_table.add_column("Value")
            for name, value in fields.items():
                if value is None or value == "":
                    continue
                raw_table.add_row(name, Text(_format_value(value)))
            self.console.print(raw_table)

    @staticmethod
    def to_json(result: InspectResult, *, show_raw: bool = False) -> dict[str, object]:
        """Build the JSON document printed for ``result``."""
        document: dict[str, object] = {
            "file": str(result.source_path),
            "type": result.file_type,
            "broken": result.broken,
            "error": result.error_message,
            "metadata": result.record.to_dict(include_empty=False) if result.record else None,
        }
        if show_raw:
            document["sources"] = result.sources
        return document

    def show_summary(self, results: Sequence[InspectResult], quiet: bool = False) -> None:
        """Display a summary of the inspected files."""
        if quiet:
            return

        failures = [result for result in results if not result.success]
        self.console.print("\n[bold]Inspection Summary:[/bold]")
        self.console.print(f"Total files inspected: {len(results)}")
        self.console.print(f"[green]Readable: {len(results) - len(failures)}[/green]")
        if not failures:
            return

        self.console.print(f"[red]Broken or failed: {len(failures)}[/red]")
        for failed in failures:
            reason = failed.error_message or "unreadable"
            self.console.print(f"[red]  • {escape(str(failed.source_path))}: {escape(reason)}[/red]")


__all__ = ["ResultDisplay"]

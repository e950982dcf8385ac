"""Rich console handler with structured tag-scan event rendering.

Where: platform/logging/handlers.py
What: Render ``scan.*`` and ``tags.*`` log events with icons and compact paths.
Why: Keep the scan output readable when walking large media directories.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class TagEventRichHandler(RichHandler):
    """Rich handler that renders structured scan events and styled paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "scan.directory.start": ("🚀", "cyan"),
        "scan.directory.complete": ("✅", "green"),
        "scan.file.start": ("🎧", "blue"),
        "scan.file.success": ("🏷️", "green"),
        "scan.file.broken": ("⚠️", "yellow"),
        "scan.file.error": ("⛔", "red"),
        "tags.write": ("✏️", "magenta"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "scan.file.start": "Reading ",
        "scan.file.success": "Tagged ",
        "scan.file.broken": "Broken ",
        "scan.file.error": "Failed ",
        "tags.write": "Writing ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` and truncated to the last segments."""

        pure_path = self._to_pure_path(path)
        if base:
            base_path = self._to_pure_path(base)
            try:
                relative = pure_path.relative_to(base_path)
            except ValueError:
                relative = None
            if relative is not None and str(relative) not in {"", "."}:
                pure_path = relative

        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        parts = [part for part in pure_path.parts if part and part != anchor]
        if len(parts) > self._PATH_SEGMENT_LIMIT:
            display = separator.join(["…", *parts[-self._PATH_SEGMENT_LIMIT:]])
        elif anchor:
            display = anchor.rstrip("\\/") + separator + separator.join(parts)
        else:
            display = separator.join(parts) or "."

        text = Text()
        for char in display:
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_event(self, record: logging.LogRecord) -> Text | None:
        event = getattr(record, "scan_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))
        base = getattr(record, "base_path", None)

        if event.startswith("scan.directory"):
            directory = getattr(record, "directory", None)
            details: list[str] = []
            if event == "scan.directory.start":
                _ = body.append("Scanning")
                total = getattr(record, "total_files", None)
                if isinstance(total, int):
                    details.append(f"total={total}")
            else:
                _ = body.append("Scan complete")
                for name in ("processed", "broken", "failed"):
                    value = getattr(record, name, None)
                    if isinstance(value, int):
                        details.append(f"{name}={value}")
                duration = getattr(record, "duration_seconds", None)
                if isinstance(duration, (int, float)):
                    details.append(f"duration={duration:.2f}s")
            if details:
                _ = body.append(" [" + ", ".join(details) + "]")
            if directory:
                _ = body.append(" @ ")
                _ = body.append_text(self.format_path(str(directory)))
        else:
            sequence = getattr(record, "sequence", None)
            total = getattr(record, "total_files", None)
            if isinstance(sequence, int) and sequence > 0:
                if isinstance(total, int) and total > 0:
                    _ = body.append(f"[{sequence}/{total}] ")
                else:
                    _ = body.append(f"[{sequence}] ")
            _ = body.append(self._EVENT_PREFIXES.get(event, ""))

            source_path = getattr(record, "source_path", None)
            if source_path:
                _ = body.append_text(self.format_path(str(source_path), base=base))

            extras: list[str] = []
            if event == "scan.file.success":
                artist = getattr(record, "artist", None)
                title = getattr(record, "title", None)
                label = " - ".join(str(part) for part in (artist, title) if part)
                if label:
                    extras.append(label)
            elif event == "scan.file.error":
                error_message = getattr(record, "error_message", None)
                if error_message:
                    extras.append(str(error_message))
            if extras:
                _ = body.append(" (" + ", ".join(extras) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for scan events."""

        event_text = self._render_event(record)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["TagEventRichHandler"]

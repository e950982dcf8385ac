"""Summary: Ports defining metadata use case dependencies.
Why: Decouple use cases from concrete adapters so tests and swaps stay simple."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from mediatag.shared import RawAnalysis, TrackInfo


@runtime_checkable
class RawTagReaderPort(Protocol):
    """Port for the tag library that analyzes a media file."""

    def analyze(self, path: Path) -> RawAnalysis:
        """Return everything parsed from ``path``.

        Raises ``FileNotFoundError`` for missing files and the library's own
        error for unreadable ones.
        """
        ...


@runtime_checkable
class TagWriterPort(Protocol):
    """Port for writing prepared tag data back into a file."""

    def write(self, path: Path, tag_data: Mapping[str, Sequence[object]]) -> bool:
        """Write ``tag_data``; return False for unsupported formats."""
        ...


@runtime_checkable
class MetadataPlugin(Protocol):
    """External metadata source consulted after the embedded tags and the path."""

    name: str

    def get_metadata(
        self, gather_types: Sequence[str], current: TrackInfo
    ) -> Mapping[str, object] | None:
        """Return extra fields for the item described by ``current``.

        None means the plugin found nothing.
        """
        ...


__all__ = ["MetadataPlugin", "RawTagReaderPort", "TagWriterPort"]

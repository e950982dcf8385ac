"""src/mediatag/ui/cli/models.py
What: Shared UI-facing data structures for CLI presentation layers.
Why: Provide lightweight value objects without introducing import cycles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mediatag.shared import TrackInfo


@dataclass(slots=True)
class InspectResult:
    """Outcome of gathering metadata for one file."""

    source_path: Path
    record: TrackInfo | None = None
    file_type: str = ""
    sources: dict[str, dict[str, object]] = field(default_factory=dict)
    broken: bool = False
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.error_message is None and not self.broken


__all__ = ["InspectResult"]

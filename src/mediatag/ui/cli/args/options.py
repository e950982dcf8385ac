"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, final

GatherType = Literal["music", "clip", "movie", "tvshow"]


@final
@dataclass(slots=True)
class InspectArgs:
    """Command line arguments for the ``inspect`` subcommand."""

    command: Literal["inspect"]
    paths: list[Path]
    gather_types: list[GatherType]
    dir_pattern: str
    file_pattern: str
    as_json: bool
    show_raw: bool
    verbose: bool
    quiet: bool
    config_path: Path | None = None


@final
@dataclass(slots=True)
class WriteArgs:
    """Command line arguments for the ``write`` subcommand."""

    command: Literal["write"]
    file_path: Path
    values: dict[str, list[str]] = field(default_factory=dict)
    text: dict[str, str] = field(default_factory=dict)
    verbose: bool = False
    quiet: bool = False
    config_path: Path | None = None


CLIArgs = InspectArgs | WriteArgs

__all__ = ["CLIArgs", "GatherType", "InspectArgs", "WriteArgs"]

"""Tests for the inspect command."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from mediatag.config.config import Config
from mediatag.features.metadata import PluginRegistry
from mediatag.shared import AudioStream, RawAnalysis
from mediatag.ui.cli.args.options import InspectArgs
from mediatag.ui.cli.commands import InspectCommand
from mediatag.ui.cli.display import ResultDisplay


class DictReader:
    """Reader serving prepared analyses by file name."""

    def __init__(self, analyses: dict[str, RawAnalysis]) -> None:
        self.analyses: dict[str, RawAnalysis] = analyses

    def analyze(self, path: Path) -> RawAnalysis:
        if path.name not in self.analyses:
            raise ValueError(f"cannot parse {path.name}")
        return self.analyses[path.name]


def _args(paths: list[Path], **overrides: object) -> InspectArgs:
    values: dict[str, object] = {
        "command": "inspect",
        "paths": paths,
        "gather_types": ["music"],
        "dir_pattern": "",
        "file_pattern": "",
        "as_json": False,
        "show_raw": False,
        "verbose": False,
        "quiet": False,
    }
    values.update(overrides)
    return InspectArgs(**values)  # pyright: ignore[reportArgumentType]


def _raw(title: str) -> RawAnalysis:
    return RawAnalysis(
        fileformat="flac",
        audio=AudioStream(dataformat="flac", bitrate=900000),
        tags={"vorbiscomment": {"title": [title], "artist": ["Band"]}},
    )


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    (root / "Band").mkdir(parents=True)
    for name in ("01.flac", "02.flac", "broken.flac", "notes.txt"):
        _ = (root / "Band" / name).write_bytes(b"\0")
    return root


def _command(args: InspectArgs, reader: DictReader) -> tuple[InspectCommand, StringIO]:
    output = StringIO()
    display = ResultDisplay(Console(file=output, width=200, color_system=None))
    command = InspectCommand(
        args, config=Config(), reader=reader, plugins=PluginRegistry(), display=display
    )
    return command, output


def test_iter_media_files_filters_extensions(library: Path) -> None:
    command, _output = _command(_args([library]), DictReader({}))

    names = [path.name for path in command.iter_media_files(library)]

    assert names == ["01.flac", "02.flac", "broken.flac"]


def test_directory_scan_reports_each_file(library: Path, caplog: pytest.LogCaptureFixture) -> None:
    reader = DictReader({"01.flac": _raw("One"), "02.flac": _raw("Two")})
    command, output = _command(_args([library]), reader)

    results = command.execute()

    assert [result.source_path.name for result in results] == ["01.flac", "02.flac", "broken.flac"]
    assert results[0].record is not None and results[0].record.title == "One"
    assert results[0].file_type == "flac"
    assert set(results[0].sources) == {"vorbiscomment", "general"}
    assert results[2].broken
    assert not results[2].success

    text = output.getvalue()
    assert "Inspection Summary:" in text
    assert "Total files inspected: 3" in text
    assert "Broken or failed: 1" in text
    assert "Broken file detected" in caplog.text


def test_single_file_json_output(library: Path) -> None:
    media = library / "Band" / "01.flac"
    command, output = _command(_args([media], as_json=True, show_raw=True), DictReader({"01.flac": _raw("One")}))

    results = command.execute()

    assert len(results) == 1
    text = output.getvalue()
    assert '"title": "One"' in text
    assert '"vorbiscomment"' in text
    assert "Inspection Summary" not in text


def test_unexpected_errors_are_recorded(library: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "mediatag.ui.cli.commands.inspect.MediaInfo", side_effect=RuntimeError("boom")
    )
    media = library / "Band" / "01.flac"
    command, output = _command(_args([media]), DictReader({}))

    results = command.execute()

    assert results[0].error_message == "boom"
    assert "boom" in output.getvalue()

"""Tests for command line argument parsing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mediatag.ui.cli.args import ArgumentParser, InspectArgs, WriteArgs


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Configuration that keeps the log file inside the temporary directory."""

    path = tmp_path / "config.toml"
    _ = path.write_text(f'log_file = "{(tmp_path / "mediatag.log").as_posix()}"\n', encoding="utf-8")
    return path


def test_inspect_arguments(tmp_path: Path, config_file: Path) -> None:
    media = tmp_path / "song.mp3"
    media.touch()

    args = ArgumentParser.process_args(
        [
            "--config",
            str(config_file),
            "inspect",
            str(media),
            "--gather",
            "music",
            "--gather",
            "clip",
            "--gather",
            "music",
            "--dir-pattern",
            "%a/%A",
            "--file-pattern",
            "%T - %t",
            "--json",
            "--raw",
        ]
    )

    assert isinstance(args, InspectArgs)
    assert args.paths == [media]
    assert args.gather_types == ["music", "clip"]
    assert args.dir_pattern == "%a/%A"
    assert args.file_pattern == "%T - %t"
    assert args.as_json is True
    assert args.show_raw is True
    assert args.config_path == config_file


def test_inspect_defaults_to_music(tmp_path: Path, config_file: Path) -> None:
    media = tmp_path / "song.mp3"
    media.touch()

    args = ArgumentParser.process_args(["--config", str(config_file), "inspect", str(media)])

    assert isinstance(args, InspectArgs)
    assert args.gather_types == ["music"]
    assert args.as_json is False
    assert args.verbose is False


def test_missing_paths_exit(tmp_path: Path, config_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(
            ["--config", str(config_file), "inspect", str(tmp_path / "missing.mp3")]
        )

    assert excinfo.value.code == 1


def test_unknown_gather_type_is_rejected(tmp_path: Path, config_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(
            ["--config", str(config_file), "inspect", str(tmp_path), "--gather", "podcast"]
        )

    assert excinfo.value.code == 2


def test_verbose_and_quiet_are_exclusive(tmp_path: Path, config_file: Path) -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.process_args(
            ["--config", str(config_file), "inspect", str(tmp_path), "--verbose", "--quiet"]
        )


def test_verbosity_sets_console_level(tmp_path: Path, config_file: Path) -> None:
    from mediatag.platform.logging import TagEventRichHandler, logger

    _ = ArgumentParser.process_args(["--config", str(config_file), "inspect", str(tmp_path), "--verbose"])

    console_handlers = [h for h in logger.handlers if isinstance(h, TagEventRichHandler)]
    assert console_handlers[0].level == logging.DEBUG
    assert (tmp_path / "mediatag.log").exists()


def test_write_arguments(tmp_path: Path, config_file: Path) -> None:
    media = tmp_path / "song.flac"
    media.touch()

    args = ArgumentParser.process_args(
        [
            "--config",
            str(config_file),
            "write",
            str(media),
            "--set",
            "title=Song",
            "--set",
            "genre=Rock",
            "--set",
            "genre=Pop",
            "--text",
            "mood=calm=ish",
            "--quiet",
        ]
    )

    assert isinstance(args, WriteArgs)
    assert args.file_path == media
    assert args.values == {"title": ["Song"], "genre": ["Rock", "Pop"]}
    assert args.text == {"mood": "calm=ish"}
    assert args.quiet is True


def test_write_needs_values(tmp_path: Path, config_file: Path) -> None:
    media = tmp_path / "song.flac"
    media.touch()

    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["--config", str(config_file), "write", str(media)])

    assert excinfo.value.code == 1


def test_write_rejects_malformed_assignment(tmp_path: Path, config_file: Path) -> None:
    media = tmp_path / "song.flac"
    media.touch()

    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(
            ["--config", str(config_file), "write", str(media), "--set", "novalue"]
        )

    assert excinfo.value.code == 2

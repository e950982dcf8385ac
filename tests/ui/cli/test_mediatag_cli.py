"""Tests for CLI functionality."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from mediatag.ui.cli import CommandProcessor, main
from mediatag.ui.cli.args.options import WriteArgs
from mediatag.ui.cli.commands import WriteCommand
from mediatag.ui.cli.models import InspectResult


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    _ = path.write_text(f'log_file = "{(tmp_path / "mediatag.log").as_posix()}"\n', encoding="utf-8")
    return path


def test_inspect_success(tmp_path: Path, config_file: Path, mocker: MockerFixture) -> None:
    """Test inspecting a single readable file.

    Args:
        tmp_path: Temporary directory path fixture
        config_file: Configuration file fixture
        mocker: Pytest mocker fixture
    """
    media = tmp_path / "song.mp3"
    media.touch()
    mock_command = mocker.patch("mediatag.ui.cli.cli.InspectCommand")
    mock_command.return_value.execute.return_value = [InspectResult(source_path=media)]

    CommandProcessor.process_command(["--config", str(config_file), "inspect", str(media)])

    args = mock_command.call_args.args[0]
    assert args.paths == [media]
    mock_command.return_value.execute.assert_called_once_with()


def test_inspect_failures_exit_with_error(
    tmp_path: Path, config_file: Path, mocker: MockerFixture
) -> None:
    media = tmp_path / "song.mp3"
    media.touch()
    mock_command = mocker.patch("mediatag.ui.cli.cli.InspectCommand")
    mock_command.return_value.execute.return_value = [
        InspectResult(source_path=media, broken=True)
    ]

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["--config", str(config_file), "inspect", str(media)])

    assert excinfo.value.code == 1


def test_write_dispatch(tmp_path: Path, config_file: Path, mocker: MockerFixture) -> None:
    media = tmp_path / "song.flac"
    media.touch()
    mock_command = mocker.patch("mediatag.ui.cli.cli.WriteCommand")
    mock_command.return_value.execute.return_value = False

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(
            ["--config", str(config_file), "write", str(media), "--set", "title=Song"]
        )

    assert excinfo.value.code == 1
    args = mock_command.call_args.args[0]
    assert isinstance(args, WriteArgs)
    assert args.values == {"title": ["Song"]}


def test_keyboard_interrupt_exits_130(
    tmp_path: Path, config_file: Path, mocker: MockerFixture
) -> None:
    media = tmp_path / "song.mp3"
    media.touch()
    mock_command = mocker.patch("mediatag.ui.cli.cli.InspectCommand")
    mock_command.return_value.execute.side_effect = KeyboardInterrupt

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["--config", str(config_file), "inspect", str(media)])

    assert excinfo.value.code == 130


def test_unexpected_error_exits_1(
    tmp_path: Path, config_file: Path, mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    media = tmp_path / "song.mp3"
    media.touch()
    mock_command = mocker.patch("mediatag.ui.cli.cli.InspectCommand")
    mock_command.return_value.execute.side_effect = RuntimeError("boom")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["--config", str(config_file), "inspect", str(media)])

    assert excinfo.value.code == 1
    assert "An unexpected error occurred: boom" in caplog.text


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch.object(CommandProcessor, "process_command")

    assert main() == 0
    process.assert_called_once_with()


def test_write_command_prepares_tag_data(tmp_path: Path, mocker: MockerFixture) -> None:
    writer = mocker.Mock()
    writer.write.return_value = True
    args = WriteArgs(
        command="write",
        file_path=tmp_path / "song.flac",
        values={"title": ["Song", "Ignored"]},
        text={"mood": "calm"},
    )

    assert WriteCommand(args, writer=writer).execute() is True

    writer.write.assert_called_once_with(
        tmp_path / "song.flac",
        {
            "title": ["Song"],
            "text": [{"data": "calm", "description": "mood", "encodingid": 0}],
        },
    )

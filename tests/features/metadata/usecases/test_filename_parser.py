"""Tests for metadata parsed out of file and directory names."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediatag.features.metadata.usecases.filename_parser import (
    FilenameParser,
    parse_pattern,
    translate_pattern_code,
)

ABBR = ("xvid", "720p", "1080p", "bluray", "x264", "hdtv", "lol")


def test_translate_pattern_code() -> None:
    assert translate_pattern_code("%a") == "artist"
    assert translate_pattern_code("%T") == "track"
    assert translate_pattern_code("%o") is None
    assert translate_pattern_code("%z") is None


def test_parse_pattern_reads_directory_and_file_parts() -> None:
    result = parse_pattern("/music/Abba/Gold/03 - SOS.mp3", "%a/%A", "%T - %t")

    assert result == {"artist": "Abba", "album": "Gold", "track": "03", "title": "SOS"}


def test_parse_pattern_file_pattern_only() -> None:
    result = parse_pattern("/music/whatever/2 - Intro.flac", "", "%T - %t")

    assert result == {"track": "2", "title": "Intro"}


def test_parse_pattern_ignores_unused_codes() -> None:
    result = parse_pattern("/music/Band/1999 - Album/ignored-01-Song.ogg", "%a/%y - %A", "%o-%T-%t")

    assert result == {
        "artist": "Band",
        "year": "1999",
        "album": "Album",
        "track": "01",
        "title": "Song",
    }


def test_parse_pattern_falls_back_to_basename_title() -> None:
    result = parse_pattern("/music/Band/01.mp3", "%a", "%T")

    assert result == {"artist": "Band", "track": "01", "title": "01.mp3"}


def test_parse_pattern_without_patterns_or_match() -> None:
    assert parse_pattern("/music/song.mp3", "", "") == {}
    assert parse_pattern("/music/song.mp3", "", "%T - %t") == {}


@pytest.mark.parametrize(
    ("path", "show", "season", "episode", "name"),
    [
        ("/tv/Lost/Lost.S02E05.Title.Here.mkv", "Lost", "02", "05", "Title Here"),
        ("/tv/Show/The.Office.3x07.Branch.Wars.avi", "The Office", "3", "07", "Branch Wars"),
        (
            "/tv/Show/Doctor Who Season 1 Episode 4 Aliens.mkv",
            "Doctor Who",
            "1",
            "4",
            "Aliens",
        ),
        ("/tv/Show/Friends.109.Sonogram.avi", "Friends", "1", "09", "Sonogram"),
    ],
)
def test_tvshow_season_and_episode_patterns(
    path: str, show: str, season: str, episode: str, name: str
) -> None:
    parser = FilenameParser(["tvshow"], common_abbr=ABBR)

    result = parser.parse(path)

    assert result["tvshow"] == show
    assert result["title"] == show
    assert result["tvshow_season"] == season
    assert result["tvshow_episode"] == episode
    assert result["original_name"] == name


def test_tvshow_name_falls_back_to_parent_folder() -> None:
    parser = FilenameParser(["tvshow"])

    result = parser.parse("/tv/Breaking Bad/S01E02.mkv")

    assert result["tvshow"] == "Breaking Bad"
    assert result["tvshow_season"] == "01"
    assert result["tvshow_episode"] == "02"


def test_tvshow_season_folder_layout() -> None:
    parser = FilenameParser(["tvshow"])

    result = parser.parse("/tv/Firefly/Season 1/03 Bushwhacked.mkv")

    assert result["tvshow"] == "Firefly"
    assert result["tvshow_season"] == "1"
    assert result["tvshow_episode"] == "03"
    assert result["original_name"] == "Bushwhacked"


def test_tvshow_year_is_read_from_path() -> None:
    parser = FilenameParser(["tvshow"], common_abbr=ABBR)

    result = parser.parse("/tv/Cosmos (2014)/Cosmos.2014.S01E01.720p.HDTV.x264.mkv")

    assert result["year"] == 2014
    assert result["tvshow"] == "Cosmos"
    assert result["original_name"] is None


def test_movie_name_is_cleaned() -> None:
    parser = FilenameParser(["movie"], common_abbr=ABBR)

    result = parser.parse("/movies/The.Matrix.1999.1080p.BluRay.x264.mkv")

    assert result == {"original_name": "The Matrix", "title": "The Matrix"}


def test_remove_common_abbreviations_handles_brackets_and_bad_regex() -> None:
    parser = FilenameParser(common_abbr=("re(pack", "720p"))

    assert parser.remove_common_abbreviations("Movie (720p) re(pack") == "Movie  "


def test_format_video_name_capitalizes_words() -> None:
    parser = FilenameParser()

    assert parser.format_video_name("the_big-lebowski.") == "The Big Lebowski"
    assert parser.format_video_name(None) == ""


def test_music_reads_pattern_and_local_size(tmp_path: Path) -> None:
    folder = tmp_path / "Band" / "Album"
    folder.mkdir(parents=True)
    media = folder / "01 - Song.mp3"
    _ = media.write_bytes(b"\0" * 10)
    parser = FilenameParser(["music"], dir_pattern="%a/%A", file_pattern="%T - %t")

    result = parser.parse(str(media))

    assert result == {
        "artist": "Band",
        "album": "Album",
        "track": "01",
        "title": "Song",
        "size": 10,
    }


def test_remote_music_skips_size() -> None:
    parser = FilenameParser(["clip"], file_pattern="%t", is_local=False)

    result = parser.parse("/remote/clip.mp4")

    assert result == {"title": "clip"}

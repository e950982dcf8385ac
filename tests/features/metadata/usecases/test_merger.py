"""Tests for merging cleaned tag sources."""

from __future__ import annotations

from pathlib import Path

from mediatag.features.metadata.usecases.merger import clean_array_tag, clean_tag_info
from mediatag.shared import TrackInfo


def test_first_non_empty_value_wins_in_key_order() -> None:
    results = {
        "id3v2": {"title": " Song ", "track": "0", "year": "2004-01-02"},
        "id3v1": {"title": "Other", "track": "7", "artist": "Band", "year": "1999"},
    }

    info = clean_tag_info(results, ["id3v2", "id3v1"])

    assert info.title == "Song"
    assert info.track == 7
    assert info.year == 2004
    assert info.artist == "Band"


def test_coercions_apply_per_field() -> None:
    results = {
        "tags": {
            "disk": "-2",
            "totaldisks": "3",
            "time": 215.7,
            "lyrics": "<i>one</i>\ntwo",
            "title": r"It\'s",
            "video_bitrate": "99999999999",
            "frame_rate": "23.976",
            "replaygain_track_gain": "0",
            "r128_album_gain": "-20",
        }
    }

    info = clean_tag_info(results, ["tags"])

    assert info.disk == 2
    assert info.totaldisks == 3
    assert info.time == 215
    assert info.lyrics == "one<br />\ntwo"
    assert info.title == "It's"
    assert info.video_bitrate == 4294967294
    assert info.frame_rate == 23.976
    assert info.replaygain_track_gain == 0.0
    assert info.r128_album_gain == -20


def test_zero_gain_is_not_overwritten_by_later_source() -> None:
    results = {
        "first": {"replaygain_track_gain": 0.0},
        "second": {"replaygain_track_gain": -4.0},
    }

    info = clean_tag_info(results, ["first", "second"])

    assert info.replaygain_track_gain == 0.0


def test_release_fields_skip_blank_values() -> None:
    results = {
        "first": {"release_type": "  ", "release_status": "official"},
        "second": {"release_type": "album"},
    }

    info = clean_tag_info(results, ["first", "second"])

    assert info.release_type == "album"
    assert info.release_status == "official"


def test_array_fields_are_taken_whole_from_first_source() -> None:
    results = {
        "first": {"genre": []},
        "second": {"genre": ["Rock", " Pop "], "artists": "Solo"},
        "third": {"genre": ["Jazz"]},
    }

    info = clean_tag_info(results, ["first", "second", "third"])

    assert info.genre == ["Rock", "Pop"]
    assert info.artists == ["Solo"]


def test_clean_array_tag_keeps_existing_values() -> None:
    assert clean_array_tag("genre", ["Rock"], {"genre": ["Jazz"]}) == ["Rock"]
    assert clean_array_tag("genre", [], {}) == []


def test_first_rating_mapping_wins() -> None:
    results = {
        "first": {"rating": {}},
        "second": {"rating": {"3": 4}},
        "third": {"rating": {5: 1.0}},
    }

    info = clean_tag_info(results, ["first", "second", "third"])

    assert info.rating == {3: 4.0}


def test_track_info_sources_are_merged_like_mappings() -> None:
    results = {
        "tags": TrackInfo(title="From tags", track=0),
        "filename": {"title": "From name", "track": "5"},
    }

    info = clean_tag_info(results, ["tags", "filename"])

    assert info.title == "From tags"
    assert info.track == 5


def test_custom_tags_only_kept_when_enabled() -> None:
    results = {"tags": {"title": "Song", "mood": "calm", "listy": ["a"]}}

    disabled = clean_tag_info(results, ["tags"])
    enabled = clean_tag_info(results, ["tags"], enable_custom_metadata=True)

    assert disabled.extra == {}
    assert enabled.extra == {"mood": "calm"}


def test_size_prefers_general_source_then_file(tmp_path: Path) -> None:
    media = tmp_path / "song.mp3"
    _ = media.write_bytes(b"x" * 42)

    from_general = clean_tag_info({"general": {"size": 1000}}, ["general"], str(media))
    from_file = clean_tag_info({"tags": {"title": "x"}}, ["tags"], str(media))
    missing = clean_tag_info({}, [], str(tmp_path / "missing.mp3"))

    assert from_general.size == 1000
    assert from_file.size == 42
    assert from_file.file == str(media)
    assert missing.size is None


def test_unknown_keys_are_ignored() -> None:
    info = clean_tag_info({"tags": {"title": "x"}}, ["absent", "tags"])

    assert info.title == "x"

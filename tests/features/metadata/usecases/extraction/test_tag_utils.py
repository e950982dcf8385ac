"""Tests for the tag coercion helpers."""

import pytest

from mediatag.features.metadata.usecases.extraction._tag_utils import (
    check_int,
    decode_date_year,
    get_mbid_array,
    normalize_year,
    parse_genres,
    parse_slash_separated,
    split_release_list,
    split_slashed_list,
    strip_slashes,
    strip_tags_keep_breaks,
    to_float,
    to_int,
    trim_ascii,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("3/12", 3), (" 07", 7), ("abc", 0), (None, 0), (["5", "6"], 5), (4.9, 4), (b"12", 12)],
)
def test_to_int_uses_leading_digits(value: object, expected: int) -> None:
    assert to_int(value) == expected


def test_to_float_keeps_none_and_reads_leading_number() -> None:
    assert to_float(None) is None
    assert to_float("-6.50 dB") == -6.5
    assert to_float("junk") == 0.0
    assert to_float(3) == 3.0


def test_normalize_year_rejects_out_of_range_values() -> None:
    assert normalize_year("1999-05-01") == 1999
    assert normalize_year("12345") == 0
    assert normalize_year("-5") == 0
    assert normalize_year("") == 0


def test_check_int_clamps() -> None:
    assert check_int("5000000000", 4294967294, 0) == 4294967294
    assert check_int("-3", 10, 0) == 0
    assert check_int("7", 10, 0) == 7


def test_parse_slash_separated() -> None:
    assert parse_slash_separated("3/12") == ("3", "12")
    assert parse_slash_separated("3") == ("3", None)
    assert parse_slash_separated("3/") == ("3", None)
    assert parse_slash_separated("") == (None, None)


def test_strip_slashes_unescapes() -> None:
    assert strip_slashes(r"Rock \'n\' Roll") == "Rock 'n' Roll"
    assert strip_slashes(r"back\\slash") == "back\\slash"


def test_strip_tags_keep_breaks() -> None:
    assert strip_tags_keep_breaks("<b>one</b>\ntwo") == "one<br />\ntwo"


def test_trim_ascii_removes_control_characters() -> None:
    assert trim_ascii("  MusicBrainz Album Id\x00 ") == "MusicBrainz Album Id"
    assert trim_ascii(None) == ""


def test_split_release_list() -> None:
    assert split_release_list("album/live") == "album, live"
    assert split_release_list(["album", "compilation"]) == "album, compilation"
    assert split_release_list(None) == ""


def test_split_slashed_list_uses_delimiter_regex() -> None:
    assert split_slashed_list("Rock / Pop;Jazz", r"[/;]") == ["Rock", "Pop", "Jazz"]
    assert split_slashed_list("Rock / Pop", None) == ["Rock / Pop"]


def test_split_slashed_list_rejects_broken_regex() -> None:
    with pytest.raises(ValueError, match="additional_delimiters"):
        _ = split_slashed_list("Rock", "[")


def test_parse_genres_splits_single_value_only() -> None:
    assert parse_genres(["Rock/Pop"], r"[/]") == ["Rock", "Pop"]
    assert parse_genres(["Rock/Pop", "Jazz"], r"[/]") == ["Rock/Pop", "Jazz"]
    assert parse_genres(["Folk, World, & Country"], r"[,]") == ["Folk World & Country"]


def test_get_mbid_array() -> None:
    mbid = "0383dadf-2a4e-4d10-a46a-e9e041da8eb3"
    assert get_mbid_array(f"junk {mbid} junk") == [mbid]
    assert get_mbid_array("not-an-id") == ["not-an-id"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2010-05-04", ("2010-05-04", "2010")),
        ("2010", ("2010-01-01", "2010")),
        ("2010-05", ("2010-05-01", "2010")),
        ("2010-05-04T10:00:00", ("2010-05-04", "2010")),
        ("unknown", (None, "unknown")),
        ("", (None, "")),
    ],
)
def test_decode_date_year(value: str, expected: tuple[str | None, str]) -> None:
    assert decode_date_year(value) == expected

"""Tag utility helpers.

Where: src/mediatag/features/metadata/usecases/extraction/_tag_utils.py
What: Pure coercion and splitting routines shared by cleaners and the merger.
Why: Tag values arrive as loosely typed strings; every consumer coerces them the same way.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime
from typing import Final

__all__ = [
    "check_int",
    "decode_date_year",
    "first_value",
    "get_mbid_array",
    "normalize_year",
    "parse_genres",
    "parse_slash_separated",
    "split_release_list",
    "split_slashed_list",
    "strip_slashes",
    "strip_tags_keep_breaks",
    "to_float",
    "to_int",
    "trim_ascii",
]

_LEADING_INT: Final[re.Pattern[str]] = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT: Final[re.Pattern[str]] = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)
_MBID: Final[re.Pattern[str]] = re.compile(
    r"[a-z0-9]{8}-[a-z0-9]{4}-[a-z0-9]{4}-[a-z0-9]{4}-[a-z0-9]{12}"
)
_NEWLINE: Final[re.Pattern[str]] = re.compile(r"(\r\n|\n\r|\n|\r)")
_NON_BREAK_TAG: Final[re.Pattern[str]] = re.compile(r"<(?!/?br\b)[^>]*>", re.IGNORECASE)
_NOISE: Final[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x80-\xff]")
_RELEASE_WORD_SPLIT: Final[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9*]")
_FOLK_GENRE: Final[str] = "Folk, World, & Country"


def first_value(data: object) -> object:
    """Return the first element of a list/tuple, or the value itself."""
    if isinstance(data, (list, tuple)):
        return data[0] if data else None
    return data


def to_int(value: object) -> int:
    """Coerce a tag value to int using its leading digits (``"3/12"`` -> 3).

    Anything without a leading number yields 0.
    """
    value = first_value(value)
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def to_float(value: object) -> float | None:
    """Coerce a tag value to float using its leading number; ``None`` stays ``None``."""
    value = first_value(value)
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    match = _LEADING_FLOAT.match(str(value))
    return float(match.group(1)) if match else 0.0


def normalize_year(value: object) -> int:
    """Return the year as an int in ``0..9999``; out-of-range or junk gives 0."""
    year = to_int(value)
    if year < 0 or year > 9999:
        return 0
    return year


def check_int(value: object, maximum: int, minimum: int) -> int:
    """Clamp an integer tag value into ``minimum..maximum``."""
    number = to_int(value)
    if number > maximum:
        return maximum
    if number < minimum:
        return minimum
    return number


def parse_slash_separated(value: object) -> tuple[str | None, str | None]:
    """Split a ``number/total`` value into its raw parts.

    Returns ``(None, None)`` for empty input and ``(number, None)`` when no
    total is present.
    """
    text = str(first_value(value) or "")
    if not text:
        return None, None
    parts = text.split("/")
    number = parts[0].strip() or None
    total = parts[1].strip() or None if len(parts) > 1 else None
    return number, total


def strip_slashes(text: str) -> str:
    """Un-quote a backslash-escaped string."""

    def _replace(match: re.Match[str]) -> str:
        char = match.group(1)
        return "\x00" if char == "0" else char

    return re.sub(r"\\(.?)", _replace, text, flags=re.DOTALL)


def strip_tags_keep_breaks(text: str) -> str:
    """Turn newlines into ``<br />`` and drop every other markup tag."""
    with_breaks = _NEWLINE.sub(r"<br />\1", text)
    return _NON_BREAK_TAG.sub("", with_breaks)


def trim_ascii(text: object) -> str:
    """Strip whitespace, then control and high-byte characters."""
    return _NOISE.sub("", str(text or "").strip())


def split_release_list(value: object) -> str:
    """Normalize a release type/status value to ``"word, word"`` form."""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    words = _RELEASE_WORD_SPLIT.split(str(value or ""))
    return ", ".join(word for word in words if word)


def split_slashed_list(data: str, delimiters: str | None) -> list[str]:
    """Split ``data`` on the configured delimiter regex.

    Raises:
        ValueError: When ``delimiters`` is not a valid regular expression.
    """
    if not delimiters:
        return [data]
    try:
        items = re.split(rf"\s?(?:{delimiters})\s?", data)
    except re.error as exc:
        raise ValueError(
            f"Pattern given in additional_delimiters is not functional: {exc}"
        ) from exc
    return [item.strip() for item in items]


def parse_genres(values: Sequence[object], delimiters: str | None) -> list[str]:
    """Clean a genre list, splitting a single combined value on the delimiters."""
    genres = [str(value).replace(_FOLK_GENRE, "Folk World & Country") for value in values]
    if len(genres) == 1:
        return split_slashed_list(genres[0], delimiters)
    return genres


def get_mbid_array(mbid: str) -> list[str]:
    """Extract the first MusicBrainz identifier, or wrap the input as is."""
    match = _MBID.search(mbid)
    if match:
        return [match.group(0)]
    return [mbid]


def decode_date_year(value: object) -> tuple[str | None, str]:
    """Read a date-like tag value.

    Returns:
        The ISO date (``None`` when unparseable) and the year to store: the
        parsed year for full dates, the value unchanged for year-only input.
    """
    raw = str(first_value(value) or "")
    compact = raw.replace(" ", "")
    iso_date: str | None = None
    year = raw
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(compact)
    except ValueError:
        match = re.match(r"^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?", compact)
        if match:
            try:
                parsed = datetime(
                    int(match.group(1)),
                    int(match.group(2) or 1),
                    int(match.group(3) or 1),
                )
            except ValueError:
                parsed = None
    if parsed is not None:
        iso_date = parsed.date().isoformat()
        if len(raw) > 4:
            year = f"{parsed.year:04d}"
    return iso_date, year

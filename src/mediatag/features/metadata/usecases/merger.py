"""Summary: Merge cleaned tag sources into one canonical TrackInfo record.
Why: Each canonical field must hold the first non-empty value in source priority order.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from typing import Final

from mediatag.platform.logging import logger
from mediatag.shared import TrackInfo

from .extraction._tag_utils import (
    check_int,
    first_value,
    normalize_year,
    strip_slashes,
    strip_tags_keep_breaks,
    to_float,
    to_int,
)
from .source_order import GENERAL_SOURCE

__all__ = ["clean_array_tag", "clean_tag_info", "SourceResults"]

SourceResults = Mapping[str, Mapping[str, object] | TrackInfo]

VIDEO_BITRATE_MAX: Final[int] = 4294967294
_ARRAY_FIELDS: Final[tuple[str, ...]] = ("genre", "artists")
_OPTIONAL_FIELDS: Final[frozenset[str]] = frozenset({"release_type", "release_status"})
# Filled after the walk from the stream facts or the file itself.
_SKIPPED_FIELDS: Final[frozenset[str]] = frozenset({"size", "rating", *_ARRAY_FIELDS})


def _text(value: object) -> str:
    value = first_value(value)
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _trimmed(value: object) -> str:
    return _text(value).strip()


def _optional_float(value: object) -> float | None:
    return None if value is None else to_float(value)


def _optional_int(value: object) -> int | None:
    return None if value is None else to_int(value)


_COERCERS: Final[dict[str, Callable[[object], object]]] = {
    "file": lambda value: _text(value) or None,
    "bitrate": to_int,
    "rate": to_int,
    "mode": lambda value: _text(value) or None,
    "mime": lambda value: _text(value) or None,
    "encoding": lambda value: _text(value) or None,
    "time": to_int,
    "channels": to_int,
    "original_name": lambda value: strip_slashes(_trimmed(value)),
    "title": lambda value: strip_slashes(_trimmed(value)),
    "year": normalize_year,
    "disk": lambda value: abs(to_int(value)),
    "totaldisks": to_int,
    "lyrics": lambda value: strip_tags_keep_breaks(_text(value)),
    "replaygain_track_gain": _optional_float,
    "replaygain_track_peak": _optional_float,
    "replaygain_album_gain": _optional_float,
    "replaygain_album_peak": _optional_float,
    "r128_track_gain": _optional_int,
    "r128_album_gain": _optional_int,
    "track": to_int,
    "totaltracks": to_int,
    "resolution_x": to_int,
    "resolution_y": to_int,
    "display_x": to_int,
    "display_y": to_int,
    "frame_rate": lambda value: to_float(value) or 0.0,
    "video_bitrate": lambda value: check_int(value, VIDEO_BITRATE_MAX, 0),
}


def clean_array_tag(name: str, current: list[str], tags: Mapping[str, object]) -> list[str]:
    """Take a multi-valued field whole from ``tags`` unless ``current`` already has one."""
    if current or not tags.get(name):
        return current
    value = tags[name]
    if isinstance(value, (list, tuple)):
        return [_trimmed(item) for item in value]
    return [_trimmed(value)]


def clean_tag_info(
    results: SourceResults,
    keys: Iterable[str],
    filename: str | None = None,
    *,
    enable_custom_metadata: bool = False,
) -> TrackInfo:
    """Merge ``results`` in ``keys`` order, first non-empty value per field.

    Args:
        results: Cleaned sources keyed by source or container name.
        keys: Source names in priority order (see ``get_tag_type``).
        filename: Path of the media file, used for ``file`` and the size fallback.
        enable_custom_metadata: Keep scalar tags without a canonical field in ``extra``.

    Returns:
        TrackInfo: The merged canonical record.
    """
    info = TrackInfo(file=filename)
    known_fields = TrackInfo.field_names()
    keys = list(keys)

    for key in keys:
        source = results.get(key)
        if source is None:
            continue
        tags: Mapping[str, object] = source.to_dict() if isinstance(source, TrackInfo) else source

        for name in known_fields:
            if name in _SKIPPED_FIELDS:
                continue
            if not TrackInfo.is_empty_value(name, getattr(info, name)):
                continue
            if name in _OPTIONAL_FIELDS and not _trimmed(tags.get(name)):
                continue
            value = tags.get(name)
            if value is None:
                continue
            coerce = _COERCERS.get(name, _trimmed)
            setattr(info, name, coerce(value))

        if not info.rating:
            rating = tags.get("rating")
            if isinstance(rating, Mapping) and rating:
                info.rating = {int(user): float(stars) for user, stars in rating.items()}

        for name in _ARRAY_FIELDS:
            setattr(info, name, clean_array_tag(name, getattr(info, name), tags))

        if enable_custom_metadata:
            for tag, value in tags.items():
                if tag in known_fields or tag in info.extra or tag == "raw":
                    continue
                if value is None or isinstance(value, (list, tuple, dict)):
                    continue
                info.extra[tag] = _trimmed(value)

    info.size = info.size or _resolve_size(results, keys, filename)
    return info


def _resolve_size(
    results: SourceResults, keys: list[str], filename: str | None
) -> int | None:
    """Prefer the analyzed file size over whatever a tag claims.

    The analyzed size lives in the ``general`` source, or in a record that
    was already merged from one.
    """
    general = results.get(GENERAL_SOURCE)
    if general is not None:
        size = general.size if isinstance(general, TrackInfo) else general.get("size")
        if size:
            return to_int(size)
    for key in keys:
        source = results.get(key)
        if isinstance(source, TrackInfo) and source.size:
            return source.size
    if not filename:
        return None
    try:
        return os.path.getsize(filename)
    except OSError as exc:
        logger.debug("Unable to read size of %s: %s", filename, exc)
        return None

"""Summary: Stream facts (bitrate, codecs, size, duration) for the ``general`` source.
Why: Technical facts come from the analysis itself, not from any tag container.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from typing import Final

from mediatag.platform.logging import logger
from mediatag.shared import RawAnalysis

from .extraction._tag_utils import to_float, to_int

__all__ = ["clean_type", "detect_type", "parse_general"]

_TYPE_ALIASES: Final[dict[str, str]] = {
    "mp3": "mp3",
    "mp2": "mp3",
    "mpeg3": "mp3",
    "vorbis": "ogg",
    "opus": "ogg",
    "asf": "asf",
    "wmv": "asf",
    "wma": "asf",
}
_KNOWN_TYPES: Final[frozenset[str]] = frozenset(
    {"flac", "flv", "mpg", "mpeg", "avi", "quicktime", "mp4", "m4a", "alac", "aac"}
)
_APE_FLOAT_ITEMS: Final[frozenset[str]] = frozenset(
    {
        "replaygain_track_gain",
        "replaygain_track_peak",
        "replaygain_album_gain",
        "replaygain_album_peak",
    }
)
_APE_INT_ITEMS: Final[frozenset[str]] = frozenset({"r128_track_gain", "r128_album_gain"})


def clean_type(type_name: str, filename: str | None = None) -> str:
    """Standardize a stream or container format name.

    Unknown names are passed through with a warning.
    """
    if type_name in _TYPE_ALIASES:
        return _TYPE_ALIASES[type_name]
    if type_name not in _KNOWN_TYPES:
        logger.warning("Unable to determine file type from %s on file %s", type_name, filename)
    return type_name


def detect_type(raw: RawAnalysis) -> str | None:
    """Pick the file type, trusting the video stream, then the audio, then the container."""
    candidates = (
        raw.video.dataformat,
        raw.audio_streams[0].dataformat if raw.audio_streams else None,
        raw.audio.dataformat,
        raw.fileformat,
    )
    for candidate in candidates:
        if candidate:
            return clean_type(candidate, raw.filename)
    return None


def parse_general(
    raw: RawAnalysis,
    filename: str,
    gather_types: Iterable[str] = (),
    *,
    forced_size: int | None = None,
    format_name: Callable[[str], str] | None = None,
) -> dict[str, object]:
    """Collect the stream facts of ``raw`` as a tag source.

    Args:
        raw: Analysis produced by the tag reader.
        filename: Path of the media file; its stem becomes the fallback title.
        gather_types: Catalog types; movies and TV shows get a formatted title.
        forced_size: Size overriding the analyzed one, also used to derive the duration.
        format_name: Video name formatter (``FilenameParser.format_video_name``).

    Returns:
        dict[str, object]: Canonical field names mapped to stream facts.
    """
    gather = set(gather_types)
    stem = os.path.splitext(os.path.basename(filename))[0]
    if format_name is not None and gather & {"movie", "tvshow"}:
        title = format_name(stem)
    else:
        title = stem

    mode = raw.audio.bitrate_mode
    if mode == "con":
        mode = "cbr"

    if forced_size:
        bitrate = raw.bitrate or raw.audio.bitrate
        playtime = (forced_size - raw.avdataoffset) * 8 / bitrate if bitrate else None
    else:
        playtime = raw.playtime_seconds

    parsed: dict[str, object] = {
        "title": title,
        "mode": mode,
        "bitrate": raw.audio.bitrate,
        "channels": to_int(raw.audio.channels),
        "rate": to_int(raw.audio.sample_rate),
        "size": forced_size or raw.filesize,
        "encoding": raw.encoding,
        "mime": raw.mime_type,
        "time": playtime,
        "audio_codec": raw.audio.dataformat,
        "video_codec": raw.video.dataformat,
        "resolution_x": raw.video.resolution_x,
        "resolution_y": raw.video.resolution_y,
        "display_x": raw.video.display_x,
        "display_y": raw.video.display_y,
        "frame_rate": raw.video.frame_rate,
        "video_bitrate": raw.video.bitrate,
    }

    for key, value in raw.ape_items.items():
        name = key.lower()
        if name in _APE_FLOAT_ITEMS:
            parsed[name] = to_float(value)
        elif name in _APE_INT_ITEMS:
            parsed[name] = None if value is None else to_int(value)

    return parsed

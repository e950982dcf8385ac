# Where: mediatag.shared.track_info
# What: Canonical TrackInfo record produced by merging every tag source.
# Why: Centralize the field vocabulary shared by cleaners, merger, plugins and UI.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar


@dataclass
class TrackInfo:
    """Canonical metadata for one media item."""

    file: str | None = None
    bitrate: int | None = None
    rate: int | None = None
    mode: str | None = None
    mime: str | None = None
    encoding: str | None = None
    rating: dict[int, float] = field(default_factory=dict)
    time: int | None = None
    channels: int | None = None

    original_name: str | None = None
    title: str | None = None
    year: int | None = None
    disk: int | None = None
    totaldisks: int | None = None
    artist: str | None = None
    albumartist: str | None = None
    album: str | None = None
    band: str | None = None
    composer: str | None = None
    publisher: str | None = None
    genre: list[str] = field(default_factory=list)

    mb_trackid: str | None = None
    isrc: str | None = None
    mb_albumid: str | None = None
    mb_albumid_group: str | None = None
    mb_artistid: str | None = None
    mb_albumartistid: str | None = None
    release_type: str | None = None
    release_status: str | None = None
    artists: list[str] = field(default_factory=list)
    original_year: str | None = None
    barcode: str | None = None
    catalog_number: str | None = None
    language: str | None = None
    comment: str | None = None
    lyrics: str | None = None

    replaygain_track_gain: float | None = None
    replaygain_track_peak: float | None = None
    replaygain_album_gain: float | None = None
    replaygain_album_peak: float | None = None
    r128_track_gain: int | None = None
    r128_album_gain: int | None = None

    track: int | None = None
    totaltracks: int | None = None
    resolution_x: int | None = None
    resolution_y: int | None = None
    display_x: int | None = None
    display_y: int | None = None
    frame_rate: float | None = None
    video_bitrate: int | None = None
    audio_codec: str | None = None
    video_codec: str | None = None
    description: str | None = None

    tvshow: str | None = None
    tvshow_year: str | None = None
    tvshow_season: str | None = None
    tvshow_episode: str | None = None
    release_date: str | None = None
    summary: str | None = None
    tvshow_summary: str | None = None
    tvshow_art: str | None = None
    tvshow_season_art: str | None = None
    art: str | None = None

    size: int | None = None

    # Custom tags that have no canonical field.
    extra: dict[str, str] = field(default_factory=dict)

    # Fields where zero is a measurement rather than a missing value.
    ZERO_IS_VALUE: ClassVar[frozenset[str]] = frozenset(
        {
            "replaygain_track_gain",
            "replaygain_track_peak",
            "replaygain_album_gain",
            "replaygain_album_peak",
            "r128_track_gain",
            "r128_album_gain",
        }
    )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of the canonical fields, ``extra`` excluded."""
        return tuple(f.name for f in fields(cls) if f.name != "extra")

    @classmethod
    def is_empty_value(cls, name: str, value: object) -> bool:
        """Tell whether ``value`` counts as missing for field ``name``."""
        if value is None:
            return True
        if name in cls.ZERO_IS_VALUE:
            return False
        if isinstance(value, bool):
            return not value
        if isinstance(value, (int, float)):
            return value == 0
        if isinstance(value, str):
            return value.strip() == ""
        if isinstance(value, (list, tuple, dict)):
            return len(value) == 0
        return False

    def get(self, name: str) -> object:
        """Return a canonical or custom field value by name."""
        if name in self.field_names():
            return getattr(self, name)
        return self.extra.get(name)

    def to_dict(self, *, include_empty: bool = True) -> dict[str, Any]:
        """Flatten the record into a plain mapping (custom tags included)."""
        result: dict[str, Any] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if not include_empty and self.is_empty_value(name, value):
                continue
            result[name] = value
        for key, value in self.extra.items():
            _ = result.setdefault(key, value)
        return result

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TrackInfo:
        """Build a record from a mapping, routing unknown keys to ``extra``."""
        known = set(cls.field_names())
        info = cls()
        for key, value in data.items():
            if key in known:
                setattr(info, key, value)
            elif value is not None and not isinstance(value, (list, dict)):
                info.extra[key] = str(value)
        return info


__all__ = ["TrackInfo"]

"""Per-container tag cleaners.

Where: src/mediatag/features/metadata/usecases/extraction/cleaners.py
What: Map each container's idiosyncratic field names onto the canonical field set.
Why: Keep format quirks in one table-driven class per container so the merger stays generic.
"""

from __future__ import annotations

import abc
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar, override

from mediatag.platform.logging import logger
from mediatag.shared import RawAnalysis, TagValue

from ._tag_utils import (
    decode_date_year,
    first_value,
    parse_genres,
    parse_slash_separated,
    split_release_list,
    split_slashed_list,
    to_float,
    to_int,
    trim_ascii,
)

__all__ = [
    "BaseTagCleaner",
    "CleanerContext",
    "GenericCleaner",
    "Id3v1Cleaner",
    "Id3v2Cleaner",
    "LyricsCleaner",
    "ParsedTags",
    "QuickTimeCleaner",
    "RiffCleaner",
    "VorbisCommentCleaner",
    "cleaner_for",
]

ParsedTags = dict[str, object]
UserLookup = Callable[[str], int | None]

MUSICBRAINZ_UFID_OWNER = "http://musicbrainz.org"
UNKNOWN_RATING_USER = -1
_UTF16_BOM = "\xff\xfe"
_IGNORED_TAGS = frozenset({"music_cd_identifier"})


@dataclass
class CleanerContext:
    """Everything a cleaner may consult besides the container's own fields."""

    raw: RawAnalysis = field(default_factory=RawAnalysis)
    delimiters: str | None = None
    enable_custom_metadata: bool = False
    rating_user: int | None = None
    user_lookup: UserLookup | None = None

    @property
    def rating_owner(self) -> int:
        """User id that receives ratings with no known owner."""
        return self.rating_user if self.rating_user else UNKNOWN_RATING_USER


class BaseTagCleaner(abc.ABC):
    """Base class for container cleaners.

    ``FIELD_MAP`` lists the plain renames (lowercased source name -> canonical
    name); subclasses handle everything that needs more than a rename in
    ``_clean_field``.
    """

    FIELD_MAP: ClassVar[dict[str, str]] = {}

    def __init__(self, context: CleanerContext | None = None) -> None:
        self.context: CleanerContext = context or CleanerContext()

    def clean(self, tags: Mapping[str, Sequence[TagValue]]) -> ParsedTags:
        """Return the canonical view of one container's fields."""
        parsed: ParsedTags = {}
        for tag, data in tags.items():
            values = list(data) if isinstance(data, (list, tuple)) else [data]
            if not values:
                continue
            name = tag.lower()
            if name in _IGNORED_TAGS:
                continue
            if self._clean_field(parsed, tag, name, values):
                continue
            target = self.FIELD_MAP.get(name)
            if target is not None:
                parsed[target] = values[0]
            else:
                parsed[self._default_key(tag)] = values[0]
        self._finish(parsed)
        return parsed

    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        """Handle fields that need more than a rename; return True when handled."""
        return False

    def _default_key(self, tag: str) -> str:
        return tag

    def _finish(self, parsed: ParsedTags) -> None:
        """Hook running after every field was visited."""

    def _genres(self, values: Sequence[TagValue]) -> list[str]:
        return parse_genres(values, self.context.delimiters)

    @staticmethod
    def _original_date(parsed: ParsedTags, value: TagValue) -> None:
        iso_date, year = decode_date_year(value)
        parsed["originaldate"] = iso_date
        parsed["original_year"] = parsed.get("original_year") or year


class GenericCleaner(BaseTagCleaner):
    """Cleaner for APE, ASF, Matroska, AVI, FLV, MPEG and unknown containers."""

    FIELD_MAP: ClassVar[dict[str, str]] = {
        "track_number": "track",
        "track": "track",
        "musicbrainz_artistid": "mb_artistid",
        "musicbrainz_albumid": "mb_albumid",
        "musicbrainz_albumartistid": "mb_albumartistid",
        "musicbrainz_releasegroupid": "mb_albumid_group",
        "musicbrainz_trackid": "mb_trackid",
    }

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        if name == "genre":
            parsed["genre"] = self._genres(values)
        elif name == "musicbrainz_albumtype":
            parsed["release_type"] = split_release_list(values[0])
        elif name == "musicbrainz_albumstatus":
            parsed["release_status"] = split_release_list(values[0])
        else:
            return False
        return True


class VorbisCommentCleaner(BaseTagCleaner):
    """Cleaner for Vorbis comments (FLAC, Ogg Vorbis, Opus, Speex)."""

    FIELD_MAP: ClassVar[dict[str, str]] = {
        "tracknumber": "track",
        "track_number": "track",
        "tracktotal": "totaltracks",
        "discnumber": "disk",
        "totaldiscs": "totaldisks",
        "disctotal": "totaldisks",
        "isrc": "isrc",
        "date": "year",
        "musicbrainz_artistid": "mb_artistid",
        "musicbrainz_albumid": "mb_albumid",
        "musicbrainz_albumartistid": "mb_albumartistid",
        "musicbrainz_releasegroupid": "mb_albumid_group",
        "musicbrainz_trackid": "mb_trackid",
        "unsyncedlyrics": "lyrics",
        "unsynced lyrics": "lyrics",
        "lyrics": "lyrics",
        "originalyear": "original_year",
        "barcode": "barcode",
        "catalognumber": "catalog_number",
        "label": "publisher",
        "organization": "publisher",
    }

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        if name == "genre":
            parsed["genre"] = self._genres(values)
        elif name in {"releasetype", "musicbrainz_albumtype"}:
            parsed["release_type"] = split_release_list(values[0])
        elif name in {"releasestatus", "musicbrainz_albumstatus"}:
            parsed["release_status"] = split_release_list(values[0])
        elif name == "originaldate":
            self._original_date(parsed, values[0])
        elif name == "rating":
            stars = math.floor((to_float(values[0]) or 0.0) * 5 / 100)
            parsed["rating"] = {self.context.rating_owner: float(stars)}
        else:
            return False
        return True

    @override
    def _finish(self, parsed: ParsedTags) -> None:
        replay_gain = self.context.raw.replay_gain
        if replay_gain.track_adjustment is not None:
            parsed["replaygain_track_gain"] = replay_gain.track_adjustment
        if replay_gain.track_peak is not None:
            parsed["replaygain_track_peak"] = replay_gain.track_peak
        if replay_gain.album_adjustment is not None:
            parsed["replaygain_album_gain"] = replay_gain.album_adjustment
        if replay_gain.album_peak is not None:
            parsed["replaygain_album_peak"] = replay_gain.album_peak


class Id3v1Cleaner(BaseTagCleaner):
    """ID3v1 already uses the canonical names; only the lists are unwrapped."""


class Id3v2Cleaner(BaseTagCleaner):
    """Cleaner for ID3v2 frames, including the raw TXXX, UFID and POPM frames."""

    FIELD_MAP: ClassVar[dict[str, str]] = {
        "track_number": "track",
        "totaltracks": "totaltracks",
        "isrc": "isrc",
        "comments": "comment",
        "unsynchronised_lyric": "lyrics",
        "originalyear": "original_year",
        "barcode": "barcode",
        "catalognumber": "catalog_number",
        "label": "publisher",
    }

    # TXXX descriptions copied verbatim into a canonical field.
    TXXX_TEXT_MAP: ClassVar[dict[str, str]] = {
        "musicbrainz album id": "mb_albumid",
        "musicbrainz release group id": "mb_albumid_group",
        "musicbrainz artist id": "mb_artistid",
        "musicbrainz album artist id": "mb_albumartistid",
        "musicbrainz album status": "release_status",
        "original_year": "original_year",
        "barcode": "barcode",
        "catalognumber": "catalog_number",
        "label": "publisher",
    }
    TXXX_FLOAT_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {
            "replaygain_track_gain",
            "replaygain_track_peak",
            "replaygain_album_gain",
            "replaygain_album_peak",
        }
    )
    TXXX_INT_FIELDS: ClassVar[frozenset[str]] = frozenset({"r128_track_gain", "r128_album_gain"})

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        if name == "genre":
            parsed["genre"] = self._genres(values)
        elif name == "part_of_a_set":
            disk, total = parse_slash_separated(values[0])
            parsed["disk"] = disk
            parsed["totaldisks"] = total
        elif name == "comment":
            parsed["comment"] = values[0]
        elif name == "composer":
            composer = values[0]
            parsed["composer"] = "" if composer == _UTF16_BOM else composer
        elif name in {"recording_time", "original_release_time", "originaldate"}:
            self._original_date(parsed, values[0])
        else:
            return False
        return True

    @override
    def _finish(self, parsed: ParsedTags) -> None:
        raw = self.context.raw

        for ufid in raw.ufid:
            if ufid.owner == MUSICBRAINZ_UFID_OWNER:
                parsed["mb_trackid"] = ufid.data

        for txxx in raw.txxx:
            self._clean_txxx(parsed, trim_ascii(txxx.description).lower(), txxx.value, txxx.text)

        ratings: dict[int, float] = {}
        for popm in raw.popm:
            stars = popm.rating / 255 * 5
            if popm.email and self.context.user_lookup is not None:
                user_id = self.context.user_lookup(popm.email)
                if user_id:
                    ratings[user_id] = stars
                    continue
            ratings[self.context.rating_owner] = stars
        if ratings:
            parsed["rating"] = ratings

    def _clean_txxx(
        self, parsed: ParsedTags, description: str, value: str, text: Sequence[str]
    ) -> None:
        if description == "artists":
            artists: list[str] = []
            for item in text:
                artists.extend(split_slashed_list(item, self.context.delimiters))
            parsed["artists"] = artists
        elif description == "musicbrainz album type":
            parsed["release_type"] = split_release_list(list(text) if len(text) > 1 else value)
        elif description in self.TXXX_TEXT_MAP:
            parsed[self.TXXX_TEXT_MAP[description]] = value
        elif description in self.TXXX_FLOAT_FIELDS:
            parsed[description] = to_float(value)
        elif description in self.TXXX_INT_FIELDS:
            parsed[description] = to_int(value)
        elif self.context.enable_custom_metadata and description not in parsed:
            parsed[description] = value


class QuickTimeCleaner(BaseTagCleaner):
    """Cleaner for QuickTime/MP4 atoms."""

    FIELD_MAP: ClassVar[dict[str, str]] = {
        "musicbrainz track id": "mb_trackid",
        "musicbrainz album id": "mb_albumid",
        "musicbrainz album artist id": "mb_albumartistid",
        "musicbrainz release group id": "mb_albumid_group",
        "musicbrainz artist id": "mb_artistid",
        "musicbrainz album status": "release_status",
        "isrc": "isrc",
        "album_artist": "albumartist",
        "originalyear": "original_year",
        "barcode": "barcode",
        "catalognumber": "catalog_number",
        "label": "publisher",
        "tv_episode": "tvshow_episode",
        "tv_season": "tvshow_season",
        "tv_show_name": "tvshow",
    }

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        if name == "genre":
            parsed["genre"] = self._genres(values)
        elif name == "creation_date":
            iso_date, year = decode_date_year(values[0])
            parsed["release_date"] = iso_date
            parsed["year"] = year
        elif name == "originaldate":
            self._original_date(parsed, values[0])
        elif name == "musicbrainz album type":
            parsed["release_type"] = split_release_list(values[0])
        elif name == "track_number":
            parsed["track"], parsed["totaltracks"] = parse_slash_separated(values[0])
        elif name == "disc_number":
            parsed["disk"], parsed["totaldisks"] = parse_slash_separated(values[0])
        else:
            return False
        return True

    @override
    def _default_key(self, tag: str) -> str:
        return tag.lower()


class RiffCleaner(BaseTagCleaner):
    """Cleaner for RIFF INFO chunks."""

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        # Only the exact chunk name maps; "Product" falls through to the default.
        if tag == "product":
            parsed["album"] = values[0]
            return True
        return False

    @override
    def _default_key(self, tag: str) -> str:
        return tag.lower()


class LyricsCleaner(BaseTagCleaner):
    """Cleaner for Lyrics3 blocks."""

    @override
    def _clean_field(
        self, parsed: ParsedTags, tag: str, name: str, values: list[TagValue]
    ) -> bool:
        if tag in {"unsyncedlyrics", "unsynced lyrics", "unsynchronised lyric"}:
            parsed["lyrics"] = first_value(values)
            return True
        return False


# container name -> (key the cleaned result is stored under, cleaner)
_CONTAINER_CLEANERS: dict[str, tuple[str, type[BaseTagCleaner]]] = {
    "ape": ("ape", GenericCleaner),
    "avi": ("avi", GenericCleaner),
    "flv": ("flv", GenericCleaner),
    "matroska": ("matroska", GenericCleaner),
    "vorbiscomment": ("vorbiscomment", VorbisCommentCleaner),
    "id3v1": ("id3v1", Id3v1Cleaner),
    "id3v2": ("id3v2", Id3v2Cleaner),
    "quicktime": ("quicktime", QuickTimeCleaner),
    "riff": ("riff", RiffCleaner),
    "mpg": ("mpeg", GenericCleaner),
    "mpeg": ("mpeg", GenericCleaner),
    "asf": ("asf", GenericCleaner),
    "wmv": ("asf", GenericCleaner),
    "wma": ("asf", GenericCleaner),
    "lyrics3": ("lyrics3", LyricsCleaner),
}


def cleaner_for(container: str) -> tuple[str, type[BaseTagCleaner]]:
    """Return the result key and cleaner class for a container name."""
    entry = _CONTAINER_CLEANERS.get(container.lower())
    if entry is None:
        logger.debug("Cleaning unrecognised tag type %s with the generic cleaner", container)
        return container, GenericCleaner
    return entry

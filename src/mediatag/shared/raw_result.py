"""Summary: Raw tag analysis value objects (reader -> cleaners).
Why: Give every container cleaner one typed view of what the tag library parsed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

# A single tag value as delivered by the reader. Multi-valued fields keep
# every value in order, scalar fields are wrapped in a one-item list.
TagValue = str | int | float | bytes
TagFields = dict[str, list[TagValue]]
RawTags = dict[str, TagFields]

__all__ = [
    "AudioStream",
    "PopmFrame",
    "RawAnalysis",
    "RawTags",
    "ReplayGain",
    "TagFields",
    "TagValue",
    "TxxxFrame",
    "UfidFrame",
    "VideoStream",
]


@dataclass(slots=True)
class AudioStream:
    """Audio stream facts reported by the tag library."""

    dataformat: str | None = None
    bitrate: int | None = None
    bitrate_mode: str | None = None
    channels: int | None = None
    sample_rate: int | None = None


@dataclass(slots=True)
class VideoStream:
    """Video stream facts reported by the tag library."""

    dataformat: str | None = None
    resolution_x: int | None = None
    resolution_y: int | None = None
    display_x: int | None = None
    display_y: int | None = None
    frame_rate: float | None = None
    bitrate: int | None = None


@dataclass(slots=True)
class ReplayGain:
    """Replay gain adjustment/peak values found outside of the tag frames."""

    track_adjustment: float | None = None
    track_peak: float | None = None
    album_adjustment: float | None = None
    album_peak: float | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.track_adjustment,
                self.track_peak,
                self.album_adjustment,
                self.album_peak,
            )
        )


@dataclass(frozen=True, slots=True)
class UfidFrame:
    """ID3v2 unique file identifier frame."""

    owner: str
    data: str


@dataclass(frozen=True, slots=True)
class TxxxFrame:
    """ID3v2 user-defined text frame."""

    description: str
    text: Sequence[str]

    @property
    def value(self) -> str:
        """First text value, or an empty string."""
        return self.text[0] if self.text else ""


@dataclass(frozen=True, slots=True)
class PopmFrame:
    """ID3v2 popularimeter frame (rating out of 255)."""

    email: str
    rating: int


@dataclass(slots=True)
class RawAnalysis:
    """Everything the tag library parsed out of one media file."""

    filename: str | None = None
    fileformat: str | None = None
    mime_type: str | None = None
    encoding: str | None = None
    filesize: int | None = None
    playtime_seconds: float | None = None
    bitrate: int | None = None
    avdataoffset: int = 0
    audio: AudioStream = field(default_factory=AudioStream)
    audio_streams: list[AudioStream] = field(default_factory=list)
    video: VideoStream = field(default_factory=VideoStream)
    tags: RawTags = field(default_factory=dict)
    replay_gain: ReplayGain = field(default_factory=ReplayGain)
    ape_items: dict[str, str] = field(default_factory=dict)
    ufid: list[UfidFrame] = field(default_factory=list)
    txxx: list[TxxxFrame] = field(default_factory=list)
    popm: list[PopmFrame] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True when nothing at all was read."""
        return self.fileformat is None and not self.tags

# Where: mediatag.shared.__init__
# What: Provide a concise import surface for shared value objects.
# Why: Reader, cleaners, merger and UI agree on one set of dataclasses.

"""Shared cross-cutting value objects exposed at the package level."""

from .raw_result import (
    AudioStream,
    PopmFrame,
    RawAnalysis,
    RawTags,
    ReplayGain,
    TagFields,
    TagValue,
    TxxxFrame,
    UfidFrame,
    VideoStream,
)
from .track_info import TrackInfo

__all__ = [
    "AudioStream",
    "PopmFrame",
    "RawAnalysis",
    "RawTags",
    "ReplayGain",
    "TagFields",
    "TagValue",
    "TrackInfo",
    "TxxxFrame",
    "UfidFrame",
    "VideoStream",
]

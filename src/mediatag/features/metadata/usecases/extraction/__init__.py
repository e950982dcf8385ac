"""Per-container tag cleaning and the value helpers it relies on."""

from .cleaners import (
    BaseTagCleaner,
    CleanerContext,
    GenericCleaner,
    Id3v1Cleaner,
    Id3v2Cleaner,
    LyricsCleaner,
    ParsedTags,
    QuickTimeCleaner,
    RiffCleaner,
    VorbisCommentCleaner,
    cleaner_for,
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

"""Media file metadata gathering.

Where: src/mediatag/features/metadata/usecases/media_info.py
What: Provide the MediaInfo facade wiring the reader, cleaners, filename parser, plugins and merger.
Why: Give callers one object that turns a media file into per-source results and a merged record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from mediatag.config.config import Config
from mediatag.platform.logging import logger
from mediatag.platform.tagreader import MutagenTagReader
from mediatag.shared import RawAnalysis, TagFields, TagValue, TrackInfo

from ..adapters.plugin_registry import PluginRegistry
from .encoding import detect_encoding, reencode
from .extraction._tag_utils import split_slashed_list
from .extraction.cleaners import CleanerContext, ParsedTags, UserLookup, cleaner_for
from .filename_parser import FilenameParser
from .general import detect_type, parse_general
from .merger import clean_tag_info
from .ports import RawTagReaderPort
from .source_order import OrderKey, get_tag_type, order_for

__all__ = ["BROKEN_ALBUM", "BROKEN_TITLE_PREFIX", "MediaInfo", "TAGS_SOURCE", "FILENAME_SOURCE"]

TAGS_SOURCE = "tags"
FILENAME_SOURCE = "filename"
BROKEN_TITLE_PREFIX = "**BROKEN** "
BROKEN_ALBUM = "Unknown (Broken)"

# Fields sampled when guessing the encoding of legacy tags.
_ENCODING_SAMPLE_FIELDS = ("artist", "album", "genre", "title")


class MediaInfo:
    """Gather metadata for one media file from every enabled tag source.

    Typical use::

        info = MediaInfo(path, ["music"])
        info.get_info()
        record = info.merged()
    """

    def __init__(
        self,
        file: str | Path,
        gather_types: Iterable[str] = (),
        *,
        config: Config | None = None,
        reader: RawTagReaderPort | None = None,
        plugins: PluginRegistry | None = None,
        user_lookup: UserLookup | None = None,
        encoding: str | None = None,
        id3v1_encoding: str | None = None,
        dir_pattern: str = "",
        file_pattern: str = "",
        is_local: bool = True,
    ) -> None:
        self.filename: str = str(file)
        self.gather_types: list[str] = list(gather_types)
        self.config: Config = config or Config.load()
        self.plugins: PluginRegistry = plugins or PluginRegistry()
        self.user_lookup: UserLookup | None = user_lookup
        self.encoding: str = encoding or self.config.site_charset
        self.encoding_id3v1: str | None = id3v1_encoding
        self.encoding_id3v2: str | None = None
        self.is_local: bool = is_local

        self.reader: RawTagReaderPort = reader or MutagenTagReader()

        self.filename_parser: FilenameParser = FilenameParser(
            self.gather_types,
            common_abbr=self.config.common_abbr,
            dir_pattern=dir_pattern,
            file_pattern=file_pattern,
            is_local=is_local,
        )

        self.type: str = ""
        self.broken: bool = False
        self.raw: RawAnalysis = RawAnalysis()
        # source name -> merged record or plain field mapping
        self.tags: dict[str, TrackInfo | dict[str, object]] = {}
        # container -> cleaned fields, kept from the last embedded-tags pass
        self.sources: dict[str, ParsedTags] = {}
        self._forced_size: int | None = None

    def force_size(self, size: int | None) -> None:
        """Use ``size`` instead of the analyzed size (and derive the duration from it)."""
        self._forced_size = size

    def metadata_order_key(self) -> OrderKey:
        if "music" in self.gather_types:
            return "metadata_order"
        return "metadata_order_video"

    def metadata_order(self) -> list[str]:
        """Tag sources in priority order for the current gather types."""
        return order_for(self.config, self.metadata_order_key())

    def read_raw(self) -> RawAnalysis:
        """Analyze the file; on failure mark it broken and return an empty analysis."""
        try:
            raw = self.reader.analyze(Path(self.filename))
        except Exception as exc:
            logger.error("Broken file detected: %s: %s", self.filename, exc)
            self.broken = True
            self.raw = RawAnalysis(filename=self.filename)
            return self.raw

        self._apply_encodings(raw)
        self.raw = raw
        return raw

    def get_info(self) -> dict[str, TrackInfo | dict[str, object]]:
        """Fill ``tags`` with one entry per enabled source and return it."""
        order = self.metadata_order()
        read_tags = TAGS_SOURCE in order and self.is_local

        if read_tags and not self.broken:
            _ = self.read_raw()
        if self.broken:
            self.tags = dict(self.set_broken())
            return self.tags

        self.type = detect_type(self.raw) or ""

        if FILENAME_SOURCE in order:
            self.tags[FILENAME_SOURCE] = self.filename_parser.parse(self.filename)

        if read_tags:
            self.tags[TAGS_SOURCE] = self._get_tags(self.raw)

        self._get_plugin_tags()
        return self.tags

    def merged(self) -> TrackInfo:
        """Merge every gathered source in metadata order."""
        return clean_tag_info(
            self.tags,
            get_tag_type(self.tags, self.metadata_order()),
            self.filename,
            enable_custom_metadata=self.config.enable_custom_metadata,
        )

    def set_broken(self) -> dict[str, dict[str, object]]:
        """Placeholder record for a file the reader could not analyze."""
        order = self.metadata_order()
        key = order[0] if order else TAGS_SOURCE
        return {
            key: {
                "title": f"{BROKEN_TITLE_PREFIX}{self.filename}",
                "album": BROKEN_ALBUM,
                "artist": BROKEN_ALBUM,
            }
        }

    def split_slashed_list(self, data: str, first_only: bool = True) -> str | list[str]:
        """Split ``data`` on the configured delimiters.

        Returns the first item by default, every item when ``first_only`` is False.
        """
        items = split_slashed_list(data, self.config.additional_delimiters)
        if first_only:
            return items[0] if items else data
        return items

    def _cleaner_context(self, raw: RawAnalysis) -> CleanerContext:
        return CleanerContext(
            raw=raw,
            delimiters=self.config.additional_delimiters,
            enable_custom_metadata=self.config.enable_custom_metadata,
            rating_user=self.config.rating_file_tag_user,
            user_lookup=self.user_lookup,
        )

    def _get_tags(self, raw: RawAnalysis) -> TrackInfo:
        """Clean every container of ``raw`` and merge them by tag order."""
        context = self._cleaner_context(raw)
        results: dict[str, ParsedTags] = {}
        for container, fields in raw.tags.items():
            key, cleaner_class = cleaner_for(container)
            logger.debug("Cleaning %s", key)
            results[key] = cleaner_class(context).clean(fields)

        results["general"] = parse_general(
            raw,
            self.filename,
            self.gather_types,
            forced_size=self._forced_size,
            format_name=self.filename_parser.format_video_name,
        )
        self.sources = results

        return clean_tag_info(
            results,
            get_tag_type(results, order_for(self.config, "tag_order")),
            self.filename,
            enable_custom_metadata=self.config.enable_custom_metadata,
        )

    def _get_plugin_tags(self) -> None:
        for plugin in self.plugins.plugins_for(self.metadata_order()):
            try:
                found = plugin.get_metadata(self.gather_types, self.merged())
            except Exception as exc:  # third-party code
                logger.error("Metadata plugin %s failed on %s: %s", plugin.name, self.filename, exc)
                continue
            if not isinstance(found, Mapping):
                logger.debug("Metadata plugin %s found nothing for %s", plugin.name, self.filename)
                continue
            self.tags[plugin.name.lower()] = dict(found)

    def _apply_encodings(self, raw: RawAnalysis) -> None:
        """Re-read legacy tag text with the detected (or given) encodings."""
        id3v1 = raw.tags.get("id3v1")
        if id3v1:
            if self.encoding_id3v1 is None:
                self.encoding_id3v1 = detect_encoding(
                    _sample(id3v1), self.config.detect_order
                )
            raw.tags["id3v1"] = _reencoded(id3v1, self.encoding_id3v1)

        id3v2 = raw.tags.get("id3v2")
        if id3v2 and self.config.detect_id3v2_encoding:
            self.encoding_id3v2 = detect_encoding(_sample(id3v2), self.config.detect_order)
            raw.tags["id3v2"] = _reencoded(id3v2, self.encoding_id3v2)


def _sample(fields: TagFields) -> list[list[TagValue]]:
    return [fields[name] for name in _ENCODING_SAMPLE_FIELDS if fields.get(name)]


def _reencoded(fields: TagFields, encoding: str) -> TagFields:
    return {
        name: [reencode(value, encoding) if isinstance(value, str) else value for value in values]
        for name, values in fields.items()
    }

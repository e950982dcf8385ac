# Where: mediatag.features.metadata.__init__
# What: Expose the metadata gathering facade and its building blocks.
# Why: Provide a cohesive import surface for UI and integration layers.

from mediatag.shared import RawAnalysis, TrackInfo

from .adapters import PluginRegistry
from .usecases import extraction
from .usecases.filename_parser import FilenameParser, parse_pattern, translate_pattern_code
from .usecases.general import clean_type, detect_type, parse_general
from .usecases.media_info import MediaInfo
from .usecases.merger import clean_tag_info
from .usecases.ports import MetadataPlugin, RawTagReaderPort, TagWriterPort
from .usecases.source_order import get_tag_type, order_for
from .usecases.tag_writing import prepare_metadata_for_writing

__all__ = [
    "FilenameParser",
    "MediaInfo",
    "MetadataPlugin",
    "PluginRegistry",
    "RawAnalysis",
    "RawTagReaderPort",
    "TagWriterPort",
    "TrackInfo",
    "clean_tag_info",
    "clean_type",
    "detect_type",
    "extraction",
    "get_tag_type",
    "order_for",
    "parse_general",
    "parse_pattern",
    "prepare_metadata_for_writing",
    "translate_pattern_code",
]

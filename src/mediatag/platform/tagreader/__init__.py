"""
Summary: Raw tag reader adapters.
Why: Isolate the tag library behind the RawTagReaderPort.
"""

from .mutagen_reader import MutagenTagReader

__all__ = ["MutagenTagReader"]

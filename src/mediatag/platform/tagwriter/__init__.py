"""
Summary: Tag writer adapters.
Why: Isolate the tag library behind the TagWriterPort.
"""

from .mutagen_writer import MutagenTagWriter

__all__ = ["MutagenTagWriter"]

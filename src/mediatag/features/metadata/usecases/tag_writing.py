"""Summary: Shape edited metadata into the tag-data layout the writers accept.
Why: Callers hand over plain field lists; writers expect one value per field plus described text frames.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypedDict

__all__ = ["TextFrame", "TagData", "prepare_metadata_for_writing"]


class TextFrame(TypedDict):
    """User-defined text entry (ID3 TXXX frame or a free Vorbis comment)."""

    data: object
    description: str
    encodingid: int


TagData = dict[str, list[object]]


def prepare_metadata_for_writing(frames: Mapping[str, object]) -> TagData:
    """Turn ``{field: values}`` into writer tag data.

    The ``text`` entry maps descriptions to values and becomes a list of
    ``TextFrame`` records; every other field keeps its first value.
    """
    prepared: TagData = {}
    for key, value in frames.items():
        if key == "text":
            text = value if isinstance(value, Mapping) else {}
            prepared["text"] = [
                TextFrame(data=data, description=str(description), encodingid=0)
                for description, data in text.items()
            ]
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            prepared[key] = [value[0]]
        else:
            prepared[key] = [value]
    return prepared

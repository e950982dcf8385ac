"""Mutagen-backed tag writer.

Where: src/mediatag/platform/tagwriter/mutagen_writer.py
What: Write prepared tag data as ID3v2.3 (mp3) or Vorbis comments (flac, oga, ogg).
Why: Keep the per-format frame mapping and save options behind the TagWriter port.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import ClassVar, final

import mutagen
from mutagen import MutagenError
from mutagen._vorbis import VCommentDict
from mutagen.apev2 import delete as delete_apev2
from mutagen.flac import FLAC
from mutagen.id3 import COMM, ID3, TXXX, USLT, Frames, ID3NoHeaderError

from mediatag.platform.logging import logger

__all__ = ["MutagenTagWriter"]

_UTF8 = 3


def _values(values: Sequence[object]) -> list[str]:
    return [str(value) for value in values if value is not None]


@final
class MutagenTagWriter:
    """Overwrite a file's tags with prepared tag data.

    Existing tags of the target format are replaced. MP3 files lose their
    ID3v1 and APEv2 tags but keep attached pictures; FLAC files lose their
    pictures.
    """

    EXTENSIONS: ClassVar[dict[str, str]] = {
        ".mp3": "id3v2.3",
        ".flac": "metaflac",
        ".oga": "vorbiscomment",
        ".ogg": "vorbiscomment",
    }

    ID3_FRAMES: ClassVar[dict[str, str]] = {
        "title": "TIT2",
        "artist": "TPE1",
        "album": "TALB",
        "band": "TPE2",
        "albumartist": "TPE2",
        "composer": "TCOM",
        "genre": "TCON",
        "track_number": "TRCK",
        "track": "TRCK",
        "part_of_a_set": "TPOS",
        "disk": "TPOS",
        "year": "TDRC",
        "original_year": "TDOR",
        "publisher": "TPUB",
        "isrc": "TSRC",
        "language": "TLAN",
        "bpm": "TBPM",
    }

    VORBIS_KEYS: ClassVar[dict[str, str]] = {
        "track_number": "TRACKNUMBER",
        "track": "TRACKNUMBER",
        "part_of_a_set": "DISCNUMBER",
        "disk": "DISCNUMBER",
        "year": "DATE",
        "band": "ALBUMARTIST",
        "unsynchronised_lyric": "LYRICS",
        "original_year": "ORIGINALYEAR",
        "publisher": "LABEL",
    }

    def write(self, path: Path, tag_data: Mapping[str, Sequence[object]]) -> bool:
        """Write ``tag_data`` into ``path``.

        Returns:
            bool: False when the extension is not writable, True otherwise.

        Raises:
            MutagenError: If the file cannot be parsed or saved.
        """
        tag_format = self.EXTENSIONS.get(path.suffix.lower())
        if tag_format is None:
            logger.debug(
                "Writing Tags: Files with %s extensions are currently ignored.", path.suffix
            )
            return False

        try:
            if tag_format == "id3v2.3":
                self._write_id3(path, tag_data)
            else:
                self._write_vorbis(path, tag_data, clear_pictures=tag_format == "metaflac")
        except MutagenError as exc:
            logger.error("Error writing tags to %s: %s", path, exc)
            raise

        logger.info(
            "Wrote %s tags to %s",
            tag_format,
            path,
            extra={"scan_event": "tags.write", "source_path": str(path)},
        )
        return True

    def _write_id3(self, path: Path, tag_data: Mapping[str, Sequence[object]]) -> None:
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            tags = ID3()

        for key in list(tags.keys()):
            if not key.startswith("APIC"):
                del tags[key]

        for key, values in tag_data.items():
            if key == "text":
                for entry in values:
                    if isinstance(entry, Mapping):
                        tags.add(
                            TXXX(
                                encoding=_UTF8,
                                desc=str(entry.get("description", "")),
                                text=_values([entry.get("data")]),
                            )
                        )
            elif key in {"comment", "comments"}:
                tags.add(COMM(encoding=_UTF8, lang="eng", desc="", text=_values(values)))
            elif key in {"unsynchronised_lyric", "lyrics"}:
                text = _values(values)
                if text:
                    tags.add(USLT(encoding=_UTF8, lang="eng", desc="", text=text[0]))
            elif key in self.ID3_FRAMES:
                frame_class = Frames[self.ID3_FRAMES[key]]
                tags.add(frame_class(encoding=_UTF8, text=_values(values)))
            else:
                logger.debug("No ID3 frame for %s; skipped", key)

        tags.update_to_v23()
        tags.save(path, v1=0, v2_version=3)
        delete_apev2(path)

    def _write_vorbis(
        self,
        path: Path,
        tag_data: Mapping[str, Sequence[object]],
        *,
        clear_pictures: bool,
    ) -> None:
        audio = FLAC(path) if clear_pictures else mutagen.File(path)
        if audio is None:
            raise MutagenError(f"Unsupported media format: {path}")
        if audio.tags is None:
            audio.add_tags()
        tags = audio.tags
        if not isinstance(tags, VCommentDict):
            raise MutagenError(f"{path} does not carry Vorbis comments")

        tags.clear()
        for key, values in tag_data.items():
            if key == "text":
                for entry in values:
                    if isinstance(entry, Mapping):
                        name = str(entry.get("description", "")).upper()
                        if name:
                            tags[name] = _values([entry.get("data")])
                continue
            tags[self.VORBIS_KEYS.get(key, key.upper())] = _values(values)

        if clear_pictures and isinstance(audio, FLAC):
            audio.clear_pictures()
        audio.save()

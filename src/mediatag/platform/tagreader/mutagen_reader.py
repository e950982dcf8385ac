"""Mutagen-backed raw tag reader.

Where: src/mediatag/platform/tagreader/mutagen_reader.py
What: Turn a mutagen file object into the container-keyed RawAnalysis the cleaners consume.
Why: Keep every mutagen type check in one adapter so cleaners only see plain names and values.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import ClassVar, Final, final

import mutagen
from mutagen import FileType, MutagenError
from mutagen._vorbis import VCommentDict
from mutagen.apev2 import APEv2, APETextValue
from mutagen.asf import ASFTags
from mutagen.id3 import ID3, ParseID3v1
from mutagen.mp4 import MP4FreeForm, MP4Tags

from mediatag.platform.logging import logger
from mediatag.shared import (
    AudioStream,
    PopmFrame,
    RawAnalysis,
    ReplayGain,
    TagFields,
    TagValue,
    TxxxFrame,
    UfidFrame,
)

__all__ = ["MutagenTagReader"]

ID3V1_BLOCK_SIZE: Final[int] = 128
_FREEFORM_PREFIX: Final[str] = "----:com.apple.iTunes:"
_BITRATE_MODES: Final[dict[int, str]] = {1: "cbr", 2: "vbr", 3: "abr"}
_MP3_LAYERS: Final[dict[int, str]] = {1: "mp1", 2: "mp2", 3: "mp3"}
_GAIN: Final[re.Pattern[str]] = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)")


def _text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _gain(values: list[TagValue] | None) -> float | None:
    """Read a replay gain comment such as ``"-6.50 dB"``."""
    if not values:
        return None
    match = _GAIN.match(_text(values[0]))
    return float(match.group(1)) if match else None


def _add(fields: TagFields, name: str, values: list[TagValue]) -> None:
    values = [value for value in values if value != ""]
    if values:
        fields.setdefault(name, []).extend(values)


@final
class MutagenTagReader:
    """Analyze media files with mutagen.

    Every container mutagen finds becomes one entry of ``RawAnalysis.tags``
    keyed by container name (``id3v1``, ``id3v2``, ``vorbiscomment``,
    ``quicktime``, ``ape``, ``asf``), with field names in the vocabulary the
    matching cleaner expects.
    """

    # mutagen class name -> container format
    FILE_FORMATS: ClassVar[dict[str, str]] = {
        "MP3": "mp3",
        "EasyMP3": "mp3",
        "FLAC": "flac",
        "OggVorbis": "ogg",
        "OggOpus": "ogg",
        "OggFLAC": "ogg",
        "OggSpeex": "ogg",
        "OggTheora": "ogg",
        "MP4": "mp4",
        "EasyMP4": "mp4",
        "ASF": "asf",
        "MonkeysAudio": "mac",
        "WavPack": "wavpack",
        "Musepack": "mpc",
        "OptimFROG": "ofr",
        "TrueAudio": "tta",
        "WAVE": "riff",
        "AIFF": "aiff",
        "DSF": "dsf",
        "DSDIFF": "dsdiff",
        "AAC": "aac",
        "AC3": "ac3",
    }

    # mutagen class name -> audio stream format, where it does not depend on the stream
    AUDIO_FORMATS: ClassVar[dict[str, str]] = {
        "FLAC": "flac",
        "OggVorbis": "vorbis",
        "OggOpus": "opus",
        "OggFLAC": "flac",
        "OggSpeex": "speex",
        "ASF": "wma",
        "MonkeysAudio": "mac",
        "WavPack": "wavpack",
        "Musepack": "mpc",
        "OptimFROG": "ofr",
        "TrueAudio": "tta",
        "WAVE": "wav",
        "AIFF": "aiff",
        "DSF": "dsd",
        "DSDIFF": "dsd",
        "AAC": "aac",
        "AC3": "ac3",
    }

    ID3_FRAMES: ClassVar[dict[str, str]] = {
        "TIT1": "content_group_description",
        "TIT2": "title",
        "TIT3": "subtitle",
        "TPE1": "artist",
        "TPE2": "band",
        "TPE3": "conductor",
        "TALB": "album",
        "TCOM": "composer",
        "TEXT": "lyricist",
        "TRCK": "track_number",
        "TPOS": "part_of_a_set",
        "TDRC": "year",
        "TYER": "year",
        "TDOR": "original_release_time",
        "TORY": "originalyear",
        "TSRC": "isrc",
        "TPUB": "publisher",
        "TLAN": "language",
        "TBPM": "bpm",
        "TKEY": "initial_key",
        "TMED": "media_type",
        "TENC": "encoded_by",
        "TSSE": "encoder_settings",
        "TCOP": "copyright_message",
    }

    MP4_ATOMS: ClassVar[dict[str, str]] = {
        "\xa9nam": "title",
        "\xa9ART": "artist",
        "aART": "album_artist",
        "\xa9alb": "album",
        "\xa9day": "creation_date",
        "\xa9gen": "genre",
        "\xa9wrt": "composer",
        "\xa9cmt": "comment",
        "\xa9lyr": "lyrics",
        "\xa9too": "encoding_tool",
        "\xa9grp": "grouping",
        "cprt": "copyright",
        "desc": "description",
        "ldes": "long_description",
        "tvsh": "tv_show_name",
        "tvsn": "tv_season",
        "tves": "tv_episode",
        "tven": "tv_episode_id",
        "tvnn": "tv_network_name",
        "tmpo": "bpm",
    }

    ASF_ATTRIBUTES: ClassVar[dict[str, str]] = {
        "title": "title",
        "author": "artist",
        "description": "comment",
        "copyright": "copyright",
        "wm/albumtitle": "album",
        "wm/albumartist": "albumartist",
        "wm/genre": "genre",
        "wm/tracknumber": "track_number",
        "wm/year": "year",
        "wm/composer": "composer",
        "wm/publisher": "publisher",
        "wm/partofset": "disk",
        "wm/isrc": "isrc",
        "wm/lyrics": "lyrics",
        "wm/language": "language",
        "musicbrainz/track id": "musicbrainz_trackid",
        "musicbrainz/artist id": "musicbrainz_artistid",
        "musicbrainz/album id": "musicbrainz_albumid",
        "musicbrainz/album artist id": "musicbrainz_albumartistid",
        "musicbrainz/release group id": "musicbrainz_releasegroupid",
        "musicbrainz/album type": "musicbrainz_albumtype",
        "musicbrainz/album status": "musicbrainz_albumstatus",
    }

    def __init__(self, encoding: str = "UTF-8") -> None:
        """Remember the charset reported for the decoded text."""
        self.encoding: str = encoding

    def analyze(self, path: Path) -> RawAnalysis:
        """Read stream facts and every tag container of ``path``.

        Raises:
            FileNotFoundError: If ``path`` is not a file.
            MutagenError: If mutagen cannot parse the file or does not know the format.
        """
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")

        try:
            audio = mutagen.File(path)
        except MutagenError as exc:
            logger.error("Failed to analyze %s: %s", path, exc)
            raise
        if audio is None:
            raise MutagenError(f"Unsupported media format: {path}")

        raw = RawAnalysis(
            filename=str(path),
            filesize=path.stat().st_size,
            encoding=self.encoding,
        )
        self._read_stream(audio, raw)

        tags = audio.tags
        if isinstance(tags, ID3):
            raw.avdataoffset = tags.size
            if tags.version >= (2, 0, 0):
                self._read_id3v2(tags, raw)
        elif isinstance(tags, VCommentDict):
            raw.tags["vorbiscomment"] = self._read_vorbis(tags, raw)
        elif isinstance(tags, MP4Tags):
            raw.tags["quicktime"] = self._read_mp4(tags)
        elif isinstance(tags, APEv2):
            raw.tags["ape"] = self._read_ape(tags, raw)
        elif isinstance(tags, ASFTags):
            raw.tags["asf"] = self._read_asf(tags)
        elif tags is not None:
            logger.debug("No reader for %s tags in %s", type(tags).__name__, path)

        id3v1 = self._read_id3v1(path)
        if id3v1:
            raw.tags["id3v1"] = id3v1

        # Empty containers carry nothing for the cleaners.
        raw.tags = {name: fields for name, fields in raw.tags.items() if fields}
        logger.debug("Analyzed %s: %s containers %s", path, raw.fileformat, list(raw.tags))
        return raw

    def _read_stream(self, audio: FileType, raw: RawAnalysis) -> None:
        kind = type(audio).__name__
        info = audio.info
        raw.fileformat = self.FILE_FORMATS.get(kind, kind.lower())
        raw.mime_type = audio.mime[0] if audio.mime else None
        raw.playtime_seconds = getattr(info, "length", None)
        raw.bitrate = getattr(info, "bitrate", None) or None

        if kind in {"MP3", "EasyMP3"}:
            dataformat = _MP3_LAYERS.get(getattr(info, "layer", 3), "mp3")
        elif kind in {"MP4", "EasyMP4"}:
            codec = str(getattr(info, "codec", "") or "")
            if codec.startswith("mp4a"):
                dataformat = "aac"
            else:
                dataformat = codec.replace("-", "") or "mp4"
        else:
            dataformat = self.AUDIO_FORMATS.get(kind, raw.fileformat)

        mode = getattr(info, "bitrate_mode", None)
        raw.audio = AudioStream(
            dataformat=dataformat,
            bitrate=raw.bitrate,
            bitrate_mode=_BITRATE_MODES.get(mode) if isinstance(mode, int) else None,
            channels=getattr(info, "channels", None),
            sample_rate=getattr(info, "sample_rate", None),
        )
        raw.audio_streams = [raw.audio]

        if kind == "OggTheora":
            raw.video.dataformat = "theora"
            raw.video.frame_rate = getattr(info, "fps", None)
            raw.video.bitrate = getattr(info, "bitrate", None)
            raw.audio_streams = []

    def _read_id3v2(self, tags: ID3, raw: RawAnalysis) -> None:
        fields: TagFields = {}
        for frame_id, name in self.ID3_FRAMES.items():
            for frame in tags.getall(frame_id):
                _add(fields, name, [str(text) for text in frame.text])

        for frame in tags.getall("TCON"):
            _add(fields, "genre", list(frame.genres))

        # Player bookkeeping comments (iTunNORM and friends) are not user text.
        comments = [
            frame for frame in tags.getall("COMM") if not frame.desc.startswith("iTun")
        ]
        comments.sort(key=lambda frame: frame.desc != "")
        for frame in comments:
            _add(fields, "comment", [str(text) for text in frame.text])

        for frame in tags.getall("USLT"):
            _add(fields, "unsynchronised_lyric", [str(frame.text)])

        raw.tags["id3v2"] = fields
        raw.ufid = [
            UfidFrame(owner=frame.owner, data=_text(frame.data))
            for frame in tags.getall("UFID")
        ]
        raw.txxx = [
            TxxxFrame(description=frame.desc, text=[str(text) for text in frame.text])
            for frame in tags.getall("TXXX")
        ]
        raw.popm = [
            PopmFrame(email=frame.email, rating=int(frame.rating))
            for frame in tags.getall("POPM")
        ]

        for frame in tags.getall("RVA2"):
            if frame.channel != 1:
                continue
            if frame.desc.lower() == "track":
                raw.replay_gain.track_adjustment = frame.gain
                raw.replay_gain.track_peak = frame.peak
            elif frame.desc.lower() == "album":
                raw.replay_gain.album_adjustment = frame.gain
                raw.replay_gain.album_peak = frame.peak

    def _read_vorbis(self, tags: VCommentDict, raw: RawAnalysis) -> TagFields:
        fields: TagFields = {}
        for key, value in tags:
            _add(fields, key.lower(), [value])
        raw.replay_gain = ReplayGain(
            track_adjustment=_gain(fields.get("replaygain_track_gain")),
            track_peak=_gain(fields.get("replaygain_track_peak")),
            album_adjustment=_gain(fields.get("replaygain_album_gain")),
            album_peak=_gain(fields.get("replaygain_album_peak")),
        )
        return fields

    def _read_mp4(self, tags: MP4Tags) -> TagFields:
        fields: TagFields = {}
        for key, values in tags.items():
            if key in {"trkn", "disk"}:
                name = "track_number" if key == "trkn" else "disc_number"
                for number, total in values:
                    _add(fields, name, [f"{number}/{total}" if total else str(number)])
            elif key.startswith(_FREEFORM_PREFIX):
                name = key[len(_FREEFORM_PREFIX):].lower()
                _add(fields, name, [_text(value) for value in values if isinstance(value, MP4FreeForm)])
            elif key in self.MP4_ATOMS:
                items = values if isinstance(values, list) else [values]
                _add(fields, self.MP4_ATOMS[key], [_text(value) for value in items])
        return fields

    def _read_ape(self, tags: APEv2, raw: RawAnalysis) -> TagFields:
        fields: TagFields = {}
        for key, value in tags.items():
            if not isinstance(value, APETextValue):
                continue
            name = key.lower()
            values: list[TagValue] = list(value)
            _add(fields, name, values)
            if values:
                raw.ape_items[name] = str(values[0])
        return fields

    def _read_asf(self, tags: ASFTags) -> TagFields:
        fields: TagFields = {}
        for key, values in tags.as_dict().items():
            name = key.lower()
            _add(fields, self.ASF_ATTRIBUTES.get(name, name), [str(value) for value in values])
        return fields

    def _read_id3v1(self, path: Path) -> TagFields:
        """Read the trailing ID3v1 block, text decoded as latin-1."""
        try:
            with open(path, "rb") as handle:
                _ = handle.seek(0, 2)
                if handle.tell() < ID3V1_BLOCK_SIZE:
                    return {}
                _ = handle.seek(-ID3V1_BLOCK_SIZE, 2)
                data = handle.read(ID3V1_BLOCK_SIZE)
        except OSError as exc:
            logger.debug("Unable to read ID3v1 block of %s: %s", path, exc)
            return {}

        if not data.startswith(b"TAG"):
            return {}
        frames = ParseID3v1(data)
        if not frames:
            return {}

        fields: TagFields = {}
        names = {"TIT2": "title", "TPE1": "artist", "TALB": "album", "TDRC": "year", "TRCK": "track"}
        for frame_id, name in names.items():
            frame = frames.get(frame_id)
            if frame is not None:
                _add(fields, name, [str(text) for text in frame.text])
        if "COMM" in frames:
            _add(fields, "comment", [str(text) for text in frames["COMM"].text])
        if "TCON" in frames:
            _add(fields, "genre", list(frames["TCON"].genres))
        return fields

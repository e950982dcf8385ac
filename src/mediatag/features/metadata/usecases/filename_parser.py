"""Summary: Extract metadata from file and directory naming conventions.
Why: Media without usable tags still carries title, track, disc, season and episode in its path.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Final

from mediatag.platform.logging import logger

__all__ = [
    "FilenameParser",
    "PATTERN_CODES",
    "parse_pattern",
    "translate_pattern_code",
]

PATTERN_CODES: Final[dict[str, str | None]] = {
    "%a": "artist",
    "%A": "album",
    "%b": "barcode",
    "%c": "comment",
    "%C": "catalog_number",
    "%d": "disk",
    "%g": "genre",
    "%o": None,
    "%r": "release_type",
    "%R": "release_status",
    "%t": "title",
    "%T": "track",
    "%y": "year",
    "%Y": "original_year",
}

_CODE: Final[re.Pattern[str]] = re.compile(r"(%\w)")
_SEP: Final[str] = r"[._\s\-]"

_TV_YEAR: Final[re.Pattern[str]] = re.compile(r"(?<=[(\[<{])[12][0-9]{3}|[12][0-9]{3}")
_TV_SXXEYY: Final[re.Pattern[str]] = re.compile(r"[Ss](\d+)[Ee](\d+)")
_TV_SXXEYY_SPLIT: Final[re.Pattern[str]] = re.compile(r"(?:^|[._\s])[Ss]\d+[._]*[Ee]\d+")
_TV_NXM: Final[re.Pattern[str]] = re.compile(rf"(?:^|{_SEP})(\d{{1,2}})[xX](\d{{1,2}})")
_TV_NXM_SPLIT: Final[re.Pattern[str]] = re.compile(rf"(?:^|{_SEP})\d+[xX]\d{{2}}{_SEP}*")
_TV_SEASON_EPISODE: Final[re.Pattern[str]] = re.compile(
    rf"[Ss]eason{_SEP}(\d+){_SEP}?\s?[Ee]pisode{_SEP}?(\d+){_SEP}?"
)
_TV_SEASON_EPISODE_SPLIT: Final[re.Pattern[str]] = re.compile(
    rf"(?:^|{_SEP})[Ss]eason{_SEP}\d+{_SEP}?\s?[Ee]pisode{_SEP}\d+{_SEP}*"
)
_TV_THREE_DIGIT: Final[re.Pattern[str]] = re.compile(rf"{_SEP}(\d)(\d\d){_SEP}*")
_TV_THREE_DIGIT_STRICT: Final[re.Pattern[str]] = re.compile(rf"{_SEP}(\d)(\d\d){_SEP}")
_TV_THREE_DIGIT_SPLIT: Final[re.Pattern[str]] = re.compile(rf"{_SEP}\d{{3}}{_SEP}")
_TV_SEASON_FOLDER: Final[re.Pattern[str]] = re.compile(
    r"[/\\]([^/\\]*)[/\\]Season (\d{1,2})[/\\]((E|Ep|Episode)\s?(\d{1,2})[/\\])?",
    re.IGNORECASE,
)
_TV_LEADING_EPISODE: Final[re.Pattern[str]] = re.compile(r"^(\d\d)[_\-.\s]?(.*)")
_TV_ANY_EPISODE: Final[re.Pattern[str]] = re.compile(r"(\d)(\d\d)[_\-.\s]?")
_YEAR_WORD: Final[str] = r"[12][0-9]{3}"


def translate_pattern_code(code: str) -> str | None:
    """Map a ``%x`` pattern code to its canonical field (``None`` = ignore)."""
    return PATTERN_CODES.get(code)


def _code_regex(code: str) -> str:
    if code == "%d":
        return r"([0-9]?)"
    if code in {"%T", "%y", "%Y"}:
        return r"([0-9]+?)"
    return r"(.+?)"


def parse_pattern(filepath: str, dir_pattern: str, file_pattern: str) -> dict[str, str]:
    """Read fields from ``filepath`` using ``%x`` directory and file patterns.

    Example: ``parse_pattern("/m/Abba/Gold/03 - SOS.mp3", "%a/%A", "%T - %t")``
    gives artist, album, track and title.
    """
    if not dir_pattern and not file_pattern:
        return {}

    pattern = f"{dir_pattern}/{file_pattern}" if dir_pattern else file_pattern
    path = filepath.replace(os.sep, "/")

    # Keep only as many trailing path parts as the pattern describes.
    depth = pattern.count("/") + 1
    parts = path.split("/")
    if len(parts) > depth:
        path = "/".join(parts[-depth:])

    elements: list[str] = []
    regex_parts: list[str] = []
    for piece in _CODE.split(pattern):
        if _CODE.fullmatch(piece):
            elements.append(piece)
            regex_parts.append(_code_regex(piece))
        elif piece:
            regex_parts.append(re.escape(piece).replace("\\ ", r"\s"))
    regex = "".join(regex_parts) + r"\..+$"

    match = re.search(regex, path)
    logger.debug("Checking %s on %s: %s", regex, path, "matched" if match else "no match")

    results: dict[str, str] = {}
    if match is None:
        return results

    for code, value in zip(elements, match.groups()):
        key = translate_pattern_code(code)
        if key is not None:
            results[key] = value
    results["title"] = results.get("title") or os.path.basename(path)
    return results


class FilenameParser:
    """Parse the ``filename`` tag source for the requested gather types."""

    def __init__(
        self,
        gather_types: Iterable[str] = (),
        *,
        common_abbr: Iterable[str] = (),
        dir_pattern: str = "",
        file_pattern: str = "",
        is_local: bool = True,
    ) -> None:
        self.gather_types: tuple[str, ...] = tuple(gather_types)
        self.common_abbr: tuple[str, ...] = tuple(common_abbr)
        self.dir_pattern: str = dir_pattern
        self.file_pattern: str = file_pattern
        self.is_local: bool = is_local
        self._abbr_patterns: list[re.Pattern[str]] = self._compile_abbreviations()

    def parse(self, filepath: str) -> dict[str, object]:
        """Return the fields the path reveals for every requested gather type."""
        results: dict[str, object] = {}
        file = os.path.splitext(os.path.basename(filepath))[0]

        if "tvshow" in self.gather_types:
            results.update(self._parse_tvshow(filepath, file))

        if "movie" in self.gather_types:
            name = self.format_video_name(file)
            results["original_name"] = name
            results["title"] = name

        if "music" in self.gather_types or "clip" in self.gather_types:
            results.update(parse_pattern(filepath, self.dir_pattern, self.file_pattern))
            if self.is_local:
                try:
                    results["size"] = os.path.getsize(filepath)
                except OSError as exc:
                    logger.debug("Unable to read size of %s: %s", filepath, exc)

        return results

    def _parse_tvshow(self, filepath: str, file: str) -> dict[str, object]:
        results: dict[str, object] = {}
        year = _TV_YEAR.search(filepath)
        results["year"] = int(year.group(0)) if year else None

        season: str | None = None
        episode: str | None = None
        temp: list[str] = []

        if match := _TV_SXXEYY.search(file):
            temp = _TV_SXXEYY_SPLIT.split(file, maxsplit=1)
            season, episode = match.group(1), match.group(2)
        elif match := _TV_NXM.search(file):
            temp = _TV_NXM_SPLIT.split(file, maxsplit=1)
            season, episode = match.group(1), match.group(2)
        elif match := _TV_SEASON_EPISODE.search(file):
            temp = _TV_SEASON_EPISODE_SPLIT.split(file, maxsplit=2)
            season, episode = match.group(1), match.group(2)
        elif match := _TV_THREE_DIGIT.search(file):
            temp = _TV_THREE_DIGIT_SPLIT.split(file)
            season = match.group(1)
            if strict := _TV_THREE_DIGIT_STRICT.search(file):
                season, episode = strict.group(1), strict.group(2)

        tvshow = self.format_video_name(temp[0]) if temp else ""
        original_name = self.format_video_name(temp[1]) if len(temp) > 1 else ""

        if not tvshow:
            folders = [part for part in re.split(r"[/\\]", filepath) if part]
            if season and episode:
                # Season and episode are known, so the show is the parent folder.
                if len(folders) > 1:
                    tvshow = self.format_video_name(folders[-2])
            elif folder := _TV_SEASON_FOLDER.search(filepath):
                tvshow = self.format_video_name(folder.group(1))
                season = folder.group(2)
                if folder.group(5):
                    episode = folder.group(5)
                elif leading := _TV_LEADING_EPISODE.match(file):
                    episode = leading.group(1)
                    original_name = self.format_video_name(leading.group(2))
                elif any_episode := _TV_ANY_EPISODE.search(file):
                    episode = any_episode.group(2)

        results["tvshow_season"] = season
        results["tvshow_episode"] = episode
        results["tvshow"] = tvshow or None
        results["original_name"] = original_name or None
        results["title"] = tvshow or None
        return results

    def _compile_abbreviations(self) -> list[re.Pattern[str]]:
        patterns: list[re.Pattern[str]] = []
        for abbr in [*self.common_abbr, _YEAR_WORD]:
            word = abbr.replace("\n", "").strip()
            if not word:
                continue
            try:
                re.compile(word)
            except re.error:
                word = re.escape(word)
            patterns.append(
                re.compile(rf"[\[(<{{]*\b(?:{word})\b[\])>}}]*", re.IGNORECASE)
            )
        return patterns

    def remove_common_abbreviations(self, name: str) -> str:
        """Drop release-group words and years, bracketed or not."""
        for pattern in self._abbr_patterns:
            name = pattern.sub("", name)
        return name

    def format_video_name(self, name: str | None) -> str:
        """Turn a dotted/underscored release name into a readable title."""
        if not name:
            return ""
        spaced = re.sub(r"[._\-]", " ", name)
        cleaned = self.remove_common_abbreviations(spaced)
        cleaned = re.sub(r"\s+", " ", cleaned).strip(" \t\n\r\0\x0b._-")
        return re.sub(r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), cleaned)

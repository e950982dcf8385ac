"""Summary: Guess the text encoding of legacy tag values.
Why: ID3v1 (and some ID3v2) tags carry bytes in whatever codec the tagger used.
"""

from __future__ import annotations

import codecs
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Final

from mediatag.platform.logging import logger

__all__ = ["FALLBACK_ENCODING", "detect_encoding", "reencode"]

FALLBACK_ENCODING: Final[str] = "ISO-8859-1"


def _canonical(name: str) -> str | None:
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.debug("Skipping unknown encoding %s in detect order", name)
        return None


def _as_bytes(value: object) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, (list, tuple)):
        return b" ".join(_as_bytes(item) for item in value)
    # Decoded tag text is latin-1 so the original bytes survive unchanged.
    return str(value).encode("latin-1", errors="replace")


def detect_encoding(values: Iterable[object], detect_order: Sequence[str]) -> str:
    """Return the codec most tag values decode with.

    Each value votes for the first codec of ``detect_order`` that decodes it
    strictly. When nothing votes, or ASCII wins, ``ISO-8859-1`` is returned.
    """
    order = [name for name in (_canonical(item) for item in detect_order) if name]
    votes: Counter[str] = Counter()
    for value in values:
        data = _as_bytes(value)
        for codec in order:
            try:
                _ = data.decode(codec)
            except UnicodeDecodeError:
                continue
            votes[codec] += 1
            break

    if not votes:
        return FALLBACK_ENCODING
    encoding, _count = votes.most_common(1)[0]
    if encoding == "ascii":
        return FALLBACK_ENCODING
    logger.debug("Detected tag encoding %s from %s", encoding, dict(votes))
    return encoding


def reencode(text: str, encoding: str) -> str:
    """Re-read latin-1 decoded ``text`` with ``encoding``.

    Text that is not representable that way comes back unchanged.
    """
    if _canonical(encoding) in {None, "latin-1", "iso8859-1"}:
        return text
    try:
        return text.encode("latin-1").decode(encoding)
    except (UnicodeEncodeError, UnicodeDecodeError):
        return text

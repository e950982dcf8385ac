"""Summary: Resolve configured tag-source priority lists into present source keys.
Why: The merger walks sources in this order, so precedence lives in one place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Final, Literal

from mediatag.config.config import Config

OrderKey = Literal["metadata_order", "metadata_order_video", "tag_order"]

GENERAL_SOURCE: Final[str] = "general"

__all__ = ["GENERAL_SOURCE", "OrderKey", "get_tag_type", "order_for"]


def order_for(config: Config, key: OrderKey) -> list[str]:
    """Return the configured priority list for ``key``, lowercased."""
    lists: dict[OrderKey, list[str]] = {
        "metadata_order": config.metadata_order,
        "metadata_order_video": config.metadata_order_video,
        "tag_order": config.tag_order,
    }
    return [name.lower() for name in lists.get(key, [])]


def get_tag_type(results: Mapping[str, object], order: Iterable[str]) -> list[str]:
    """Pick the sources of ``results`` to merge, in priority order.

    Sources listed in ``order`` win in that order when they are present and
    non-empty. When none of them is present every key is used, sorted. The
    ``general`` stream facts are always consulted last unless listed.
    """
    returned_keys = [key for key in (name.lower() for name in order) if results.get(key)]

    if not returned_keys:
        returned_keys = sorted(results)

    if GENERAL_SOURCE not in returned_keys:
        returned_keys.append(GENERAL_SOURCE)

    return returned_keys

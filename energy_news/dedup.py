from __future__ import annotations

import logging
from typing import Iterable, List, Set

from .models import CanonicalItem

logger = logging.getLogger(__name__)


def deduplicate(items: Iterable[CanonicalItem]) -> List[CanonicalItem]:
    """
    Remove duplicates keyed by link, falling back to title.
    Keeps the first occurrence and preserves original order. Items with neither
    a link nor a title have no stable key and are dropped.
    """
    seen: Set[str] = set()
    out: List[CanonicalItem] = []

    for it in items:
        key = it.link or it.title
        if not key:
            logger.debug("Dropping item without link or title")
            continue
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out

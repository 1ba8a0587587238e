from __future__ import annotations

from typing import Iterable, List, Optional

from .config import DEFAULT_KEYWORDS
from .models import FeedQuery


def split_keywords(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


def build_query(extra_keywords: Optional[str] = None,
                defaults: Iterable[str] = DEFAULT_KEYWORDS) -> FeedQuery:
    """
    Combine the default keywords with comma-separated extras into a FeedQuery.

    Duplicates are removed (case-sensitive, first occurrence wins) and order is kept:
    defaults first, then extras in input order.
    """
    seen = set()
    keywords: List[str] = []
    for k in [*defaults, *split_keywords(extra_keywords)]:
        if k in seen:
            continue
        seen.add(k)
        keywords.append(k)
    return FeedQuery(keywords=tuple(keywords))

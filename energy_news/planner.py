from __future__ import annotations

import logging
from typing import List, Union
from urllib.parse import urlencode

from .config import DEFAULT_SEARCH_URL
from .models import CANONICAL_LOCALES, FeedQuery, PlannedSource, Scope

logger = logging.getLogger(__name__)


def build_search_url(query: Union[FeedQuery, str], language: str, region: str,
                     search_url: str = DEFAULT_SEARCH_URL) -> str:
    """Search feed URL carrying q, hl (lang-REGION), gl (REGION) and ceid (REGION:lang)."""
    params = {
        "q": str(query),
        "hl": f"{language}-{region}",
        "gl": region,
        "ceid": f"{region}:{language}",
    }
    return f"{search_url}?{urlencode(params)}"


def _source(query, language: str, region: str, search_url: str) -> PlannedSource:
    return PlannedSource(
        url=build_search_url(query, language, region, search_url),
        language=language,
        region=region,
    )


def plan_sources(scope: Union[Scope, str], query: Union[FeedQuery, str],
                 language: str, region: str,
                 search_url: str = DEFAULT_SEARCH_URL) -> List[PlannedSource]:
    """
    Expand a scope into the ordered list of feeds to query.

    BOTH always uses the two canonical locales. A single scope uses its canonical
    locale unless the caller asked for a different (language, region) pair, in which
    case exactly that pair is planned instead.
    """
    scope = Scope(scope)
    planned: List[PlannedSource] = []
    if scope in (Scope.ID, Scope.BOTH):
        planned.append(_source(query, *CANONICAL_LOCALES[Scope.ID], search_url))
    if scope in (Scope.GLOBAL, Scope.BOTH):
        planned.append(_source(query, *CANONICAL_LOCALES[Scope.GLOBAL], search_url))

    if scope is not Scope.BOTH and (language, region) != CANONICAL_LOCALES[scope]:
        planned = [_source(query, language, region, search_url)]

    for p in planned:
        logger.debug("Planned source %s-%s: %s", p.language, p.region, p.url)
    return planned

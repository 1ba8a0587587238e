from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from .config import AggregatorConfig
from .dedup import deduplicate
from .fetcher import FeedFetcher
from .models import (
    AggregationRequest,
    AggregationResult,
    CanonicalItem,
    FetchOutcome,
    PlannedSource,
    Scope,
)
from .normalizer import to_canonical_item
from .parser import published_timestamp
from .planner import plan_sources
from .query import build_query

logger = logging.getLogger(__name__)


class SourceFetcher(Protocol):
    async def fetch_many(self, sources: Sequence[PlannedSource]) -> List[FetchOutcome]:  # pragma: no cover - interface
        ...


class Aggregator:
    """
    High-level API: query several locale feeds at once and return ranked CanonicalItems.

    Pipeline: build query → plan sources → fetch (concurrent) → normalize → deduplicate
    → sort (newest first) → limit
    """

    def __init__(self, config: Optional[AggregatorConfig] = None,
                 fetcher: Optional[SourceFetcher] = None) -> None:
        self.config = config or AggregatorConfig()
        self.fetcher = fetcher or FeedFetcher(self.config)

    async def aggregate(self, request: AggregationRequest) -> AggregationResult:
        query = build_query(request.extra_keywords, self.config.default_keywords)
        sources = plan_sources(
            request.scope, query, request.language, request.region,
            search_url=self.config.search_url,
        )

        outcomes = await self.fetcher.fetch_many(sources)

        # Normalize to model; failed sources contribute nothing
        items: List[CanonicalItem] = []
        failed: List[str] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning("Skipping source %s: %s", outcome.source.url, outcome.error)
                failed.append(outcome.source.url)
                continue
            items.extend(to_canonical_item(raw) for raw in outcome.items)

        # Deduplicate and sort (newest first); sort is stable so ties keep fetch order
        items = deduplicate(items)
        items.sort(key=lambda x: published_timestamp(x.pub_date), reverse=True)
        items = items[: request.effective_limit]

        logger.info(
            "Aggregated %d item(s) from %d/%d source(s)",
            len(items), len(outcomes) - len(failed), len(outcomes),
        )
        return AggregationResult(items=tuple(items), failed_sources=tuple(failed))


async def fetch_energy_news(
    scope: Union[Scope, str],
    limit: int,
    language: str,
    region: str,
    extra_keywords: Optional[str] = None,
    *,
    config: Optional[AggregatorConfig] = None,
) -> Dict[str, Any]:
    """Aggregate energy news and return the public `{"items": [...]}` shape."""
    request = AggregationRequest(
        scope=scope, limit=limit, language=language, region=region,
        extra_keywords=extra_keywords,
    )
    result = await Aggregator(config).aggregate(request)
    return result.to_dict()

"""
energy_news

A small library that aggregates energy news from several Google News search feeds.

Core ideas:
- Input: a scope (id / global / both), a limit, a locale and optional extra keywords
- Process: query → plan feeds → fetch concurrently → normalize → deduplicate → sort (newest first) → limit
- Output: AggregationResult of CanonicalItem

A feed that fails or times out simply contributes no items; the call never raises
for upstream problems.

Example
-------
import asyncio
from energy_news import Aggregator, AggregationRequest

request = AggregationRequest(scope="both", limit=10, language="id", region="ID",
                             extra_keywords="pertamina, geothermal")
result = asyncio.run(Aggregator().aggregate(request))

for item in result:
    print(item.pub_date, item.source, item.title)
"""
from .config import AggregatorConfig
from .core import Aggregator, fetch_energy_news
from .exceptions import UpstreamFetchError
from .models import AggregationRequest, AggregationResult, CanonicalItem, Scope

__all__ = [
    "Aggregator",
    "AggregatorConfig",
    "AggregationRequest",
    "AggregationResult",
    "CanonicalItem",
    "Scope",
    "UpstreamFetchError",
    "fetch_energy_news",
]

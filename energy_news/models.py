from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .exceptions import UpstreamFetchError


class Scope(str, Enum):
    """Which locale variant(s) of the news search to query."""
    ID = "id"
    GLOBAL = "global"
    BOTH = "both"


# Canonical (language, region) pair per single-locale scope
CANONICAL_LOCALES: Dict[Scope, Tuple[str, str]] = {
    Scope.ID: ("id", "ID"),
    Scope.GLOBAL: ("en", "US"),
}


@dataclass(frozen=True)
class AggregationRequest:
    scope: Union[Scope, str]
    limit: int
    language: str
    region: str
    extra_keywords: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept the plain string form ("id" / "global" / "both")
        object.__setattr__(self, "scope", Scope(self.scope))

    @property
    def effective_limit(self) -> int:
        return max(1, int(self.limit))


@dataclass(frozen=True)
class FeedQuery:
    keywords: Tuple[str, ...]

    @property
    def expression(self) -> str:
        return " OR ".join(f'"{k}"' for k in self.keywords)

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True)
class PlannedSource:
    url: str
    language: str
    region: str


@dataclass(frozen=True)
class RawFeedItem:
    """
    Provider-native item as returned by the feed-to-JSON service.

    Only title and link are always present; everything else may be missing.
    """
    title: str = ""
    link: str = ""
    pub_date: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    enclosure_link: Optional[str] = None


@dataclass(frozen=True)
class CanonicalItem:
    """
    Normalized news item handed to callers.

    WARNING: Do not change fields lightly. This is the library's contract.
    """
    title: str
    link: str
    pub_date: Optional[str]
    source: str
    description: str
    summary: str
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "source": self.source,
            "description": self.description,
            "summary": self.summary,
            "image": self.image,
        }


@dataclass(frozen=True)
class FetchOutcome:
    """Settled result of fetching one planned source: either items or an error."""
    source: PlannedSource
    items: Tuple[RawFeedItem, ...] = ()
    error: Optional[UpstreamFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AggregationResult:
    items: Tuple[CanonicalItem, ...] = ()
    failed_sources: Tuple[str, ...] = field(default=(), compare=False)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [it.to_dict() for it in self.items]}

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urlparse

from .models import CanonicalItem, RawFeedItem

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")
_IMG_RE = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.IGNORECASE)
_HTTP_RE = re.compile(r"^https?://", re.IGNORECASE)


def strip_html(text: Optional[str]) -> str:
    """Drop markup tags, collapse whitespace and trim. Plain text passes through."""
    if not text:
        return ""
    return _WS_RE.sub(" ", _TAG_RE.sub("", text)).strip()


def get_domain(url: Optional[str]) -> str:
    if not url:
        return ""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return ""
    if not host:
        return ""
    return host[4:] if host.startswith("www.") else host


def extract_image(html: Optional[str]) -> Optional[str]:
    if not html:
        return None
    m = _IMG_RE.search(html)
    return m.group(1) if m else None


def to_canonical_item(raw: RawFeedItem) -> CanonicalItem:
    """
    Convert a RawFeedItem into a CanonicalItem. Never raises.

    - description/summary: plain text of description, else content
    - source: author, else link domain without "www."
    - image: absolute http(s) enclosure, else first <img src> in the body
    """
    body = raw.description or raw.content
    text = strip_html(body)

    if raw.enclosure_link and _HTTP_RE.match(raw.enclosure_link):
        image = raw.enclosure_link
    else:
        image = extract_image(body)

    return CanonicalItem(
        title=raw.title,
        link=raw.link,
        pub_date=raw.pub_date,
        source=raw.author or get_domain(raw.link),
        description=text,
        summary=text,
        image=image,
    )

from typing import Optional


class UpstreamFetchError(Exception):
    """Raised when one upstream feed cannot be fetched through the feed-to-JSON service."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{message}: {url}")
        self.url = url
        self.status_code = status_code

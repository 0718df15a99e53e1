from typing import Any, Optional


class GPOClientError(Exception):
    """Base class for every failure the client reports."""


class FetchError(GPOClientError):
    """Transport or HTTP-status failure while talking to gpo.gov."""

    def __init__(self, reason: Any, url: Optional[str] = None):
        self.reason = reason
        self.url = url
        msg = f"{reason}" if url is None else f"{reason} ({url})"
        super().__init__(msg)


class MalformedDocument(GPOClientError):
    """An expected tag is missing or the document is not the expected shape."""


class ParseError(GPOClientError):
    """A composite bill id did not split into session/type/number."""


class NoSessionFound(GPOClientError):
    """The sitemap index yielded no session tokens."""

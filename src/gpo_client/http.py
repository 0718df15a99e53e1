from __future__ import annotations

import logging
from typing import Optional

import requests
from requests import RequestException

from .errors import FetchError
from .results import returns_result
from .utils import logger_setup

DEFAULT_BASE_URL = "https://www.gpo.gov"


class GPOHttp:
    """
    Thin GET-only wrapper around a requests.Session rooted at the GPO origin.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60,
        session: Optional[requests.Session] = None,
        log_level: int = logging.INFO,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/xml, text/xml;q=0.9, */*;q=0.8"
        })
        self.logger = logger_setup(logger_name="GPO HTTP", log_level=log_level)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, path: str) -> bytes:
        """GET ``path`` and return the raw body, raising FetchError on any transport or status failure."""
        url = self.url_for(path)
        self.logger.debug(f"GET {url}")
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as e:
            self.logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise FetchError(e, url=url) from e
        return resp.content

    # Result-returning variant of fetch
    get = returns_result(fetch)

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    API_PATH,
    HTTP_TIMEOUT,
    NO_CACHE_HEADERS,
    REQUEST_HEADERS,
    RETRY_ATTEMPTS,
)
from .datamodels import FeedEnvelope
from .errors import InvalidResponseError, NetworkError, ServerError

logger = logging.getLogger("newsfeed")


def create_session(retries: int = RETRY_ATTEMPTS) -> requests.Session:
    s = requests.Session()
    s.headers.update(REQUEST_HEADERS)
    # Retries cover dropped connections only; a final bad status is returned
    # as-is so it can be reported with its code.
    retry = Retry(
        total=retries,
        backoff_factor=0.3,
        status_forcelist=[502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    return s


class FeedFetcher:
    """Loads the feed envelope from the backend."""

    def __init__(
        self,
        base_url: str,
        path: str = API_PATH,
        timeout: float = HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))
        self.timeout = timeout
        self.session = session or create_session()

    def fetch(self) -> FeedEnvelope:
        logger.debug("Fetching %s", self.url)
        try:
            resp = self.session.get(
                self.url, headers=NO_CACHE_HEADERS, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", self.url, e)
            raise NetworkError(str(e)) from e

        if not resp.ok:
            logger.warning("Request to %s returned %d", self.url, resp.status_code)
            raise ServerError(resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("Response from %s is not JSON: %s", self.url, e)
            raise InvalidResponseError("Response is not valid JSON") from e

        envelope = FeedEnvelope.from_json(payload)
        logger.debug("Fetched %d items from %s", len(envelope.news), self.url)
        return envelope

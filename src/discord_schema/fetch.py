"""HTTP retrieval of raw documentation pages via requests."""

import logging
from dataclasses import dataclass

import requests

from discord_schema.errors import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "discord-schema docs reader"
DEFAULT_TIMEOUT = 30


@dataclass
class FetchResult:
    status_code: int
    body: str


def fetch(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """GET a page and return its status code and decoded body."""
    logger.debug("Requesting %s", url)
    resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    return FetchResult(status_code=resp.status_code, body=resp.text)


def fetch_document(url: str) -> str:
    """Fetch a documentation page, failing on anything but a 200."""
    result = fetch(url)
    if result.status_code != 200:
        raise FetchError(url, result.status_code)
    return result.body

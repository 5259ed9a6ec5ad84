"""HTTP session handling and page fetching for profile acquisition."""

import logging
import random
from contextlib import contextmanager
from typing import Iterator

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from profile_analyzer.errors import AcquisitionError

logger = logging.getLogger("profile_analyzer.http")

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
]


def create_session(status_retries: int = 0) -> requests.Session:
    """Create a requests session with browser-like headers.

    Connection-level retries are left to the caller's backoff policy; only
    ``status_retries`` transparent retries on 5xx/429 are mounted.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=status_retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
    })

    return session


@contextmanager
def open_session(status_retries: int = 0) -> Iterator[requests.Session]:
    """Scoped session handle: opened for one acquisition and always closed."""
    session = create_session(status_retries)
    try:
        yield session
    finally:
        session.close()


def fetch_page(url: str, session: requests.Session, timeout: int = 30) -> requests.Response:
    """GET a page, raising AcquisitionError on any transport or HTTP failure."""
    try:
        session.headers["User-Agent"] = random.choice(USER_AGENTS)
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        return response
    except requests.RequestException as e:
        logger.warning("HTTP request failed for %s: %s", url, e)
        raise AcquisitionError(f"Failed to fetch {url}: {e}", source=url) from e

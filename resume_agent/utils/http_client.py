"""HTTP session for downloading recruitment article pages."""

import logging
import random
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("resume_agent.http")

# One is picked at random per session; the last mimics the in-app browser.
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148 MicroMessenger/8.0.47",
]

RETRY_STATUSES = (429, 500, 502, 503, 504)


def create_session(max_retries: int = 3, backoff_factor: float = 1.0) -> requests.Session:
    """Session that retries GETs on throttling and 5xx, asking for Chinese content."""
    retries = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=list(RETRY_STATUSES),
        allowed_methods=["GET"],
    )

    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retries)
    for prefix in ("http://", "https://"):
        session.mount(prefix, adapter)

    session.headers.update({
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    })
    return session


def safe_get(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: int = 30,
    **kwargs,
) -> Optional[requests.Response]:
    """GET url; None on any request failure instead of raising."""
    session = session or create_session()

    try:
        response = session.get(url, timeout=timeout, **kwargs)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning("HTTP request failed for %s: %s", url, e)
        return None

    logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
    return response


def response_text(response: requests.Response) -> str:
    """Decode a page body, trusting the sniffed charset when the header has none.

    requests assumes ISO-8859-1 for text/html without a charset, which
    garbles Chinese pages.
    """
    if not response.encoding or response.encoding.lower() == "iso-8859-1":
        response.encoding = response.apparent_encoding or "utf-8"
    return response.text

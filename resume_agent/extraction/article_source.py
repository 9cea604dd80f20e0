"""Input adapters that turn an article into plain text for extraction.

Both adapters produce an Article; the extraction itself is the same
(`extract_from_article`) regardless of where the text came from.
"""

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup

from resume_agent.extraction.job_extractor import extract_from_article
from resume_agent.jobs.models import JobInfo
from resume_agent.utils.http_client import create_session, response_text, safe_get
from resume_agent.utils.text_processing import ensure_text

logger = logging.getLogger("resume_agent.extraction.article")

# Official-account article markup
BODY_SELECTORS = ("#js_content", ".rich_media_content")
TITLE_SELECTOR = ".rich_media_title"
ACCOUNT_SELECTOR = "#js_name"

# Elements that end a line when rendered
BLOCK_TAGS = ["p", "div", "section", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote"]


@dataclass
class Article:
    text: str
    url: str = ""
    title: str = ""
    account_name: str = ""

    def extract(self) -> JobInfo:
        return extract_from_article(self.text, self.url, self.title, self.account_name)


def article_from_text(text: str | bytes, url: str = "", title: str = "") -> Article:
    """Passthrough adapter for text that is already plain."""
    return Article(text=ensure_text(text), url=url, title=title)


def article_from_html(html: str | bytes, url: str = "") -> Article:
    """Render article HTML to text the way a browser's innerText would.

    Falls back to the whole <body> when the usual article container is missing.
    """
    soup = BeautifulSoup(ensure_text(html), "lxml")

    body = None
    for selector in BODY_SELECTORS:
        body = soup.select_one(selector)
        if body is not None:
            break
    if body is None:
        body = soup.body or soup

    for tag in body.find_all(["script", "style"]):
        tag.decompose()
    for br in body.find_all("br"):
        br.replace_with("\n")
    for block in body.find_all(BLOCK_TAGS):
        block.append("\n")

    text = body.get_text()
    lines = [line.strip() for line in text.splitlines()]
    text = "\n".join(line for line in lines if line)

    title_elem = soup.select_one(TITLE_SELECTOR)
    if title_elem is not None:
        title = title_elem.get_text(strip=True)
    else:
        title = soup.title.get_text(strip=True) if soup.title else ""

    account_elem = soup.select_one(ACCOUNT_SELECTOR)
    account_name = account_elem.get_text(strip=True) if account_elem is not None else ""

    logger.debug("Rendered article '%s' to %d chars of text", title, len(text))
    return Article(text=text, url=url, title=title, account_name=account_name)


def fetch_article(url: str, timeout: int = 30, max_retries: int = 3) -> Article:
    """Download an article page and render it to text."""
    with create_session(max_retries=max_retries) as session:
        response = safe_get(url, session=session, timeout=timeout)

    if response is None:
        raise ConnectionError(f"Failed to fetch article: {url}")

    return article_from_html(response_text(response), url)

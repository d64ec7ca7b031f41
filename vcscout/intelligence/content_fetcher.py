"""
Company website fetching and HTML sanitising.

The fetcher never raises: an unreachable, slow, or erroring site yields an
empty string so enrichment can continue on partial information.
"""

from __future__ import annotations

import html
import re
from typing import List, Optional

import requests
import structlog

from vcscout.core.config import FetchConfig
from vcscout.core.models import WebsiteContent

logger = structlog.get_logger(__name__)

DEFAULT_MAX_CHARS = 15000

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_HREF_RE = re.compile(r"""\bhref\s*=\s*["']([^"']+)["']""", re.IGNORECASE)


def normalize_website_url(website: str) -> str:
    """Prefix ``https://`` when the website has no scheme."""
    website = (website or "").strip()
    if not website:
        return website
    if _SCHEME_RE.match(website):
        return website
    return f"https://{website}"


def sanitize_html(raw_html: Optional[str], max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """
    Reduce an HTML document to plain text.

    Removes script and style blocks with their content, then comments,
    then any remaining tags. Whitespace runs collapse to one space and the
    result is cut hard at ``max_chars``.
    """
    if not raw_html:
        return ""

    text = _SCRIPT_RE.sub(" ", raw_html)
    text = _STYLE_RE.sub(" ", text)
    text = _COMMENT_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[: max(0, max_chars)]


def extract_links(raw_html: Optional[str]) -> List[str]:
    """Collect ``href`` targets outside scripts, styles and comments, first occurrence only."""
    if not raw_html:
        return []

    markup = _SCRIPT_RE.sub(" ", raw_html)
    markup = _STYLE_RE.sub(" ", markup)
    markup = _COMMENT_RE.sub(" ", markup)

    links: List[str] = []
    for match in _HREF_RE.finditer(markup):
        link = html.unescape(match.group(1)).strip()
        if link and link not in links:
            links.append(link)
    return links


class ContentFetcher:
    """Fetches a company website over HTTP and returns sanitised text."""

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or FetchConfig()
        self.session = session or self._create_session()
        self.calls = 0

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
                "Accept-Encoding": "gzip, deflate",
            }
        )
        return session

    def fetch_html(self, website: str) -> str:
        """Return the raw HTML body, or an empty string on any failure."""
        url = normalize_website_url(website)
        if not url:
            return ""

        self.calls += 1
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.Timeout:
            logger.warning(
                "website_fetch_timeout", url=url, timeout=self.config.timeout_seconds
            )
            return ""
        except requests.RequestException as exc:
            logger.warning("website_fetch_failed", url=url, error=str(exc))
            return ""
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "website_fetch_error", url=url, error_type=type(exc).__name__, error=str(exc)
            )
            return ""

        if not 200 <= response.status_code < 300:
            logger.warning("website_fetch_non_2xx", url=url, status=response.status_code)
            return ""

        logger.debug(
            "website_fetched",
            url=url,
            status=response.status_code,
            bytes=len(response.content or b""),
        )
        return response.text or ""

    def fetch_content(self, website: str) -> WebsiteContent:
        """Fetch ``website`` once, keeping both its sanitised text and its links."""
        raw_html = self.fetch_html(website)
        return WebsiteContent(
            text=sanitize_html(raw_html, self.config.max_chars),
            links=extract_links(raw_html),
        )

    def fetch(self, website: str) -> str:
        """Fetch ``website`` and return its sanitised plain text."""
        return self.fetch_content(website).text

    def close(self) -> None:
        self.session.close()

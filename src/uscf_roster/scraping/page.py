"""
Read-only access to the content of a host page.

The scanning code only needs a handful of queries against a page (links,
rendered text, registration table rows), expressed by the
:class:`PageContent` protocol. :class:`SoupPage` implements it over
BeautifulSoup, and :class:`PageSource` obtains pages from a URL or a saved
HTML file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, Comment, Doctype

from uscf_roster.core.constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from uscf_roster.core.errors import PageUnavailableError

logger = logging.getLogger(__name__)

# Elements whose text never shows up in the rendered page
_HIDDEN_TAGS = ("script", "style", "noscript", "template")

# Elements that start a new line or cell when rendered
_BLOCK_TAGS = (
    "address", "article", "aside", "blockquote", "br", "caption", "dd", "div",
    "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1",
    "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol",
    "p", "pre", "section", "table", "tbody", "td", "tfoot", "th", "thead",
    "tr", "ul",
)


@dataclass(frozen=True)
class Link:
    href: str
    text: str


@runtime_checkable
class PageContent(Protocol):
    """Queries the identifier scan and table scrape run against a page."""

    @property
    def html(self) -> str:
        """Raw HTML text of the page."""
        ...

    def query_links(self, selector: str) -> list[Link]:
        """Anchors matching a CSS selector, with hrefs resolved to absolute URLs."""
        ...

    def query_text(self) -> str:
        """Rendered text of the page body."""
        ...

    def query_table_rows(self, container_id: str) -> list[list[str]]:
        """Cell texts of every row inside the element with ``container_id``."""
        ...


class SoupPage:
    """PageContent backed by a parsed BeautifulSoup document."""

    def __init__(self, html: str, url: str = "") -> None:
        self._html = html
        self.url = url
        self.soup = BeautifulSoup(html, "html.parser")

    @property
    def html(self) -> str:
        return self._html

    def query_links(self, selector: str) -> list[Link]:
        links = []
        for anchor in self.soup.select(selector):
            href = anchor.get("href")
            if not href:
                continue
            links.append(
                Link(
                    href=urljoin(self.url, href),
                    text=anchor.get_text(" ", strip=True),
                )
            )
        return links

    def query_text(self) -> str:
        """Rendered body text: inline runs join up, block boundaries split."""
        # Parsed again so the inserted separators never leak into self.soup
        soup = BeautifulSoup(self._html, "html.parser")
        root = soup.body or soup
        for tag in root.find_all(_HIDDEN_TAGS):
            tag.decompose()
        for tag in root.find_all(_BLOCK_TAGS):
            tag.insert_before(" ")
            tag.insert_after(" ")
        return "".join(
            str(node)
            for node in root.find_all(string=True)
            if not isinstance(node, (Comment, Doctype))
        )

    def query_table_rows(self, container_id: str) -> list[list[str]]:
        container = self.soup.find(id=container_id)
        if container is None:
            logger.debug("No element with id=%r on page", container_id)
            return []
        return [
            [cell.get_text(" ", strip=True) for cell in row.find_all(["td", "th"])]
            for row in container.find_all("tr")
        ]


class PageSource:
    """Loads a page from an http(s) URL or a local HTML file.

    URLs are fetched through a requests session, attached on first read. A
    failed fetch raises :class:`PageUnavailableError`; callers recover with
    ``with_retry_once(source.attach, source.read)``, which reads again over a
    fresh session.
    """

    def __init__(
        self,
        location: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.location = location
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: requests.Session | None = None

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    def attach(self) -> None:
        """Open a fresh HTTP session for remote pages."""
        if self.session is not None:
            self.session.close()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.user_agent})
        logger.debug("Attached HTTP session for %s", self.location)

    def read(self) -> SoupPage:
        if not self.is_remote:
            return load_page(self.location)
        if self.session is None:
            self.attach()
        return fetch_page(self.location, session=self.session, timeout=self.timeout)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


def fetch_page(
    url: str,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> SoupPage:
    """Download a page and parse it."""
    if session is None:
        session = requests.Session()
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise PageUnavailableError(f"Failed to fetch {url}: {e}") from e

    logger.debug("Fetched %s (%d bytes)", url, len(response.text))
    return SoupPage(response.text, url=response.url or url)


def load_page(path: str | Path) -> SoupPage:
    """Parse a saved HTML file; relative links resolve against its file URL."""
    path = Path(path)
    try:
        html = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise PageUnavailableError(f"Failed to read {path}: {e}") from e
    return SoupPage(html, url=path.resolve().as_uri())

"""DOM snapshot extraction: scope, filter, sanitize and bound page markup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..browser.base import PageHandle
from .sanitize import sanitize_html

LOGGER = logging.getLogger(__name__)

DEFAULT_LIMIT = 100_000
FRAGMENT_SEPARATOR = "\n\n"


@dataclass
class SnapshotResult:
    """Sanitized, size-bounded markup extracted from a page."""

    content: str
    truncated: bool
    original_length: int
    matched: int

    @property
    def found(self) -> bool:
        return self.matched > 0


def matches_search_term(text: str, term: str) -> bool:
    """Case-insensitive containment of ``term`` or its hashtag form."""

    if not term:
        return True
    haystack = text.lower()
    needle = term.lower()
    return needle in haystack or f"#{needle}" in haystack


def select_scope(soup: BeautifulSoup) -> Optional[Tag]:
    """Prefer the primary ``<main>`` container, falling back to ``<body>``."""

    main = soup.find("main")
    if isinstance(main, Tag):
        return main
    body = soup.body
    return body if isinstance(body, Tag) else None


def head_metadata(soup: BeautifulSoup) -> str:
    head = soup.head
    if not isinstance(head, Tag):
        return ""
    return "\n".join(str(meta) for meta in head.find_all("meta"))


def truncate(content: str, limit: int) -> tuple[str, bool]:
    if len(content) > limit:
        return content[:limit], True
    return content, False


def build_snapshot(
    markup: str,
    search_term: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
) -> SnapshotResult:
    """Turn raw page markup into a bounded snapshot.

    With a ``search_term`` every descendant of the scope whose text contains
    the term (or ``#term``) is kept, ancestors included; without one the whole
    scope is kept.
    """

    soup = BeautifulSoup(markup, "html.parser")
    scope = select_scope(soup)
    if scope is None:
        return SnapshotResult(content="", truncated=False, original_length=0, matched=0)

    if search_term:
        elements = [
            element
            for element in scope.find_all(True)
            if matches_search_term(element.get_text(), search_term)
        ]
    else:
        elements = [scope]
    if not elements:
        return SnapshotResult(content="", truncated=False, original_length=0, matched=0)

    body = FRAGMENT_SEPARATOR.join(sanitize_html(str(element)) for element in elements)
    meta = head_metadata(soup)
    content = f"{meta}{FRAGMENT_SEPARATOR}{body}" if meta else body
    bounded, truncated = truncate(content, limit)
    LOGGER.debug(
        "Snapshot built from %d element(s): %d chars%s",
        len(elements),
        len(content),
        " (truncated)" if truncated else "",
    )
    return SnapshotResult(
        content=bounded,
        truncated=truncated,
        original_length=len(content),
        matched=len(elements),
    )


def capture_snapshot(
    page: PageHandle,
    search_term: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
) -> SnapshotResult:
    return build_snapshot(page.content(), search_term=search_term, limit=limit)

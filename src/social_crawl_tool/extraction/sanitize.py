"""Markup sanitization rules applied to DOM snapshots.

Each rule is an independent transform over a parsed BeautifulSoup tree.
:func:`sanitize_html` parses the markup once, folds the rules over the tree in
order and serializes the result. The fold is repeated on its own output until
nothing changes, so sanitizing already-sanitized markup is a no-op.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter

_FLAGS = re.IGNORECASE | re.DOTALL

# Void elements render as ``<img ...>``; text keeps only ``&``, ``<`` and ``>`` escaped.
_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix="",
)

CHROME_KEYWORDS = ("navigation", "sidebar", "menu", "toolbar", "breadcrumb")
CONTAINER_TAGS = ("div", "span", "section", "p", "ul", "li")
PRESENTATION_ATTRIBUTES = frozenset(
    {"class", "style", "role", "tabindex", "crossorigin", "nonce", "async", "defer"}
)
PRESENTATION_PREFIXES = ("aria-", "data-")


@dataclass(frozen=True)
class SanitizeRule:
    """A named in-place transformation of a parsed markup tree."""

    name: str
    transform: Callable[[BeautifulSoup], None]

    def __call__(self, soup: BeautifulSoup) -> None:
        self.transform(soup)


def parse_markup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def render_markup(soup: BeautifulSoup) -> str:
    return soup.decode(formatter=_FORMATTER)


def _live_tags(soup: BeautifulSoup, names: Any = True) -> list[Tag]:
    return [tag for tag in soup.find_all(names) if isinstance(tag, Tag)]


def strip_elements(name: str, tags: Iterable[str]) -> SanitizeRule:
    """Remove every ``tags`` element together with its content."""

    names = tuple(tags)

    def transform(soup: BeautifulSoup) -> None:
        for tag in _live_tags(soup, list(names)):
            if not tag.decomposed:
                tag.decompose()

    return SanitizeRule(name, transform)


def _strip_comments(soup: BeautifulSoup) -> None:
    # Comments plus declarations, CDATA and processing instructions.
    for node in soup.find_all(string=lambda text: isinstance(text, PreformattedString)):
        node.extract()


def _attribute_text(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def _looks_like_chrome(tag: Tag) -> bool:
    for value in tag.attrs.values():
        text = _attribute_text(value).lower()
        if any(keyword in text for keyword in CHROME_KEYWORDS):
            return True
    return False


def _strip_chrome_keywords(soup: BeautifulSoup) -> None:
    for tag in _live_tags(soup):
        if not tag.decomposed and _looks_like_chrome(tag):
            tag.decompose()


def _until_stable(transform: Callable[[str], str]) -> Callable[[str], str]:
    def repeated(text: str) -> str:
        while True:
            cleaned = transform(text)
            if cleaned == text:
                return cleaned
            text = cleaned

    return repeated


def strip_payloads(name: str, pattern: str) -> SanitizeRule:
    """Cut ``pattern`` out of every attribute value and text node."""

    compiled = re.compile(pattern, _FLAGS)
    scrub = _until_stable(lambda text: compiled.sub("", text))

    def transform(soup: BeautifulSoup) -> None:
        for tag in _live_tags(soup):
            for attribute, value in list(tag.attrs.items()):
                text = _attribute_text(value)
                cleaned = scrub(text)
                if cleaned != text:
                    tag[attribute] = cleaned
        for node in soup.find_all(string=True):
            if isinstance(node, PreformattedString):
                continue
            cleaned = scrub(str(node))
            if cleaned != node:
                node.replace_with(cleaned)

    return SanitizeRule(name, transform)


def strip_attributes(
    name: str,
    attributes: Iterable[str],
    prefixes: Iterable[str] = (),
) -> SanitizeRule:
    """Remove attributes by exact name or name prefix from every element."""

    exact = frozenset(attributes)
    prefixed = tuple(prefixes)

    def transform(soup: BeautifulSoup) -> None:
        for tag in _live_tags(soup):
            for attribute in list(tag.attrs):
                if attribute in exact or attribute.startswith(prefixed):
                    del tag[attribute]

    return SanitizeRule(name, transform)


def _normalize_anchors(soup: BeautifulSoup) -> None:
    for anchor in _live_tags(soup, ["a"]):
        href = anchor.get("href")
        anchor.attrs = {"href": _attribute_text(href)} if href is not None else {}


def _is_empty(tag: Tag) -> bool:
    return tag.find(True) is None and not tag.get_text(strip=True)


def _strip_empty_containers(soup: BeautifulSoup) -> None:
    # Reversed document order visits children before their parents.
    for tag in reversed(_live_tags(soup, list(CONTAINER_TAGS))):
        if _is_empty(tag):
            tag.decompose()


_WHITESPACE = re.compile(r"\s+")


def _collapse_whitespace(soup: BeautifulSoup) -> None:
    soup.smooth()
    for node in soup.find_all(string=True):
        if isinstance(node, PreformattedString):
            continue
        collapsed = _WHITESPACE.sub(" ", str(node))
        if collapsed != node:
            node.replace_with(collapsed)

    contents = soup.contents
    if contents and isinstance(contents[0], NavigableString):
        _trim(contents[0], str.lstrip)
    if soup.contents and isinstance(soup.contents[-1], NavigableString):
        _trim(soup.contents[-1], str.rstrip)


def _trim(node: NavigableString, strip: Callable[[str], str]) -> None:
    trimmed = strip(str(node))
    if not trimmed:
        node.extract()
    elif trimmed != node:
        node.replace_with(trimmed)


_PARAMS = r"(?:;[\w.+-]+(?:=[\w.+-]+)?)*"
_PAYLOAD = r"[^\"'\s<>)]*"

DEFAULT_RULES: tuple[SanitizeRule, ...] = (
    strip_elements("scripts", ["script"]),
    strip_elements("styles", ["style"]),
    strip_elements("links", ["link"]),
    strip_elements("noscript", ["noscript"]),
    SanitizeRule("comments", _strip_comments),
    strip_elements("vector_graphics", ["svg"]),
    strip_elements("page_chrome", ["nav", "footer", "header"]),
    SanitizeRule("chrome_keywords", _strip_chrome_keywords),
    strip_payloads(
        "media_data_uris",
        rf"data:(?:image|video|audio)/[\w.+-]+{_PARAMS},{_PAYLOAD}",
    ),
    strip_payloads(
        "code_data_uris",
        rf"data:(?:text|application)/(?:javascript|ecmascript|x-javascript|css){_PARAMS},{_PAYLOAD}",
    ),
    strip_payloads(
        "base64_payloads",
        rf"(?:data:[\w.+-]+/[\w.+-]+|charset=[\w.-]+){_PARAMS};base64,[A-Za-z0-9+/=]*",
    ),
    strip_attributes("image_sources", ["src", "srcset"]),
    SanitizeRule("anchors", _normalize_anchors),
    strip_attributes("presentation_attributes", PRESENTATION_ATTRIBUTES, PRESENTATION_PREFIXES),
    SanitizeRule("empty_containers", _strip_empty_containers),
    SanitizeRule("whitespace", _collapse_whitespace),
)


def apply_rules(soup: BeautifulSoup, rules: Sequence[SanitizeRule]) -> BeautifulSoup:
    """Run every rule once, in order, mutating ``soup``."""

    for rule in rules:
        rule(soup)
    return soup


def sanitize_once(markup: str, rules: Sequence[SanitizeRule] = DEFAULT_RULES) -> str:
    return render_markup(apply_rules(parse_markup(markup), rules))


def sanitize_html(markup: str, rules: Sequence[SanitizeRule] = DEFAULT_RULES) -> str:
    """Strip scripts, media payloads, presentational noise and page chrome."""

    cleaned = sanitize_once(markup, rules)
    while True:
        again = sanitize_once(cleaned, rules)
        if again == cleaned:
            return cleaned
        cleaned = again

"""CSS-selector-based HTML extraction helpers.

Thin wrappers around BeautifulSoup used by the page and player extractors.
Every helper returns a default instead of raising when nothing matches, so
extractors can aggregate partial results.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (``lxml`` parser)."""
    return BeautifulSoup(html, "lxml")


def child_elements(root: BeautifulSoup | Tag, selector: str) -> list[Tag]:
    """Direct element children of the first element matching *selector*."""
    container = root.select_one(selector)
    if container is None:
        return []
    return container.find_all(recursive=False)


def extract_text(
    element: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
    strip: bool = True,
) -> str:
    """Extract text from the first matching child element.

    With ``selector=""`` the element's own text is returned. ``strip``
    collapses whitespace runs, so inline tags keep their surrounding spaces.
    """
    if selector == "":
        text = _text_of(element, strip)
        return text if text else default

    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            text = _text_of(match, strip)
            if text:
                return text
    return default


def _text_of(element: BeautifulSoup | Tag, strip: bool) -> str:
    text = element.get_text()
    return " ".join(text.split()) if strip else text


def extract_own_text(element: BeautifulSoup | Tag, selector: str) -> str:
    """Text of the first match after removing its nested child elements.

    Used for labels that carry a badge, e.g.
    ``<span class="title">Season 1 <i>2021</i></span>`` -> ``"Season 1"``.
    """
    match = element.select_one(selector)
    if match is None:
        return ""
    for child in match.find_all(recursive=False):
        child.decompose()
    return match.get_text().strip()


def extract_attr(
    element: BeautifulSoup | Tag,
    selector: str,
    attr: str,
    *fallback_selectors: str,
    default: str = "",
) -> str:
    """Extract an HTML attribute from the first matching child element.

    With ``selector=""`` the attribute is read from *element* itself.
    """
    if selector == "":
        val = element.get(attr)
        return str(val) if val else default

    for sel in (selector, *fallback_selectors):
        match = element.select_one(sel)
        if match:
            val = match.get(attr)
            if val:
                return str(val)
    return default

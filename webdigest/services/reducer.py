"""Reduce rendered HTML to deduplicated, link-annotated plain text.

The reduction walks the DOM depth-first (pre-order) and emits one line per
node whose trimmed text has not been seen anywhere else in the document.
Links with a navigable ``href`` are rendered as ``[text](href)``.  Each line
is indented by two spaces per nesting level, and lines that look like script
remnants, asset references or third-party widget markers are dropped.

The walk is written against the small :class:`DomNode` protocol, so it can
run over a hand-built tree as well as over BeautifulSoup via
:class:`SoupNode`.
"""

import logging
import re
from typing import Iterator, List, NamedTuple, Optional, Pattern, Protocol, Sequence, Set

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

# Elements whose subtree never contributes text
_SKIPPED_TAGS = {"script", "style"}

_INDENT = "  "

# href prefixes that do not lead to another document
_NON_NAVIGABLE_PREFIXES = ("#", "javascript:")


class DomNode(Protocol):
    @property
    def tag(self) -> Optional[str]:
        """Lower-case tag name, or None for text nodes."""

    @property
    def text(self) -> str:
        """Trimmed text content of the node and its descendants."""

    @property
    def children(self) -> Sequence["DomNode"]:
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        ...


class NoiseFilter(NamedTuple):
    name: str
    pattern: Pattern[str]

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


NOISE_FILTERS: List[NoiseFilter] = [
    # Inline JavaScript / CSS that leaked into text content
    NoiseFilter("script-remnant", re.compile(r"var |function\(\)|[{}]", re.IGNORECASE)),
    # References to stylesheet or script files
    NoiseFilter("asset-reference", re.compile(r"\.js|\.css", re.IGNORECASE)),
    # Analytics and comment-embed widgets
    NoiseFilter("tracking-widget", re.compile(r"google-analytics|disqus", re.IGNORECASE)),
]


def is_noise(line: str, filters: Sequence[NoiseFilter] = NOISE_FILTERS) -> bool:
    """Return True when any of *filters* matches *line*."""
    return any(f.matches(line) for f in filters)


def _is_content_string(element: PageElement) -> bool:
    # Comments, doctypes, CDATA and processing instructions are not page text
    return isinstance(element, NavigableString) and not isinstance(element, PreformattedString)


def _visible_strings(tag: Tag) -> Iterator[str]:
    for child in tag.children:
        if isinstance(child, Tag):
            if child.name not in _SKIPPED_TAGS:
                yield from _visible_strings(child)
        elif _is_content_string(child):
            yield str(child)


class SoupNode:
    """:class:`DomNode` view over a BeautifulSoup element."""

    __slots__ = ("_element",)

    def __init__(self, element: PageElement) -> None:
        self._element = element

    @property
    def tag(self) -> Optional[str]:
        if isinstance(self._element, Tag):
            return self._element.name.lower()
        return None

    @property
    def text(self) -> str:
        if isinstance(self._element, Tag):
            return "".join(_visible_strings(self._element)).strip()
        return str(self._element).strip()

    @property
    def children(self) -> List["SoupNode"]:
        if not isinstance(self._element, Tag):
            return []
        return [
            SoupNode(child)
            for child in self._element.children
            if isinstance(child, Tag) or _is_content_string(child)
        ]

    def get_attribute(self, name: str) -> Optional[str]:
        if not isinstance(self._element, Tag):
            return None
        value = self._element.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value


def reduce_node(root: DomNode) -> str:
    """Reduce the tree under *root* to newline-joined text lines."""
    lines: List[str] = []
    seen: Set[str] = set()

    def visit(node: DomNode, depth: int) -> None:
        if node.tag in _SKIPPED_TAGS:
            return
        text = node.text
        if not text:
            return

        if node.tag == "a":
            href = (node.get_attribute("href") or "").strip()
            if not href or href.startswith(_NON_NAVIGABLE_PREFIXES):
                return
            if text not in seen:
                lines.append(f"{_INDENT * depth}[{text}]({href})")
                seen.add(text)
        elif text not in seen:
            lines.append(f"{_INDENT * depth}{text}")
            seen.add(text)

        for child in node.children:
            visit(child, depth + 1)

    visit(root, 0)
    return "\n".join(line for line in lines if not is_noise(line))


def _find_root(soup: BeautifulSoup, selector: Optional[str]) -> Tag:
    if selector:
        try:
            node = soup.select_one(selector)
        except SelectorSyntaxError as exc:
            logger.warning("Ignoring invalid selector %r: %s", selector, exc)
            node = None
        if node is not None:
            return node
    return soup.find("body") or soup


def reduce_html(html: Optional[str], selector: Optional[str] = None) -> str:
    """Return the reduced text of *html*, or an empty string on any failure.

    Args:
        html: Rendered page source; ``None`` or empty yields ``""``.
        selector: Optional CSS selector scoping the reduction root.  When it
            matches nothing the ``<body>`` (or the whole document) is used.
    """
    if not html:
        return ""

    try:
        soup = BeautifulSoup(html, "lxml")
        return reduce_node(SoupNode(_find_root(soup, selector)))
    except Exception as exc:
        logger.error("Error parsing HTML: %s", exc)
        return ""

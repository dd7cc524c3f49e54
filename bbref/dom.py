# dom.py
"""
Read-only helpers over a parsed BeautifulSoup tree.

Every lookup returns None for "absent" so callers check it explicitly.
Nothing here mutates the tree.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

Predicate = Callable[[Tag], bool]


def search(root: Tag, predicate: Predicate, max_depth: Optional[int] = None) -> Optional[Tag]:
    """
    Pre-order depth-first search starting at root.

    Returns the first element (root included) for which predicate holds,
    or None. Children are visited left to right before any later sibling.
    max_depth bounds the descent; root is depth 0.
    """
    stack: List[Tuple[Tag, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if predicate(node):
            return node
        if max_depth is not None and depth >= max_depth:
            continue
        children = [c for c in node.children if isinstance(c, Tag)]
        for child in reversed(children):
            stack.append((child, depth + 1))
    return None


def element_children(node: Tag, *names: str) -> Iterator[Tag]:
    """Direct element children of node, optionally restricted to tag names."""
    for child in node.children:
        if not isinstance(child, Tag):
            continue
        if names and child.name not in names:
            continue
        yield child


def get_attribute(node: Tag, key: str) -> Optional[str]:
    """
    Attribute value, or None if the attribute is not present.
    Multi-valued attributes (class, rel, ...) come back space-joined.
    """
    if key not in node.attrs:
        return None
    value = node.attrs[key]
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def _is_text(element: PageElement) -> bool:
    # Comments, CDATA, doctypes and declarations are not text.
    return isinstance(element, NavigableString) and not isinstance(element, PreformattedString)


def get_text(node: Tag) -> Optional[str]:
    """
    First run of text inside node, in document order.

    Nested markup is flattened and only the first run is kept:
    <td><a>12</a> pts</td> gives "12", not "12 pts".
    """
    for element in node.descendants:
        if _is_text(element) and str(element):
            return str(element)
    return None

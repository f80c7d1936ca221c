"""Comment reader that collapses ``<see cref="..."/>`` references into text.

``T:`` references to a loaded command class become its ``Verb-Noun`` name,
references to any other loaded class become the class name, and everything
else falls back to the last dotted segment of the reference.
"""

from __future__ import annotations

import copy
from typing import List, Optional, Tuple
from xml.etree.ElementTree import Element

from ..domain.reflection import MemberRef, resolve_type
from ..markers import cmdlet_marker
from .base import CommentReader


class RewritingCommentReader(CommentReader):
    """Returns rewritten copies of the fragments supplied by ``inner``."""

    def __init__(self, inner: CommentReader) -> None:
        self._inner = inner

    def get_type_comments(self, cls: type) -> Optional[Element]:
        return rewrite_fragment(self._inner.get_type_comments(cls))

    def get_field_comments(self, member: MemberRef) -> Optional[Element]:
        return rewrite_fragment(self._inner.get_field_comments(member))

    def get_property_comments(self, member: MemberRef) -> Optional[Element]:
        return rewrite_fragment(self._inner.get_property_comments(member))


def rewrite_fragment(fragment: Optional[Element]) -> Optional[Element]:
    """Return a copy of ``fragment`` with every ``see[@cref]`` collapsed."""
    if fragment is None:
        return None
    rewritten = copy.deepcopy(fragment)
    stack: List[Tuple[Element, Element]] = [(rewritten, child) for child in rewritten]
    while stack:
        parent, element = stack.pop()
        if _collapse_see(parent, element):
            continue
        stack.extend((element, child) for child in element)
    return rewritten


def text_for_cref(cref: str) -> str:
    if cref.startswith("T:"):
        referenced = resolve_type(cref[2:])
        if referenced is not None:
            marker = cmdlet_marker(referenced)
            return marker.name if marker is not None else referenced.__name__
    if "." in cref:
        return cref.rsplit(".", 1)[1]
    if len(cref) >= 2 and cref[1] == ":":
        return cref[2:]
    return cref


def _collapse_see(parent: Element, element: Element) -> bool:
    if element.tag != "see":
        return False
    cref = element.get("cref")
    if cref is None:
        return False
    text = "".join(element.itertext())
    if not text.strip():
        text = text_for_cref(cref)
    if not text.strip():
        return False
    _replace_with_text(parent, element, text)
    return True


def _replace_with_text(parent: Element, element: Element, text: str) -> None:
    children = list(parent)
    index = children.index(element)
    merged = text + (element.tail or "")
    if index == 0:
        parent.text = (parent.text or "") + merged
    else:
        previous = children[index - 1]
        previous.tail = (previous.tail or "") + merged
    parent.remove(element)


__all__ = ["RewritingCommentReader", "rewrite_fragment", "text_for_cref"]

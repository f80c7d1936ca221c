"""XML doc comment index and the reader that adapts it."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Optional
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element

from ..domain.reflection import MemberRef, full_type_name
from .base import CommentReader


class XmlDocIndex:
    """Name-keyed view over a ``<doc><members>`` XML doc comments file.

    Members are keyed by their prefixed identifier, e.g.
    ``T:module.GetThingCommand`` or ``P:module.GetThingCommand.Name``.
    """

    def __init__(self, members: Dict[str, Element]) -> None:
        self._members = members

    @classmethod
    def load(cls, path: Path) -> "XmlDocIndex":
        """Parse ``path``; raises ``ET.ParseError`` or ``OSError`` on failure."""
        root = ET.parse(path).getroot()
        return cls.from_element(root)

    @classmethod
    def from_string(cls, text: str) -> "XmlDocIndex":
        return cls.from_element(ET.fromstring(text))

    @classmethod
    def from_element(cls, root: Element) -> "XmlDocIndex":
        members: Dict[str, Element] = {}
        for member in root.iter("member"):
            name = member.get("name")
            if name and name not in members:
                members[name] = member
        return cls(members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def get(self, name: str) -> Optional[Element]:
        return self._members.get(name)


class XmlDocCommentReader(CommentReader):
    """Reads fragments straight from an :class:`XmlDocIndex`."""

    def __init__(self, index: XmlDocIndex) -> None:
        self._index = index

    def get_type_comments(self, cls: type) -> Optional[Element]:
        return self._index.get(f"T:{full_type_name(cls)}")

    def get_field_comments(self, member: MemberRef) -> Optional[Element]:
        return self._index.get(f"F:{member.full_name}")

    def get_property_comments(self, member: MemberRef) -> Optional[Element]:
        return self._index.get(f"P:{member.full_name}")


__all__ = ["XmlDocCommentReader", "XmlDocIndex"]

"""Base contract for doc comment readers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from xml.etree.ElementTree import Element

from ..domain.reflection import MemberKind, MemberRef


class CommentReader(ABC):
    """Looks up the XML doc comment fragment for a type, field or property.

    A fragment is the ``<member>`` element for the requested member, or None
    when the member is undocumented.
    """

    @abstractmethod
    def get_type_comments(self, cls: type) -> Optional[Element]:
        """Return the fragment documenting ``cls``."""

    @abstractmethod
    def get_field_comments(self, member: MemberRef) -> Optional[Element]:
        """Return the fragment documenting a field."""

    @abstractmethod
    def get_property_comments(self, member: MemberRef) -> Optional[Element]:
        """Return the fragment documenting a property."""

    def get_member_comments(self, member: MemberRef) -> Optional[Element]:
        if member.kind is MemberKind.FIELD:
            return self.get_field_comments(member)
        return self.get_property_comments(member)


__all__ = ["CommentReader"]

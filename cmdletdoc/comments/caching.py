"""Memoizing comment reader."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Optional, TypeVar, Union
from xml.etree.ElementTree import Element

from ..domain.reflection import MemberRef
from .base import CommentReader

_MISSING = object()

_K = TypeVar("_K", bound=Hashable)


class CachingCommentReader(CommentReader):
    """Delegates each lookup to ``inner`` at most once per member.

    Absent results are cached too, so an undocumented member is only looked
    up (and only reported by an inner logging reader) once.
    """

    def __init__(self, inner: CommentReader) -> None:
        self._inner = inner
        self._cache: Dict[Union[type, MemberRef], object] = {}

    def get_type_comments(self, cls: type) -> Optional[Element]:
        return self._lookup(cls, self._inner.get_type_comments)

    def get_field_comments(self, member: MemberRef) -> Optional[Element]:
        return self._lookup(member, self._inner.get_field_comments)

    def get_property_comments(self, member: MemberRef) -> Optional[Element]:
        return self._lookup(member, self._inner.get_property_comments)

    def _lookup(self, key: _K, fetch: Callable[[_K], Optional[Element]]) -> Optional[Element]:
        cached = self._cache.get(key, _MISSING)
        if cached is _MISSING:
            cached = fetch(key)
            self._cache[key] = cached
        return cached  # type: ignore[return-value]


__all__ = ["CachingCommentReader"]

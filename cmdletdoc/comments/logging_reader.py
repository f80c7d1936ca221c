"""Comment reader that reports undocumented members."""

from __future__ import annotations

from typing import Optional
from xml.etree.ElementTree import Element

from ..domain.reflection import MemberRef, ReportWarning, WarningTarget
from .base import CommentReader

NO_COMMENT_WARNING = "No XML doc comment found."


class LoggingCommentReader(CommentReader):
    """Reports a warning whenever ``inner`` has no fragment for a member."""

    def __init__(self, inner: CommentReader, report_warning: ReportWarning) -> None:
        self._inner = inner
        self._report_warning = report_warning

    def get_type_comments(self, cls: type) -> Optional[Element]:
        return self._check(self._inner.get_type_comments(cls), cls)

    def get_field_comments(self, member: MemberRef) -> Optional[Element]:
        return self._check(self._inner.get_field_comments(member), member)

    def get_property_comments(self, member: MemberRef) -> Optional[Element]:
        return self._check(self._inner.get_property_comments(member), member)

    def _check(self, fragment: Optional[Element], target: WarningTarget) -> Optional[Element]:
        if fragment is None:
            self._report_warning(target, NO_COMMENT_WARNING)
        return fragment


__all__ = ["LoggingCommentReader", "NO_COMMENT_WARNING"]

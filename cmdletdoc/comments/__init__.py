"""Doc comment readers and the decorator chain built over them."""

from .base import CommentReader
from .caching import CachingCommentReader
from .logging_reader import LoggingCommentReader
from .rewriting import RewritingCommentReader
from .xmldoc import XmlDocCommentReader, XmlDocIndex
from ..domain.reflection import ReportWarning


def build_comment_reader(index: XmlDocIndex, report_warning: ReportWarning) -> CommentReader:
    """Compose the reader chain used for one generation run."""
    return CachingCommentReader(
        LoggingCommentReader(RewritingCommentReader(XmlDocCommentReader(index)), report_warning)
    )


__all__ = [
    "CachingCommentReader",
    "CommentReader",
    "LoggingCommentReader",
    "RewritingCommentReader",
    "XmlDocCommentReader",
    "XmlDocIndex",
    "build_comment_reader",
]

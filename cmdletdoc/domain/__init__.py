"""Command and parameter model reflected from a loaded command module."""

from .command import Command
from .parameter import Parameter, ReflectedSource, RuntimeSource
from .reflection import MemberKind, MemberRef

__all__ = [
    "Command",
    "MemberKind",
    "MemberRef",
    "Parameter",
    "ReflectedSource",
    "RuntimeSource",
]

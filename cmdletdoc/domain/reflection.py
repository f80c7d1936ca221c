"""Reflection helpers over command classes and their annotated members."""

from __future__ import annotations

import enum
import inspect
import sys
import types
import typing
from collections import abc
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

_ITERABLE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    abc.Sequence,
    abc.MutableSequence,
    abc.Iterable,
    abc.Collection,
    abc.Set,
)

_UNION_TYPES = (Union, types.UnionType)


class MemberKind(enum.Enum):
    """Kind of class member backing a parameter."""

    FIELD = "field"
    PROPERTY = "property"


@dataclass(frozen=True)
class MemberRef:
    """Identity of a field or property on a class."""

    owner: type
    name: str
    kind: MemberKind

    @property
    def full_name(self) -> str:
        return f"{full_type_name(self.owner)}.{self.name}"

    @property
    def module(self) -> str:
        return self.owner.__module__


def full_type_name(tp: Any) -> str:
    """Return ``module.QualName`` for a class (builtins keep their bare name)."""
    if tp is type(None):
        return "None"
    if typing.get_origin(tp) is not None:
        return _render_generic(tp)
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None) or repr(tp)
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"


def short_type_name(tp: Any) -> str:
    if typing.get_origin(tp) is not None:
        return _render_generic(tp)
    return getattr(tp, "__name__", None) or repr(tp)


def _render_generic(tp: Any) -> str:
    origin = typing.get_origin(tp)
    args = ", ".join(
        "..." if arg is Ellipsis else full_type_name(arg) for arg in typing.get_args(tp)
    )
    return f"{short_type_name(origin)}[{args}]"


WarningTarget = Union[type, MemberRef]
ReportWarning = Callable[[WarningTarget, str], None]


def target_name(target: WarningTarget) -> str:
    """Fully-qualified name of a warning target."""
    if isinstance(target, MemberRef):
        return target.full_name
    return full_type_name(target)


def target_module(target: WarningTarget) -> Optional[str]:
    if isinstance(target, MemberRef):
        return target.module
    return getattr(target, "__module__", None)


def unwrap_optional(tp: Any) -> Any:
    """Strip ``Optional[...]`` down to its underlying type."""
    if typing.get_origin(tp) in _UNION_TYPES:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def split_annotated(hint: Any) -> Tuple[Any, Tuple[object, ...]]:
    """Return ``(type, metadata)`` for an ``Annotated`` hint."""
    if typing.get_origin(hint) is typing.Annotated:
        base, *metadata = typing.get_args(hint)
        return base, tuple(metadata)
    return hint, ()


def array_element_type(tp: Any) -> Optional[Any]:
    """Element type for ``list[X]`` and ``tuple[X, ...]``, else None."""
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is list and len(args) == 1:
        return args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    return None


def enum_type_of(tp: Any) -> Optional[type]:
    """Return the enum class behind ``tp`` or its element type."""
    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        return tp
    if typing.get_origin(tp) in _ITERABLE_ORIGINS:
        args = [arg for arg in typing.get_args(tp) if arg is not Ellipsis]
        if args:
            element = unwrap_optional(args[0])
            if isinstance(element, type) and issubclass(element, enum.Enum):
                return element
    return None


def iter_annotated_members(cls: type) -> Iterator[Tuple[MemberRef, Any, Tuple[object, ...]]]:
    """Yield public annotated fields and properties of ``cls``.

    Each item is ``(member, value type, metadata)``; ``member.owner`` is the
    class that declares the member. Members are yielded in declaration order,
    base classes first, fields before properties. A member redeclared by a
    subclass is reported once, as the subclass declares it.
    """
    seen: set[str] = set()
    groups: List[List[Tuple[MemberRef, Any]]] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        group = []
        for member, hint in _class_members(klass):
            if member.name in seen:
                continue
            seen.add(member.name)
            group.append((member, hint))
        groups.append(group)
    for group in reversed(groups):
        for member, hint in group:
            base, metadata = split_annotated(hint)
            yield member, unwrap_optional(base), metadata


def _class_members(klass: type) -> List[Tuple[MemberRef, Any]]:
    members: List[Tuple[MemberRef, Any]] = []
    own_annotations = inspect.get_annotations(klass)
    if own_annotations:
        hints = _type_hints(klass)
        for name in own_annotations:
            if name.startswith("_") or name not in hints:
                continue
            if isinstance(klass.__dict__.get(name), property):
                continue
            members.append((MemberRef(klass, name, MemberKind.FIELD), hints[name]))
    for name, value in klass.__dict__.items():
        if name.startswith("_") or not isinstance(value, property):
            continue
        hint = _property_hint(value)
        if hint is not None:
            members.append((MemberRef(klass, name, MemberKind.PROPERTY), hint))
    return members


def _type_hints(obj: Any) -> Dict[str, Any]:
    return typing.get_type_hints(obj, include_extras=True)


def _property_hint(prop: property) -> Optional[Any]:
    if prop.fget is not None:
        return _type_hints(prop.fget).get("return")
    if prop.fset is not None:
        hints = _type_hints(prop.fset)
        hints.pop("return", None)
        values = list(hints.values())
        return values[0] if values else None
    return None


def resolve_type(dotted_name: str) -> Optional[type]:
    """Find a loaded class by its dotted ``module.QualName``."""
    parts = dotted_name.split(".")
    for split in range(len(parts), 0, -1):
        module = sys.modules.get(".".join(parts[:split]))
        if module is None:
            continue
        obj: Any = module
        for attribute in parts[split:]:
            obj = getattr(obj, attribute, None)
            if obj is None:
                break
        if isinstance(obj, type):
            return obj
    return None


__all__ = [
    "MemberKind",
    "MemberRef",
    "ReportWarning",
    "WarningTarget",
    "array_element_type",
    "enum_type_of",
    "full_type_name",
    "iter_annotated_members",
    "resolve_type",
    "short_type_name",
    "split_annotated",
    "target_module",
    "target_name",
    "unwrap_optional",
]

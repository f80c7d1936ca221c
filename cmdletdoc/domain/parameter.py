"""Parameters of a command.

A parameter is backed either by a reflected member (a field or property on the
command class, or on a class that supplies its dynamic parameters) or by a
:class:`~cmdletdoc.markers.RuntimeDefinedParameter` built by the command at
runtime. :class:`Parameter` exposes one operation set over both variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

from ..markers import (
    ALL_PARAMETER_SETS,
    Alias,
    Parameter as ParameterMarker,
    RuntimeDefinedParameter,
    SupportsWildcards,
)
from .reflection import MemberKind, MemberRef, ReportWarning, enum_type_of

_M = TypeVar("_M")


@dataclass(frozen=True)
class ReflectedSource:
    """A parameter declared on a class member.

    ``owner_type`` is the class instantiated to read default values; the
    member itself may be declared on one of its bases.
    """

    owner_type: type
    member: MemberRef
    value_type: Any
    metadata: Tuple[object, ...]


@dataclass(frozen=True)
class RuntimeSource:
    """A parameter supplied by the command at runtime."""

    cmdlet_type: type
    definition: RuntimeDefinedParameter


ParameterSource = Union[ReflectedSource, RuntimeSource]


class Parameter:
    """A single parameter of a command."""

    def __init__(self, source: ParameterSource) -> None:
        self.source = source
        self._declarations: List[ParameterMarker] = self.markers(ParameterMarker)

    def __repr__(self) -> str:
        return f"Parameter({self.name!r})"

    @property
    def name(self) -> str:
        match self.source:
            case ReflectedSource(member=member):
                return member.name
            case RuntimeSource(definition=definition):
                return definition.name
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    @property
    def value_type(self) -> Any:
        match self.source:
            case ReflectedSource(value_type=value_type):
                return value_type
            case RuntimeSource(definition=definition):
                return definition.value_type
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    @property
    def member_kind(self) -> MemberKind:
        match self.source:
            case ReflectedSource(member=member):
                return member.kind
            case RuntimeSource():
                return MemberKind.PROPERTY
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    @property
    def member(self) -> MemberRef:
        """Member used to look up comments and to attribute warnings.

        Runtime parameters map onto a property of the same name on the
        command class.
        """
        match self.source:
            case ReflectedSource(member=member):
                return member
            case RuntimeSource(cmdlet_type=cmdlet_type, definition=definition):
                return MemberRef(cmdlet_type, definition.name, MemberKind.PROPERTY)
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    @property
    def supports_globbing(self) -> bool:
        match self.source:
            case ReflectedSource():
                return bool(self.markers(SupportsWildcards))
            case RuntimeSource():
                # Runtime parameters are not inspected for wildcard markers.
                return False
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    def markers(self, marker_type: type[_M]) -> List[_M]:
        """Return the declarative markers of ``marker_type`` on this parameter."""
        match self.source:
            case ReflectedSource(metadata=metadata):
                candidates: Sequence[object] = metadata
            case RuntimeSource(definition=definition):
                candidates = definition.attributes
            case _:
                raise TypeError(f"Unsupported parameter source: {self.source!r}")
        return [item for item in candidates if isinstance(item, marker_type)]

    def get_default_value(self, report_warning: ReportWarning) -> Any:
        """Instantiate the owning class and read the member's initial value."""
        match self.source:
            case RuntimeSource():
                return None
            case ReflectedSource(owner_type=owner_type, member=member):
                return _read_default(owner_type, member, report_warning)
        raise TypeError(f"Unsupported parameter source: {self.source!r}")

    # ------------------------------------------------------------------
    # Parameter set declarations

    @property
    def parameter_set_names(self) -> List[str]:
        return [declaration.parameter_set_name for declaration in self._declarations]

    def _declarations_for(self, parameter_set_name: str) -> List[ParameterMarker]:
        if parameter_set_name == ALL_PARAMETER_SETS:
            return list(self._declarations)
        return [
            declaration
            for declaration in self._declarations
            if declaration.parameter_set_name in (parameter_set_name, ALL_PARAMETER_SETS)
        ]

    def is_required(self, parameter_set_name: str) -> bool:
        return any(d.mandatory for d in self._declarations_for(parameter_set_name))

    def is_pipeline(self, parameter_set_name: str) -> bool:
        return any(
            d.value_from_pipeline or d.value_from_pipeline_by_property_name
            for d in self._declarations_for(parameter_set_name)
        )

    def pipeline_input(self, parameter_set_name: str) -> str:
        declarations = self._declarations_for(parameter_set_name)
        by_value = any(d.value_from_pipeline for d in declarations)
        by_property_name = any(d.value_from_pipeline_by_property_name for d in declarations)
        if by_value and by_property_name:
            return "true (ByValue, ByPropertyName)"
        if by_value:
            return "true (ByValue)"
        if by_property_name:
            return "true (ByPropertyName)"
        return "false"

    def position(self, parameter_set_name: str) -> Optional[str]:
        """Position within the set: a decimal string, ``"named"``, or None."""
        declarations = self._declarations_for(parameter_set_name)
        if not declarations:
            return None
        declared = declarations[0].position
        return "named" if declared is None else str(declared)

    # ------------------------------------------------------------------
    # Derived values

    @property
    def aliases(self) -> List[str]:
        found = self.markers(Alias)
        return list(found[0].names) if found else []

    @property
    def enum_values(self) -> List[str]:
        enum_type = enum_type_of(self.value_type)
        if enum_type is None:
            return []
        return list(enum_type.__members__)


def _read_default(owner_type: type, member: MemberRef, report_warning: ReportWarning) -> Any:
    if member.kind is MemberKind.PROPERTY:
        prop = _find_property(owner_type, member.name)
        if prop is not None and prop.fget is None:
            report_warning(
                member, "Parameter does not have a getter. Unable to determine its default value"
            )
            return None
    try:
        instance = owner_type()
    except Exception as exc:
        report_warning(
            member, f"Unable to create {owner_type.__qualname__} to determine its default value: {exc}"
        )
        return None
    try:
        return getattr(instance, member.name, None)
    except Exception as exc:
        report_warning(member, f"Unable to read {member.name} to determine its default value: {exc}")
        return None


def _find_property(owner_type: type, name: str) -> Optional[property]:
    for klass in owner_type.__mro__:
        value = klass.__dict__.get(name)
        if value is not None:
            return value if isinstance(value, property) else None
    return None


__all__ = [
    "Parameter",
    "ParameterSource",
    "ReflectedSource",
    "RuntimeSource",
]

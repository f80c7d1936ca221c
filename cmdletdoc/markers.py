"""Declarative markers used by command modules to describe their cmdlets.

A command module exposes public classes that derive from :class:`Cmdlet` and
carry a :func:`cmdlet` marker. Parameters are declared with ``typing.Annotated``
metadata, either on a class-level field annotation or on a property getter's
return annotation::

    @cmdlet("Get", "Thing")
    @output_type(Thing)
    class GetThingCommand(Cmdlet):
        name: Annotated[str, Parameter(mandatory=True, position=0), Alias("n")] = ""

        @property
        def colour(self) -> Annotated[Colour, Parameter(parameter_set_name="ByColour")]:
            return self._colour
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

ALL_PARAMETER_SETS = "__AllParameterSets"

_CMDLET_ATTR = "__cmdlet__"
_OUTPUT_TYPES_ATTR = "__output_types__"

_T = TypeVar("_T", bound=type)


@dataclass(frozen=True)
class CmdletMarker:
    """Verb and noun that name a command."""

    verb: str
    noun: str

    @property
    def name(self) -> str:
        return f"{self.verb}-{self.noun}"


@dataclass(frozen=True)
class Parameter:
    """Declares membership of a parameter in one parameter set.

    A member may carry several markers, one per parameter set it belongs to.
    ``position=None`` means the parameter can only be bound by name.
    """

    parameter_set_name: str = ALL_PARAMETER_SETS
    mandatory: bool = False
    position: Optional[int] = None
    value_from_pipeline: bool = False
    value_from_pipeline_by_property_name: bool = False


@dataclass(frozen=True)
class Alias:
    """Alternative names accepted for a parameter."""

    names: Tuple[str, ...]

    def __init__(self, *names: str) -> None:
        object.__setattr__(self, "names", tuple(names))


@dataclass(frozen=True)
class SupportsWildcards:
    """Marks a parameter whose value may contain wildcard patterns."""


class Cmdlet:
    """Base class for command types."""


class DynamicParameters(ABC):
    """Mixin for commands that declare parameters at runtime."""

    @abstractmethod
    def get_dynamic_parameters(self) -> object:
        """Return an object whose class declares parameters, or a
        :class:`RuntimeDefinedParameterDictionary`."""


@dataclass
class RuntimeDefinedParameter:
    """A parameter built at runtime rather than declared on a class."""

    name: str
    value_type: Any
    attributes: List[object] = field(default_factory=list)


class RuntimeDefinedParameterDictionary(Dict[str, RuntimeDefinedParameter]):
    """Name-keyed collection of runtime parameters."""


def cmdlet(verb: str, noun: str) -> Callable[[_T], _T]:
    """Class decorator naming a command ``verb-noun``."""

    def decorate(cls: _T) -> _T:
        setattr(cls, _CMDLET_ATTR, CmdletMarker(verb, noun))
        return cls

    return decorate


def output_type(*types: Optional[type]) -> Callable[[_T], _T]:
    """Class decorator declaring the types a command writes to its output.

    ``None`` declares that the command produces no output. The decorator may be
    applied more than once.
    """

    def decorate(cls: _T) -> _T:
        declared = list(cls.__dict__.get(_OUTPUT_TYPES_ATTR, ()))
        declared.extend(type(None) if item is None else item for item in types)
        setattr(cls, _OUTPUT_TYPES_ATTR, tuple(declared))
        return cls

    return decorate


def cmdlet_marker(cls: type) -> Optional[CmdletMarker]:
    """Return the command marker declared directly on ``cls``, if any."""
    marker = cls.__dict__.get(_CMDLET_ATTR)
    return marker if isinstance(marker, CmdletMarker) else None


def declared_output_types(cls: type) -> Sequence[type]:
    return tuple(cls.__dict__.get(_OUTPUT_TYPES_ATTR, ()))


__all__ = [
    "ALL_PARAMETER_SETS",
    "Alias",
    "Cmdlet",
    "CmdletMarker",
    "DynamicParameters",
    "Parameter",
    "RuntimeDefinedParameter",
    "RuntimeDefinedParameterDictionary",
    "SupportsWildcards",
    "cmdlet",
    "cmdlet_marker",
    "declared_output_types",
    "output_type",
]

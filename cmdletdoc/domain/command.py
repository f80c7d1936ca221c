"""Command model built by reflecting over a cmdlet class."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..markers import (
    ALL_PARAMETER_SETS,
    CmdletMarker,
    DynamicParameters,
    Parameter as ParameterMarker,
    RuntimeDefinedParameterDictionary,
    cmdlet_marker,
    declared_output_types,
)
from .parameter import Parameter, ReflectedSource, RuntimeSource
from .reflection import full_type_name, iter_annotated_members


class Command:
    """A documented command: one public class carrying a ``@cmdlet`` marker."""

    def __init__(self, cmdlet_type: type) -> None:
        marker = cmdlet_marker(cmdlet_type)
        if marker is None:
            raise ValueError(f"{full_type_name(cmdlet_type)} has no @cmdlet marker")
        self.cmdlet_type = cmdlet_type
        self._marker: CmdletMarker = marker
        self._parameters: Optional[List[Parameter]] = None

    def __repr__(self) -> str:
        return f"Command({self.name!r})"

    @property
    def verb(self) -> str:
        return self._marker.verb

    @property
    def noun(self) -> str:
        return self._marker.noun

    @property
    def name(self) -> str:
        return self._marker.name

    @property
    def output_types(self) -> List[type]:
        distinct = list(dict.fromkeys(declared_output_types(self.cmdlet_type)))
        return sorted(distinct, key=full_type_name)

    @property
    def parameters(self) -> List[Parameter]:
        if self._parameters is None:
            self._parameters = self._discover_parameters()
        return list(self._parameters)

    def get_parameters(self, parameter_set_name: str) -> List[Parameter]:
        if parameter_set_name == ALL_PARAMETER_SETS:
            return self.parameters
        return [
            parameter
            for parameter in self.parameters
            if parameter_set_name in parameter.parameter_set_names
            or ALL_PARAMETER_SETS in parameter.parameter_set_names
        ]

    @property
    def parameter_set_names(self) -> List[str]:
        names: List[str] = []
        for parameter in self.parameters:
            for name in parameter.parameter_set_names:
                if name not in names:
                    names.append(name)
        return names

    def _discover_parameters(self) -> List[Parameter]:
        parameters = _reflected_parameters(self.cmdlet_type)
        if not issubclass(self.cmdlet_type, DynamicParameters):
            return parameters

        scanned = {self.cmdlet_type}
        for value in vars(self.cmdlet_type).values():
            if isinstance(value, type):
                scanned.add(value)
                parameters.extend(_reflected_parameters(value))

        dynamic = self.cmdlet_type().get_dynamic_parameters()
        if isinstance(dynamic, RuntimeDefinedParameterDictionary):
            for definition in dynamic.values():
                if any(isinstance(item, ParameterMarker) for item in definition.attributes):
                    parameters.append(Parameter(RuntimeSource(self.cmdlet_type, definition)))
        elif dynamic is not None and type(dynamic) not in scanned:
            parameters.extend(_reflected_parameters(type(dynamic)))
        return parameters


def _reflected_parameters(owner_type: type) -> List[Parameter]:
    found: List[Parameter] = []
    for member, value_type, metadata in iter_annotated_members(owner_type):
        if not _has_parameter_marker(metadata):
            continue
        found.append(Parameter(ReflectedSource(owner_type, member, value_type, metadata)))
    return found


def _has_parameter_marker(metadata: Sequence[object]) -> bool:
    return any(isinstance(item, ParameterMarker) for item in metadata)


__all__ = ["Command"]

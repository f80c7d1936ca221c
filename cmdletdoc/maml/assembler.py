"""Assembles the MAML help document for a set of commands."""

from __future__ import annotations

import copy
import ctypes
import enum
from collections.abc import Iterable
from typing import Any, Collection, Dict, List, Optional, Sequence
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Comment, Element, SubElement

from ..comments.base import CommentReader
from ..domain import Command, Parameter
from ..domain.reflection import (
    ReportWarning,
    WarningTarget,
    array_element_type,
    full_type_name,
    short_type_name,
)
from ..logging import get_logger
from ..markers import ALL_PARAMETER_SETS
from .extraction import (
    Warn,
    alert_set_element,
    append_para,
    description_element,
    examples_element,
    related_links_element,
)
from .namespaces import command, dev, maml, msh

_NONE_TYPE = type(None)

# c_int and c_uint come after c_long and c_ulong so they win where ctypes aliases them.
_SIMPLE_TYPE_NAMES: Dict[Any, str] = {
    object: "object",
    str: "string",
    bool: "bool",
    int: "int",
    float: "double",
    ctypes.c_byte: "byte",
    ctypes.c_char: "char",
    ctypes.c_short: "short",
    ctypes.c_ushort: "ushort",
    ctypes.c_long: "long",
    ctypes.c_ulong: "ulong",
    ctypes.c_int: "int",
    ctypes.c_uint: "uint",
    ctypes.c_float: "float",
    ctypes.c_double: "double",
}


def simple_type_name(value_type: Any) -> str:
    """Short display name used for ``command:parameterValue``."""
    element_type = array_element_type(value_type)
    if element_type is not None:
        return simple_type_name(element_type) + "[]"
    try:
        name = _SIMPLE_TYPE_NAMES.get(value_type)
    except TypeError:
        name = None
    return name if name is not None else short_type_name(value_type)


def format_default_value(value: Any) -> str:
    """Render a default value; non-string iterables are comma-joined."""
    if value is None:
        return ""
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return _format_scalar(value)
    return ", ".join(_format_scalar(item) for item in value)


def _format_scalar(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _syntax_sort_key(parameter: Parameter, parameter_set_name: str) -> tuple[str, str, str]:
    # Positions compare as strings, so "10" sorts before "2" and "named" after digits.
    return (
        parameter.position(parameter_set_name) or "",
        "0" if parameter.is_required(parameter_set_name) else "1",
        parameter.name,
    )


def _bool(value: bool) -> str:
    return "true" if value else "false"


class HelpDocumentAssembler:
    """Builds ``helpItems`` trees from commands and their doc comments.

    ``comment_reader`` is normally the full decorator chain so that every
    fragment is rewritten, reported when missing, and looked up once.
    """

    def __init__(
        self,
        comment_reader: CommentReader,
        report_warning: ReportWarning,
        excluded_parameter_sets: Collection[str] = (),
    ) -> None:
        self._comments = comment_reader
        self._report_warning = report_warning
        self._excluded = frozenset(excluded_parameter_sets)
        self.logger = get_logger("assembler")

    def build(self, commands: Sequence[Command]) -> ET.ElementTree:
        root = Element(msh("helpItems"), {"schema": "maml"})
        for cmd in sorted(commands, key=lambda item: full_type_name(item.cmdlet_type)):
            self.logger.debug("Assembling help for %s", cmd.name)
            root.append(_comment(f" Cmdlet: {cmd.name} "))
            root.append(self.command_element(cmd))
        return ET.ElementTree(root)

    def command_element(self, cmd: Command) -> Element:
        element = Element(command("command"))
        element.append(self._details_element(cmd))
        self._append(element, self._description(cmd))
        element.append(self._syntax_element(cmd))
        element.append(self._parameters_element(cmd))
        element.append(self._input_types_element(cmd))
        element.append(self._return_values_element(cmd))
        fragment = self._comments.get_type_comments(cmd.cmdlet_type)
        self._append(element, alert_set_element(fragment))
        self._append(element, examples_element(fragment, self._warn_for(cmd.cmdlet_type)))
        self._append(element, related_links_element(fragment))
        return element

    # ------------------------------------------------------------------
    # Command sections

    def _details_element(self, cmd: Command) -> Element:
        details = Element(command("details"))
        SubElement(details, command("name")).text = cmd.name
        SubElement(details, command("verb")).text = cmd.verb
        SubElement(details, command("noun")).text = cmd.noun
        fragment = self._comments.get_type_comments(cmd.cmdlet_type)
        self._append(
            details, description_element(fragment, "synopsis", self._warn_for(cmd.cmdlet_type))
        )
        return details

    def _description(self, cmd: Command) -> Optional[Element]:
        fragment = self._comments.get_type_comments(cmd.cmdlet_type)
        return description_element(fragment, "description", self._warn_for(cmd.cmdlet_type))

    def _syntax_element(self, cmd: Command) -> Element:
        syntax = Element(command("syntax"))
        for parameter_set_name in self._syntax_parameter_sets(cmd):
            syntax.append(_comment(f"Parameter set: {parameter_set_name}"))
            item = SubElement(syntax, command("syntaxItem"))
            SubElement(item, maml("name")).text = cmd.name
            parameters = sorted(
                cmd.get_parameters(parameter_set_name),
                key=lambda parameter: _syntax_sort_key(parameter, parameter_set_name),
            )
            for parameter in parameters:
                item.append(self._parameter_element(parameter, parameter_set_name))
        return syntax

    def _syntax_parameter_sets(self, cmd: Command) -> List[str]:
        names = cmd.parameter_set_names
        if len(names) > 1:
            names = [name for name in names if name != ALL_PARAMETER_SETS]
        if not names:
            names = [ALL_PARAMETER_SETS]
        return [name for name in names if name not in self._excluded]

    def _parameters_element(self, cmd: Command) -> Element:
        parameters = Element(command("parameters"))
        for parameter in cmd.parameters:
            parameters.append(_comment(f"Parameter: {parameter.name}"))
            element = self._parameter_element(parameter, ALL_PARAMETER_SETS)
            parameters.append(element)
            for alias in parameter.aliases:
                parameters.append(_comment(f"Parameter: {alias}"))
                parameters.append(_alias_element(element, alias, parameter.name))
        return parameters

    def _input_types_element(self, cmd: Command) -> Element:
        input_types = Element(command("inputTypes"))
        for parameter in cmd.parameters:
            if not parameter.is_pipeline(ALL_PARAMETER_SETS):
                continue
            input_type = SubElement(input_types, command("inputType"))
            fragment = self._comments.get_member_comments(parameter.member)
            description = description_element(fragment, "inputType", _ignore)
            if description is None:
                description = description_element(fragment, "description", _ignore)
            if description is None:
                self._report_warning(parameter.member, "No inputType comment found.")
                input_type.append(self._type_element(parameter.value_type, with_description=True))
            else:
                input_type.append(self._type_element(parameter.value_type, with_description=False))
                input_type.append(description)
        return input_types

    def _return_values_element(self, cmd: Command) -> Element:
        return_values = Element(command("returnValues"))
        for output_type in cmd.output_types:
            return_value = SubElement(return_values, command("returnValue"))
            return_value.append(self._type_element(output_type, with_description=False))
            if output_type is not _NONE_TYPE:
                self._append(return_value, self._type_description(output_type))
        return return_values

    # ------------------------------------------------------------------
    # Parameters

    def _parameter_element(self, parameter: Parameter, parameter_set_name: str) -> Element:
        element = Element(command("parameter"))
        element.set("required", _bool(parameter.is_required(parameter_set_name)))
        element.set("globbing", _bool(parameter.supports_globbing))
        element.set("pipelineInput", parameter.pipeline_input(parameter_set_name))
        position = parameter.position(parameter_set_name)
        if position is not None:
            element.set("position", position)

        SubElement(element, maml("name")).text = parameter.name
        self._append(element, self._parameter_description(parameter))
        value = SubElement(element, command("parameterValue"), {"required": "true"})
        value.text = simple_type_name(parameter.value_type)
        element.append(self._type_element(parameter.value_type, with_description=True))

        default_value = format_default_value(parameter.get_default_value(self._report_warning))
        if default_value:
            SubElement(element, dev("defaultValue")).text = default_value

        enum_values = parameter.enum_values
        if enum_values:
            group = SubElement(element, command("parameterValueGroup"))
            for name in enum_values:
                SubElement(
                    group,
                    command("parameterValue"),
                    {"required": "false", "variableLength": "false"},
                ).text = name
        return element

    def _parameter_description(self, parameter: Parameter) -> Optional[Element]:
        fragment = self._comments.get_member_comments(parameter.member)
        description = description_element(fragment, "description", self._warn_for(parameter.member))
        enum_values = parameter.enum_values
        if enum_values:
            if description is None:
                description = Element(maml("description"))
            append_para(description, "Possible values: " + ", ".join(enum_values))
        return description

    # ------------------------------------------------------------------
    # Types

    def _type_element(self, value_type: Any, *, with_description: bool) -> Element:
        element = Element(dev("type"))
        SubElement(element, maml("name")).text = full_type_name(value_type)
        SubElement(element, maml("uri"))
        if with_description:
            self._append(element, self._type_description(value_type))
        return element

    def _type_description(self, value_type: Any) -> Optional[Element]:
        fragment = self._comments.get_type_comments(value_type)
        return description_element(fragment, "description", self._warn_for(value_type))

    # ------------------------------------------------------------------
    # Helpers

    def _warn_for(self, target: WarningTarget) -> Warn:
        def warn(text: str) -> None:
            self._report_warning(target, text)

        return warn

    @staticmethod
    def _append(parent: Element, child: Optional[Element]) -> None:
        if child is not None:
            parent.append(child)


def _alias_element(element: Element, alias: str, original_name: str) -> Element:
    duplicate = copy.deepcopy(element)
    duplicate.find(maml("name")).text = alias
    description = duplicate.find(maml("description"))
    if description is None:
        description = Element(maml("description"))
        duplicate.insert(1, description)
    append_para(description, f"This is an alias of the {original_name} parameter.")
    return duplicate


def _comment(text: str) -> Element:
    # XML comments may not contain "--" or end with "-".
    while "--" in text:
        text = text.replace("--", "- -")
    if text.endswith("-"):
        text += " "
    return Comment(text)


def _ignore(_text: str) -> None:
    return None


def write_document(document: ET.ElementTree, path: Any) -> None:
    """Serialize ``document`` as indented UTF-8 with an XML declaration."""
    ET.indent(document, space="  ")
    with open(path, "wb") as handle:
        document.write(handle, encoding="utf-8", xml_declaration=True)


__all__ = [
    "HelpDocumentAssembler",
    "format_default_value",
    "simple_type_name",
    "write_document",
]

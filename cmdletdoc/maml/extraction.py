"""Rules that reshape XML doc comment fragments into MAML elements.

Every function here is pure apart from the ``warn`` callback, which receives
the warning text for the member the fragment belongs to.
"""

from __future__ import annotations

import copy
import re
from itertools import dropwhile, takewhile
from typing import Callable, List, Optional
from xml.etree.ElementTree import Element, SubElement

from .namespaces import PREFIXES, command, dev, maml

Warn = Callable[[str], None]

_WHITESPACE_RUN = re.compile(r"\s{2,}")
_LEADING_WHITESPACE = re.compile(r"^\s*")


def tidy(value: str) -> str:
    """Collapse runs of two or more whitespace characters and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", value).strip()


def tidy_code(value: str) -> str:
    """Trim blank leading and trailing lines and dedent the rest."""
    lines = value.replace("\r\n", "\n").split("\n")
    lines = list(dropwhile(_is_blank, lines))
    lines = list(reversed(list(dropwhile(_is_blank, reversed(lines)))))
    non_blank = [line for line in lines if not _is_blank(line)]
    if non_blank:
        prefix = min(len(_LEADING_WHITESPACE.match(line).group(0)) for line in non_blank)
        if prefix > 0:
            lines = ["" if len(line) <= prefix else line[prefix:] for line in lines]
    return "\n".join(lines)


def element_text(element: Element) -> str:
    return "".join(element.itertext())


def _is_blank(line: str) -> bool:
    return not line.strip()


def _para(parent: Element, text: str) -> Element:
    para = SubElement(parent, maml("para"))
    para.text = text
    return para


def description_element(fragment: Optional[Element], kind: str, warn: Warn) -> Optional[Element]:
    """Resolve a ``maml:description`` of the given kind from a fragment.

    An embedded ``<maml:description type="kind">`` wins; otherwise every
    ``<para type="kind">`` becomes a tidied ``maml:para``. When neither is
    present a warning is reported and None is returned.
    """
    if fragment is not None:
        embedded = fragment.find(f".//maml:description[@type='{kind}']", PREFIXES)
        if embedded is not None:
            description = copy.deepcopy(embedded)
            description.attrib.clear()
            description.tail = None
            return description

        paras = fragment.findall(f".//para[@type='{kind}']")
        if paras:
            description = Element(maml("description"))
            for para in paras:
                _para(description, tidy(element_text(para)))
            return description

    warn(f"No {kind} comment found.")
    return None


def append_para(description: Element, text: str) -> None:
    _para(description, text)


def examples_element(fragment: Optional[Element], warn: Warn) -> Optional[Element]:
    """Build ``command:examples`` from the ``<example>`` elements of a fragment."""
    if fragment is None:
        return None
    sources = fragment.findall(".//example")
    if not sources:
        warn("No examples found.")
        return None

    examples = Element(command("examples"))
    number = 1
    for source in sources:
        example = _example_element(source, number)
        if example is None:
            warn(f"No para or code elements found for example {number}.")
            continue
        examples.append(example)
        number += 1
    return examples if number > 1 else None


def _example_element(source: Element, number: int) -> Optional[Element]:
    items = [child for child in source if child.tag in ("para", "code")]
    intros = list(takewhile(lambda item: item.tag == "para", items))
    rest = items[len(intros):]
    code = rest[0] if rest and rest[0].tag == "code" else None
    remarks = [item for item in dropwhile(lambda item: item.tag == "code", rest) if item.tag == "para"]
    if not intros and code is None and not remarks:
        return None

    example = Element(command("example"))
    SubElement(example, maml("title")).text = f"----------  EXAMPLE {number}  ----------"
    if intros:
        introduction = SubElement(example, maml("introduction"))
        for para in intros:
            _para(introduction, tidy(element_text(para)))
    if code is not None:
        SubElement(example, dev("code")).text = tidy_code(element_text(code))
    if remarks:
        remarks_element = SubElement(example, dev("remarks"))
        for para in remarks:
            _para(remarks_element, tidy(element_text(para)))
    return example


def alert_set_element(fragment: Optional[Element]) -> Optional[Element]:
    """Return an embedded ``maml:alertSet`` or build one from an alertSet list."""
    if fragment is None:
        return None
    embedded = fragment.find(".//maml:alertSet", PREFIXES)
    if embedded is not None:
        alert_set = copy.deepcopy(embedded)
        alert_set.tail = None
        return alert_set

    source = fragment.find(".//list[@type='alertSet']")
    if source is None:
        return None
    alert_set = Element(maml("alertSet"))
    for item in source.findall("item"):
        term = item.find("term")
        description = item.find("description")
        if term is None or description is None:
            continue
        SubElement(alert_set, maml("title")).text = tidy(element_text(term))
        alert = SubElement(alert_set, maml("alert"))
        paras: List[Element] = description.findall("para")
        if paras:
            for para in paras:
                _para(alert, tidy(element_text(para)))
        else:
            _para(alert, tidy(element_text(description)))
    return alert_set


def related_links_element(fragment: Optional[Element]) -> Optional[Element]:
    """Build ``maml:relatedLinks`` from ``<para type="link">`` elements."""
    if fragment is None:
        return None
    paras = fragment.findall(".//para[@type='link']")
    if not paras:
        return None
    related_links = Element(maml("relatedLinks"))
    for para in paras:
        link = SubElement(related_links, maml("navigationLink"))
        SubElement(link, maml("linkText")).text = tidy(element_text(para))
        uri = para.get("uri")
        if uri is not None:
            SubElement(link, maml("uri")).text = uri
    return related_links


__all__ = [
    "Warn",
    "alert_set_element",
    "append_para",
    "description_element",
    "element_text",
    "examples_element",
    "related_links_element",
    "tidy",
    "tidy_code",
]

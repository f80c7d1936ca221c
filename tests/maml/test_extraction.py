"""Tests for cmdletdoc.maml.extraction."""

from __future__ import annotations

from typing import List
from xml.etree import ElementTree as ET

import pytest

from cmdletdoc.maml.extraction import (
    alert_set_element,
    description_element,
    examples_element,
    related_links_element,
    tidy,
    tidy_code,
)
from cmdletdoc.maml.namespaces import COMMAND_NS, DEV_NS, MAML_NS

NS = {"maml": MAML_NS, "command": COMMAND_NS, "dev": DEV_NS}


def _fragment(body: str) -> ET.Element:
    return ET.fromstring(
        f'<member name="T:m.C" xmlns:maml="{MAML_NS}">{body}</member>'
    )


def _texts(element: ET.Element, path: str) -> List[str]:
    return [item.text or "" for item in element.findall(path, NS)]


class _Collect:
    def __init__(self) -> None:
        self.warnings: List[str] = []

    def __call__(self, text: str) -> None:
        self.warnings.append(text)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  plain  ", "plain"),
        ("two  spaces", "two spaces"),
        ("line one\n        line two", "line one line two"),
        ("single\nnewline", "single\nnewline"),
        ("", ""),
    ],
)
def test_tidy(raw: str, expected: str) -> None:
    assert tidy(raw) == expected


def test_tidy_code_trims_blank_lines_and_dedents() -> None:
    raw = "\n\n        first()\n          indented()\n\n        last()\n    \n"

    assert tidy_code(raw) == "first()\n  indented()\n\nlast()"


def test_tidy_code_leaves_flush_code_alone() -> None:
    assert tidy_code("a()\n    b()") == "a()\n    b()"


def test_embedded_description_wins_over_loose_paragraphs() -> None:
    fragment = _fragment(
        '<summary><maml:description type="description" id="x">'
        "<maml:para>Embedded.</maml:para></maml:description>"
        '<para type="description">Loose.</para></summary>'
    )
    warn = _Collect()

    description = description_element(fragment, "description", warn)

    assert description is not None
    assert description.tag == f"{{{MAML_NS}}}description"
    assert description.attrib == {}
    assert _texts(description, "maml:para") == ["Embedded."]
    assert warn.warnings == []
    # The source fragment keeps its attributes.
    source = fragment.find(".//maml:description", NS)
    assert source is not None and source.get("type") == "description"


def test_loose_paragraphs_are_tidied_in_document_order() -> None:
    fragment = _fragment(
        '<summary><para type="synopsis">First   part.</para></summary>'
        '<para type="synopsis">Second\n            part.</para>'
        '<para type="description">Not a synopsis.</para>'
    )

    description = description_element(fragment, "synopsis", _Collect())

    assert description is not None
    assert _texts(description, "maml:para") == ["First part.", "Second part."]


@pytest.mark.parametrize("fragment", [None, _fragment("<summary>No typed paragraphs.</summary>")])
def test_missing_description_warns_and_returns_none(fragment) -> None:
    warn = _Collect()

    assert description_element(fragment, "inputType", warn) is None
    assert warn.warnings == ["No inputType comment found."]


def test_examples_are_numbered_skipping_empty_ones() -> None:
    fragment = _fragment(
        "<example><para>Intro one.</para><code>\n    a()\n</code><para>Remark one.</para></example>"
        "<example>Only text.</example>"
        "<example><code>b()</code></example>"
        "<example><para>Intro three.</para></example>"
        "<example><code>c()</code><para>Remark four.</para></example>"
        "<example><para>Intro five.</para><code>d()</code></example>"
    )
    warn = _Collect()

    examples = examples_element(fragment, warn)

    assert examples is not None
    assert _texts(examples, "command:example/maml:title") == [
        f"----------  EXAMPLE {number}  ----------" for number in range(1, 6)
    ]
    assert warn.warnings == ["No para or code elements found for example 2."]
    first = examples.findall("command:example", NS)[0]
    assert _texts(first, "maml:introduction/maml:para") == ["Intro one."]
    assert _texts(first, "dev:code") == ["a()"]
    assert _texts(first, "dev:remarks/maml:para") == ["Remark one."]
    fourth = examples.findall("command:example", NS)[3]
    assert fourth.find("maml:introduction", NS) is None
    assert _texts(fourth, "dev:remarks/maml:para") == ["Remark four."]


def test_only_first_code_block_is_used_and_later_paras_are_remarks() -> None:
    fragment = _fragment(
        "<example><code>one()</code><code>two()</code><para>After.</para></example>"
    )

    examples = examples_element(fragment, _Collect())

    assert examples is not None
    example = examples.find("command:example", NS)
    assert example is not None
    assert _texts(example, "dev:code") == ["one()"]
    assert _texts(example, "dev:remarks/maml:para") == ["After."]


def test_no_examples_warns_and_returns_none() -> None:
    warn = _Collect()

    assert examples_element(_fragment("<summary/>"), warn) is None
    assert warn.warnings == ["No examples found."]


def test_only_empty_examples_yield_no_block() -> None:
    warn = _Collect()

    assert examples_element(_fragment("<example>text</example>"), warn) is None
    assert warn.warnings == ["No para or code elements found for example 1."]


def test_embedded_alert_set_is_copied_verbatim() -> None:
    fragment = _fragment(
        "<summary><maml:alertSet><maml:title>Note</maml:title>"
        "<maml:alert><maml:para>Careful.</maml:para></maml:alert></maml:alertSet></summary>"
        '<list type="alertSet"><item><term>Ignored</term><description>x</description></item></list>'
    )

    alert_set = alert_set_element(fragment)

    assert alert_set is not None
    assert _texts(alert_set, "maml:title") == ["Note"]
    assert _texts(alert_set, "maml:alert/maml:para") == ["Careful."]
    assert alert_set is not fragment.find(".//maml:alertSet", NS)


def test_alert_set_built_from_list_items() -> None:
    fragment = _fragment(
        '<list type="alertSet">'
        "<item><term>First  note</term><description>Plain   text.</description></item>"
        "<item><term>Second</term><description><para>One.</para><para>Two.</para></description></item>"
        "<item><term>No description</term></item>"
        "</list>"
    )

    alert_set = alert_set_element(fragment)

    assert alert_set is not None
    assert [child.tag.split("}")[1] for child in alert_set] == ["title", "alert", "title", "alert"]
    assert _texts(alert_set, "maml:title") == ["First note", "Second"]
    alerts = alert_set.findall("maml:alert", NS)
    assert _texts(alerts[0], "maml:para") == ["Plain text."]
    assert _texts(alerts[1], "maml:para") == ["One.", "Two."]


def test_alert_set_absent_without_a_source() -> None:
    assert alert_set_element(_fragment('<list type="bullet"/>')) is None
    assert alert_set_element(None) is None


def test_related_links_carry_optional_uris() -> None:
    fragment = _fragment(
        '<para type="link">Plain   link</para>'
        '<summary><para type="link" uri="https://example.com/help">With uri</para></summary>'
    )

    links = related_links_element(fragment)

    assert links is not None
    navigation = links.findall("maml:navigationLink", NS)
    assert [_texts(link, "maml:linkText") for link in navigation] == [["Plain link"], ["With uri"]]
    assert navigation[0].find("maml:uri", NS) is None
    assert _texts(navigation[1], "maml:uri") == ["https://example.com/help"]


def test_related_links_absent_without_link_paragraphs() -> None:
    assert related_links_element(_fragment("<summary/>")) is None

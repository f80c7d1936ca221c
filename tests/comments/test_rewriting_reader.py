"""Tests for cmdletdoc.comments.rewriting."""

from __future__ import annotations

from types import ModuleType
from xml.etree import ElementTree as ET

import pytest

from cmdletdoc.comments import RewritingCommentReader, XmlDocCommentReader, XmlDocIndex
from cmdletdoc.comments.rewriting import rewrite_fragment, text_for_cref
from cmdletdoc.maml.extraction import element_text, tidy


def _paras(fragment: ET.Element, kind: str) -> list[str]:
    return [tidy(element_text(para)) for para in fragment.iter("para") if para.get("type") == kind]


def test_references_collapse_to_command_and_type_names(
    sample_module: ModuleType, sample_index: XmlDocIndex
) -> None:
    reader = RewritingCommentReader(XmlDocCommentReader(sample_index))

    fragment = reader.get_type_comments(sample_module.TestReferencesCommand)

    assert fragment is not None
    assert _paras(fragment, "synopsis") == ["Synopsis for Test-References."]
    assert _paras(fragment, "description") == [
        "This description for Test-References references parameter_one and the second parameter.",
        "It also mentions ManualClass and Widget.",
    ]
    assert list(fragment.iter("see")) == []


def test_source_fragment_is_not_mutated(sample_module: ModuleType, sample_index: XmlDocIndex) -> None:
    reader = RewritingCommentReader(XmlDocCommentReader(sample_index))
    source = sample_index.get("T:sample_cmdlets.TestReferencesCommand")
    assert source is not None
    before = ET.tostring(source)

    rewritten = reader.get_type_comments(sample_module.TestReferencesCommand)

    assert rewritten is not source
    assert ET.tostring(source) == before
    assert len(list(source.iter("see"))) == 6


def test_absent_fragment_stays_absent(sample_module: ModuleType, sample_index: XmlDocIndex) -> None:
    reader = RewritingCommentReader(XmlDocCommentReader(sample_index))

    assert reader.get_type_comments(sample_module.TestUndocumentedCommand) is None


def test_existing_inline_text_is_kept_and_tails_survive() -> None:
    fragment = ET.fromstring(
        '<member><summary><para>Use <see cref="T:nowhere.Thing">this thing</see>, '
        'then <b>bold</b> <see cref="M:nowhere.Thing.Run"/> now.</para></summary></member>'
    )

    rewritten = rewrite_fragment(fragment)

    assert rewritten is not None
    para = rewritten.find("summary/para")
    assert para is not None
    assert element_text(para) == "Use this thing, then bold Run now."
    assert [child.tag for child in para] == ["b"]


def test_see_without_cref_is_left_alone() -> None:
    fragment = ET.fromstring('<member><summary><see langword="null"/></summary></member>')

    rewritten = rewrite_fragment(fragment)

    assert rewritten is not None
    assert rewritten.find("summary/see") is not None


@pytest.mark.parametrize(
    "cref, expected",
    [
        ("T:nowhere.module.Widget", "Widget"),
        ("P:nowhere.Widget.Size", "Size"),
        ("T:Widget", "Widget"),
        ("Widget", "Widget"),
        ("T:builtins.str", "str"),
    ],
)
def test_text_for_unresolved_and_builtin_references(cref: str, expected: str) -> None:
    assert text_for_cref(cref) == expected


def test_text_for_command_reference_uses_verb_and_noun(sample_module: ModuleType) -> None:
    assert text_for_cref("T:sample_cmdlets.TestWildcardSupportedCommand") == "Test-WildcardSupport"
    assert text_for_cref("T:sample_cmdlets.Colour") == "Colour"
    assert text_for_cref("T:sample_cmdlets.InheritedWildcardCommand") == "InheritedWildcardCommand"

"""Tests for doclint.parser."""

from __future__ import annotations

import pytest

from doclint.errors import ParseError, UnknownCategoryError
from doclint.models import Category
from doclint.parser import parse_document, parse_fragment, prose_lines
from tests._fixtures.samples import REFERENCE_DOC, SKILL_DOC, STANDARDS_DOC


def test_parse_splits_sections_on_headings() -> None:
    text = "Intro text\n# A\nbody a\n## B\nbody b\n# C\n"

    document = parse_document(text, "doc.md")

    assert document.sections == (
        ("", "Intro text"),
        ("A", "body a"),
        ("B", "body b"),
        ("C", ""),
    )
    assert [child.title for child in document.root.children] == ["A", "C"]
    assert [child.title for child in document.root.children[0].children] == ["B"]
    assert document.root.children[0].children[0].level == 2


def test_parse_omits_empty_root_section() -> None:
    document = parse_document("# Only\ntext\n", "doc.md")

    assert document.sections == (("Only", "text"),)


def test_parse_reads_metadata_header() -> None:
    document = parse_document(SKILL_DOC, "skill.md")

    assert document.has_header is True
    assert document.metadata["name"] == "view-transitions"
    assert document.category is Category.SKILL
    assert document.headings()[0].title == "View Transitions"
    assert document.headings()[0].line == 6


def test_metadata_is_read_only() -> None:
    document = parse_document(SKILL_DOC, "skill.md")

    with pytest.raises(TypeError):
        document.metadata["name"] = "other"  # type: ignore[index]


def test_parse_is_deterministic() -> None:
    first = parse_document(STANDARDS_DOC, "standards.md")
    second = parse_document(STANDARDS_DOC, "standards.md")

    assert first.root == second.root
    assert first.sections == second.sections
    assert dict(first.metadata) == dict(second.metadata)
    assert first.category is second.category


def test_unclosed_header_raises_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_document("---\nname: demo\n# Title\n", "broken.md")

    assert excinfo.value.line == 1
    assert "never closed" in excinfo.value.reason


def test_invalid_yaml_header_raises_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_document("---\nname: [unclosed\n---\n# Title\n", "broken.md")

    assert "invalid metadata header" in excinfo.value.reason


def test_non_mapping_header_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="must be a mapping"):
        parse_document("---\n- a\n- b\n---\n", "list.md")


def test_structured_name_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="'name' must be a scalar"):
        parse_document("---\nname:\n  nested: true\ndescription: x\n---\n", "skill.md")


def test_headings_inside_fences_are_ignored() -> None:
    text = "```bash\n# not a heading\n```\n# Real\n"

    document = parse_document(text, "doc.md")

    assert [node.title for node in document.headings()] == ["Real"]
    assert document.root.blocks[0].code == "# not a heading"
    assert document.root.blocks[0].language == "bash"


def test_unterminated_fence_is_recorded() -> None:
    document = parse_document("# Title\n\n```python\nprint('hi')\n", "doc.md")

    block = document.headings()[0].blocks[0]
    assert block.closed is False
    assert block.line == 3


def test_tilde_fence_requires_matching_marker() -> None:
    text = "~~~~\n```\nstill code\n~~~~\n# After\n"

    document = parse_document(text, "doc.md")

    assert document.root.blocks[0].closed is True
    assert document.root.blocks[0].code == "```\nstill code"
    assert [node.title for node in document.headings()] == ["After"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ('```tsx title="Bad example"\nx\n```\n', "bad"),
        ("```js\n// Good: pure function\nx\n```\n", "good"),
        ("❌ Avoid this:\n\n```js\nx\n```\n", "bad"),
        ("**Good:**\n```js\nx\n```\n", "good"),
        ("Don't mutate props:\n```js\nx\n```\n", "bad"),
        ("Some context.\n```js\nx\n```\n", None),
    ],
)
def test_fence_labels(text: str, expected: str | None) -> None:
    document = parse_document(text, "doc.md")

    assert document.root.blocks[0].label == expected


def test_heading_title_labels_first_fence() -> None:
    document = parse_document("### ✅ Good\n\n```js\nx\n```\n", "doc.md")

    assert document.headings()[0].blocks[0].label == "good"


def test_classifies_skill_standards_and_reference() -> None:
    assert parse_document(SKILL_DOC, "a.md").category is Category.SKILL
    assert parse_document(STANDARDS_DOC, "b.md").category is Category.STANDARDS
    assert parse_document(REFERENCE_DOC, "c.md").category is Category.REFERENCE


def test_partial_skill_header_is_still_a_skill() -> None:
    document = parse_document("---\nname: demo\n---\n# Demo\n", "skill.md")

    assert document.category is Category.SKILL


def test_category_override_wins() -> None:
    document = parse_document(SKILL_DOC, "skill.md", category="reference")

    assert document.category is Category.REFERENCE


def test_unknown_category_override_raises() -> None:
    with pytest.raises(UnknownCategoryError):
        parse_document(SKILL_DOC, "skill.md", category="tutorial")


def test_crlf_input_matches_lf_input() -> None:
    lf = parse_document("# A\nbody\n", "doc.md")
    crlf = parse_document("# A\r\nbody\r\n", "doc.md")

    assert lf.root == crlf.root


def test_leading_thematic_breaks_are_not_a_header() -> None:
    text = "---\n\nIntro paragraph.\n\n---\n\n# Catalog\n\n## Button\n\nTriggers an action.\n"

    document = parse_document(text, "ref.md")

    assert document.has_header is False
    assert dict(document.metadata) == {}
    assert document.category is Category.REFERENCE
    assert "Intro paragraph." in document.root.body
    assert [node.title for node in document.headings()] == ["Catalog", "Button"]


def test_prose_lines_follow_fence_length() -> None:
    text = "````markdown\n```python\nx = 1\n```\n**Inside:** hidden\n````\n**Outside:** shown"

    assert list(prose_lines(text)) == ["**Outside:** shown"]


def test_parse_fragment_builds_a_section_tree() -> None:
    root = parse_fragment("#### Current Code\n\n```python\nx = 1\n```\n\n#### Problem\n\nText.")

    assert [child.title for child in root.children] == ["Current Code", "Problem"]
    assert root.children[0].blocks[0].language == "python"

"""Tests for structural rules shared by every category."""

from __future__ import annotations

from doclint.models import Severity
from doclint.parser import parse_document
from doclint.registry import SchemaRegistry
from doclint.validator import validate


def _rule_ids(text: str, registry: SchemaRegistry) -> list[str]:
    document = parse_document(text, "guide.md")
    return [d.rule_id for d in validate(document, registry.rules_for(document.category))]


def test_bad_example_needs_good_example(registry: SchemaRegistry) -> None:
    text = "# Guide\n\n## Effects\n\n**Bad:**\n\n```js\nuseEffect(fetchAll)\n```\n"

    assert _rule_ids(text, registry) == ["examples.paired"]


def test_good_example_in_subsection_pairs(registry: SchemaRegistry) -> None:
    text = (
        "# Guide\n\n## Effects\n\n**Bad:**\n\n```js\nuseEffect(fetchAll)\n```\n\n"
        "### Fix\n\n**Good:**\n\n```js\nuseEffect(fetchOne, [id])\n```\n"
    )

    assert _rule_ids(text, registry) == []


def test_good_example_after_sibling_heading_does_not_pair(registry: SchemaRegistry) -> None:
    text = (
        "# Guide\n\n## First\n\n**Bad:**\n\n```js\nx()\n```\n\n"
        "## Second\n\n**Good:**\n\n```js\ny()\n```\n"
    )

    assert _rule_ids(text, registry) == ["examples.paired"]


def test_labelled_headings_pair_within_parent(registry: SchemaRegistry) -> None:
    text = (
        "# Guide\n\n## Navigation\n\n### ❌ Bad\n\n```tsx\nnavigate(url)\n```\n\n"
        "### ✅ Good\n\n```tsx\nstartViewTransition(() => navigate(url))\n```\n"
    )

    assert _rule_ids(text, registry) == []


def test_unclosed_fence_is_an_error(registry: SchemaRegistry) -> None:
    document = parse_document("# Guide\n\n```js\nconst a = 1;\n", "guide.md")

    diagnostics = validate(document, registry.rules_for(document.category))

    assert [(d.rule_id, d.severity) for d in diagnostics] == [
        ("structure.closed-fences", Severity.ERROR)
    ]
    assert "line 3" in diagnostics[0].message


def test_skipped_heading_level_warns(registry: SchemaRegistry) -> None:
    document = parse_document("# Guide\n\n### Deep\n\ntext\n", "guide.md")

    diagnostics = validate(document, registry.rules_for(document.category))

    assert [(d.rule_id, d.severity) for d in diagnostics] == [
        ("structure.heading-levels", Severity.WARNING)
    ]
    assert "'Deep' is h3 under h1" in diagnostics[0].message

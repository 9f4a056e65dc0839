"""Tests for skill document rules."""

from __future__ import annotations

from doclint.models import Severity
from doclint.parser import parse_document
from doclint.registry import SchemaRegistry
from doclint.validator import validate
from tests._fixtures.samples import (
    SKILL_DOC,
    SKILL_DOC_WITH_BAD_NAME,
    SKILL_DOC_WITHOUT_DESCRIPTION,
)


def _diagnostics(text: str, registry: SchemaRegistry):
    document = parse_document(text, "skills/view-transitions/SKILL.md")
    return validate(document, registry.rules_for(document.category))


def test_well_formed_skill_has_no_diagnostics(registry: SchemaRegistry) -> None:
    assert _diagnostics(SKILL_DOC, registry) == []


def test_missing_description_yields_single_metadata_error(registry: SchemaRegistry) -> None:
    diagnostics = _diagnostics(SKILL_DOC_WITHOUT_DESCRIPTION, registry)

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.rule_id == "skill.required-metadata"
    assert diagnostic.severity is Severity.ERROR
    assert "description" in diagnostic.message
    assert diagnostic.document_path == "skills/view-transitions/SKILL.md"


def test_blank_name_counts_as_missing(registry: SchemaRegistry) -> None:
    text = "---\nname: '  '\ndescription: Demo skill.\n---\n# Demo\n"

    diagnostics = _diagnostics(text, registry)

    assert [d.rule_id for d in diagnostics] == ["skill.required-metadata"]
    assert "missing or empty: name" in diagnostics[0].message


def test_badly_formatted_name_is_a_warning(registry: SchemaRegistry) -> None:
    diagnostics = _diagnostics(SKILL_DOC_WITH_BAD_NAME, registry)

    assert [(d.rule_id, d.severity) for d in diagnostics] == [
        ("skill.name-format", Severity.WARNING)
    ]
    assert "'View Transitions'" in diagnostics[0].message


def test_long_description_is_a_warning(registry: SchemaRegistry) -> None:
    text = f"---\nname: demo\ndescription: {'x' * 1100}\n---\n# Demo\n"

    diagnostics = _diagnostics(text, registry)

    assert [d.rule_id for d in diagnostics] == ["skill.description-length"]
    assert "1100 characters" in diagnostics[0].message


def test_skill_without_sections_warns(registry: SchemaRegistry) -> None:
    text = "---\nname: demo\ndescription: Demo skill.\n---\nJust prose.\n"

    diagnostics = _diagnostics(text, registry)

    assert [d.rule_id for d in diagnostics] == ["skill.has-instructions"]

"""Tests for doclint.registry."""

from __future__ import annotations

import dataclasses

import pytest

from doclint.models import Category, Severity
from doclint.registry import SchemaRegistry, default_registry
from doclint.rules import RULE_TABLE, RULESET_VERSION


def test_every_category_has_rules(registry: SchemaRegistry) -> None:
    for category in Category:
        rules = registry.rules_for(category)
        assert rules
        assert all(rule.applies_to is category for rule in rules)


def test_rules_for_accepts_category_names(registry: SchemaRegistry) -> None:
    assert registry.rules_for("skill") == registry.rules_for(Category.SKILL)


def test_unknown_category_yields_no_rules(registry: SchemaRegistry) -> None:
    assert registry.rules_for("tutorial") == ()
    assert registry.knows("tutorial") is False


def test_rules_keep_registration_order(registry: SchemaRegistry) -> None:
    expected = [spec.id for spec in RULE_TABLE if Category.SKILL in spec.categories]

    assert [rule.id for rule in registry.rules_for(Category.SKILL)] == expected


def test_registry_is_immutable(registry: SchemaRegistry) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        registry.rules = ()  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        registry.rules[0].severity = Severity.WARNING  # type: ignore[misc]


def test_default_registry_is_rebuilt_consistently() -> None:
    first = default_registry()
    second = default_registry()

    assert first == second
    assert first.version == RULESET_VERSION


def test_without_returns_new_registry(registry: SchemaRegistry) -> None:
    narrowed = registry.without(["skill.name-format"])

    assert "skill.name-format" not in narrowed.rule_ids()
    assert "skill.name-format" in registry.rule_ids()
    assert narrowed.knows(Category.SKILL)


def test_with_severity_overrides_rules(registry: SchemaRegistry) -> None:
    adjusted = registry.with_severity({"reference.has-entries": "error"})

    rule = next(r for r in adjusted.rules if r.id == "reference.has-entries")
    original = next(r for r in registry.rules if r.id == "reference.has-entries")
    assert rule.severity is Severity.ERROR
    assert original.severity is Severity.WARNING


def test_shared_rules_bind_to_every_category(registry: SchemaRegistry) -> None:
    for category in Category:
        ids = [rule.id for rule in registry.rules_for(category)]
        assert "examples.paired" in ids
        assert "structure.closed-fences" in ids

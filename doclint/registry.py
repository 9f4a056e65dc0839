"""Immutable schema registry built once from the versioned rule table."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence, Tuple

from .errors import UnknownCategoryError
from .logging import get_logger
from .models import Category, Severity
from .rules import RULE_TABLE, RULESET_VERSION, RuleSpec, SchemaRule

_LOGGER = get_logger("registry")


@dataclass(frozen=True)
class SchemaRegistry:
    """Ordered, read-only collection of rules keyed by document category."""

    rules: Tuple[SchemaRule, ...]
    categories: FrozenSet[Category] = field(default_factory=frozenset)
    version: str = RULESET_VERSION

    @classmethod
    def from_table(
        cls,
        table: Sequence[RuleSpec],
        *,
        version: str = RULESET_VERSION,
        categories: Optional[Iterable[Category]] = None,
    ) -> "SchemaRegistry":
        rules = tuple(rule for spec in table for rule in spec.bind())
        covered = frozenset(categories) if categories is not None else frozenset(
            rule.applies_to for rule in rules
        )
        return cls(rules=rules, categories=covered, version=version)

    def knows(self, category: Category | str) -> bool:
        try:
            return Category.parse(category) in self.categories
        except UnknownCategoryError:
            return False

    def rules_for(self, category: Category | str) -> Tuple[SchemaRule, ...]:
        """Return the rules registered for ``category`` in registration order."""
        try:
            resolved = Category.parse(category)
        except UnknownCategoryError:
            return ()
        return tuple(rule for rule in self.rules if rule.applies_to is resolved)

    def rule_ids(self) -> Tuple[str, ...]:
        seen: list[str] = []
        for rule in self.rules:
            if rule.id not in seen:
                seen.append(rule.id)
        return tuple(seen)

    def without(self, rule_ids: Iterable[str]) -> "SchemaRegistry":
        """Return a registry with the given rules removed."""
        disabled = set(rule_ids)
        self._warn_unknown(disabled)
        return replace(self, rules=tuple(rule for rule in self.rules if rule.id not in disabled))

    def with_severity(self, overrides: Mapping[str, Severity | str]) -> "SchemaRegistry":
        """Return a registry whose rules use the overridden severities."""
        if not overrides:
            return self
        resolved = {rule_id: Severity(value) for rule_id, value in overrides.items()}
        self._warn_unknown(set(resolved))
        return replace(
            self,
            rules=tuple(
                replace(rule, severity=resolved[rule.id]) if rule.id in resolved else rule
                for rule in self.rules
            ),
        )

    def _warn_unknown(self, rule_ids: set[str]) -> None:
        for rule_id in sorted(rule_ids - set(self.rule_ids())):
            _LOGGER.warning("Configured rule %s is not registered; ignoring", rule_id)


def default_registry() -> SchemaRegistry:
    """Build the registry from the built-in rule table."""
    return SchemaRegistry.from_table(RULE_TABLE, categories=tuple(Category))


__all__ = ["SchemaRegistry", "default_registry"]

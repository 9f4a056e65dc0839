"""Core rule data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from ..models import Category, Document, Severity

Predicate = Callable[[Document], bool]
Detail = Callable[[Document], str]


@dataclass(frozen=True)
class SchemaRule:
    """A named check bound to one document category."""

    id: str
    applies_to: Category
    description: str
    predicate: Predicate = field(compare=False)
    severity: Severity = Severity.ERROR
    detail: Optional[Detail] = field(default=None, compare=False)

    def applies(self, document: Document) -> bool:
        return self.applies_to is document.category

    def message(self, document: Document) -> str:
        """Describe a failure of this rule for ``document``."""
        if self.detail is None:
            return self.description
        extra = self.detail(document)
        return f"{self.description} ({extra})" if extra else self.description


@dataclass(frozen=True)
class RuleSpec:
    """Table entry that binds one check to one or more categories."""

    id: str
    categories: Tuple[Category, ...]
    description: str
    predicate: Predicate
    severity: Severity = Severity.ERROR
    detail: Optional[Detail] = None

    def bind(self) -> Tuple[SchemaRule, ...]:
        return tuple(
            SchemaRule(
                id=self.id,
                applies_to=category,
                description=self.description,
                predicate=self.predicate,
                severity=self.severity,
                detail=self.detail,
            )
            for category in self.categories
        )


def join_limited(items: Sequence[str], limit: int = 5) -> str:
    shown = ", ".join(items[:limit])
    if len(items) > limit:
        shown += f", +{len(items) - limit} more"
    return shown


__all__ = ["Detail", "Predicate", "RuleSpec", "SchemaRule", "join_limited"]

"""Apply schema rules to parsed documents."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import ParseError, RuleEvaluationError, UnknownCategoryError
from .logging import get_logger
from .models import Category, Diagnostic, Document, DocumentReport, Severity
from .parser import parse_document
from .registry import SchemaRegistry
from .rules import SchemaRule

PARSE_RULE_ID = "doclint.parse"
CATEGORY_RULE_ID = "doclint.category"

_LOGGER = get_logger("validator")


def validate(document: Document, rules: Sequence[SchemaRule]) -> List[Diagnostic]:
    """Evaluate each applicable rule and return one diagnostic per failure.

    A predicate that raises is reported as an error against that rule and
    evaluation continues with the remaining rules.
    """
    diagnostics: List[Diagnostic] = []
    for rule in rules:
        if not rule.applies(document):
            continue
        try:
            passed = bool(rule.predicate(document))
            message = "" if passed else rule.message(document)
        except Exception as exc:
            error = exc if isinstance(exc, RuleEvaluationError) else RuleEvaluationError(rule.id, exc)
            _LOGGER.warning("Rule evaluation failed for %s: %s", document.path, error)
            diagnostics.append(
                Diagnostic(
                    document_path=document.path,
                    rule_id=rule.id,
                    severity=Severity.ERROR,
                    message=f"rule evaluation failed: {error}",
                )
            )
            continue
        if not passed:
            diagnostics.append(
                Diagnostic(
                    document_path=document.path,
                    rule_id=rule.id,
                    severity=rule.severity,
                    message=message,
                )
            )
    return diagnostics


class DocumentValidator:
    """Validates documents against an explicitly supplied registry."""

    def __init__(self, registry: SchemaRegistry) -> None:
        self.registry = registry

    def check(self, document: Document) -> DocumentReport:
        if not self.registry.knows(document.category):
            return DocumentReport(
                path=document.path,
                category=document.category,
                diagnostics=(
                    Diagnostic(
                        document_path=document.path,
                        rule_id=CATEGORY_RULE_ID,
                        severity=Severity.WARNING,
                        message=f"no schema registered for category '{document.category.value}'",
                    ),
                ),
                skipped=True,
                skip_reason="unknown category",
            )

        rules = self.registry.rules_for(document.category)
        if not rules:
            _LOGGER.debug("No rules apply to %s; skipping", document.path)
            return DocumentReport(
                path=document.path,
                category=document.category,
                skipped=True,
                skip_reason="no applicable rules",
            )
        return DocumentReport(
            path=document.path,
            category=document.category,
            diagnostics=tuple(validate(document, rules)),
        )

    def parse_and_check(
        self,
        text: str,
        path: str,
        *,
        category: Optional[Category | str] = None,
    ) -> DocumentReport:
        """Parse ``text`` and validate it, turning per-document failures into diagnostics."""
        try:
            document = parse_document(text, path, category=category)
        except ParseError as exc:
            _LOGGER.info("Could not parse %s: %s", path, exc)
            location = f" (line {exc.line})" if exc.line is not None else ""
            return DocumentReport(
                path=path,
                category=None,
                diagnostics=(
                    Diagnostic(
                        document_path=path,
                        rule_id=PARSE_RULE_ID,
                        severity=Severity.ERROR,
                        message=f"{exc.reason}{location}",
                    ),
                ),
            )
        except UnknownCategoryError as exc:
            return DocumentReport(
                path=path,
                category=None,
                diagnostics=(
                    Diagnostic(
                        document_path=path,
                        rule_id=CATEGORY_RULE_ID,
                        severity=Severity.WARNING,
                        message=f"unknown category {exc.value!r}; document skipped",
                    ),
                ),
                skipped=True,
                skip_reason="unknown category",
            )
        return self.check(document)


__all__ = ["CATEGORY_RULE_ID", "DocumentValidator", "PARSE_RULE_ID", "validate"]

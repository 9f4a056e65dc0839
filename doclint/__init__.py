"""Structured-document linter for skill, standards and reference docs."""

from .models import Category, Diagnostic, Document, DocumentReport, RunResult, Severity
from .parser import parse_document
from .registry import SchemaRegistry, default_registry
from .reporter import aggregate
from .validator import DocumentValidator, validate

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Diagnostic",
    "Document",
    "DocumentReport",
    "DocumentValidator",
    "RunResult",
    "SchemaRegistry",
    "Severity",
    "__version__",
    "aggregate",
    "default_registry",
    "parse_document",
    "validate",
]

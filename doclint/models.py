"""Core data models shared across doclint components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple

from .errors import UnknownCategoryError


class Category(str, Enum):
    """Document categories with their own rule sets."""

    SKILL = "skill"
    STANDARDS = "standards"
    REFERENCE = "reference"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise UnknownCategoryError(value)


class Severity(str, Enum):
    """Diagnostic severity; errors block success."""

    ERROR = "error"
    WARNING = "warning"

    @property
    def rank(self) -> int:
        return 0 if self is Severity.ERROR else 1


class Status(str, Enum):
    """Outcome of validating one document."""

    PASSED = "passed"
    WARNED = "warned"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code block with its optional bad/good example label."""

    info: str
    code: str
    line: int
    closed: bool = True
    label: Optional[str] = None

    @property
    def language(self) -> str:
        return self.info.split()[0] if self.info.strip() else ""


@dataclass(frozen=True)
class SectionNode:
    """One heading and its body; level 0 is the implicit root section."""

    title: str
    level: int
    body: str = ""
    line: int = 1
    blocks: Tuple[FencedBlock, ...] = ()
    children: Tuple["SectionNode", ...] = ()

    def walk(self) -> Iterator["SectionNode"]:
        """Yield this node and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def subtree_blocks(self) -> Iterator[FencedBlock]:
        for node in self.walk():
            yield from node.blocks


@dataclass(frozen=True)
class Document:
    """Parsed view of one documentation file."""

    path: str
    category: Category
    root: SectionNode
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    has_header: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def sections(self) -> Tuple[Tuple[str, str], ...]:
        """Ordered ``(title, body)`` pairs; the root section only when it has text."""
        pairs = []
        for node in self.root.walk():
            if node.level == 0 and not node.body.strip():
                continue
            pairs.append((node.title, node.body))
        return tuple(pairs)

    def headings(self) -> Tuple[SectionNode, ...]:
        return tuple(node for node in self.root.walk() if node.level > 0)


@dataclass(frozen=True)
class Diagnostic:
    """One validation outcome for a document."""

    document_path: str
    rule_id: str
    severity: Severity
    message: str

    def sort_key(self) -> tuple[int, str, str]:
        return (self.severity.rank, self.rule_id, self.message)

    def to_dict(self) -> dict[str, str]:
        return {
            "path": self.document_path,
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class DocumentReport:
    """Diagnostics gathered for one document path."""

    path: str
    category: Optional[Category]
    diagnostics: Tuple[Diagnostic, ...] = ()
    skipped: bool = False
    skip_reason: Optional[str] = None

    @property
    def errors(self) -> int:
        return sum(1 for diag in self.diagnostics if diag.severity is Severity.ERROR)

    @property
    def warnings(self) -> int:
        return sum(1 for diag in self.diagnostics if diag.severity is Severity.WARNING)

    @property
    def status(self) -> Status:
        if self.errors:
            return Status.FAILED
        if self.skipped:
            return Status.SKIPPED
        if self.warnings:
            return Status.WARNED
        return Status.PASSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "category": self.category.value if self.category is not None else None,
            "status": self.status.value,
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


@dataclass(frozen=True)
class RunResult:
    """Aggregate of every document report for one invocation."""

    reports: Tuple[DocumentReport, ...]
    exit_code: int
    strict: bool = False

    @property
    def documents(self) -> int:
        return len(self.reports)

    @property
    def errors(self) -> int:
        return sum(report.errors for report in self.reports)

    @property
    def warnings(self) -> int:
        return sum(report.warnings for report in self.reports)

    @property
    def skipped(self) -> int:
        return sum(1 for report in self.reports if report.status is Status.SKIPPED)

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(diag for report in self.reports for diag in report.diagnostics)


__all__ = [
    "Category",
    "Diagnostic",
    "Document",
    "DocumentReport",
    "FencedBlock",
    "RunResult",
    "SectionNode",
    "Severity",
    "Status",
]

"""Rules for standards documents such as review-finding formats."""

from __future__ import annotations

import re
from typing import Iterator, List, Set, Tuple

from ..models import Document, SectionNode
from ..parser import is_requirements_title, normalize_title, parse_fragment, prose_lines
from .base import join_limited

FINDING_SUBSECTIONS = (
    "Current Code",
    "Problem",
    "Impact",
    "Suggested Fix",
    "Why This Fix Works",
    "Validation",
)

_REQUIRED = {normalize_title(title): title for title in FINDING_SUBSECTIONS}
_BOLD_LABEL = re.compile(r"^\s*(?:[-*+]\s+)?(?:\*\*|__)([^*_]+?)(?:\*\*|__)")
_LIST_ITEM = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+\S")
_TABLE_ROW = re.compile(r"^\s*\|.*\|\s*$")
_MIN_FINDING_LABELS = 2
_MARKDOWN_LANGUAGES = {"markdown", "md"}


def _labels(node: SectionNode) -> Set[str]:
    labels = {normalize_title(child.title) for child in node.children}
    for line in prose_lines(node.body):
        match = _BOLD_LABEL.match(line)
        if match:
            labels.add(normalize_title(match.group(1)))
    return labels


def _candidates(root: SectionNode, owner: str) -> Iterator[Tuple[str, Set[str]]]:
    """Yield ``(title, labels)`` for every finding example under ``root``.

    Templates written inside ``markdown`` fences are parsed and scanned
    too; their untitled top level is reported under the enclosing section.
    """
    for node in root.walk():
        title = node.title if node.level > 0 else owner
        found = _labels(node) & set(_REQUIRED)
        if len(found) >= _MIN_FINDING_LABELS:
            yield title, found
        for block in node.blocks:
            if block.language.lower() in _MARKDOWN_LANGUAGES:
                yield from _candidates(parse_fragment(block.code), title)


def _incomplete_findings(document: Document) -> List[Tuple[str, List[str]]]:
    incomplete = []
    for title, found in _candidates(document.root, ""):
        missing = [label for key, label in _REQUIRED.items() if key not in found]
        if missing:
            incomplete.append((title, missing))
    return incomplete


def has_requirements_section(document: Document) -> bool:
    return any(is_requirements_title(node.title) for node in document.headings())


def findings_are_complete(document: Document) -> bool:
    return not _incomplete_findings(document)


def findings_detail(document: Document) -> str:
    return join_limited(
        [
            f"'{title or '(top)'}' lacks {', '.join(missing)}"
            for title, missing in _incomplete_findings(document)
        ],
        limit=3,
    )


def _enumerates(node: SectionNode) -> bool:
    if node.children:
        return True
    return any(
        _LIST_ITEM.match(line) or _TABLE_ROW.match(line)
        for line in node.body.splitlines()
    )


def _unenumerated_severity_sections(document: Document) -> List[SectionNode]:
    return [
        node
        for node in document.headings()
        if "severity" in normalize_title(node.title) and not _enumerates(node)
    ]


def severity_levels_enumerated(document: Document) -> bool:
    return not _unenumerated_severity_sections(document)


def severity_detail(document: Document) -> str:
    return join_limited([f"'{node.title}'" for node in _unenumerated_severity_sections(document)])


__all__ = [
    "FINDING_SUBSECTIONS",
    "findings_are_complete",
    "findings_detail",
    "has_requirements_section",
    "severity_detail",
    "severity_levels_enumerated",
]

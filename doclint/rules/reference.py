"""Rules for catalog-style reference documents."""

from __future__ import annotations

import re
from typing import List

from ..models import Document, SectionNode
from .base import join_limited

INTERACTIVE_KEYWORDS = frozenset(
    {
        "button",
        "checkbox",
        "combobox",
        "dialog",
        "drawer",
        "dropdown",
        "input",
        "menu",
        "radio",
        "range",
        "rating",
        "select",
        "slider",
        "switch",
        "tab",
        "textarea",
        "toggle",
    }
)

_TAG = re.compile(r"<\s*([a-z][a-z0-9]*(?:-[a-z0-9]+)+)[^>]*>|`([a-z][a-z0-9]*(?:-[a-z0-9]+)+)`")
_WORD = re.compile(r"[a-z0-9]+")
_DECLARATION = r"(?:key\s+)?(?:attributes?|props?|properties|slots?|events?)\b"
_DECLARATION_LINE = re.compile(
    r"^\s*(?:[-*+]\s+)?(?:\*\*|__)?\s*" + _DECLARATION, re.IGNORECASE
)
_DECLARATION_TABLE = re.compile(r"^\s*\|.*\b" + _DECLARATION + r".*\|", re.IGNORECASE)
_MAX_ENTRY_TITLE_WORDS = 4


def _is_keyword(word: str) -> bool:
    if word in INTERACTIVE_KEYWORDS:
        return True
    return word.endswith("s") and word[:-1] in INTERACTIVE_KEYWORDS


def _is_interactive_entry(node: SectionNode) -> bool:
    title = node.title.lower()
    for match in _TAG.finditer(title):
        tag = match.group(1) or match.group(2)
        if any(_is_keyword(part) for part in tag.split("-")):
            return True
    words = _WORD.findall(_TAG.sub(" ", title))
    if len(words) > _MAX_ENTRY_TITLE_WORDS:
        return False
    return any(_is_keyword(word) for word in words)


def _declares_api(node: SectionNode) -> bool:
    for descendant in node.walk():
        if descendant is not node and _DECLARATION_LINE.match(descendant.title):
            return True
        for line in descendant.body.splitlines():
            if _DECLARATION_LINE.match(line) or _DECLARATION_TABLE.match(line):
                return True
    return False


def _undeclared_entries(document: Document) -> List[SectionNode]:
    return [
        node
        for node in document.headings()
        if _is_interactive_entry(node) and not _declares_api(node)
    ]


def has_entries(document: Document) -> bool:
    return bool(document.headings())


def interactive_entries_declare_api(document: Document) -> bool:
    return not _undeclared_entries(document)


def interactive_entries_detail(document: Document) -> str:
    return join_limited([f"'{node.title}'" for node in _undeclared_entries(document)])


__all__ = [
    "INTERACTIVE_KEYWORDS",
    "has_entries",
    "interactive_entries_declare_api",
    "interactive_entries_detail",
]

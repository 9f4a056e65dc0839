"""Rules for skill documents (metadata header with name and description)."""

from __future__ import annotations

import re
from typing import List

from ..models import Document

REQUIRED_FIELDS = ("name", "description")
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024

_NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _field_text(document: Document, key: str) -> str:
    value = document.metadata.get(key)
    if value is None:
        return ""
    return str(value).strip()


def missing_fields(document: Document) -> List[str]:
    return [key for key in REQUIRED_FIELDS if not _field_text(document, key)]


def has_required_metadata(document: Document) -> bool:
    return not missing_fields(document)


def required_metadata_detail(document: Document) -> str:
    return "missing or empty: " + ", ".join(missing_fields(document))


def name_is_well_formed(document: Document) -> bool:
    name = _field_text(document, "name")
    if not name:
        return True
    return len(name) <= MAX_NAME_LENGTH and bool(_NAME_PATTERN.match(name))


def name_detail(document: Document) -> str:
    return f"got {_field_text(document, 'name')!r}"


def description_within_limit(document: Document) -> bool:
    return len(_field_text(document, "description")) <= MAX_DESCRIPTION_LENGTH


def description_detail(document: Document) -> str:
    return f"{len(_field_text(document, 'description'))} characters"


def has_instructions(document: Document) -> bool:
    return bool(document.headings())


__all__ = [
    "MAX_DESCRIPTION_LENGTH",
    "MAX_NAME_LENGTH",
    "REQUIRED_FIELDS",
    "description_detail",
    "description_within_limit",
    "has_instructions",
    "has_required_metadata",
    "missing_fields",
    "name_detail",
    "name_is_well_formed",
    "required_metadata_detail",
]

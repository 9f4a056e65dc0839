"""Markdown document parsing into the doclint section tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import yaml

from .errors import ParseError
from .models import Category, Document, FencedBlock, SectionNode

_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_HASHES = re.compile(r"[ \t]+#+$")
_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_HEADER_DELIMITER = "---"
_HEADER_TERMINATORS = {"---", "..."}
_SKILL_KEYS = ("name", "description")

_STANDARDS_TITLE = re.compile(
    r"\b(?:(?:output|finding|report|review|response)\s+)?format(?:ting)?\s+"
    r"(?:requirements?|rules|specification)\b"
    r"|\brequired\s+(?:output\s+)?format\b"
    r"|\bfinding\s+format\b",
    re.IGNORECASE,
)

_BAD_MARKERS = ("❌", "🚫", "⛔")
_GOOD_MARKERS = ("✅", "✔", "👍")
_BAD_WORDS = re.compile(r"(?:bad|wrong|incorrect|avoid|don['’]?t|do not|never|anti-?pattern)\b")
_GOOD_WORDS = re.compile(r"(?:good|correct|better|preferred|recommended|do)\b")
_INFO_BAD = re.compile(r"\b(?:bad|wrong|incorrect|avoid|anti-?pattern)\b")
_INFO_GOOD = re.compile(r"\b(?:good|correct|better|preferred|recommended)\b")
_LABEL_STRIP = re.compile(r"^[\s*_>#`\-:\[\]()|]+")
_COMMENT_PREFIX = re.compile(r"^\s*(?://|#|--|/\*|<!--|\{/\*)\s*(.*)$")


def parse_document(
    text: str,
    path: str,
    *,
    category: Optional[Category | str] = None,
) -> Document:
    """Parse markdown text into a ``Document``.

    Raises ``ParseError`` when the metadata header is malformed and
    ``UnknownCategoryError`` when ``category`` names no known category.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    lines = normalized.split("\n")

    metadata, has_header, body_start = _parse_header(lines, path)
    root = _build_tree(lines, body_start)
    resolved = classify(metadata, root, override=category)
    return Document(
        path=path,
        category=resolved,
        root=root,
        metadata=metadata,
        has_header=has_header,
    )


def classify(
    metadata: Mapping[str, Any],
    root: SectionNode,
    *,
    override: Optional[Category | str] = None,
) -> Category:
    """Return the document category, preferring an explicit override."""
    if override is not None:
        return Category.parse(override)
    if any(key in metadata for key in _SKILL_KEYS):
        return Category.SKILL
    for node in root.walk():
        if node.level > 0 and is_requirements_title(node.title):
            return Category.STANDARDS
    return Category.REFERENCE


def is_requirements_title(title: str) -> bool:
    return bool(_STANDARDS_TITLE.search(title))


def normalize_title(title: str) -> str:
    """Lowercase a heading title and strip emphasis, numbering and punctuation."""
    cleaned = re.sub(r"[*_`]", "", title)
    cleaned = re.sub(r"^\s*(?:\d+[.)]\s*)+", "", cleaned)
    cleaned = re.sub(r"[^\w\s'-]", " ", cleaned)
    return " ".join(cleaned.lower().split())


def _parse_header(lines: Sequence[str], path: str) -> Tuple[Dict[str, Any], bool, int]:
    if not lines or lines[0].strip() != _HEADER_DELIMITER:
        return {}, False, 0

    closing = None
    for index in range(1, len(lines)):
        if lines[index].strip() in _HEADER_TERMINATORS:
            closing = index
            break
    if closing is None:
        raise ParseError("metadata header is never closed", path=path, line=1)

    raw = "\n".join(lines[1:closing])
    try:
        loaded = yaml.safe_load(raw) if raw.strip() else None
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise ParseError(f"invalid metadata header: {problem}", path=path, line=line) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, (dict, list)):
        # Prose between two thematic breaks, not metadata.
        return {}, False, 0
    if not isinstance(loaded, dict):
        raise ParseError("metadata header must be a mapping", path=path, line=1)

    metadata = {str(key): value for key, value in loaded.items()}
    for key in _SKILL_KEYS:
        if isinstance(metadata.get(key), (dict, list)):
            raise ParseError(f"metadata field '{key}' must be a scalar", path=path, line=1)
    return metadata, True, closing + 1


@dataclass
class _SectionBuilder:
    title: str
    level: int
    line: int
    body: List[str] = field(default_factory=list)
    blocks: List[FencedBlock] = field(default_factory=list)
    children: List["_SectionBuilder"] = field(default_factory=list)

    def freeze(self) -> SectionNode:
        return SectionNode(
            title=self.title,
            level=self.level,
            body="\n".join(self.body).strip("\n"),
            line=self.line,
            blocks=tuple(self.blocks),
            children=tuple(child.freeze() for child in self.children),
        )


@dataclass
class _OpenFence:
    marker: str
    info: str
    line: int
    lead: Optional[str]
    code: List[str] = field(default_factory=list)

    def matches_close(self, line: str) -> bool:
        stripped = line.strip()
        if len(line) - len(line.lstrip(" ")) > 3:
            return False
        char = self.marker[0]
        return (
            len(stripped) >= len(self.marker)
            and set(stripped) == {char}
        )

    def finish(self, *, closed: bool) -> FencedBlock:
        return FencedBlock(
            info=self.info,
            code="\n".join(self.code),
            line=self.line,
            closed=closed,
            label=_fence_label(self.info, self.code, self.lead),
        )


def _open_fence(line: str, line_no: int, lead: Optional[str]) -> Optional[_OpenFence]:
    opened = _FENCE_OPEN.match(line)
    if opened is None:
        return None
    # A backtick fence's info string may not itself contain backticks.
    if opened.group(1).startswith("`") and "`" in opened.group(2):
        return None
    return _OpenFence(
        marker=opened.group(1),
        info=opened.group(2).strip(),
        line=line_no,
        lead=lead,
    )


def parse_fragment(text: str) -> SectionNode:
    """Parse a markdown snippet, such as a fenced template, into a section tree."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return _build_tree(normalized.split("\n"), 0)


def prose_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` that sit outside fenced code blocks."""
    fence: Optional[_OpenFence] = None
    for line_no, line in enumerate(text.split("\n"), start=1):
        if fence is not None:
            if fence.matches_close(line):
                fence = None
            continue
        fence = _open_fence(line, line_no, None)
        if fence is None:
            yield line


def _build_tree(lines: Sequence[str], start: int) -> SectionNode:
    root = _SectionBuilder(title="", level=0, line=start + 1)
    stack: List[_SectionBuilder] = [root]
    fence: Optional[_OpenFence] = None
    lead: Optional[str] = None

    for index in range(start, len(lines)):
        line = lines[index]
        line_no = index + 1
        current = stack[-1]

        if fence is not None:
            current.body.append(line)
            if fence.matches_close(line):
                current.blocks.append(fence.finish(closed=True))
                fence = None
                lead = None
            else:
                fence.code.append(line)
            continue

        opened = _open_fence(line, line_no, lead)
        if opened is not None:
            current.body.append(line)
            fence = opened
            continue

        heading = _HEADING_PATTERN.match(line)
        if heading:
            level = len(heading.group(1))
            title = _CLOSING_HASHES.sub("", heading.group(2) or "").strip()
            while stack[-1].level >= level:
                stack.pop()
            node = _SectionBuilder(title=title, level=level, line=line_no)
            stack[-1].children.append(node)
            stack.append(node)
            lead = title
            continue

        current.body.append(line)
        if line.strip():
            lead = line.strip()

    if fence is not None:
        stack[-1].blocks.append(fence.finish(closed=False))

    return root.freeze()


def _fence_label(info: str, code: Sequence[str], lead: Optional[str]) -> Optional[str]:
    if info:
        label = _classify_label(info, anchored=False)
        if label:
            return label
    for line in code:
        if not line.strip():
            continue
        comment = _COMMENT_PREFIX.match(line)
        if comment:
            label = _classify_label(comment.group(1), anchored=True)
            if label:
                return label
        break
    if lead:
        return _classify_label(lead, anchored=True)
    return None


def heading_label(title: str) -> Optional[str]:
    """Return ``"bad"``/``"good"`` when a heading itself labels its examples."""
    return _classify_label(title, anchored=True)


def _classify_label(text: str, *, anchored: bool) -> Optional[str]:
    if any(marker in text for marker in _BAD_MARKERS):
        return "bad"
    if any(marker in text for marker in _GOOD_MARKERS):
        return "good"
    cleaned = _LABEL_STRIP.sub("", text.lower())
    if anchored:
        if _BAD_WORDS.match(cleaned):
            return "bad"
        if _GOOD_WORDS.match(cleaned):
            return "good"
        return None
    if _INFO_BAD.search(cleaned):
        return "bad"
    if _INFO_GOOD.search(cleaned):
        return "good"
    return None


__all__ = [
    "classify",
    "heading_label",
    "is_requirements_title",
    "normalize_title",
    "parse_document",
    "parse_fragment",
    "prose_lines",
]

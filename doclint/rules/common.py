"""Structural rules shared by every document category."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..models import Document, FencedBlock, SectionNode
from ..parser import heading_label
from .base import join_limited


def _parents(root: SectionNode) -> Dict[int, SectionNode]:
    parents: Dict[int, SectionNode] = {}
    for node in root.walk():
        for child in node.children:
            parents[id(child)] = node
    return parents


def _unpaired_examples(document: Document) -> List[Tuple[SectionNode, FencedBlock]]:
    parents = _parents(document.root)
    unpaired: List[Tuple[SectionNode, FencedBlock]] = []
    for node in document.root.walk():
        for block in node.blocks:
            if block.label != "bad":
                continue
            # A heading such as "### Bad" labels the example; pair within its parent.
            scope = node
            if node.level > 0 and heading_label(node.title) is not None:
                scope = parents.get(id(node), node)
            if not any(other.label == "good" for other in scope.subtree_blocks()):
                unpaired.append((node, block))
    return unpaired


def examples_are_paired(document: Document) -> bool:
    return not _unpaired_examples(document)


def unpaired_detail(document: Document) -> str:
    locations = [
        f"line {block.line} in '{node.title or '(top)'}'"
        for node, block in _unpaired_examples(document)
    ]
    return "unpaired: " + join_limited(locations)


def _unclosed_blocks(document: Document) -> List[FencedBlock]:
    return [block for block in document.root.subtree_blocks() if not block.closed]


def fences_are_closed(document: Document) -> bool:
    return not _unclosed_blocks(document)


def unclosed_detail(document: Document) -> str:
    return "opened at " + join_limited([f"line {block.line}" for block in _unclosed_blocks(document)])


def _skipped_levels(document: Document) -> List[Tuple[SectionNode, SectionNode]]:
    skipped: List[Tuple[SectionNode, SectionNode]] = []
    for node in document.root.walk():
        if node.level == 0:
            continue
        for child in node.children:
            if child.level > node.level + 1:
                skipped.append((node, child))
    return skipped


def heading_levels_are_sequential(document: Document) -> bool:
    return not _skipped_levels(document)


def heading_levels_detail(document: Document) -> str:
    return join_limited(
        [
            f"'{child.title}' is h{child.level} under h{parent.level}"
            for parent, child in _skipped_levels(document)
        ]
    )


__all__ = [
    "examples_are_paired",
    "fences_are_closed",
    "heading_levels_are_sequential",
    "heading_levels_detail",
    "unclosed_detail",
    "unpaired_detail",
]

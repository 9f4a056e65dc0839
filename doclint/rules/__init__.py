"""Versioned rule table for every document category."""

from ..models import Category, Severity
from . import common, reference, skill, standards
from .base import RuleSpec, SchemaRule

RULESET_VERSION = "2024.1"

_ALL = (Category.SKILL, Category.STANDARDS, Category.REFERENCE)

RULE_TABLE = (
    RuleSpec(
        id="skill.required-metadata",
        categories=(Category.SKILL,),
        description="skill documents must declare non-empty 'name' and 'description' metadata",
        predicate=skill.has_required_metadata,
        detail=skill.required_metadata_detail,
    ),
    RuleSpec(
        id="skill.name-format",
        categories=(Category.SKILL,),
        description=(
            "skill name should be lowercase kebab-case of at most "
            f"{skill.MAX_NAME_LENGTH} characters"
        ),
        predicate=skill.name_is_well_formed,
        severity=Severity.WARNING,
        detail=skill.name_detail,
    ),
    RuleSpec(
        id="skill.description-length",
        categories=(Category.SKILL,),
        description=f"skill description should not exceed {skill.MAX_DESCRIPTION_LENGTH} characters",
        predicate=skill.description_within_limit,
        severity=Severity.WARNING,
        detail=skill.description_detail,
    ),
    RuleSpec(
        id="skill.has-instructions",
        categories=(Category.SKILL,),
        description="skill documents should contain at least one instruction section",
        predicate=skill.has_instructions,
        severity=Severity.WARNING,
    ),
    RuleSpec(
        id="standards.requirements-section",
        categories=(Category.STANDARDS,),
        description="standards documents must contain a formatting requirements section",
        predicate=standards.has_requirements_section,
    ),
    RuleSpec(
        id="standards.finding-subsections",
        categories=(Category.STANDARDS,),
        description=(
            "example findings must include every required subsection: "
            + ", ".join(standards.FINDING_SUBSECTIONS)
        ),
        predicate=standards.findings_are_complete,
        detail=standards.findings_detail,
    ),
    RuleSpec(
        id="standards.severity-levels",
        categories=(Category.STANDARDS,),
        description="severity sections should enumerate their levels in a list or table",
        predicate=standards.severity_levels_enumerated,
        severity=Severity.WARNING,
        detail=standards.severity_detail,
    ),
    RuleSpec(
        id="reference.has-entries",
        categories=(Category.REFERENCE,),
        description="reference documents should contain at least one entry heading",
        predicate=reference.has_entries,
        severity=Severity.WARNING,
    ),
    RuleSpec(
        id="reference.interactive-entry",
        categories=(Category.REFERENCE,),
        description="interactive element entries must declare attributes, slots or events",
        predicate=reference.interactive_entries_declare_api,
        detail=reference.interactive_entries_detail,
    ),
    RuleSpec(
        id="examples.paired",
        categories=_ALL,
        description="a 'bad' example needs a 'good' example before the next heading of equal or higher level",
        predicate=common.examples_are_paired,
        detail=common.unpaired_detail,
    ),
    RuleSpec(
        id="structure.closed-fences",
        categories=_ALL,
        description="fenced code blocks must be closed",
        predicate=common.fences_are_closed,
        detail=common.unclosed_detail,
    ),
    RuleSpec(
        id="structure.heading-levels",
        categories=_ALL,
        description="headings should not skip levels",
        predicate=common.heading_levels_are_sequential,
        severity=Severity.WARNING,
        detail=common.heading_levels_detail,
    ),
)

__all__ = ["RULESET_VERSION", "RULE_TABLE", "RuleSpec", "SchemaRule"]

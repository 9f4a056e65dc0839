"""Tests for doclint.runner."""

from __future__ import annotations

from pathlib import Path

import pytest

from doclint.config import DoclintConfig
from doclint.errors import InputError
from doclint.models import Category, Status
from doclint.reporter import EXIT_FAILURE, EXIT_OK, render_text
from doclint.runner import Runner
from doclint.scanner import DocumentScanner
from tests._fixtures.docs_builder import DocsBuilder
from tests._fixtures.samples import (
    REFERENCE_DOC,
    SKILL_DOC,
    SKILL_DOC_WITHOUT_DESCRIPTION,
    STANDARDS_DOC,
)


def _runner(tmp_path: Path, **config_kwargs) -> Runner:
    config = DoclintConfig(root=tmp_path.resolve(), **config_kwargs)
    return Runner(config, scanner=DocumentScanner(base=tmp_path))


def test_run_over_clean_tree_succeeds(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write(
        {
            "skills/view-transitions/SKILL.md": SKILL_DOC,
            "standards/review.md": STANDARDS_DOC,
            "reference/catalog.md": REFERENCE_DOC,
        }
    )

    result = _runner(tmp_path).run([docs_builder.path()])

    assert result.exit_code == EXIT_OK
    assert result.documents == 3
    assert {report.category for report in result.reports} == set(Category)
    assert all(report.status is Status.PASSED for report in result.reports)


def test_run_reports_errors(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"skills/broken/SKILL.md": SKILL_DOC_WITHOUT_DESCRIPTION})

    result = _runner(tmp_path).run([docs_builder.path()])

    assert result.exit_code == EXIT_FAILURE
    assert [d.rule_id for d in result.diagnostics] == ["skill.required-metadata"]
    assert result.diagnostics[0].document_path == "docs/skills/broken/SKILL.md"


def test_parallel_run_matches_sequential_run(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write(
        {
            f"skills/skill-{index}/SKILL.md": (
                SKILL_DOC if index % 2 else SKILL_DOC_WITHOUT_DESCRIPTION
            )
            for index in range(12)
        }
    )
    runner = _runner(tmp_path)

    sequential = runner.run([docs_builder.path()], jobs=1)
    parallel = runner.run([docs_builder.path()], jobs=4)

    assert render_text(parallel) == render_text(sequential)
    assert parallel.errors == 6


def test_configured_category_override_applies(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"catalog/review.md": STANDARDS_DOC})
    runner = _runner(tmp_path, categories={"docs/catalog/*.md": "reference"})

    result = runner.run([docs_builder.path()])

    assert result.reports[0].category is Category.REFERENCE


def test_cli_category_beats_configured_override(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"catalog/review.md": STANDARDS_DOC})
    runner = _runner(tmp_path, categories={"docs/catalog/*.md": "reference"})

    result = runner.run([docs_builder.path()], category="standards")

    assert result.reports[0].category is Category.STANDARDS


def test_strict_defaults_to_config(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"catalog.md": "Just a paragraph.\n"})

    assert _runner(tmp_path).run([docs_builder.path()]).exit_code == EXIT_OK
    assert _runner(tmp_path, strict=True).run([docs_builder.path()]).exit_code == EXIT_FAILURE


def test_missing_input_aborts_before_parsing(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    docs_builder.write({"good.md": REFERENCE_DOC})

    with pytest.raises(InputError):
        _runner(tmp_path).run([docs_builder.path(), tmp_path / "absent.md"])


def test_empty_directory_yields_empty_run(docs_builder: DocsBuilder, tmp_path: Path) -> None:
    result = _runner(tmp_path).run([docs_builder.path()])

    assert result.exit_code == EXIT_OK
    assert result.documents == 0


def test_check_text_validates_in_memory_content(tmp_path: Path) -> None:
    report = _runner(tmp_path).check_text(SKILL_DOC_WITHOUT_DESCRIPTION, "SKILL.md")

    assert report.status is Status.FAILED
    assert [d.rule_id for d in report.diagnostics] == ["skill.required-metadata"]

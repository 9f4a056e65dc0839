"""Aggregate document reports and render them deterministically."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Dict, Iterable, List

from .models import DocumentReport, RunResult, Status

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

FORMATS = ("text", "json")


def aggregate(reports: Iterable[DocumentReport], *, strict: bool = False) -> RunResult:
    """Sort reports and compute the exit code for one run."""
    ordered = sorted(
        (
            replace(report, diagnostics=tuple(sorted(report.diagnostics, key=lambda d: d.sort_key())))
            for report in reports
        ),
        key=lambda report: report.path,
    )
    errors = sum(report.errors for report in ordered)
    warnings = sum(report.warnings for report in ordered)
    failing = errors > 0 or (strict and warnings > 0)
    return RunResult(
        reports=tuple(ordered),
        exit_code=EXIT_FAILURE if failing else EXIT_OK,
        strict=strict,
    )


def summary_line(result: RunResult) -> str:
    line = f"{result.documents} documents, {result.errors} errors, {result.warnings} warnings"
    if result.skipped:
        line += f", {result.skipped} skipped"
    return line


def render_text(result: RunResult) -> str:
    lines: List[str] = []
    for report in result.reports:
        for diag in report.diagnostics:
            lines.append(f"{diag.severity.value} {diag.document_path} [{diag.rule_id}] {diag.message}")
        if report.status is Status.SKIPPED:
            lines.append(f"skipped {report.path} ({report.skip_reason or 'no applicable rules'})")
    lines.append(summary_line(result))
    return "\n".join(lines) + "\n"


def result_payload(result: RunResult) -> Dict[str, Any]:
    return {
        "documents": [report.to_dict() for report in result.reports],
        "summary": {
            "documents": result.documents,
            "errors": result.errors,
            "warnings": result.warnings,
            "skipped": result.skipped,
            "strict": result.strict,
            "exitCode": result.exit_code,
        },
    }


def render_json(result: RunResult) -> str:
    return json.dumps(result_payload(result), indent=2, sort_keys=True) + "\n"


def render(result: RunResult, output_format: str = "text") -> str:
    if output_format == "json":
        return render_json(result)
    if output_format == "text":
        return render_text(result)
    raise ValueError(f"Unsupported report format: {output_format}")


__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "EXIT_USAGE",
    "FORMATS",
    "aggregate",
    "render",
    "render_json",
    "render_text",
    "result_payload",
    "summary_line",
]

"""Pipeline orchestration: scan, parse, validate, aggregate."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from .config import DoclintConfig
from .logging import get_logger
from .models import Category, DocumentReport, RunResult
from .registry import SchemaRegistry, default_registry
from .reporter import aggregate
from .scanner import DocumentScanner, SourceFile
from .validator import DocumentValidator


class Runner:
    """Coordinates one validation run over a set of input paths."""

    def __init__(
        self,
        config: DoclintConfig | None = None,
        *,
        registry: SchemaRegistry | None = None,
        scanner: DocumentScanner | None = None,
    ) -> None:
        self.config = config or DoclintConfig(root=Path.cwd().resolve())
        self.registry = registry or self.config.apply_rules(default_registry())
        self.scanner = scanner or DocumentScanner(
            extensions=self.config.extensions,
            exclude_paths=self.config.exclude_paths,
        )
        self.validator = DocumentValidator(self.registry)
        self.logger = get_logger("runner")

    def run(
        self,
        paths: Sequence[str | Path],
        *,
        category: Optional[Category | str] = None,
        strict: Optional[bool] = None,
        jobs: Optional[int] = None,
    ) -> RunResult:
        """Validate every document under ``paths``.

        Raises ``InputError`` before any document is parsed when a path is
        missing or unreadable.
        """
        sources = self.scanner.scan(paths)
        workers = jobs if jobs is not None else self.config.jobs
        self.logger.info(
            "Validating %d documents with ruleset %s", len(sources), self.registry.version
        )
        reports = self._check_all(sources, category, workers)
        effective_strict = self.config.strict if strict is None else strict
        return aggregate(reports, strict=effective_strict)

    def check_text(
        self,
        text: str,
        path: str,
        *,
        category: Optional[Category | str] = None,
    ) -> DocumentReport:
        """Validate in-memory document text."""
        override = category if category is not None else self.config.category_for(Path(path))
        return self.validator.parse_and_check(text, path, category=override)

    def _check_source(
        self, source: SourceFile, category: Optional[Category | str]
    ) -> DocumentReport:
        override = category if category is not None else self.config.category_for(source.path)
        report = self.validator.parse_and_check(source.text, source.display, category=override)
        self.logger.debug("%s: %s", source.display, report.status.value)
        return report

    def _check_all(
        self,
        sources: Sequence[SourceFile],
        category: Optional[Category | str],
        workers: int,
    ) -> List[DocumentReport]:
        if workers <= 1 or len(sources) < 2:
            return [self._check_source(source, category) for source in sources]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(lambda source: self._check_source(source, category), sources))


__all__ = ["Runner"]

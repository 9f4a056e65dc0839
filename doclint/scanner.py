"""Expand input paths into documentation files and read them."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from .config import DEFAULT_EXTENSIONS
from .errors import InputError
from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".tox",
    ".idea",
}


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or exclude_paths."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.is_file():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


@dataclass(frozen=True)
class SourceFile:
    """A documentation file read from disk."""

    path: Path
    display: str
    text: str


def display_path(path: Path, base: Optional[Path] = None) -> str:
    """Return ``path`` relative to ``base`` (default: cwd) when possible."""
    anchor = (base or Path.cwd()).resolve()
    resolved = path.resolve()
    try:
        return resolved.relative_to(anchor).as_posix()
    except ValueError:
        return resolved.as_posix()


class DocumentScanner:
    """Collects documentation files from files and directories."""

    def __init__(
        self,
        *,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        exclude_paths: Iterable[str] = (),
        base: Optional[Path] = None,
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.exclude_rules = [
            rule for rule in (build_ignore_rule(pattern) for pattern in exclude_paths) if rule
        ]
        self.base = base
        self.logger = get_logger("scanner")

    def collect(self, paths: Sequence[str | Path]) -> List[Path]:
        """Expand ``paths`` into an ordered, de-duplicated list of files."""
        collected: List[Path] = []
        seen: set[Path] = set()
        for raw in paths:
            path = Path(raw).expanduser()
            if not path.exists():
                raise InputError(f"Path does not exist: {raw}", path=raw)
            candidates = [path] if path.is_file() else list(self._iter_directory(path))
            for candidate in candidates:
                key = candidate.resolve()
                if key in seen:
                    continue
                seen.add(key)
                collected.append(candidate)
        self.logger.debug("Collected %d documentation files", len(collected))
        return collected

    def read(self, paths: Sequence[Path]) -> List[SourceFile]:
        sources: List[SourceFile] = []
        for path in paths:
            try:
                text = path.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise InputError(f"File is not valid UTF-8: {path}", path=path) from exc
            except OSError as exc:
                raise InputError(f"Cannot read {path}: {exc.strerror or exc}", path=path) from exc
            sources.append(SourceFile(path=path, display=display_path(path, self.base), text=text))
        return sources

    def scan(self, paths: Sequence[str | Path]) -> List[SourceFile]:
        """Collect and read every documentation file under ``paths``."""
        return self.read(self.collect(paths))

    def _iter_directory(self, root: Path) -> Iterator[Path]:
        rules = parse_gitignore(root / ".gitignore") + self.exclude_rules
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                if Path(filename).suffix.lower() not in self.extensions:
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield current_dir / filename


__all__ = ["DocumentScanner", "IgnoreRule", "SourceFile", "build_ignore_rule", "display_path"]

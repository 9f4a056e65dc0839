"""Exception taxonomy for doclint runs."""

from __future__ import annotations

from pathlib import Path


class DoclintError(Exception):
    """Base class for errors raised by doclint."""


class ParseError(DoclintError):
    """Raised when a document's structure cannot be parsed."""

    def __init__(self, message: str, *, path: str, line: int | None = None) -> None:
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"{location}: {message}")
        self.reason = message
        self.path = path
        self.line = line


class UnknownCategoryError(DoclintError, ValueError):
    """Raised when a category name matches no known document category."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unknown document category: {value!r}")
        self.value = value


class RuleEvaluationError(DoclintError):
    """Raised when a rule predicate fails on an unexpected document shape."""

    def __init__(self, rule_id: str, cause: BaseException) -> None:
        super().__init__(f"rule {rule_id} raised {type(cause).__name__}: {cause}")
        self.rule_id = rule_id
        self.cause = cause


class InputError(DoclintError, OSError):
    """Raised when input paths are missing or unreadable."""

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


class ConfigError(DoclintError, RuntimeError):
    """Raised when the configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "DoclintError",
    "InputError",
    "ParseError",
    "RuleEvaluationError",
    "UnknownCategoryError",
]

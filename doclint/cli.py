"""CLI entrypoint for validate-docs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .errors import ConfigError, InputError
from .logging import configure_logging, get_logger
from .models import Category
from .registry import SchemaRegistry
from .reporter import EXIT_OK, EXIT_USAGE, FORMATS, render
from .runner import Runner


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="validate-docs",
        description="Validate skill, standards and reference documents against their schemas.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Documentation files or directories to validate.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file.",
    )
    parser.add_argument(
        "--category",
        choices=[category.value for category in Category],
        help="Override the inferred category for every given path.",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Report output shape (default: text, or the configured format).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat warnings as failures.",
    )
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=None,
        help="Validate documents on this many worker threads.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .doclint.yml file (defaults to the current directory).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the registered rules and exit.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for validate-docs; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(args.log_file) if args.log_file else None,
    )
    logger = get_logger("cli")

    try:
        if args.config:
            config = load_config(Path(args.config), required=True)
        else:
            config = load_config(Path.cwd())
    except ConfigError as exc:
        parser.exit(EXIT_USAGE, f"validate-docs: {exc}\n")

    runner = Runner(config)

    if args.list_rules:
        sys.stdout.write(_format_rules(runner.registry))
        return EXIT_OK

    if not args.paths:
        parser.error("at least one path is required")

    try:
        result = runner.run(
            args.paths,
            category=args.category,
            strict=args.strict,
            jobs=args.jobs,
        )
    except InputError as exc:
        parser.exit(EXIT_USAGE, f"validate-docs: {exc}\n")

    report = render(result, args.format or config.format)
    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(report, encoding="utf-8")
        except OSError as exc:
            parser.exit(EXIT_USAGE, f"validate-docs: cannot write {output_path}: {exc}\n")
        logger.info("Report written to %s", output_path)
    else:
        sys.stdout.write(report)
    return result.exit_code


def _format_rules(registry: SchemaRegistry) -> str:
    lines = [f"ruleset {registry.version}"]
    for rule in registry.rules:
        lines.append(
            f"{rule.id:<32} {rule.applies_to.value:<10} {rule.severity.value:<8} {rule.description}"
        )
    return "\n".join(lines) + "\n"


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

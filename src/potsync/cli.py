"""Command line interface: ``potsync extract|compile|validate``.

Exit codes: 0 on success, 1 when the command failed or found problems
(validation issues, nothing compiled, locale errors, invalid options).

Python 3.11+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from potsync import __version__
from potsync.compiler import compile_catalogs
from potsync.constants import DEFAULT_FUZZY_THRESHOLD, DEFAULT_TEMPLATE_FILENAME
from potsync.core.babel_compat import BabelImportError
from potsync.diagnostics import CatalogError, DiagnosticFormatter, OutputFormat
from potsync.enums import CompileFormat
from potsync.validation import validate_catalogs
from potsync.workflow import extract

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

_TEXT_FORMAT = "text"


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _threshold(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        msg = f"invalid threshold: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="potsync",
        description="Extract translatable messages and keep gettext catalogs in sync.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Scan sources and write a template or sync locale catalogs"
    )
    extract_parser.add_argument("paths", nargs="*", default=["src"], help="Files or directories")
    extract_parser.add_argument(
        "-o", "--out", default=DEFAULT_TEMPLATE_FILENAME, help="Output POT file"
    )
    extract_parser.add_argument("--cwd", help="Working directory for relative paths")
    extract_parser.add_argument(
        "--extensions", type=_split_list, help="Comma-separated file extensions to scan"
    )
    extract_parser.add_argument(
        "--dry-run", action="store_true", help="Print extracted strings without writing"
    )
    extract_parser.add_argument("--quiet", action="store_true", help="Suppress the summary")
    extract_parser.add_argument("--locales-dir", help="Directory with one folder per language")
    extract_parser.add_argument(
        "--languages", type=_split_list, default=[], help="Comma-separated languages to sync"
    )
    extract_parser.add_argument(
        "--default-locale", help="Language whose new entries repeat the source text"
    )
    extract_parser.add_argument(
        "--no-fuzzy", dest="fuzzy", action="store_false", help="Disable fuzzy matching"
    )
    extract_parser.add_argument(
        "--fuzzy-threshold",
        type=_threshold,
        default=DEFAULT_FUZZY_THRESHOLD,
        help=f"Minimum similarity for fuzzy matches (default: {DEFAULT_FUZZY_THRESHOLD})",
    )

    compile_parser = subparsers.add_parser("compile", help="Compile .po files")
    compile_parser.add_argument(
        "paths", nargs="*", default=["locales"], help="Files or directories"
    )
    compile_parser.add_argument(
        "-f",
        "--format",
        default=CompileFormat.JSON.value,
        choices=[fmt.value for fmt in CompileFormat],
        help="Output format (default: json)",
    )
    compile_parser.add_argument(
        "-o", "--out", help="Destination directory (default: next to each catalog)"
    )
    compile_parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    compile_parser.add_argument(
        "--exclude-fuzzy",
        dest="include_fuzzy",
        action="store_false",
        help="Leave translations flagged fuzzy out of the output",
    )
    compile_parser.add_argument("--cwd", help="Working directory for relative paths")

    validate_parser = subparsers.add_parser("validate", help="Lint .po files")
    validate_parser.add_argument(
        "paths", nargs="*", default=["locales"], help="Files or directories"
    )
    validate_parser.add_argument(
        "--strict", action="store_true", help="Also fail on fuzzy translations"
    )
    validate_parser.add_argument(
        "--format",
        default=_TEXT_FORMAT,
        choices=[_TEXT_FORMAT, *(fmt.value for fmt in OutputFormat)],
        help="Issue output style (default: text, one line per issue)",
    )
    validate_parser.add_argument("--cwd", help="Working directory for relative paths")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run_extract(args: argparse.Namespace) -> int:
    result = extract(
        args.paths,
        cwd=args.cwd,
        out_file=args.out,
        extensions=args.extensions,
        dry_run=args.dry_run,
        locales_dir=args.locales_dir,
        languages=args.languages,
        default_locale=args.default_locale,
        fuzzy=args.fuzzy,
        fuzzy_threshold=args.fuzzy_threshold,
    )

    if args.dry_run:
        for message in result.messages:
            label = f"[{message.context}] " if message.context else ""
            plural = f" / {message.plural_id}" if message.plural_id else ""
            print(f"{label}{message.msgid}{plural}")

    summary = result.summary
    if summary is None:
        if not args.quiet:
            target = "(dry run)" if args.dry_run else str(result.out_file)
            print(f"Extracted {len(result.messages)} messages -> {target}")
        return 0

    for locale_result in summary.results:
        if locale_result.is_error:
            print(
                f"{locale_result.locale}: error: {locale_result.error}",
                file=sys.stderr,
            )
        elif not args.quiet:
            print(
                f"{locale_result.locale}: {locale_result.status} "
                f"(created {locale_result.created}, updated {locale_result.updated}, "
                f"fuzzy {locale_result.fuzzy}, obsolete {locale_result.obsoleted})"
            )
    return 1 if summary.has_errors else 0


def _run_compile(args: argparse.Namespace) -> int:
    result = compile_catalogs(
        args.paths,
        cwd=args.cwd,
        out_dir=args.out,
        output_format=args.format,
        pretty=args.pretty,
        include_fuzzy=args.include_fuzzy,
    )
    if result.skipped:
        skipped = ", ".join(result.skipped)
        print(f"Skipped {len(result.skipped)} path(s): {skipped}", file=sys.stderr)
    if not result.artifacts:
        print("No catalogs compiled", file=sys.stderr)
        return 1
    for artifact in result.artifacts:
        print(f"{artifact.input_file} -> {artifact.output_file}")
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    report = validate_catalogs(args.paths, cwd=args.cwd, strict=args.strict)
    if report.skipped:
        skipped = ", ".join(report.skipped)
        print(f"Skipped {len(report.skipped)} path(s): {skipped}", file=sys.stderr)
    if args.format == _TEXT_FORMAT:
        for issue in report.issues:
            print(issue.format())
    elif report.issues:
        formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))
        print(formatter.format_all(issue.to_diagnostic() for issue in report.issues))

    if report.is_valid:
        # stdout carries only JSON objects in json mode
        if args.format != OutputFormat.JSON:
            print(f"{len(report.files)} catalog(s) valid")
        return 0
    print(f"{report.issue_count} issue(s) found", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        match args.command:
            case "extract":
                return _run_extract(args)
            case "compile":
                return _run_compile(args)
            case "validate":
                return _run_validate(args)
    except (CatalogError, BabelImportError, OSError) as error:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 1

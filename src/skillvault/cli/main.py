"""CLI entrypoint for the Skillvault linter."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from skillvault import __version__
from skillvault.cli.handlers import handle_lint, handle_locate, handle_scan_docs, handle_validate_config
from skillvault.constants.branding import CLI_DESCRIPTION
from skillvault.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_GROUP_BY

_SEVERITY_CHOICES = ["low", "medium", "high"]


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="skillvault",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Lint skills, commands and MCP server pointers")
    lint.add_argument("-r", "--root", type=Path, required=True, help="Vault root path")
    lint.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory root (no files written if omitted)",
    )
    lint.add_argument("-c", "--config", type=Path, help="Explicit config file")
    lint.add_argument("-n", "--no-cache", action="store_true", help="Disable cache reads/writes")
    lint.add_argument("--max-file-mb", type=int, help="Skip vault files larger than this size")
    lint.add_argument(
        "--output-format",
        default=DEFAULT_OUTPUT_FORMAT,
        help="Comma-separated output formats: json, csv, sarif (default: json)",
    )
    lint.add_argument("--min-severity", choices=_SEVERITY_CHOICES, default=None, help="Hide findings below severity")
    lint.add_argument("--errors-only", action="store_true", help="Hide informational findings")
    lint.add_argument("--group-by", choices=list(VALID_GROUP_BY), default=None, help="Group stdout findings")
    lint.add_argument("--summary-only", action="store_true", help="Print only the summary header")
    lint.add_argument(
        "--fail-on",
        choices=_SEVERITY_CHOICES,
        default=None,
        help="Exit 1 when any finding reaches this severity",
    )
    lint.add_argument("--fail-on-score", type=int, default=None, help="Exit 1 when the aggregate score reaches N")
    lint.add_argument("--no-stdout", action="store_true", help="Silence stdout output")
    lint.add_argument("--no-color", action="store_true", help="Disable colored output")
    lint.add_argument("-v", "--verbose", action="store_true", help="Show cache stats and diagnostics")
    lint.set_defaults(handler=handle_lint)

    validate = subparsers.add_parser("validate-config", help="Validate configuration without linting")
    validate.add_argument("-r", "--root", type=Path, required=True, help="Vault root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")
    validate.set_defaults(handler=handle_validate_config)

    docs = subparsers.add_parser("scan-docs", help="Index documentation files into a topic map")
    docs.add_argument("-r", "--root", type=Path, required=True, help="Directory to index")
    docs.add_argument("-c", "--config", type=Path, help="Explicit config file")
    docs.add_argument("-o", "--output", type=Path, default=None, help="Write JSON here instead of stdout")
    docs.set_defaults(handler=handle_scan_docs)

    locate = subparsers.add_parser("locate", help="Resolve documentation topics to files")
    locate.add_argument("-r", "--root", type=Path, required=True, help="Directory to search")
    locate.add_argument("-c", "--config", type=Path, help="Explicit config file")
    locate.add_argument("topics", nargs="*", help="Topics to resolve (all known topics if omitted)")
    locate.add_argument("--json", action="store_true", help="Print results as JSON")
    locate.add_argument("--no-fallback", action="store_true", help="Do not fall back to the readme")
    locate.set_defaults(handler=handle_locate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    return int(args.handler(args))


if __name__ == "__main__":
    raise SystemExit(main())

"""Command line interface for parsing versions and checking ranges."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .config import ConfigError
from .core import check_repository
from .errors import SemverSyntaxError
from .manifests import ManifestError
from .parser import parse_range, parse_version
from .matchers import match
from .summary import render_summary

EXIT_OK = 0
EXIT_UNSATISFIED = 1
EXIT_ERROR = 2
EXIT_FINDINGS = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="npm-semver", description=__doc__)
    parser.add_argument(
        "--log-level",
        default=os.environ.get("NPM_SEMVER_LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity (or NPM_SEMVER_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    version = sub.add_parser("version", help="Parse and normalise a version")
    version.add_argument("text")

    range_p = sub.add_parser("range", help="Parse and normalise a range expression")
    range_p.add_argument("expr")

    satisfies = sub.add_parser("satisfies", help="Exit 0 when VERSION satisfies EXPR, 1 otherwise")
    satisfies.add_argument("version")
    satisfies.add_argument("expr")

    check = sub.add_parser("check", help="Check lockfile versions against package.json ranges")
    check.add_argument("--root", type=Path, default=Path("."))
    check.add_argument("--config", type=Path, default=None, help="Path to npm-semver.json")
    check.add_argument("--format", choices=["json", "markdown"], default="json")
    check.add_argument("--warn-only", action="store_true")

    return parser


def _run_check(args: argparse.Namespace) -> int:
    report = check_repository(args.root, config_path=args.config)
    if args.format == "markdown":
        print(render_summary(report), end="")
    else:
        print(json.dumps(report, indent=2))

    if not report.get("hasFindings") or args.warn_only:
        return EXIT_OK
    warn_env = os.getenv("NPM_SEMVER_WARN_ONLY", "").strip().lower()
    if warn_env in {"1", "true", "yes", "y"}:
        return EXIT_OK
    return EXIT_FINDINGS


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "version":
            print(parse_version(args.text))
            return EXIT_OK
        if args.command == "range":
            print(parse_range(args.expr))
            return EXIT_OK
        if args.command == "satisfies":
            ok = match(parse_range(args.expr), parse_version(args.version))
            return EXIT_OK if ok else EXIT_UNSATISFIED
        return _run_check(args)
    except SemverSyntaxError as exc:
        print(f"ERROR: Invalid syntax: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except ManifestError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

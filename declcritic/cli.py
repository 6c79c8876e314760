"""CLI entrypoints for declcritic commands."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, Sequence

from .config import ConfigError, load_config
from .critic import analyze, dts_critic
from .errors import UnknownErrorKindError, parse_enabled_kinds
from .exceptions import EntryPointError, RegistryError, ToolUnavailableError
from .logging import configure_logging
from .models import CriticFinding, ErrorKind
from .registry.cache import RegistryCache
from .registry.npm import NpmRegistry


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Turn debug logging on, including inferred module structures.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", "--debug", **kwargs)


def _add_common_options(parser: argparse.ArgumentParser, *, require_js: bool) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument("--dts", required=True, help="Path of declaration file to be critiqued.")
    parser.add_argument(
        "--js",
        required=require_js,
        help="Path of JavaScript file to be used as source.",
    )
    parser.add_argument(
        "--config",
        help="Path to .declcritic.yml (defaults to the one next to the declaration file).",
    )
    parser.add_argument(
        "--enable-error",
        action="append",
        default=[],
        metavar="KIND",
        help="Enable a finding kind that is off by default (repeatable).",
    )
    parser.add_argument(
        "--disable-error",
        action="append",
        default=[],
        metavar="KIND",
        help="Disable a finding kind (repeatable).",
    )
    parser.add_argument("--json", action="store_true", help="Print findings as JSON.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="declcritic",
        description="Check a TypeScript declaration file against its JavaScript source.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Check a declaration, looking up and downloading the package when --js is omitted.",
    )
    _add_common_options(check_parser, require_js=False)

    check_file_parser = subparsers.add_parser(
        "check-file",
        help="Compare a declaration against a local source file only.",
    )
    _add_common_options(check_file_parser, require_js=True)
    return parser


def _overrides(args: argparse.Namespace) -> Dict[ErrorKind, bool]:
    overrides = parse_enabled_kinds(args.enable_error, value=True)
    overrides.update(parse_enabled_kinds(args.disable_error, value=False))
    return overrides


def _render(findings: Sequence[CriticFinding], as_json: bool) -> str:
    if as_json:
        return json.dumps([finding.to_dict() for finding in findings], indent=2)
    if not findings:
        return "No errors!"
    lines = []
    for finding in findings:
        line = f"Error: {finding.message}"
        if finding.position is not None:
            line += f" (at {finding.position.start}:{finding.position.length})"
        lines.append(line)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for declcritic commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.config) if args.config else Path(args.dts))
        overrides = _overrides(args)
    except (ConfigError, UnknownErrorKindError) as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "check":
        cache = RegistryCache(config.registry_cache)
        try:
            registry = NpmRegistry(cache=cache)
            findings = dts_critic(args.dts, args.js, overrides, registry=registry, config=config)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ToolUnavailableError, RegistryError, EntryPointError) as exc:
            parser.exit(1, f"declcritic check failed: {exc}\nRun with --verbose for more details.\n")
        finally:
            cache.persist()
    elif args.command == "check-file":
        try:
            findings = analyze(args.dts, args.js, overrides, config=config)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except ToolUnavailableError as exc:
            parser.exit(1, f"declcritic check-file failed: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    print(_render(findings, bool(args.json)))


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()

"""Entry points that critique a declaration file against its JavaScript source."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional

from .analyzers.comparator import compare_modules
from .analyzers.default_export import DefaultExportDetector
from .analyzers.descriptors import format_debug, inspect_declaration, inspect_source
from .config import DEFAULT_SOURCES_DIR, CriticConfig
from .errors import filter_findings
from .header import Header, parse_header
from .logging import debug_enabled, get_logger
from .models import CriticFinding, ErrorKind
from .names import dt_to_npm_name, find_dts_name
from .oracle.base import TypeOracle
from .oracle.structural import StructuralOracle
from .registry.base import PackageInfo, Registry
from .registry.npm import find_entry_point
from .versions import VersionResolution, resolve_version

logger = get_logger("critic")


def _read(path: Path | str) -> str:
    return Path(path).read_text(encoding="utf-8")


def check_source(
    name: str,
    declaration_path: Path | str,
    source_path: Path | str,
    *,
    oracle: Optional[TypeOracle] = None,
    detector: Optional[DefaultExportDetector] = None,
) -> List[CriticFinding]:
    """Compare a declaration's exports against its source module, unfiltered."""
    oracle = oracle or StructuralOracle()
    npm_name = dt_to_npm_name(name)
    declaration_text = _read(declaration_path)
    source_text = _read(source_path)

    source = inspect_source(oracle, source_text, npm_name, detector)
    declaration = inspect_declaration(oracle, declaration_text, npm_name, detector)
    if debug_enabled("critic"):
        logger.debug("%s", format_debug(source, declaration))
    return compare_modules(source, declaration)


def analyze(
    declaration_path: Path | str,
    source_path: Path | str,
    enabled_kinds: Optional[Mapping[ErrorKind, bool]] = None,
    *,
    oracle: Optional[TypeOracle] = None,
    config: Optional[CriticConfig] = None,
) -> List[CriticFinding]:
    """Check a declaration against a local source file and keep enabled findings.

    ``enabled_kinds`` entries override the configuration's ``errors`` mapping,
    which in turn overrides the defaults.
    """
    detector = DefaultExportDetector(config.heuristics) if config is not None else None
    enabled = _merge_enabled(config, enabled_kinds)
    findings = check_source(
        find_dts_name(declaration_path), declaration_path, source_path, oracle=oracle, detector=detector
    )
    return filter_findings(findings, enabled)


def critique(
    declaration_path: Path | str,
    source_path: Path | str | None,
    *,
    registry: Registry,
    config: Optional[CriticConfig] = None,
    oracle: Optional[TypeOracle] = None,
) -> List[CriticFinding]:
    """Run package checks, then the source comparison; returns unfiltered findings.

    When ``source_path`` is omitted the matching published package is
    downloaded and its entry file is used as the source.
    """
    config = config or CriticConfig(root=Path.cwd())
    detector = DefaultExportDetector(config.heuristics)
    declaration_text = _read(declaration_path)
    header = parse_header(declaration_text)
    name = find_dts_name(declaration_path)
    info = registry.lookup_package(name)

    if header is not None and header.non_npm:
        findings: List[CriticFinding] = []
        conflict = check_non_distributed(name, info, config)
        if conflict is not None:
            findings.append(conflict)
        if source_path:
            findings.extend(check_source(name, declaration_path, source_path, oracle=oracle, detector=detector))
        else:
            logger.warning(
                "Declaration provided is for a non-npm package. If you want to check the declaration "
                "against the JavaScript source code, you must provide a path to the source file."
            )
        return findings

    outcome = check_distributed(name, info, header)
    if isinstance(outcome, CriticFinding):
        return [outcome]

    if not source_path:
        sources_dir = config.sources_dir or Path(DEFAULT_SOURCES_DIR)
        package_root = registry.fetch_and_extract_package(name, str(outcome.version), sources_dir)
        source_path = find_entry_point(package_root)
    return check_source(name, declaration_path, source_path, oracle=oracle, detector=detector)


def dts_critic(
    declaration_path: Path | str,
    source_path: Path | str | None = None,
    enabled_kinds: Optional[Mapping[ErrorKind, bool]] = None,
    *,
    registry: Registry,
    config: Optional[CriticConfig] = None,
    oracle: Optional[TypeOracle] = None,
) -> List[CriticFinding]:
    """:func:`critique` followed by enablement filtering."""
    findings = critique(declaration_path, source_path, registry=registry, config=config, oracle=oracle)
    return filter_findings(findings, _merge_enabled(config, enabled_kinds))


def check_non_distributed(name: str, info: PackageInfo, config: CriticConfig) -> Optional[CriticFinding]:
    if not info.exists or config.is_squatter(name):
        return None
    return CriticFinding(
        kind=ErrorKind.NON_DISTRIBUTED_HAS_MATCHING_PACKAGE,
        message=(
            f"The non-npm package '{name}' conflicts with the existing npm package "
            f"'{dt_to_npm_name(name)}'.\n"
            "Try adding -browser to the end of the name to get\n\n"
            f"{name}-browser"
        ),
    )


def check_distributed(
    name: str, info: PackageInfo, header: Optional[Header]
) -> CriticFinding | VersionResolution:
    """Return the resolved version, or the finding that ends the critique."""
    if not info.exists:
        return CriticFinding(
            kind=ErrorKind.NO_MATCHING_PACKAGE,
            message=(
                "d.ts file must have a matching npm package.\n"
                "To resolve this error, either:\n"
                "1. Change the name to match an npm package.\n"
                "2. Add a Definitely Typed header with the first line\n\n\n"
                f"// Type definitions for non-npm package {name}-browser\n\n"
                "Add -browser to the end of your name to make sure it doesn't conflict "
                "with existing npm packages."
            ),
        )

    requested = header.requested_version if header is not None else None
    resolution = resolve_version(requested, info.versions, info.tags)
    if resolution.found:
        return resolution
    return CriticFinding(
        kind=ErrorKind.NO_MATCHING_VERSION,
        message=(
            f"The types for '{name}' must match a version that exists on npm.\n"
            "You should copy the major and minor version from the package on npm.\n\n"
            f"To resolve this error, change the version in the header, "
            f"{requested or 'NO HEADER VERSION FOUND'},\n"
            f"to match one on npm: {', '.join(resolution.versions)}.\n\n"
            f"For example, if you're trying to match the latest version, use {resolution.latest}."
        ),
    )


def _merge_enabled(
    config: Optional[CriticConfig], enabled_kinds: Optional[Mapping[ErrorKind, bool]]
) -> dict[ErrorKind, bool]:
    if config is None:
        return dict(enabled_kinds or {})
    return config.with_overrides(dict(enabled_kinds or {}))


__all__ = [
    "analyze",
    "check_distributed",
    "check_non_distributed",
    "check_source",
    "critique",
    "dts_critic",
]

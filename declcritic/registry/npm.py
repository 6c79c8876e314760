"""npm registry adapter built on the ``npm`` executable."""

from __future__ import annotations

import json
import shutil
import subprocess
import tarfile
from pathlib import Path
from typing import Callable, NamedTuple, Optional, Sequence

from ..exceptions import EntryPointError, RegistryError, ToolUnavailableError
from ..logging import get_logger
from ..names import dt_to_npm_name
from .base import PackageInfo
from .cache import RegistryCache

NPM_NOT_FOUND = "E404"
DEFAULT_ENTRY_FILE = "index.js"
JS_EXTENSION = ".js"

logger = get_logger("registry.npm")


class CommandResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str = ""


CommandRunner = Callable[[Sequence[str], Optional[Path]], CommandResult]


class NpmRegistry:
    """Looks up and downloads packages through ``npm info`` and ``npm pack``.

    Names are accepted in their mangled repository form (``babel__core``) and
    translated to registry names before any command runs.
    """

    def __init__(
        self,
        executable: str = "npm",
        *,
        cache: RegistryCache | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.executable = executable
        self.cache = cache
        self._runner = runner or self._default_runner
        if runner is None and shutil.which(executable) is None:
            raise ToolUnavailableError(
                f"You need to have {executable} installed to look up packages, "
                "you can get it from https://www.npmjs.com/get-npm"
            )

    def lookup_package(self, name: str) -> PackageInfo:
        npm_name = dt_to_npm_name(name)
        if self.cache is not None:
            cached = self.cache.get(npm_name)
            if cached is not None:
                return cached

        result = self._runner(
            [self.executable, "info", npm_name, "--json", "--silent", "versions", "dist-tags"], None
        )
        info = self._parse_info(npm_name, result)
        if self.cache is not None:
            self.cache.store(npm_name, info)
        return info

    def fetch_and_extract_package(self, name: str, version: str, out_dir: Path) -> Path:
        npm_name = dt_to_npm_name(name)
        out_path = Path(out_dir) / name
        out_path.mkdir(parents=True, exist_ok=True)
        logger.debug("Downloading %s@%s into %s", npm_name, version, out_path)

        result = self._runner(
            [self.executable, "pack", f"{npm_name}@{version}", "--json", "--silent"], out_path
        )
        if result.returncode != 0:
            raise RegistryError(
                f"Command 'npm pack' failed for package {npm_name}@{version} "
                f"with status {result.returncode}."
            )
        try:
            packed = json.loads(result.stdout)[0]
            tarball = out_path / packed["filename"]
        except (ValueError, LookupError, TypeError) as exc:
            raise RegistryError(f"Could not read 'npm pack' output for {npm_name}@{version}.") from exc

        try:
            with tarfile.open(tarball, "r:gz") as archive:
                archive.extractall(out_path, filter="data")
        finally:
            tarball.unlink(missing_ok=True)
        return out_path / "package"

    @staticmethod
    def _parse_info(npm_name: str, result: CommandResult) -> PackageInfo:
        try:
            info = json.loads(result.stdout) if result.stdout.strip() else {}
        except json.JSONDecodeError as exc:
            raise RegistryError(f"Command 'npm info' for package {npm_name} returned invalid JSON.") from exc

        error = info.get("error") if isinstance(info, dict) else None
        if error is not None:
            if isinstance(error, dict) and error.get("code") == NPM_NOT_FOUND:
                return PackageInfo.not_found()
            summary = error.get("summary") if isinstance(error, dict) else error
            raise RegistryError(
                f"Command 'npm info' for package {npm_name} returned an error. Reason: {summary}."
            )
        if result.returncode != 0:
            raise RegistryError(
                f"Command 'npm info' failed for package {npm_name} with status {result.returncode}."
            )
        if not isinstance(info, dict):
            raise RegistryError(f"Command 'npm info' for package {npm_name} returned unexpected output.")

        versions = info.get("versions", [])
        # A package with a single published version reports it as a string.
        if isinstance(versions, str):
            versions = [versions]
        tags = info.get("dist-tags") or {}
        return PackageInfo(
            exists=True,
            versions=[str(version) for version in versions],
            tags={str(tag): str(version) for tag, version in tags.items() if version is not None},
        )

    @staticmethod
    def _default_runner(args: Sequence[str], cwd: Optional[Path]) -> CommandResult:
        try:
            completed = subprocess.run(
                list(args),
                cwd=str(cwd) if cwd is not None else None,
                check=False,
                text=True,
                capture_output=True,
            )
        except FileNotFoundError as exc:  # pragma: no cover - depends on environment
            raise ToolUnavailableError(f"Unable to locate '{args[0]}'.") from exc
        return CommandResult(completed.returncode, completed.stdout, completed.stderr)


def find_entry_point(package_root: Path) -> Path:
    """Resolve the entry file of an extracted package.

    Tries ``main`` from ``package.json``, then ``main`` with ``.js`` appended,
    then ``main/index.js``, then ``index.js``.
    """
    root = Path(package_root)
    manifest = root / "package.json"
    try:
        package_info = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise EntryPointError(f"Could not read package manifest '{manifest}'.") from exc

    main = package_info.get("main") if isinstance(package_info, dict) else None
    if not main or not isinstance(main, str):
        return (root / DEFAULT_ENTRY_FILE).resolve()

    candidates = [
        root / main,
        root / f"{main}{JS_EXTENSION}",
        root / main / DEFAULT_ENTRY_FILE,
        root / DEFAULT_ENTRY_FILE,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()
    raise EntryPointError(
        f"Could not find entry point for package on path '{root}' with main '{main}'."
    )


__all__ = [
    "CommandResult",
    "CommandRunner",
    "NPM_NOT_FOUND",
    "NpmRegistry",
    "find_entry_point",
]

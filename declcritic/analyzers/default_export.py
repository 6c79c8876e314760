"""Default-export detection for declarations and source modules.

Type evidence is preferred. The textual checks are heuristics for modules
whose exports are rewritten at runtime (transpiler interop, wrappers) where
inference cannot see a ``default`` member; they deliberately over-approximate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..models import (
    DefaultExportAssertion,
    DefaultExportEvidence,
    InferenceResult,
    Inferred,
    Position,
)
from ..oracle.base import TypeHandle, find_property

DEFAULT_MARKERS = (
    "default",
    "__esModule",
    "react-side-effect",
    "@flow",
    "module.exports = require",
)
DEFAULT_EXPORT_PACKAGES = ("ember-feature-flags", "material-ui-datatables")
DEFAULT_EXPORT_NAME_FRAGMENTS = ("react-native",)

_EXPORT_DEFAULT = "export default"
_EXPORT_EQUALS = "export ="
_AMBIENT_MODULE = re.compile(r"declare module ['\"]")


@dataclass
class DefaultExportHeuristics:
    """Hand-curated evidence that a source module exposes ``default`` at runtime."""

    markers: List[str] = field(default_factory=lambda: list(DEFAULT_MARKERS))
    packages: List[str] = field(default_factory=lambda: list(DEFAULT_EXPORT_PACKAGES))
    name_fragments: List[str] = field(default_factory=lambda: list(DEFAULT_EXPORT_NAME_FRAGMENTS))

    def known_package(self, name: str) -> bool:
        return name in self.packages or any(fragment in name for fragment in self.name_fragments)

    def mentions_default(self, text: str) -> bool:
        return any(marker in text for marker in self.markers)


class DefaultExportDetector:
    """Answers both sides of the default-export check."""

    def __init__(self, heuristics: DefaultExportHeuristics | None = None) -> None:
        self.heuristics = heuristics or DefaultExportHeuristics()

    def declared_default(
        self, declaration_text: str, export_type: InferenceResult[TypeHandle]
    ) -> Optional[DefaultExportAssertion]:
        """Where the declaration asserts a default export, if it does.

        A resolved type is authoritative: a ``default`` property is an
        assertion, its absence is not. Only when the declared type failed to
        resolve is the text scanned for ``export default``.
        """
        if isinstance(export_type, Inferred):
            symbol = find_property(export_type.value, "default")
            if symbol is None:
                return None
            return DefaultExportAssertion(position=symbol.position, evidence=DefaultExportEvidence.TYPE)

        index = declaration_text.find(_EXPORT_DEFAULT)
        if (
            index > -1
            and _EXPORT_EQUALS not in declaration_text
            and not _AMBIENT_MODULE.search(declaration_text)
        ):
            return DefaultExportAssertion(
                position=Position(start=index, length=len(_EXPORT_DEFAULT)),
                evidence=DefaultExportEvidence.TEXT,
            )
        return None

    def source_exposes_default(
        self,
        source_text: str,
        package_name: str,
        export_type: Optional[InferenceResult[TypeHandle]] = None,
    ) -> bool:
        if isinstance(export_type, Inferred) and find_property(export_type.value, "default"):
            return True
        return self.heuristics.known_package(package_name) or self.heuristics.mentions_default(source_text)


__all__ = [
    "DEFAULT_EXPORT_NAME_FRAGMENTS",
    "DEFAULT_EXPORT_PACKAGES",
    "DEFAULT_MARKERS",
    "DefaultExportDetector",
    "DefaultExportHeuristics",
]

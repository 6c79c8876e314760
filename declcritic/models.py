"""Core data models shared across declcritic components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Generic, Optional, TypeVar, Union

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .oracle.base import TypeHandle

T = TypeVar("T")


@dataclass(frozen=True)
class Position:
    """Character span inside the declaration file."""

    start: int
    length: int


@dataclass(frozen=True)
class PropertySymbol:
    """Named member of an inferred or declared export type."""

    name: str
    position: Optional[Position] = None


class ExportStyle(Enum):
    """How a module exposes its public surface."""

    WHOLE_MODULE_ASSIGNMENT = "WholeModuleAssignment"
    NAMED_EXPORTS = "NamedExports"
    UNCLASSIFIED = "Unclassified"


class TypeFlag(Enum):
    ANY = "Any"
    UNKNOWN = "Unknown"
    NULL = "Null"
    UNDEFINED = "Undefined"
    OBJECT = "Object"
    BOOLEAN = "Boolean"
    STRING = "String"
    NUMBER = "Number"


# Flags for which no structural question has a meaningful answer.
DISQUALIFYING_FLAGS = frozenset({TypeFlag.ANY, TypeFlag.UNKNOWN, TypeFlag.NULL, TypeFlag.UNDEFINED})
PRIMITIVE_FLAGS = frozenset({TypeFlag.BOOLEAN, TypeFlag.STRING, TypeFlag.NUMBER})


class ExportEqualsJudgement(Enum):
    REQUIRED = "Required"
    NOT_REQUIRED = "Not required"


@dataclass(frozen=True)
class ExportEqualsVerdict:
    """Whether a declaration must use ``export =``, with the user-facing reason."""

    judgement: ExportEqualsJudgement
    reason: str


@dataclass(frozen=True)
class InferenceFailure:
    """The oracle could not produce a usable answer."""

    reason: str


@dataclass(frozen=True)
class Inferred(Generic[T]):
    """Successful inference result."""

    value: T


InferenceResult = Union[Inferred[T], InferenceFailure]


class DefaultExportEvidence(Enum):
    """Which detection path asserted a declared default export."""

    TYPE = "type"
    TEXT = "text"


@dataclass(frozen=True)
class DefaultExportAssertion:
    """A declaration's claim that the module has a ``default`` member."""

    position: Optional[Position]
    evidence: DefaultExportEvidence


class ModuleRole(Enum):
    SOURCE = "source"
    DECLARATION = "declaration"


@dataclass(frozen=True)
class ModuleDescriptor:
    """Inferred shape of one module, built once per analysis.

    ``export_equals`` is only set for source modules using whole-module
    assignment whose export type resolved. ``exposes_default`` belongs to the
    source side and ``default_export`` to the declaration side.
    """

    role: ModuleRole
    export_style: ExportStyle
    export_type: "InferenceResult[TypeHandle]"
    export_equals: Optional[InferenceResult[ExportEqualsVerdict]] = None
    exposes_default: Optional[bool] = None
    default_export: Optional[DefaultExportAssertion] = None


class ErrorKind(Enum):
    """Closed set of finding kinds."""

    NO_MATCHING_PACKAGE = "NoMatchingPackage"
    NO_MATCHING_VERSION = "NoMatchingVersion"
    NON_DISTRIBUTED_HAS_MATCHING_PACKAGE = "NonDistributedHasMatchingPackage"
    NEEDS_WHOLE_MODULE_EXPORT = "NeedsWholeModuleExport"
    NO_DEFAULT_EXPORT = "NoDefaultExport"
    SOURCE_PROPERTY_NOT_DECLARED = "SourcePropertyNotDeclared"
    DECLARED_PROPERTY_NOT_IN_SOURCE = "DeclaredPropertyNotInSource"
    SOURCE_IS_CALLABLE = "SourceIsCallable"
    DECLARATION_IS_CALLABLE = "DeclarationIsCallable"


@dataclass(frozen=True)
class CriticFinding:
    """Structural disagreement between a declaration and its source.

    ``position`` always points into the declaration file.
    """

    kind: ErrorKind
    message: str
    position: Optional[Position] = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"kind": self.kind.value, "message": self.message}
        if self.position is not None:
            payload["position"] = {"start": self.position.start, "length": self.position.length}
        return payload

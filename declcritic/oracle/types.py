"""Concrete type handle produced by the structural oracle."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Sequence, Tuple

from ..models import DISQUALIFYING_FLAGS, PropertySymbol, TypeFlag

_OBJECT = frozenset({TypeFlag.OBJECT})


@dataclass(frozen=True)
class StructuralType:
    """Shallow structural view of a value: flags, members and signature counts."""

    type_flags: FrozenSet[TypeFlag] = _OBJECT
    members: Tuple[PropertySymbol, ...] = ()
    call_signatures: int = 0
    construct_signatures: int = 0
    array_like: bool = False
    description: str = ""

    # TypeHandle protocol

    def properties(self) -> Sequence[PropertySymbol]:
        return self.members

    def call_signature_count(self) -> int:
        return self.call_signatures

    def construct_signature_count(self) -> int:
        return self.construct_signatures

    def is_array_like(self) -> bool:
        return self.array_like

    def flags(self) -> FrozenSet[TypeFlag]:
        return self.type_flags

    def render_as_string(self) -> str:
        if self.description:
            return self.description
        if self.array_like:
            return "any[]"
        if TypeFlag.OBJECT not in self.type_flags:
            return " | ".join(sorted(flag.value.lower() for flag in self.type_flags)) or "never"
        parts = []
        if self.call_signatures:
            parts.append("(...args: any[]): any;")
        if self.construct_signatures:
            parts.append("new (...args: any[]): any;")
        parts.extend(f"{symbol.name}: any;" for symbol in self.members)
        return "{ " + " ".join(parts) + " }" if parts else "{}"

    # Construction helpers

    def with_members(self, extra: Iterable[PropertySymbol]) -> "StructuralType":
        """Add members not already present; the first declaration of a name wins."""
        merged = list(self.members)
        seen = {symbol.name for symbol in merged}
        for symbol in extra:
            if symbol.name in seen:
                continue
            seen.add(symbol.name)
            merged.append(symbol)
        return replace(self, members=tuple(merged))

    def described(self, description: str) -> "StructuralType":
        return replace(self, description=description)

    def merge(self, other: "StructuralType") -> "StructuralType":
        """Combine two declarations of the same entity (declaration merging)."""
        flags = self.type_flags | other.type_flags
        if TypeFlag.OBJECT in flags:
            flags = frozenset(flag for flag in flags if flag is TypeFlag.OBJECT or flag in DISQUALIFYING_FLAGS)
        return replace(
            self.with_members(other.members),
            type_flags=flags,
            call_signatures=self.call_signatures + other.call_signatures,
            construct_signatures=max(self.construct_signatures, other.construct_signatures),
            array_like=self.array_like or other.array_like,
        )

    @classmethod
    def of_flag(cls, flag: TypeFlag, description: str = "") -> "StructuralType":
        return cls(type_flags=frozenset({flag}), description=description or flag.value.lower())

    @classmethod
    def any(cls) -> "StructuralType":
        return cls.of_flag(TypeFlag.ANY)

    @classmethod
    def object(cls, members: Iterable[PropertySymbol] = (), description: str = "") -> "StructuralType":
        return cls(description=description).with_members(members)

    @classmethod
    def function(cls, members: Iterable[PropertySymbol] = (), description: str = "") -> "StructuralType":
        return cls(call_signatures=1, description=description).with_members(members)

    @classmethod
    def class_(cls, members: Iterable[PropertySymbol] = (), description: str = "") -> "StructuralType":
        return cls(construct_signatures=1, description=description).with_members(members)

    @classmethod
    def array(cls, description: str = "") -> "StructuralType":
        return cls(array_like=True, description=description)


__all__ = ["StructuralType"]

"""Shared types for the BumpGuard engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType

from bumpguard.engine.errors import AmbiguousMemberMatch, MalformedInput

MemberKey = tuple[str, tuple[str, ...]]


class Verdict(IntEnum):
    """Semantic-versioning verdict, ordered by severity."""

    PATCH = 0
    MINOR = 1
    MAJOR = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> Verdict:
        try:
            return cls[label.upper()]
        except KeyError:
            msg = f"Unknown verdict: {label!r}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class TypeRef:
    """A reference to a type by qualified name only."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ParameterSymbol:
    """One positional slot in a member's call signature."""

    type: TypeRef
    is_input: bool = True
    is_output: bool = False


@dataclass(frozen=True)
class MemberSymbol:
    """A publicly visible callable member."""

    name: str
    return_type: TypeRef
    parameters: tuple[ParameterSymbol, ...] = ()

    @property
    def key(self) -> MemberKey:
        """Identity used to pair this member across versions."""
        return member_key(self)


@dataclass(frozen=True)
class TypeSymbol:
    """A publicly visible type and its members."""

    qualified_name: str
    members: Mapping[MemberKey, MemberSymbol] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_members(cls, qualified_name: str, members: Iterable[MemberSymbol]) -> TypeSymbol:
        """Build a type from a member sequence, rejecting colliding keys."""
        index: dict[MemberKey, MemberSymbol] = {}
        for m in members:
            key = m.key
            if key in index:
                raise AmbiguousMemberMatch(qualified_name, key)
            index[key] = m
        return cls(qualified_name=qualified_name, members=MappingProxyType(index))


@dataclass(frozen=True)
class SymbolTable:
    """Immutable snapshot of one version's public surface."""

    types: Mapping[str, TypeSymbol] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_types(cls, types: Iterable[TypeSymbol]) -> SymbolTable:
        """Build a table from a type sequence, rejecting duplicate names."""
        index: dict[str, TypeSymbol] = {}
        for t in types:
            if t.qualified_name in index:
                msg = f"Duplicate qualified type name: {t.qualified_name!r}"
                raise MalformedInput(msg)
            index[t.qualified_name] = t
        return cls(types=MappingProxyType(index))

    def get(self, qualified_name: str) -> TypeSymbol | None:
        """Look up a type; ``None`` when absent."""
        return self.types.get(qualified_name)


def member_key(member: MemberSymbol) -> MemberKey:
    """Return ``(name, ordered parameter type names)``."""
    return (member.name, tuple(p.type.name for p in member.parameters))


def validate_table(table: SymbolTable) -> None:
    """Check the invariants a classification relies on.

    Raises:
        MalformedInput: a type or member is stored under the wrong key, or a
            name / type reference is empty.
    """
    for name, t in table.types.items():
        if not name:
            raise MalformedInput("Empty qualified type name")
        if t.qualified_name != name:
            msg = f"Type {t.qualified_name!r} stored under key {name!r}"
            raise MalformedInput(msg)
        for key, m in t.members.items():
            if not m.name:
                msg = f"Member with empty name in {name!r}"
                raise MalformedInput(msg)
            if not m.return_type.name:
                msg = f"Member {name}.{m.name} has an empty return type reference"
                raise MalformedInput(msg)
            if any(not p.type.name for p in m.parameters):
                msg = f"Member {name}.{m.name} has an empty parameter type reference"
                raise MalformedInput(msg)
            if key != m.key:
                msg = f"Member {name}.{m.name} stored under key {key!r}, expected {m.key!r}"
                raise MalformedInput(msg)

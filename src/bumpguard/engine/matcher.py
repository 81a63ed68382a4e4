"""Old↔new pairing of types and members."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bumpguard.engine._types import MemberKey, MemberSymbol, SymbolTable, TypeSymbol
from bumpguard.engine.errors import AmbiguousMemberMatch


@dataclass(frozen=True)
class MatchedMember:
    """A matched pair of old/new members, or an unmatched member."""

    old: MemberSymbol | None  # None = added
    new: MemberSymbol | None  # None = removed


@dataclass(frozen=True)
class MatchedType:
    """A matched pair of old/new types, or an unmatched type."""

    name: str
    old: TypeSymbol | None  # None = added
    new: TypeSymbol | None  # None = removed


def _build_index(type_name: str, members: Iterable[MemberSymbol]) -> dict[MemberKey, MemberSymbol]:
    index: dict[MemberKey, list[MemberSymbol]] = {}
    for m in members:
        index.setdefault(m.key, []).append(m)
    for key, found in index.items():
        if len(found) > 1:
            raise AmbiguousMemberMatch(type_name, key)
    return {key: found[0] for key, found in index.items()}


def match_members(
    type_name: str,
    old_members: Iterable[MemberSymbol],
    new_members: Iterable[MemberSymbol],
) -> list[MatchedMember]:
    """Pair members by ``(name, parameter types)`` key.

    Results are ordered by key. A key that occurs more than once on either
    side raises :class:`AmbiguousMemberMatch` instead of guessing a pairing.
    """
    old_index = _build_index(type_name, old_members)
    new_index = _build_index(type_name, new_members)

    results: list[MatchedMember] = []
    for key in sorted({*old_index, *new_index}):
        results.append(MatchedMember(old=old_index.get(key), new=new_index.get(key)))
    return results


def match_types(older: SymbolTable, newer: SymbolTable) -> list[MatchedType]:
    """Pair types by qualified name, ordered by name."""
    results: list[MatchedType] = []
    for name in sorted({*older.types, *newer.types}):
        results.append(MatchedType(name=name, old=older.get(name), new=newer.get(name)))
    return results

"""Verdict classification: walks two symbol tables and returns one Verdict.

Major is absorbing: the walk stops at the first breaking finding. Minor
findings only raise a floor, since a later Major still wins.
"""

from __future__ import annotations

import logging

from bumpguard.engine._types import SymbolTable, TypeSymbol, Verdict, validate_table
from bumpguard.engine.comparator import set_difference
from bumpguard.engine.matcher import match_members
from bumpguard.engine.signatures import compare_members

logger = logging.getLogger(__name__)


def classify(older: SymbolTable, newer: SymbolTable) -> Verdict:
    """Classify the change from *older* to *newer*.

    Raises:
        MalformedInput: either table violates its invariants.
        AmbiguousMemberMatch: a member pairing cannot be resolved uniquely.
    """
    validate_table(older)
    validate_table(newer)

    removed = set_difference(older.types, newer.types)
    if removed:
        logger.debug("Major: %d type(s) removed, first %s", len(removed), removed[0].qualified_name)
        return Verdict.MAJOR

    at_least_minor = False
    added = set_difference(newer.types, older.types)
    if added:
        logger.debug("Minor floor: %d type(s) added", len(added))
        at_least_minor = True

    for name, old_type in older.types.items():
        new_type = newer.get(name)
        assert new_type is not None  # removed types already returned Major
        diff = classify_type(old_type, new_type)
        if diff == Verdict.MAJOR:
            logger.debug("Major: breaking change in type %s", name)
            return Verdict.MAJOR
        if diff == Verdict.MINOR:
            at_least_minor = True

    if at_least_minor:
        return Verdict.MINOR
    return Verdict.PATCH


def classify_type(older: TypeSymbol, newer: TypeSymbol) -> Verdict:
    """Classify a type present in both versions."""
    matches = match_members(older.qualified_name, older.members.values(), newer.members.values())

    if any(m.new is None for m in matches):
        return Verdict.MAJOR

    at_least_minor = any(m.old is None for m in matches)

    for m in matches:
        if m.old is None or m.new is None:
            continue
        if compare_members(m.old, m.new) == Verdict.MAJOR:
            return Verdict.MAJOR

    if at_least_minor:
        return Verdict.MINOR
    return Verdict.PATCH

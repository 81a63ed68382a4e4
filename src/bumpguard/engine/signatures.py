"""Member signature comparison for breaking change detection.

Conservative: any difference in a paired member's signature is breaking.
No covariance or contravariance reasoning is attempted.
"""

from __future__ import annotations

from bumpguard.engine._types import MemberSymbol, ParameterSymbol, Verdict
from bumpguard.engine.comparator import type_ref_equal

RETURN_TYPE_CHANGED = "RETURN TYPE CHANGED"
PARAMETER_TYPE_CHANGED = "PARAMETER TYPE CHANGED"
PARAMETER_DIRECTION_CHANGED = "PARAMETER DIRECTION CHANGED"
PARAMETER_COUNT_CHANGED = "PARAMETER COUNT CHANGED"


def describe_member_change(older: MemberSymbol, newer: MemberSymbol) -> str | None:
    """Return a category label for the first signature difference.

    Returns ``None`` when the signatures are identical, otherwise one of:
        "RETURN TYPE CHANGED"
        "PARAMETER TYPE CHANGED"
        "PARAMETER DIRECTION CHANGED"
        "PARAMETER COUNT CHANGED"
    """
    if not type_ref_equal(older.return_type, newer.return_type):
        return RETURN_TYPE_CHANGED

    for old_p, new_p in zip(older.parameters, newer.parameters):
        if not type_ref_equal(old_p.type, new_p.type):
            return PARAMETER_TYPE_CHANGED
        if old_p.is_input != new_p.is_input:
            return PARAMETER_DIRECTION_CHANGED
        if old_p.is_output != new_p.is_output:
            return PARAMETER_DIRECTION_CHANGED

    # Unreachable under the full member key, but the pairing may come from elsewhere.
    if len(older.parameters) != len(newer.parameters):
        return PARAMETER_COUNT_CHANGED

    return None


def compare_members(older: MemberSymbol, newer: MemberSymbol) -> Verdict:
    """Classify a member present in both versions under the same key."""
    if describe_member_change(older, newer) is None:
        return Verdict.PATCH
    return Verdict.MAJOR


def _format_param(p: ParameterSymbol) -> str:
    if p.is_input and p.is_output:
        return f"ref {p.type}"
    if p.is_output:
        return f"out {p.type}"
    if not p.is_input:
        return f"none {p.type}"
    return str(p.type)


def format_member(member: MemberSymbol) -> str:
    """Render ``name(T1, out T2, ref T3) -> R``."""
    params = ", ".join(_format_param(p) for p in member.parameters)
    return f"{member.name}({params}) -> {member.return_type}"

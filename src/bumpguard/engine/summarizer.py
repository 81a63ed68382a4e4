"""Tiered summary generation.

Orders output by review priority, NOT name order.
Priority: removed types > removed members > changed members > added types > added members.
"""

from __future__ import annotations

from collections import Counter

from bumpguard.engine._types import Verdict
from bumpguard.schema import Finding, Summary, TieredSummary

# ---- Priority buckets (lower = higher priority) ----
_P_TYPE_REMOVED = 0
_P_MEMBER_REMOVED = 1
_P_CHANGED = 2
_P_TYPE_ADDED = 3
_P_MEMBER_ADDED = 4

_PRIORITY: dict[tuple[str, str], int] = {
    ("removed", "type"): _P_TYPE_REMOVED,
    ("removed", "member"): _P_MEMBER_REMOVED,
    ("changed", "member"): _P_CHANGED,
    ("added", "type"): _P_TYPE_ADDED,
    ("added", "member"): _P_MEMBER_ADDED,
}

_DETAILED_CAP = 15
_FOCUS_CAP = 5


def _priority(f: Finding) -> int:
    return _PRIORITY.get((f.kind, f.entity), _P_CHANGED)


def _sorted_findings(findings: list[Finding]) -> list[Finding]:
    return sorted(findings, key=lambda f: (_priority(f), f.path))


def _change_type(f: Finding) -> str:
    return f"{f.entity}_{f.kind}"


# ---------------------------------------------------------------------------
# Summary (structured)
# ---------------------------------------------------------------------------


def build_summary(findings: list[Finding]) -> Summary:
    """Build the structured Summary from report findings."""
    counter: Counter[str] = Counter(_change_type(f) for f in findings)
    breaking = [f for f in findings if f.severity == Verdict.MAJOR.label]

    focus: list[str] = []
    seen: set[str] = set()
    for f in _sorted_findings(findings):
        if len(focus) >= _FOCUS_CAP:
            break
        label = _focus_label(f)
        if label not in seen:
            seen.add(label)
            focus.append(label)

    return Summary(change_types=dict(counter), breaking_changes=breaking, focus=focus)


def _focus_label(f: Finding) -> str:
    """Human-readable focus item."""
    if f.kind == "changed":
        label = f"BREAKING: `{f.path}` {(f.category or 'signature changed').lower()}"
        # Overloads share a path; the old signature tells them apart
        return f"{label} (`{f.before}`)" if f.before else label
    labels = {
        ("removed", "type"): f"BREAKING: removed type `{f.path}`",
        ("removed", "member"): f"BREAKING: removed `{f.before or f.path}`",
        ("added", "type"): f"New type `{f.path}`",
        ("added", "member"): f"New `{f.after or f.path}`",
    }
    return labels.get((f.kind, f.entity), f"Changed `{f.path}`")


# ---------------------------------------------------------------------------
# Tiered text
# ---------------------------------------------------------------------------


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def _build_oneliner(verdict: Verdict, findings: list[Finding]) -> str:
    if not findings:
        return f"{verdict.label.upper()}: no public API changes"
    breaking = sum(1 for f in findings if f.severity == Verdict.MAJOR.label)
    additive = sum(1 for f in findings if f.severity == Verdict.MINOR.label)
    parts: list[str] = []
    if breaking:
        parts.append(_plural(breaking, "breaking change"))
    if additive:
        parts.append(_plural(additive, "addition"))
    return f"{verdict.label.upper()}: {', '.join(parts)}"


def _build_short(verdict: Verdict, summary: Summary) -> str:
    if not summary.focus:
        return f"{verdict.label.upper()}: public API unchanged."
    return f"{verdict.label.upper()}: " + "; ".join(summary.focus)


def _detail_line(f: Finding) -> str:
    if f.kind == "changed":
        return f"- `{f.path}`: {f.category} (`{f.before}` → `{f.after}`)"
    if f.entity == "member":
        sig = f.before if f.kind == "removed" else f.after
        return f"- `{f.path}`: `{sig}`"
    return f"- `{f.path}`"


def _build_detailed(verdict: Verdict, findings: list[Finding]) -> str:
    lines = [f"## Verdict: {verdict.label.upper()}"]
    if not findings:
        lines.append("")
        lines.append("No public API changes.")
        return "\n".join(lines)

    sections = [
        ("Removed", [f for f in findings if f.kind == "removed"]),
        ("Changed", [f for f in findings if f.kind == "changed"]),
        ("Added", [f for f in findings if f.kind == "added"]),
    ]
    for title, items in sections:
        if not items:
            continue
        lines.append("")
        lines.append(f"### {title} ({len(items)})")
        for f in _sorted_findings(items)[:_DETAILED_CAP]:
            lines.append(_detail_line(f))
        if len(items) > _DETAILED_CAP:
            lines.append(f"- ... and {len(items) - _DETAILED_CAP} more")
    return "\n".join(lines)


def build_tiered_summary(
    verdict: Verdict,
    findings: list[Finding],
    summary: Summary,
) -> TieredSummary:
    """Build the oneliner/short/detailed tiers."""
    return TieredSummary(
        oneliner=_build_oneliner(verdict, findings),
        short=_build_short(verdict, summary),
        detailed=_build_detailed(verdict, findings),
    )

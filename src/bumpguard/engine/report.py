"""DiffReport: the full, non-short-circuiting walk.

Same rules as the classifier, but every finding is kept so the verdict can
be explained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bumpguard.engine._types import SymbolTable, TypeSymbol, Verdict, validate_table
from bumpguard.engine.comparator import combine
from bumpguard.engine.matcher import MatchedMember, match_members, match_types
from bumpguard.engine.signatures import describe_member_change, format_member
from bumpguard.schema import Finding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffReport:
    """Ordered findings of one comparison."""

    findings: list[Finding] = field(default_factory=list)

    @property
    def verdict(self) -> Verdict:
        return combine(*(Verdict.from_label(f.severity) for f in self.findings))

    def by_kind(self, kind: str) -> list[Finding]:
        return [f for f in self.findings if f.kind == kind]


def build_report(older: SymbolTable, newer: SymbolTable) -> DiffReport:
    """Compare two tables and collect every finding.

    Types are visited in name order; within a type, removed members come
    first, then added, then changed.
    """
    validate_table(older)
    validate_table(newer)

    findings: list[Finding] = []
    for mt in match_types(older, newer):
        if mt.new is None:
            findings.append(
                Finding(path=mt.name, kind="removed", entity="type", severity=Verdict.MAJOR.label)
            )
        elif mt.old is None:
            findings.append(
                Finding(path=mt.name, kind="added", entity="type", severity=Verdict.MINOR.label)
            )
        else:
            findings.extend(_type_findings(mt.old, mt.new))

    logger.debug(
        "Report: %d finding(s) across %d/%d types",
        len(findings),
        len(older.types),
        len(newer.types),
    )
    return DiffReport(findings=findings)


def _type_findings(older: TypeSymbol, newer: TypeSymbol) -> list[Finding]:
    matches = match_members(older.qualified_name, older.members.values(), newer.members.values())
    removed: list[Finding] = []
    added: list[Finding] = []
    changed: list[Finding] = []

    for m in matches:
        finding = _member_finding(older.qualified_name, m)
        if finding is None:
            continue
        if finding.kind == "removed":
            removed.append(finding)
        elif finding.kind == "added":
            added.append(finding)
        else:
            changed.append(finding)

    return removed + added + changed


def _member_finding(type_name: str, m: MatchedMember) -> Finding | None:
    if m.new is None:
        assert m.old is not None
        return Finding(
            path=f"{type_name}.{m.old.name}",
            kind="removed",
            entity="member",
            severity=Verdict.MAJOR.label,
            before=format_member(m.old),
        )

    if m.old is None:
        return Finding(
            path=f"{type_name}.{m.new.name}",
            kind="added",
            entity="member",
            severity=Verdict.MINOR.label,
            after=format_member(m.new),
        )

    category = describe_member_change(m.old, m.new)
    if category is None:
        return None
    return Finding(
        path=f"{type_name}.{m.new.name}",
        kind="changed",
        entity="member",
        severity=Verdict.MAJOR.label,
        category=category,
        before=format_member(m.old),
        after=format_member(m.new),
    )

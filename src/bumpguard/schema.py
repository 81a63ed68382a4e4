"""BumpGuard schemas: Pydantic v2 models for snapshot files and output."""

from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel

from bumpguard.engine._types import (
    MemberSymbol,
    ParameterSymbol,
    SymbolTable,
    TypeRef,
    TypeSymbol,
)

VerdictLabel = Literal["major", "minor", "patch"]

# ---------------------------------------------------------------------------
# Snapshot file format
# ---------------------------------------------------------------------------


class ParameterEntry(BaseModel):
    """One parameter slot."""

    type: str
    is_input: bool = True
    is_output: bool = False


class MemberEntry(BaseModel):
    """One callable member."""

    name: str
    return_type: str
    parameters: list[ParameterEntry] = []


class TypeEntry(BaseModel):
    """One public type.

    Members are a list, not a map, so colliding keys stay detectable.
    """

    name: str
    members: list[MemberEntry] = []


class SnapshotFile(BaseModel):
    """On-disk JSON form of a SymbolTable."""

    schema_version: str = "1.0"
    label: str | None = None
    types: list[TypeEntry] = []

    def to_symbol_table(self) -> SymbolTable:
        """Convert to the engine model, enforcing uniqueness."""
        return SymbolTable.from_types(
            TypeSymbol.from_members(
                t.name,
                (
                    MemberSymbol(
                        name=m.name,
                        return_type=TypeRef(m.return_type),
                        parameters=tuple(
                            ParameterSymbol(
                                type=TypeRef(p.type),
                                is_input=p.is_input,
                                is_output=p.is_output,
                            )
                            for p in m.parameters
                        ),
                    )
                    for m in t.members
                ),
            )
            for t in self.types
        )

    @classmethod
    def from_symbol_table(cls, table: SymbolTable, label: str | None = None) -> SnapshotFile:
        """Serialize an engine table; types and members are sorted for stable output."""
        types: list[TypeEntry] = []
        for name in sorted(table.types):
            t = table.types[name]
            members = [
                MemberEntry(
                    name=m.name,
                    return_type=m.return_type.name,
                    parameters=[
                        ParameterEntry(type=p.type.name, is_input=p.is_input, is_output=p.is_output)
                        for p in m.parameters
                    ],
                )
                for _, m in sorted(t.members.items())
            ]
            types.append(TypeEntry(name=name, members=members))
        return cls(label=label, types=types)


# ---------------------------------------------------------------------------
# Advisor output
# ---------------------------------------------------------------------------


class Finding(BaseModel):
    """A single added/removed/changed entity."""

    path: str
    kind: Literal["removed", "added", "changed"]
    entity: Literal["type", "member"]
    severity: VerdictLabel
    category: str | None = None
    before: str | None = None
    after: str | None = None


class Meta(BaseModel):
    """Run metadata."""

    older: str
    newer: str
    older_types: int = 0
    newer_types: int = 0
    current_version: str | None = None
    next_version: str | None = None
    short_circuit: bool = False
    warnings: list[str] = []
    timing_ms: float | None = None


class Summary(BaseModel):
    """Aggregate summary of findings."""

    change_types: dict[str, int] = {}
    breaking_changes: list[Finding] = []
    focus: list[str] = []


class TieredSummary(BaseModel):
    """Multi-tier human-readable summary."""

    oneliner: str = ""
    short: str = ""
    detailed: str = ""


class AdvisorOutput(BaseModel):
    """Top-level BumpGuard output."""

    schema_version: str = "1.0"
    meta: Meta
    verdict: VerdictLabel
    findings: list[Finding] = []
    summary: Summary = Summary()
    tiered: TieredSummary = TieredSummary()


def export_json_schema() -> str:
    """Export the output JSON schema as a string."""
    return json.dumps(AdvisorOutput.model_json_schema(), indent=2)


def export_snapshot_schema() -> str:
    """Export the snapshot file JSON schema as a string."""
    return json.dumps(SnapshotFile.model_json_schema(), indent=2)

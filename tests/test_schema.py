"""Tests for bumpguard.schema models."""

from __future__ import annotations

import json
from typing import Any

import pytest
from builders import method, param, table, type_
from pydantic import ValidationError

from bumpguard.engine.errors import AmbiguousMemberMatch, MalformedInput
from bumpguard.schema import (
    AdvisorOutput,
    Finding,
    Meta,
    SnapshotFile,
    export_json_schema,
    export_snapshot_schema,
)


def _minimal_output(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"meta": {"older": "a.json", "newer": "b.json"}, "verdict": "patch"}
    data.update(overrides)
    return data


class TestDefaults:
    def test_minimal_output(self) -> None:
        out = AdvisorOutput.model_validate(_minimal_output())
        assert out.schema_version == "1.0"
        assert out.findings == []
        assert out.summary.change_types == {}
        assert out.tiered.oneliner == ""

    def test_meta_defaults(self) -> None:
        meta = Meta.model_validate({"older": "a", "newer": "b"})
        assert meta.warnings == []
        assert meta.timing_ms is None
        assert meta.next_version is None

    def test_bad_verdict(self) -> None:
        with pytest.raises(ValidationError):
            AdvisorOutput.model_validate(_minimal_output(verdict="huge"))


class TestFinding:
    @pytest.mark.parametrize("kind", ["removed", "added", "changed"])
    def test_valid_kinds(self, kind: str) -> None:
        f = Finding(path="A", kind=kind, entity="type", severity="major")  # type: ignore[arg-type]
        assert f.kind == kind

    def test_invalid_kind(self) -> None:
        with pytest.raises(ValidationError):
            Finding(path="A", kind="renamed", entity="type", severity="major")  # type: ignore[arg-type]


class TestSnapshotFile:
    def test_to_symbol_table(self) -> None:
        snap = SnapshotFile.model_validate(
            {
                "types": [
                    {
                        "name": "Acme.Widget",
                        "members": [
                            {
                                "name": "TryParse",
                                "return_type": "bool",
                                "parameters": [
                                    {"type": "string"},
                                    {"type": "Widget", "is_input": False, "is_output": True},
                                ],
                            }
                        ],
                    }
                ]
            }
        )
        tbl = snap.to_symbol_table()
        widget = tbl.types["Acme.Widget"]
        (member,) = widget.members.values()
        assert member.key == ("TryParse", ("string", "Widget"))
        assert member.parameters[0].is_input is True
        assert member.parameters[0].is_output is False
        assert member.parameters[1].is_input is False
        assert member.parameters[1].is_output is True

    def test_duplicate_type(self) -> None:
        snap = SnapshotFile.model_validate({"types": [{"name": "A"}, {"name": "A"}]})
        with pytest.raises(MalformedInput):
            snap.to_symbol_table()

    def test_ambiguous_member(self) -> None:
        snap = SnapshotFile.model_validate(
            {
                "types": [
                    {
                        "name": "A",
                        "members": [
                            {"name": "M", "return_type": "int"},
                            {"name": "M", "return_type": "long"},
                        ],
                    }
                ]
            }
        )
        with pytest.raises(AmbiguousMemberMatch):
            snap.to_symbol_table()

    def test_from_symbol_table_sorted(self) -> None:
        tbl = table(
            type_("B", method("z"), method("a", param("int", is_output=True))),
            "A",
        )
        snap = SnapshotFile.from_symbol_table(tbl, label="1.0.0")
        assert snap.label == "1.0.0"
        assert [t.name for t in snap.types] == ["A", "B"]
        assert [m.name for m in snap.types[1].members] == ["a", "z"]
        assert snap.types[1].members[0].parameters[0].is_output is True
        assert snap.to_symbol_table() == tbl


class TestExport:
    def test_output_schema(self) -> None:
        schema = json.loads(export_json_schema())
        assert "verdict" in schema["properties"]

    def test_snapshot_schema(self) -> None:
        schema = json.loads(export_snapshot_schema())
        assert "types" in schema["properties"]

"""Tests for the full DiffReport walk."""

from __future__ import annotations

import pytest
from builders import method, param, table, type_

from bumpguard.engine._types import SymbolTable, Verdict
from bumpguard.engine.classifier import classify
from bumpguard.engine.report import DiffReport, build_report
from bumpguard.engine.signatures import PARAMETER_DIRECTION_CHANGED, RETURN_TYPE_CHANGED
from bumpguard.schema import Finding

OLD = table(
    type_("Acme.Widget", method("Render", "int"), method("Parse", "string", returns="Widget")),
    type_("Acme.Gadget", method("Spin")),
    "Acme.Legacy",
)
NEW = table(
    type_(
        "Acme.Widget",
        method("Render", "int"),
        method("Render", "int", "int"),
        method("Parse", "string", returns="Widget?"),
    ),
    type_("Acme.Gadget"),
    "Acme.Sprocket",
)


class TestBuildReport:
    def test_identity_has_no_findings(self) -> None:
        report = build_report(OLD, OLD)
        assert report.findings == []
        assert report.verdict == Verdict.PATCH

    def test_collects_everything(self) -> None:
        report = build_report(OLD, NEW)
        paths = [(f.kind, f.path) for f in report.findings]
        assert paths == [
            ("removed", "Acme.Gadget.Spin"),
            ("removed", "Acme.Legacy"),
            ("added", "Acme.Sprocket"),
            ("added", "Acme.Widget.Render"),
            ("changed", "Acme.Widget.Parse"),
        ]
        assert report.verdict == Verdict.MAJOR

    def test_severities(self) -> None:
        report = build_report(OLD, NEW)
        for f in report.findings:
            expected = "minor" if f.kind == "added" else "major"
            assert f.severity == expected

    def test_changed_member_details(self) -> None:
        report = build_report(OLD, NEW)
        (changed,) = report.by_kind("changed")
        assert changed.entity == "member"
        assert changed.category == RETURN_TYPE_CHANGED
        assert changed.before == "Parse(string) -> Widget"
        assert changed.after == "Parse(string) -> Widget?"

    def test_added_overload_signature(self) -> None:
        report = build_report(OLD, NEW)
        added = [f for f in report.by_kind("added") if f.entity == "member"]
        assert len(added) == 1
        assert added[0].after == "Render(int, int) -> void"

    def test_direction_change(self) -> None:
        old = table(type_("A", method("M", param("int"))))
        new = table(type_("A", method("M", param("int", is_output=True))))
        (finding,) = build_report(old, new).findings
        assert finding.category == PARAMETER_DIRECTION_CHANGED

    def test_minor_only(self) -> None:
        report = build_report(table("A"), table("A", "B"))
        assert report.verdict == Verdict.MINOR
        assert [f.path for f in report.findings] == ["B"]

    @pytest.mark.parametrize(
        ("old", "new"),
        [
            (OLD, NEW),
            (NEW, OLD),
            (OLD, OLD),
            (table("A"), table("A", "B")),
            (table(type_("A", method("M", "int"))), table(type_("A", method("M", "string")))),
            (SymbolTable(), table("A")),
        ],
    )
    def test_verdict_matches_classifier(self, old: SymbolTable, new: SymbolTable) -> None:
        assert build_report(old, new).verdict == classify(old, new)


class TestDiffReport:
    def test_empty_verdict(self) -> None:
        assert DiffReport().verdict == Verdict.PATCH

    def test_verdict_is_max(self) -> None:
        report = DiffReport(
            findings=[
                Finding(path="A", kind="added", entity="type", severity="minor"),
                Finding(path="B", kind="removed", entity="type", severity="major"),
            ]
        )
        assert report.verdict == Verdict.MAJOR

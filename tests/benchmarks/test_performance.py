"""Classifier and extraction performance benchmarks."""

from __future__ import annotations

from typing import Any

from bumpguard.engine._types import (
    MemberSymbol,
    ParameterSymbol,
    SymbolTable,
    TypeRef,
    TypeSymbol,
    Verdict,
)
from bumpguard.engine.classifier import classify
from bumpguard.engine.parallel import classify_parallel
from bumpguard.engine.parser import parse_file
from bumpguard.engine.report import build_report


def _generate_table(n_types: int = 500, n_members: int = 40, *, extra: bool = False) -> SymbolTable:
    """Generate a large table; *extra* appends one member to the last type."""
    types = []
    for t in range(n_types):
        members = [
            MemberSymbol(
                name=f"Op{m}",
                return_type=TypeRef("System.Int32"),
                parameters=(
                    ParameterSymbol(TypeRef("System.String")),
                    ParameterSymbol(TypeRef(f"Acme.T{t}"), is_input=False, is_output=True),
                ),
            )
            for m in range(n_members)
        ]
        if extra and t == n_types - 1:
            members.append(MemberSymbol(name="Extra", return_type=TypeRef("System.Void")))
        types.append(TypeSymbol.from_members(f"Acme.T{t}", members))
    return SymbolTable.from_types(types)


OLDER = _generate_table()
NEWER_MINOR = _generate_table(extra=True)
NEWER_MAJOR = SymbolTable.from_types(list(OLDER.types.values())[1:])


def _generate_python_module(n_classes: int = 30) -> str:
    lines = ['"""A large module with many classes."""', "", "from typing import Any", ""]
    for c in range(n_classes):
        lines.append(f"class Service{c}:")
        for m in range(15):
            lines.extend(
                [
                    f"    def call_{m}(self, value: int, *args: str, **kw: Any) -> dict[str, Any]:",
                    f"        return {{'n': value * {m}}}",
                    "",
                ]
            )
        lines.append("")
    return "\n".join(lines)


LARGE_PYTHON = _generate_python_module()


def test_classify_minor(benchmark: Any) -> None:
    """Full walk: no breaking change until the end."""
    assert benchmark(classify, OLDER, NEWER_MINOR) == Verdict.MINOR


def test_classify_major_short_circuit(benchmark: Any) -> None:
    assert benchmark(classify, OLDER, NEWER_MAJOR) == Verdict.MAJOR


def test_classify_parallel_minor(benchmark: Any) -> None:
    result = benchmark(classify_parallel, OLDER, NEWER_MINOR, max_workers=4)
    assert result == Verdict.MINOR


def test_build_report(benchmark: Any) -> None:
    report = benchmark(build_report, OLDER, NEWER_MINOR)
    assert report.verdict == Verdict.MINOR
    assert len(report.findings) == 1


def test_parse_python_large(benchmark: Any) -> None:
    """Benchmark extracting a large Python module."""
    result = benchmark(parse_file, LARGE_PYTHON, "python", "acme.services")
    assert not result.parse_error
    assert len(result.types) == 30

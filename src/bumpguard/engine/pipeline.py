"""End-to-end pipeline: two symbol tables → AdvisorOutput."""

from __future__ import annotations

import logging
import time

from bumpguard.engine._types import SymbolTable, Verdict
from bumpguard.engine.classifier import classify
from bumpguard.engine.parallel import classify_parallel
from bumpguard.engine.report import build_report
from bumpguard.engine.summarizer import build_summary, build_tiered_summary
from bumpguard.engine.versioning import next_version
from bumpguard.schema import AdvisorOutput, Finding, Meta, Summary

logger = logging.getLogger(__name__)


def run_advisor(
    older: SymbolTable,
    newer: SymbolTable,
    *,
    older_label: str = "older",
    newer_label: str = "newer",
    current_version: str | None = None,
    short_circuit: bool = False,
    max_workers: int | None = None,
) -> AdvisorOutput:
    """Classify *older* → *newer* and package the result.

    Args:
        older_label / newer_label: Free-form labels recorded in ``meta``.
        current_version: When given, ``meta.next_version`` is filled in.
        short_circuit: Only compute the verdict (no findings). Uses the
            parallel classifier when *max_workers* is set.

    Returns:
        Fully populated :class:`AdvisorOutput`.
    """
    t0 = time.monotonic()

    findings: list[Finding] = []
    if short_circuit:
        if max_workers is not None:
            verdict = classify_parallel(older, newer, max_workers=max_workers)
        else:
            verdict = classify(older, newer)
        summary = Summary()
    else:
        report = build_report(older, newer)
        findings = report.findings
        verdict = report.verdict
        summary = build_summary(findings)

    tiered = build_tiered_summary(verdict, findings, summary)

    elapsed_ms = (time.monotonic() - t0) * 1000
    logger.debug("Verdict %s in %.2fms", verdict.label, elapsed_ms)

    meta = Meta(
        older=older_label,
        newer=newer_label,
        older_types=len(older.types),
        newer_types=len(newer.types),
        current_version=current_version,
        next_version=next_version(current_version, verdict) if current_version else None,
        short_circuit=short_circuit,
        timing_ms=round(elapsed_ms, 2),
    )

    return AdvisorOutput(
        meta=meta,
        verdict=verdict.label,
        findings=findings,
        summary=summary,
        tiered=tiered,
    )


def verdict_of(output: AdvisorOutput) -> Verdict:
    """Return the output's verdict as an enum."""
    return Verdict.from_label(output.verdict)

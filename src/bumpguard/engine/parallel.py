"""Parallel classification for large APIs.

Per-type comparisons share no mutable state, so they fan out across a
thread pool. Early exit on Major is kept through a shared cancellation
event: the first worker that finds a breaking change sets it, the others
stop between members, and queued work is cancelled.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from bumpguard.engine._types import SymbolTable, TypeSymbol, Verdict, validate_table
from bumpguard.engine.comparator import combine, set_difference
from bumpguard.engine.matcher import match_members
from bumpguard.engine.signatures import compare_members

logger = logging.getLogger(__name__)


def _classify_type_cancellable(
    older: TypeSymbol,
    newer: TypeSymbol,
    cancel: threading.Event,
) -> Verdict | None:
    """Same rules as ``classifier.classify_type``; ``None`` when cancelled."""
    if cancel.is_set():
        return None

    matches = match_members(older.qualified_name, older.members.values(), newer.members.values())
    if any(m.new is None for m in matches):
        cancel.set()
        return Verdict.MAJOR

    at_least_minor = any(m.old is None for m in matches)
    for m in matches:
        if cancel.is_set():
            return None
        if m.old is None or m.new is None:
            continue
        if compare_members(m.old, m.new) == Verdict.MAJOR:
            cancel.set()
            return Verdict.MAJOR

    return Verdict.MINOR if at_least_minor else Verdict.PATCH


def classify_parallel(
    older: SymbolTable,
    newer: SymbolTable,
    *,
    max_workers: int | None = None,
) -> Verdict:
    """Thread-pooled equivalent of :func:`bumpguard.engine.classifier.classify`.

    Errors raised by a worker (e.g. ``AmbiguousMemberMatch``) propagate to the
    caller unless a Major verdict was already established.
    """
    validate_table(older)
    validate_table(newer)

    if set_difference(older.types, newer.types):
        return Verdict.MAJOR

    floor = Verdict.MINOR if set_difference(newer.types, older.types) else Verdict.PATCH
    shared = [(t, newer.types[name]) for name, t in older.types.items()]
    if not shared:
        return floor

    cancel = threading.Event()
    verdicts: list[Verdict] = [floor]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        pending: set[Future[Verdict | None]] = {
            pool.submit(_classify_type_cancellable, old_t, new_t, cancel) for old_t, new_t in shared
        }
        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for fut in done:
                if fut.cancelled():
                    continue
                try:
                    result = fut.result()
                except Exception:
                    if cancel.is_set():
                        continue
                    cancel.set()
                    for p in pending:
                        p.cancel()
                    raise
                if result is not None:
                    verdicts.append(result)
            if cancel.is_set():
                logger.debug("Major found; cancelling %d pending type comparison(s)", len(pending))
                for p in pending:
                    p.cancel()

    return combine(*verdicts)

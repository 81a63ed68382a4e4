"""Equality and set-difference primitives shared by every level of the walk.

Standalone module: pure functions, no state, no I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, TypeVar

from bumpguard.engine._types import TypeRef, Verdict

T = TypeVar("T")


def type_ref_equal(a: TypeRef, b: TypeRef) -> bool:
    """True iff the qualified names match exactly (case-sensitive)."""
    return a.name == b.name


def set_difference(
    old: Mapping[Any, T] | Iterable[T],
    new: Mapping[Any, T] | Iterable[T],
    key: Callable[[T], Hashable] | None = None,
) -> list[T]:
    """Return the elements of *old* whose key has no counterpart in *new*.

    Mappings are compared by their keys and the unmatched values are returned.
    Other iterables need a *key* function. Order of *old* is preserved.
    """
    if key is None:
        if not isinstance(old, Mapping) or not isinstance(new, Mapping):
            msg = "set_difference needs a key function for non-mapping inputs"
            raise TypeError(msg)
        return [v for k, v in old.items() if k not in new]

    old_items = old.values() if isinstance(old, Mapping) else old
    new_items = new.values() if isinstance(new, Mapping) else new
    new_keys = {key(x) for x in new_items}
    return [x for x in old_items if key(x) not in new_keys]


def combine(*verdicts: Verdict) -> Verdict:
    """Max-aggregate verdicts; PATCH when there is nothing to combine."""
    return max(verdicts, default=Verdict.PATCH)

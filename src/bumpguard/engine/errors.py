"""Engine exceptions."""

from __future__ import annotations


class BumpGuardError(Exception):
    """Base class for classification failures."""


class MalformedInput(BumpGuardError, ValueError):
    """A symbol table violates one of its invariants."""


class AmbiguousMemberMatch(BumpGuardError):
    """Two members collapse to the same key, so pairing cannot be trusted."""

    def __init__(self, type_name: str, key: tuple[str, tuple[str, ...]]) -> None:
        self.type_name = type_name
        self.key = key
        name, params = key
        super().__init__(
            f"Ambiguous member match in {type_name!r}: "
            f"more than one member keyed {name}({', '.join(params)})"
        )

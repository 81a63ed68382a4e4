"""Next-version arithmetic for a verdict."""

from __future__ import annotations

import re

from bumpguard.engine._types import Verdict

_VERSION_RE = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``MAJOR.MINOR.PATCH`` (leading ``v`` and pre-release/build suffix allowed)."""
    match = _VERSION_RE.match(version.strip())
    if match is None:
        msg = f"Not a semantic version: {version!r}"
        raise ValueError(msg)
    return int(match["major"]), int(match["minor"]), int(match["patch"])


def next_version(current: str, verdict: Verdict) -> str:
    """Return the version the verdict requires after *current*."""
    major, minor, patch = parse_version(current)
    if verdict == Verdict.MAJOR:
        return f"{major + 1}.0.0"
    if verdict == Verdict.MINOR:
        return f"{major}.{minor + 1}.0"
    return f"{major}.{minor}.{patch + 1}"

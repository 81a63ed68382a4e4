"""Git file retrieval.

All git subprocess calls live here. Nothing else touches git.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def split_ref_range(ref_range: str) -> tuple[str, str]:
    """Split ``old..new``; a single ref means ``ref~1..ref``."""
    parts = ref_range.split("..")
    if len(parts) == 2 and all(parts):  # noqa: PLR2004
        return parts[0], parts[1]
    if len(parts) == 1 and parts[0]:
        return f"{ref_range}~1", ref_range
    msg = f"Invalid ref range '{ref_range}'"
    raise ValueError(msg)


def list_files_at_ref(
    ref: str,
    prefix: str,
    repo_path: str | Path = ".",
) -> list[str]:
    """List tracked files under *prefix* at *ref* (repo-relative posix paths)."""
    result = subprocess.run(
        ["git", "ls-tree", "-r", "--name-only", ref, "--", prefix],
        capture_output=True,
        text=True,
        cwd=str(repo_path),
        check=False,
    )
    if result.returncode != 0:
        stderr = result.stderr.strip()
        # Extract just the first meaningful line from git's stderr
        first_line = stderr.split("\n")[0] if stderr else "unknown error"
        if "not a git repository" in stderr.lower():
            msg = f"Not a git repository: {repo_path}"
        elif "not a valid object name" in stderr.lower() or "bad revision" in stderr.lower():
            msg = f"Invalid ref '{ref}': {first_line}"
        else:
            msg = f"git ls-tree failed: {first_line}"
        logger.error(msg)
        raise RuntimeError(msg)
    return [line for line in result.stdout.splitlines() if line]


def get_file_at_ref(
    ref: str,
    file_path: str,
    repo_path: str | Path = ".",
) -> str | None:
    """Retrieve file contents at a specific git ref. Returns None if missing."""
    result = subprocess.run(
        ["git", "show", f"{ref}:{file_path}"],
        capture_output=True,
        text=True,
        cwd=str(repo_path),
        check=False,
    )
    if result.returncode != 0:
        return None
    return result.stdout

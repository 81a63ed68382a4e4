"""Public surface extraction: builds a SymbolTable from sources or snapshots.

This is the collaborator side of the engine: the classifier only ever sees
the SymbolTable produced here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath

from pydantic import ValidationError

from bumpguard.engine._types import SymbolTable, TypeSymbol
from bumpguard.engine.errors import MalformedInput
from bumpguard.engine.parser import parse_file
from bumpguard.git import get_file_at_ref, list_files_at_ref
from bumpguard.languages import detect_language
from bumpguard.languages.python import is_public
from bumpguard.schema import SnapshotFile

logger = logging.getLogger(__name__)


def module_name(path: str, package: str) -> str | None:
    """Dotted module name for *path* (relative to the package dir).

    Returns ``None`` for private modules, i.e. any path segment with a leading
    underscore other than ``__init__``.
    """
    p = PurePosixPath(path)
    parts = [*p.parent.parts, p.stem]
    if parts[-1] == "__init__":
        parts = parts[:-1]
    if any(not is_public(part) or part.startswith("__") for part in parts):
        return None
    return ".".join([package, *parts]) if package else ".".join(parts)


def _select_sources(files: Mapping[str, str]) -> dict[str, str]:
    """Drop files that are not Python, and ``.py`` files shadowed by a ``.pyi`` stub."""
    selected: dict[str, str] = {}
    for path in sorted(files):
        if detect_language(path) is None:
            continue
        if path.endswith(".py") and f"{path}i" in files:
            logger.debug("Using stub for %s", path)
            continue
        selected[path] = files[path]
    return selected


def extract_public_surface(files: Mapping[str, str], package: str) -> SymbolTable:
    """Build a SymbolTable from ``{relative path: source}``.

    Raises:
        MalformedInput: two files produce the same qualified type name.
        AmbiguousMemberMatch: a scope defines one signature twice.
    """
    types: list[TypeSymbol] = []
    for path, source in _select_sources(files).items():
        module = module_name(path, package)
        if module is None:
            continue
        language = detect_language(path)
        assert language is not None
        result = parse_file(source, language, module)
        if result.parse_error:
            logger.warning("%s: %s; using recovered symbols", path, result.error_message)
        types.extend(result.types)

    logger.debug("Extracted %d public type(s) from package %r", len(types), package)
    return SymbolTable.from_types(types)


def extract_from_directory(root: str | Path, package: str | None = None) -> SymbolTable:
    """Extract the surface of the package rooted at *root*.

    Type names are qualified with *package*, or with the directory name when
    it is not given. Comparing two checkouts with different directory names
    (e.g. ``acme-1.0`` and ``acme-1.1``) needs an explicit *package*.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        msg = f"Not a directory: {root_path}"
        raise ValueError(msg)
    files = {
        p.relative_to(root_path).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root_path.rglob("*"))
        if p.is_file() and detect_language(p.name) is not None
    }
    return extract_public_surface(files, package or root_path.resolve().name)


def extract_from_git(ref: str, package_path: str, repo_path: str | Path = ".") -> SymbolTable:
    """Extract the surface of *package_path* as it was at *ref*."""
    prefix = package_path.strip("/")
    files: dict[str, str] = {}
    for path in list_files_at_ref(ref, prefix, repo_path=repo_path):
        if detect_language(path) is None:
            continue
        source = get_file_at_ref(ref, path, repo_path=repo_path)
        if source is None:
            logger.warning("%s missing at %s", path, ref)
            continue
        files[PurePosixPath(path).relative_to(prefix).as_posix()] = source
    return extract_public_surface(files, PurePosixPath(prefix).name)


# ---------------------------------------------------------------------------
# Snapshot files
# ---------------------------------------------------------------------------


def load_snapshot(path: str | Path) -> SymbolTable:
    """Load a JSON snapshot file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        snapshot = SnapshotFile.model_validate_json(text)
    except ValidationError as exc:
        msg = f"Invalid snapshot {path}: {exc}"
        raise MalformedInput(msg) from exc
    return snapshot.to_symbol_table()


def dump_snapshot(table: SymbolTable, label: str | None = None) -> str:
    """Serialize *table* as snapshot JSON."""
    return SnapshotFile.from_symbol_table(table, label=label).model_dump_json(indent=2)


def load_surface(source: str | Path, package: str | None = None) -> SymbolTable:
    """Load a snapshot ``.json`` file or extract a source directory.

    *package* only applies to directories; snapshots carry their own names.
    """
    path = Path(source)
    if path.is_dir():
        return extract_from_directory(path, package)
    if path.suffix == ".json":
        return load_snapshot(path)
    msg = f"Expected a snapshot .json file or a package directory: {source}"
    raise ValueError(msg)

"""BumpGuard CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from bumpguard import __version__
from bumpguard.engine._types import SymbolTable, Verdict
from bumpguard.engine.extractor import dump_snapshot, extract_from_git, load_surface
from bumpguard.engine.pipeline import run_advisor, verdict_of
from bumpguard.git import split_ref_range
from bumpguard.schema import AdvisorOutput, export_json_schema, export_snapshot_schema

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0  # Verdict below the --fail-on threshold
EXIT_THRESHOLD = 1  # Verdict reached the --fail-on threshold
EXIT_ERROR = 2  # Something went wrong

_FAIL_ON = {"major": Verdict.MAJOR, "minor": Verdict.MINOR}


def _configure_logging(verbose: bool) -> None:
    """Send DEBUG-level bumpguard logs to stderr when verbose."""
    if not verbose:
        return
    root = logging.getLogger("bumpguard")
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[bumpguard] %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


def _format_output(output: AdvisorOutput, fmt: str) -> str:
    """Format pipeline output according to --format flag."""
    if fmt == "json":
        return output.model_dump_json(indent=2)
    if fmt == "verdict":
        if output.meta.next_version:
            return f"{output.verdict} {output.meta.next_version}"
        return output.verdict
    return str(getattr(output.tiered, fmt))


def _exit_code(output: AdvisorOutput, fail_on: str) -> int:
    threshold = _FAIL_ON.get(fail_on)
    if threshold is not None and verdict_of(output) >= threshold:
        return EXIT_THRESHOLD
    return EXIT_SUCCESS


def _common_options(func):  # type: ignore[no-untyped-def]
    """Options shared by the comparison commands."""
    options = [
        click.option(
            "--format",
            "fmt",
            type=click.Choice(["json", "verdict", "oneliner", "short", "detailed"]),
            default="json",
            help="Output format (default: json).",
        ),
        click.option(
            "--current-version",
            default=None,
            help="Current release version; the required next version is reported.",
        ),
        click.option(
            "--fail-on",
            type=click.Choice(["major", "minor", "never"]),
            default="never",
            help="Exit 1 when the verdict is at least this severe (default: never).",
        ),
        click.option(
            "--fast",
            is_flag=True,
            default=False,
            help="Only compute the verdict, stopping at the first breaking change.",
        ),
        click.option(
            "--workers",
            type=click.IntRange(min=1),
            default=None,
            help="Worker threads for --fast on large APIs (requires --fast).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _check_workers(fast: bool, workers: int | None) -> None:
    if workers is not None and not fast:
        msg = "--workers only applies with --fast"
        raise click.UsageError(msg)


def _run_compare(
    older: SymbolTable,
    newer: SymbolTable,
    *,
    older_label: str,
    newer_label: str,
    fmt: str,
    current_version: str | None,
    fail_on: str,
    fast: bool,
    workers: int | None,
) -> None:
    output = run_advisor(
        older,
        newer,
        older_label=older_label,
        newer_label=newer_label,
        current_version=current_version,
        short_circuit=fast,
        max_workers=workers,
    )
    click.echo(_format_output(output, fmt))
    sys.exit(_exit_code(output, fail_on))


@click.group()
@click.version_option(__version__, "--version", "-v")
@click.option("--verbose", is_flag=True, default=False, help="Debug logging on stderr.")
def main(verbose: bool) -> None:
    """BumpGuard: decides the semantic-version bump a new build of a library requires."""
    _configure_logging(verbose)


@main.command()
@click.argument("older")
@click.argument("newer")
@click.option(
    "--package",
    default=None,
    help="Package name for source directories (default: each directory's name).",
)
@_common_options
def compare(
    older: str,
    newer: str,
    package: str | None,
    fmt: str,
    current_version: str | None,
    fail_on: str,
    fast: bool,
    workers: int | None,
) -> None:
    """Compare two API surfaces.

    OLDER and NEWER are snapshot .json files or Python package directories.
    """
    _check_workers(fast, workers)
    try:
        _run_compare(
            load_surface(older, package),
            load_surface(newer, package),
            older_label=older,
            newer_label=newer,
            fmt=fmt,
            current_version=current_version,
            fail_on=fail_on,
            fast=fast,
            workers=workers,
        )
    except SystemExit:
        raise
    except Exception as exc:
        logger.debug("CLI error", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)


@main.command("git")
@click.argument("ref_range")
@click.option("--path", "package_path", required=True, help="Package directory inside the repo.")
@click.option("--repo", default=".", help="Repository path (default: current directory).")
@_common_options
def git_command(
    ref_range: str,
    package_path: str,
    repo: str,
    fmt: str,
    current_version: str | None,
    fail_on: str,
    fast: bool,
    workers: int | None,
) -> None:
    """Compare a package's API surface between two git refs.

    REF_RANGE: Git ref range like v1.2.0..HEAD. A single ref means REF~1..REF.

    \b
    Exit codes:
      0: Verdict below --fail-on
      1: Verdict reached --fail-on
      2: Error
    """
    _check_workers(fast, workers)
    try:
        old_ref, new_ref = split_ref_range(ref_range)
        _run_compare(
            extract_from_git(old_ref, package_path, repo_path=repo),
            extract_from_git(new_ref, package_path, repo_path=repo),
            older_label=old_ref,
            newer_label=new_ref,
            fmt=fmt,
            current_version=current_version,
            fail_on=fail_on,
            fast=fast,
            workers=workers,
        )
    except SystemExit:
        raise
    except Exception as exc:
        logger.debug("CLI error", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("source")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the snapshot to a file instead of stdout.",
)
@click.option("--label", default=None, help="Label stored in the snapshot (e.g. a version).")
@click.option("--package", default=None, help="Package name for a source directory.")
def snapshot(source: str, output: Path | None, label: str | None, package: str | None) -> None:
    """Write the public API snapshot of SOURCE as JSON."""
    try:
        text = dump_snapshot(load_surface(source, package), label=label)
        if output is None:
            click.echo(text)
        else:
            output.write_text(text + "\n", encoding="utf-8")
            click.echo(f"Wrote {output}", err=True)
    except Exception as exc:
        logger.debug("CLI error", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_ERROR)


@main.command(hidden=True)
@click.option("--snapshot", "for_snapshot", is_flag=True, default=False, help="Snapshot file schema.")
def schema(for_snapshot: bool) -> None:
    """Print the JSON schema of the output (or of snapshot files)."""
    click.echo(export_snapshot_schema() if for_snapshot else export_json_schema())

"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from chunknamer.config import Settings, load_config
from chunknamer.core.models import NamingSummary
from chunknamer.core.outline import outline_document
from chunknamer.core.parse import MalformedBlockError, discover_files, parse_file
from chunknamer.core.pipeline import run_clean, run_rename


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _echo_summary(summary: NamingSummary, check: bool) -> None:
    """Print per-doc status, failures to stderr, and a summary line."""
    verb = "would relabel" if check else "relabeled"
    for doc in summary.documents:
        if doc.error:
            typer.echo(f"Error: {doc.error}", err=True)
        elif doc.modified:
            typer.echo(f"  {verb}: {doc.path} ({doc.relabeled} of {doc.blocks} block(s))")
            if doc.diff:
                typer.echo("".join(doc.diff), nl=False)
    typer.echo(
        f"Naming {'check' if check else 'complete'} - "
        f"{summary.documents_modified} modified, "
        f"{summary.documents_scanned - summary.documents_modified - len(summary.failures)} unchanged, "
        f"{len(summary.failures)} failed; "
        f"{summary.blocks_relabeled} of {summary.blocks_total} block(s) relabeled"
    )


def names_cmd(
    root: Annotated[Optional[str], typer.Argument(help="Book source directory or single file")] = None,
    pattern: Annotated[Optional[str], typer.Option("--pattern", help="Glob selecting documents")] = None,
    width: Annotated[Optional[int], typer.Option("--label-width", help="Zero-padding width; 0 disables")] = None,
    check: Annotated[bool, typer.Option("--check", help="Report documents that would change; write nothing")] = False,
    diff: Annotated[bool, typer.Option("--diff", help="Print a unified diff for each changed document")] = False,
    json_out: Annotated[bool, typer.Option("--json", help="Print the summary as JSON")] = False,
    ):
    """Re-create chunk labels as <document-stem>-<number> in every matched document."""
    settings = _settings(overrides={"book_dir": root, "pattern": pattern, "label_width": width})
    try:
        summary = run_rename(
            Path(settings.book_dir), settings.pattern, settings.label_width,
            settings.preserve_labels, write=not check, with_diff=diff,
        )
    except FileNotFoundError as e:
        _fail(str(e))

    if not summary.documents and not json_out:
        typer.echo(f"No documents matching '{settings.pattern}' under {settings.book_dir}/.")
        raise typer.Exit(0)

    if json_out:
        typer.echo(summary.model_dump_json(indent=2))
    else:
        _echo_summary(summary, check)

    if summary.failures or (check and summary.documents_modified):
        raise typer.Exit(1)


def list_cmd(
    root: Annotated[Optional[str], typer.Argument(help="Book source directory or single file")] = None,
    pattern: Annotated[Optional[str], typer.Option("--pattern", help="Glob selecting documents")] = None,
    ):
    """List code chunks per document with their line, label, and section."""
    settings = _settings(overrides={"book_dir": root, "pattern": pattern})
    try:
        files = discover_files(Path(settings.book_dir), settings.pattern)
    except FileNotFoundError as e:
        _fail(str(e))

    failed = 0
    for path in files:
        try:
            parsed = parse_file(path)
        except (OSError, UnicodeDecodeError, MalformedBlockError) as e:
            typer.echo(f"Error: {e}", err=True)
            failed += 1
            continue
        typer.echo(f"{path}")
        for block, section in outline_document(parsed):
            label = block.label or "-"
            typer.echo(f"  {block.start + 1:>5}  {block.engine:<8} {label}" + (f"  [{section}]" if section else ""))
    if failed:
        raise typer.Exit(1)


def clean_cmd(
    root: Annotated[Optional[str], typer.Argument(help="Book source directory")] = None,
    ):
    """Remove auto-generated book output (_book, _bookdown_files)."""
    settings = _settings(overrides={"book_dir": root})
    removed = run_clean(Path(settings.book_dir))
    for p in removed:
        typer.echo(f"  removed: {p}")
    typer.echo(f"Removed {len(removed)} director{'y' if len(removed) == 1 else 'ies'}.")

"""Pipeline step functions: naming pass over a book and build-output cleanup"""

import difflib
import shutil
from pathlib import Path
from typing import Iterable

from chunknamer.core.models import DocResult, NamingSummary, ParsedDoc
from chunknamer.core.parse import (
    DuplicateLabelError,
    MalformedBlockError,
    discover_files,
    parse_file,
    render_header,
    write_text,
)
from chunknamer.core.utils.slug import make_label


BUILD_DIRS = ('_book', '_bookdown_files')


def name_blocks(parsed: ParsedDoc, width: int = 3, preserve: Iterable[str] = ()) -> tuple[list[str], int]:
    """Relabel every block of a parsed document in order.

    Returns (new_lines, relabeled) where relabeled counts headers that changed.
    Blocks whose label is in preserve keep it and do not consume a number;
    generated labels skip over kept ones. Raises DuplicateLabelError when a
    kept label appears on more than one block.
    """
    keep = set(preserve)
    reserved: set[str] = set()
    for block in parsed.blocks:
        if block.label in keep:
            if block.label in reserved:
                raise DuplicateLabelError(parsed.path, block.start + 1, block.label)
            reserved.add(block.label)

    lines = list(parsed.lines)
    relabeled = 0
    index = 0
    for block in parsed.blocks:
        if block.label in keep:
            continue
        index += 1
        while make_label(parsed.stem, index, width) in reserved:
            index += 1
        header = render_header(lines[block.start], make_label(parsed.stem, index, width))
        if header != lines[block.start]:
            lines[block.start] = header
            relabeled += 1
    return lines, relabeled


def _diff(old: str, new: str, name: str) -> list[str]:
    """Unified diff lines between the original and rewritten document."""
    return list(difflib.unified_diff(
        old.splitlines(keepends=True), new.splitlines(keepends=True), f"a/{name}", f"b/{name}",
    ))


def rename_file(
    path: Path,
    width: int = 3,
    preserve: Iterable[str] = (),
    write: bool = True,
    with_diff: bool = False,
    ) -> DocResult:
    """Name the blocks of one document, writing it back only if its content changed."""
    parsed = parse_file(path)
    lines, relabeled = name_blocks(parsed, width, preserve)
    old, new = ''.join(parsed.lines), ''.join(lines)
    modified = new != old
    if modified and write:
        write_text(path, new)
    return DocResult(
        path=str(path),
        blocks=len(parsed.blocks),
        relabeled=relabeled,
        modified=modified,
        diff=_diff(old, new, path.name) if with_diff and modified else [],
    )


def run_rename(
    root: Path,
    pattern: str = '*.Rmd',
    width: int = 3,
    preserve: Iterable[str] = (),
    write: bool = True,
    with_diff: bool = False,
    ) -> NamingSummary:
    """Name blocks in every document under root matching pattern, in path order.

    Malformed or unreadable documents are recorded as failures and left
    untouched; the pass continues with the remaining documents.
    """
    preserve = tuple(preserve)
    results = []
    for p in discover_files(root, pattern):
        try:
            results.append(rename_file(p, width, preserve, write, with_diff))
        except (OSError, UnicodeDecodeError) as e:
            results.append(DocResult(path=str(p), error=f"I/O error: {e}"))
        except (MalformedBlockError, DuplicateLabelError) as e:
            results.append(DocResult(path=str(p), error=str(e)))
    return NamingSummary(documents=results)


def run_clean(book_dir: Path) -> list[Path]:
    """Remove the renderer's auto-generated directories under book_dir. Returns removed paths."""
    removed = []
    for name in BUILD_DIRS:
        target = book_dir / name
        if target.is_dir():
            shutil.rmtree(target)
            removed.append(target)
    return removed

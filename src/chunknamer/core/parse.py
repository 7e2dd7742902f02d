"""File discovery, chunk header parsing, and code block location"""

import re
from pathlib import Path
from typing import Optional

from chunknamer.core.models import CodeBlock, ParsedDoc


# Line-based chunk markers, as recognised by the book renderer itself.
START_RE = re.compile(
    r'^(?P<indent>[\t >]*)(?P<fence>```+)(?P<pad>\s*)\{(?P<inner>[A-Za-z0-9_].*)\}(?P<trail>\s*)$'
)
END_RE = re.compile(r'^[\t >]*```+\s*$')
ENGINE_RE = re.compile(r'^(?P<engine>[A-Za-z0-9_]+)(?P<rest>.*)$', re.DOTALL)
LABEL_OPTION_RE = re.compile(
    r'(?:^|,)\s*label\s*=\s*(?:(["\'])(?P<quoted>.*?)\1|(?P<bare>[^,\s"\']+))\s*(?=,|$)'
)
EOL_RE = re.compile(r'\r?\n$')
LINE_SPLIT_RE = re.compile(r"(?<=\n)")
BOM = "\ufeff"


class MalformedBlockError(ValueError):
    """A chunk start marker with no end marker before EOF or the next start marker."""

    def __init__(self, path: Path, line: int, reason: str):
        self.path = path
        self.line = line
        super().__init__(f"{path}:{line}: {reason}")


class DuplicateLabelError(ValueError):
    """A preserved label used by more than one chunk in the same document."""

    def __init__(self, path: Path, line: int, label: str):
        self.path = path
        self.line = line
        self.label = label
        super().__init__(f"{path}:{line}: preserved label '{label}' is already used by an earlier chunk")


def split_lines(text: str) -> list[str]:
    """Split on newlines only, keeping line endings; joining the result restores text."""
    return [line for line in LINE_SPLIT_RE.split(text) if line]


def split_eol(line: str) -> tuple[str, str]:
    """Return (text, line_ending) for a line read with keepends."""
    m = EOL_RE.search(line)
    return (line[:m.start()], m.group()) if m else (line, "")


def parse_header(inner: str) -> tuple[str, Optional[str], str]:
    """Split the text inside a chunk header's braces into (engine, label, options).

    The label is the first comma-separated token after the engine when it holds
    no '='; a label= option (quoted or bare) is also taken as the label and removed.
    Options are returned verbatim, including their leading separator.
    """
    m = ENGINE_RE.match(inner)
    engine, rest = m.group('engine'), m.group('rest')

    label = None
    options = rest
    head, sep, tail = rest.lstrip().partition(',')
    if head.strip() and '=' not in head:
        label = head.strip()
        options = head[len(head.rstrip()):] + sep + tail

    opt = LABEL_OPTION_RE.search(options)
    if opt:
        if label is None:
            label = opt.group('quoted') if opt.group(1) else opt.group('bare')
        options = options[:opt.start()] + options[opt.end():]
    return engine, label, options


def render_header(line: str, label: str) -> str:
    """Return a chunk start line with its label replaced; everything else kept verbatim."""
    text, eol = split_eol(line)
    bom = BOM if text.startswith(BOM) else ""
    m = START_RE.match(text[len(bom):])
    engine, _, options = parse_header(m.group('inner'))
    if options.strip() and not options.lstrip().startswith(','):
        options = ', ' + options.lstrip()
    return (
        f"{bom}{m.group('indent')}{m.group('fence')}{m.group('pad')}"
        f"{{{engine} {label}{options}}}{m.group('trail')}{eol}"
    )


def find_blocks(lines: list[str], path: Path) -> list[CodeBlock]:
    """Locate code blocks in document order. Raises MalformedBlockError on unterminated blocks."""
    blocks: list[CodeBlock] = []
    opened: Optional[tuple[int, re.Match]] = None

    for i, line in enumerate(lines):
        text, _ = split_eol(line)
        if i == 0:
            text = text.removeprefix(BOM)
        start = START_RE.match(text)
        if opened is None:
            if start:
                opened = (i, start)
            continue
        if start:
            raise MalformedBlockError(
                path, opened[0] + 1, f"chunk has no end marker before the next chunk at line {i + 1}"
            )
        if END_RE.match(text):
            engine, label, options = parse_header(opened[1].group('inner'))
            blocks.append(CodeBlock(
                engine=engine,
                label=label,
                options=options,
                start=opened[0],
                end=i,
                position=len(blocks),
            ))
            opened = None

    if opened is not None:
        raise MalformedBlockError(path, opened[0] + 1, "chunk has no end marker before end of file")
    return blocks


def discover_files(root: Path, pattern: str = '*.Rmd') -> list[Path]:
    """Return files under root matching pattern, sorted by path, or [root] if a single file."""
    if root.is_file():
        return [root]
    if not root.is_dir():
        raise FileNotFoundError(f"No such directory: {root}")
    return sorted(p for p in root.glob(pattern) if p.is_file())


def read_text(path: Path) -> str:
    """Read a document without translating line endings."""
    with open(path, encoding='utf-8', newline='') as f:
        return f.read()


def write_text(path: Path, text: str) -> None:
    """Write a document without translating line endings."""
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)


def parse_file(path: Path) -> ParsedDoc:
    """Read a document and locate its code blocks."""
    lines = split_lines(read_text(path))
    return ParsedDoc(path=path, stem=path.stem, lines=lines, blocks=find_blocks(lines, path))

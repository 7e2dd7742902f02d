"""Chunk outline: pair each code block with the section heading it falls under"""

import re
from typing import Optional

from markdown_it import MarkdownIt

from chunknamer.core.models import CodeBlock, ParsedDoc


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
HEADING_ATTRS_RE = re.compile(r'\s*\{[^}]*\}\s*$')


def _blank_frontmatter(text: str) -> str:
    """Replace a YAML header with empty lines so token line maps stay aligned."""
    m = FRONTMATTER_RE.match(text)
    if m:
        return '\n' * m.group().count('\n') + text[m.end():]
    return text


def _headings(text: str) -> list[tuple[int, str]]:
    """Return (line_index, title) for each heading, with pandoc attributes like {#id} stripped."""
    tokens = MarkdownIt('commonmark').parse(_blank_frontmatter(text))
    found = []
    for i, tok in enumerate(tokens):
        if tok.type == 'heading_open' and tok.map:
            title = HEADING_ATTRS_RE.sub('', tokens[i + 1].content)
            found.append((tok.map[0], title))
    return found


def outline_document(parsed: ParsedDoc) -> list[tuple[CodeBlock, Optional[str]]]:
    """Return each block with the title of the nearest preceding heading, or None."""
    headings = _headings(''.join(parsed.lines).replace('\r\n', '\n'))
    result = []
    for block in parsed.blocks:
        section = None
        for line, title in headings:
            if line >= block.start:
                break
            section = title
        result.append((block, section))
    return result

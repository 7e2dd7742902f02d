"""Data models for the chunk naming pass"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class CodeBlock(BaseModel):
    """A single executable chunk located in a document."""
    engine: str
    label: Optional[str] = None     # existing label; None when unlabeled
    options: str = ""               # header text after the label, verbatim
    start: int                      # 0-based line index of the start marker
    end: int                        # 0-based line index of the end marker
    position: int                   # 0-based sequence number within the document


@dataclass
class ParsedDoc:
    """Internal parse result for one document; not persisted."""
    path:   Path
    stem:   str
    lines:  list[str]                                   # keepends, original line endings
    blocks: list[CodeBlock] = field(default_factory=list)


class DocResult(BaseModel):
    """Outcome of naming one document."""
    path: str
    blocks: int = 0
    relabeled: int = 0
    modified: bool = False
    error: Optional[str] = None
    diff: list[str] = Field(default=[], exclude=True)   # unified diff lines, filled on request


class NamingSummary(BaseModel):
    """Aggregate outcome of a naming pass over all matched documents."""
    documents: list[DocResult] = []

    @computed_field
    @property
    def documents_scanned(self) -> int:
        return len(self.documents)

    @computed_field
    @property
    def documents_modified(self) -> int:
        return sum(1 for d in self.documents if d.modified)

    @computed_field
    @property
    def blocks_total(self) -> int:
        return sum(d.blocks for d in self.documents)

    @computed_field
    @property
    def blocks_relabeled(self) -> int:
        return sum(d.relabeled for d in self.documents)

    @property
    def failures(self) -> list[DocResult]:
        return [d for d in self.documents if d.error is not None]

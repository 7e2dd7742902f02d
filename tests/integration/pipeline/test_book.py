"""End-to-end naming pass over a small multi-chapter book"""

from chunknamer.core.parse import parse_file
from chunknamer.core.pipeline import run_rename


INDEX = """\
---
title: "Book"
site: bookdown::bookdown_site
---

# Preface {-}

```{r setup, include = FALSE}
library(mlr3book)
```
"""

CHAPTER = """\
# Optimization {#optimization}

```{r 03-optimization-007}
library("mlr3tuning")
```

Text with inline `r 1 + 1` code.

```r
# display-only code is left alone
```

> ```{r, echo = FALSE, fig.cap = "Tuning, visualised"}
> plot(instance)
> ```

```{python}
import numpy
```
"""


def test_book_pass_and_rerun(book_dir):
    """A full pass numbers every chunk per chapter; a rerun is a no-op."""
    (book_dir / "index.Rmd").write_text(INDEX)
    (book_dir / "03-optimization.Rmd").write_text(CHAPTER)

    first = run_rename(book_dir)
    assert first.documents_modified == 2
    assert first.blocks_total == 4
    assert not first.failures

    chapter = book_dir / "03-optimization.Rmd"
    assert [b.label for b in parse_file(chapter).blocks] == [
        "03-optimization-001", "03-optimization-002", "03-optimization-003",
    ]
    assert "> ```{r 03-optimization-002, echo = FALSE, fig.cap = \"Tuning, visualised\"}\n" in chapter.read_text()
    assert "```r\n# display-only code is left alone\n```" in chapter.read_text()
    assert "```{r index-001, include = FALSE}" in (book_dir / "index.Rmd").read_text()

    snapshot = {p.name: p.read_bytes() for p in book_dir.iterdir()}
    second = run_rename(book_dir)
    assert second.documents_modified == 0
    assert second.blocks_relabeled == 0
    assert {p.name: p.read_bytes() for p in book_dir.iterdir()} == snapshot


def test_book_pass_preserving_setup(book_dir):
    (book_dir / "index.Rmd").write_text(INDEX)
    run_rename(book_dir, preserve=["setup"])
    assert "```{r setup, include = FALSE}" in (book_dir / "index.Rmd").read_text()

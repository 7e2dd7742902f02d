"""Unit tests for core/outline.py"""

from chunknamer.core.outline import outline_document
from chunknamer.core.parse import parse_file


def test_outline_pairs_blocks_with_sections(sample_path):
    """Each block is paired with the nearest preceding heading; attributes are stripped."""
    outline = outline_document(parse_file(sample_path))
    assert [section for _, section in outline] == [
        "Hyperparameter Tuning",
        "Hyperparameter Tuning",
        "Search Spaces",
        "Search Spaces",
    ]


def test_outline_ignores_frontmatter_and_code_comments(tmp_path):
    """YAML headers and '#' comments inside chunks are not sections."""
    p = tmp_path / "ch.Rmd"
    p.write_text("---\ntitle: x\n---\n\n```{r}\n# comment\n```\n\n# Real\n\n```{r}\n```\n")
    outline = outline_document(parse_file(p))
    assert [section for _, section in outline] == [None, "Real"]

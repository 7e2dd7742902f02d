"""Label generation for code chunks"""

import re


def label_stem(text: str) -> str:
    """Make a document stem safe for use in a chunk label; case is kept."""
    text = re.sub(r'[^A-Za-z0-9_-]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or 'chunk'


def make_label(stem: str, index: int, width: int = 3) -> str:
    """Return '<stem>-<index>' with index zero-padded to width (0 = no padding)."""
    return f"{label_stem(stem)}-{str(index).zfill(width)}"

from __future__ import annotations

from pathlib import Path

import pandas as pd

DICKINSON = [
    "Because I could not stop for Death -",
    "He kindly stopped for me -",
    "The Carriage held but just Ourselves -",
    "and Immortality",
]


def dickinson_records() -> pd.DataFrame:
    """Return the four-line poem as a ``[line, text]`` table."""
    return pd.DataFrame({"line": [1, 2, 3, 4], "text": DICKINSON})


def write_corpus(root: Path, files: dict[str, str]) -> Path:
    """Create a directory of text files keyed by relative path."""
    root.mkdir(parents=True, exist_ok=True)
    for relative, body in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return root

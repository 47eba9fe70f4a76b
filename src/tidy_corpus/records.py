from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from .errors import require_columns
from .models import Document

# Matches headings such as "Chapter 1", "CHAPTER XII" or "chapter iv.".
CHAPTER_PATTERN = r"^\s*chapter\s+[\divxlc]"

# File types the loaders know how to expand into Document instances.
SUPPORTED_INPUT_EXTENSIONS = {".txt"}

LOGGER = logging.getLogger(__name__)


def records_from_lines(lines: Iterable[str], start: int = 1) -> pd.DataFrame:
    """Build a ``[line, text]`` table numbering lines from ``start``."""
    texts = list(lines)
    return pd.DataFrame(
        {"line": range(start, start + len(texts)), "text": pd.Series(texts, dtype=object)},
        columns=["line", "text"],
    )


def records_from_text(text: str) -> pd.DataFrame:
    """Split text on line breaks into a ``[line, text]`` table."""
    return records_from_lines(text.splitlines())


def records_from_documents(documents: Iterable[Document]) -> pd.DataFrame:
    """Build a ``[doc_id, line, text]`` table; line numbers restart per document."""
    doc_ids: List[str] = []
    line_numbers: List[int] = []
    texts: List[str] = []
    for doc in documents:
        for number, line in enumerate(doc.text.splitlines(), start=1):
            doc_ids.append(doc.doc_id)
            line_numbers.append(number)
            texts.append(line)
    return pd.DataFrame(
        {
            "doc_id": pd.Series(doc_ids, dtype=object),
            "line": pd.Series(line_numbers, dtype="int64"),
            "text": pd.Series(texts, dtype=object),
        }
    )


def annotate_chapters(
    records: pd.DataFrame,
    pattern: str = CHAPTER_PATTERN,
    input: str = "text",
    by: str | None = "doc_id",
) -> pd.DataFrame:
    """
    Return a copy of ``records`` with a running ``chapter`` number.

    The chapter of a line is the count of heading lines seen so far, matched
    case-insensitively against ``pattern``. Lines before the first heading get
    chapter 0. With ``by`` set the count restarts for every group; pass
    ``None`` to number the whole table as one text.
    """
    require_columns(records.columns, input)
    if by is not None:
        require_columns(records.columns, by)
    compiled = re.compile(pattern, re.IGNORECASE)
    is_heading = (
        records[input]
        .map(lambda value: isinstance(value, str) and bool(compiled.search(value)))
        .astype("int64")
    )
    annotated = records.copy()
    if by is None:
        annotated["chapter"] = is_heading.cumsum()
    else:
        annotated["chapter"] = is_heading.groupby(records[by], sort=False).cumsum()
    return annotated


def load_documents(input_path: Path) -> List[Document]:
    """Expand a file or directory into documents; doc ids are relative paths."""
    if input_path.is_file():
        return [_document_from_file(input_path, input_path.name)]

    # Directory input: gather all supported files so ordering is deterministic.
    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    documents = [
        _document_from_file(file, file.relative_to(input_path).as_posix())
        for file in files
    ]
    LOGGER.info("Loaded %d documents from %s", len(documents), input_path)
    return documents


def _document_from_file(path: Path, doc_id: str) -> Document:
    return Document(doc_id=doc_id, text=path.read_text(encoding="utf-8"))

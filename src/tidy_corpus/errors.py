from __future__ import annotations

from typing import Iterable


class TidyCorpusError(Exception):
    """Base class for tidy_corpus validation failures."""


class InvalidPolicy(TidyCorpusError, ValueError):
    """Raised when a segmentation policy is unknown or has bad parameters."""


class MissingField(TidyCorpusError, KeyError):
    """Raised when a table lacks a column an operation needs."""

    def __init__(self, field: str, columns: Iterable[object] = ()) -> None:
        self.field = field
        self.columns = [str(column) for column in columns]
        super().__init__(field)

    def __str__(self) -> str:
        available = ", ".join(self.columns) or "<none>"
        return f"Column '{self.field}' not found (available: {available})."


def require_columns(columns: Iterable[object], *names: str) -> None:
    """Raise MissingField for the first name not present in columns."""
    present = list(columns)
    for name in names:
        if name not in present:
            raise MissingField(name, present)

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Document:
    """Represents an input document."""

    doc_id: str
    text: str

"""
Segmentation policies accepted by :func:`tidy_corpus.unnest.unnest_tokens`.

Each policy is a frozen dataclass carrying its own parameters. Parameters are
validated on construction, so an invalid policy value cannot exist.
"""

from __future__ import annotations

import numbers
import re
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Union

from .errors import InvalidPolicy


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a regular expression once per process."""
    return re.compile(pattern)


def _check_size(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidPolicy(f"'{name}' must be a positive integer, got {value!r}.")


def _check_sizes(n: int, n_min: int | None) -> None:
    _check_size("n", n)
    if n_min is None:
        return
    _check_size("n_min", n_min)
    if n_min > n:
        raise InvalidPolicy(f"'n_min' ({n_min}) must not exceed 'n' ({n}).")


@dataclass(frozen=True, slots=True)
class Word:
    """Runs of letters and digits; an apostrophe between letters stays inside."""

    keep_apostrophes: bool = True
    strip_numeric: bool = False


@dataclass(frozen=True, slots=True)
class Character:
    """One token per character, optionally skipping non-alphanumerics."""

    strip_non_alphanum: bool = True


@dataclass(frozen=True, slots=True)
class CharacterShingles:
    """Overlapping windows of ``n`` characters."""

    n: int = 3
    n_min: int | None = None
    strip_non_alphanum: bool = True

    def __post_init__(self) -> None:
        _check_sizes(self.n, self.n_min)


@dataclass(frozen=True, slots=True)
class NGram:
    """Overlapping windows of ``n`` consecutive words joined by a space."""

    n: int = 2
    n_min: int | None = None

    def __post_init__(self) -> None:
        _check_sizes(self.n, self.n_min)


@dataclass(frozen=True, slots=True)
class Sentence:
    """Sentences delimited by terminal punctuation."""


@dataclass(frozen=True, slots=True)
class Line:
    """Non-blank lines."""


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Blocks separated by blank lines."""


@dataclass(frozen=True, slots=True)
class Regex:
    """Remainders left after splitting on ``pattern``."""

    pattern: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not self.pattern:
            raise InvalidPolicy("The regex policy requires a non-empty pattern.")
        try:
            compile_pattern(self.pattern)
        except re.error as exc:
            raise InvalidPolicy(
                f"Invalid regex pattern {self.pattern!r}: {exc}"
            ) from exc


Policy = Union[
    Word, Character, CharacterShingles, NGram, Sentence, Line, Paragraph, Regex
]

POLICY_TYPES = (
    Word,
    Character,
    CharacterShingles,
    NGram,
    Sentence,
    Line,
    Paragraph,
    Regex,
)

# Plural names follow the tidy-text convention; singular forms are aliases.
_POLICY_NAMES: Dict[str, type] = {
    "words": Word,
    "word": Word,
    "characters": Character,
    "character": Character,
    "character_shingles": CharacterShingles,
    "ngrams": NGram,
    "ngram": NGram,
    "sentences": Sentence,
    "sentence": Sentence,
    "lines": Line,
    "line": Line,
    "paragraphs": Paragraph,
    "paragraph": Paragraph,
    "regex": Regex,
}


def _lookup(name: object) -> type:
    if not isinstance(name, str):
        raise InvalidPolicy(f"Policy name must be a string, got {name!r}.")
    policy_cls = _POLICY_NAMES.get(name.lower().strip())
    if policy_cls is None:
        raise InvalidPolicy(f"Unknown segmentation policy '{name}'.")
    return policy_cls


def policy_parameters(name: str) -> FrozenSet[str]:
    """Return the parameter names accepted by the named policy."""
    return frozenset(field.name for field in fields(_lookup(name)))


def parse_policy(name: str, **params: Any) -> Policy:
    """Factory for building policies by name."""
    policy_cls = _lookup(name)
    allowed = {field.name for field in fields(policy_cls)}
    unexpected = sorted(set(params) - allowed)
    if unexpected:
        raise InvalidPolicy(
            f"Policy '{name}' does not accept parameter(s): {', '.join(unexpected)}."
        )
    return policy_cls(**params)


def resolve_policy(token: Policy | str) -> Policy:
    """Accept a policy instance or a policy name."""
    if isinstance(token, POLICY_TYPES):
        return token
    if isinstance(token, str):
        return parse_policy(token)
    raise InvalidPolicy(f"Unsupported segmentation policy {token!r}.")

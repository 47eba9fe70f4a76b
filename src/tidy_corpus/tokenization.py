from __future__ import annotations

import re
import unicodedata
from typing import List

import regex

from .errors import InvalidPolicy
from .policies import (
    Character,
    CharacterShingles,
    Line,
    NGram,
    Paragraph,
    Policy,
    Regex,
    Sentence,
    Word,
    compile_pattern,
)

# A word starts with a letter or digit; combining marks may continue it.
_WORD_RUN = r"[\p{L}\p{N}][\p{L}\p{M}\p{N}]*"
WORD_PATTERN = regex.compile(rf"{_WORD_RUN}(?:['’]{_WORD_RUN})*")
BARE_WORD_PATTERN = regex.compile(_WORD_RUN)
TYPOGRAPHIC_APOSTROPHE = "’"
# Whitespace after terminal punctuation, optionally behind one closing quote.
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+|(?<=[.!?][\"'”’)\]])\s+")
PARAGRAPH_BREAK = re.compile(r"\n[ \t\r\f\v]*\n\s*")
INNER_NEWLINE = re.compile(r"\s*\n\s*")
WHITESPACE = re.compile(r"\s+")


def normalize_case(token: str) -> str:
    """Lowercase a token; applying it twice changes nothing."""
    return token.lower()


def tokenize_words(
    text: str, keep_apostrophes: bool = True, strip_numeric: bool = False
) -> List[str]:
    """Split text into words, dropping punctuation-only fragments.

    Typographic apostrophes inside a word are written as ``'`` so that
    ``don’t`` and ``don't`` are the same token.
    """
    pattern = WORD_PATTERN if keep_apostrophes else BARE_WORD_PATTERN
    words = [
        word.replace(TYPOGRAPHIC_APOSTROPHE, "'") for word in pattern.findall(text)
    ]
    if strip_numeric:
        words = [word for word in words if not word.isdigit()]
    return words


def tokenize_characters(text: str, strip_non_alphanum: bool = True) -> List[str]:
    """Split text into single characters."""
    if strip_non_alphanum:
        return [ch for ch in text if ch.isalnum()]
    return list(text)


def tokenize_character_shingles(
    text: str, n: int = 3, n_min: int | None = None, strip_non_alphanum: bool = True
) -> List[str]:
    """Overlapping character windows of sizes n_min..n per start position."""
    chars = tokenize_characters(text, strip_non_alphanum=strip_non_alphanum)
    return ["".join(window) for window in _windows(chars, n, n_min)]


def tokenize_ngrams(text: str, n: int = 2, n_min: int | None = None) -> List[str]:
    """Overlapping word windows of sizes n_min..n per start position."""
    words = tokenize_words(text)
    return [" ".join(window) for window in _windows(words, n, n_min)]


def tokenize_sentences(text: str) -> List[str]:
    """Split text into sentences using a simple punctuation-based heuristic."""
    normalized = WHITESPACE.sub(" ", text).strip()
    if not normalized:
        return []
    return [part.strip() for part in SENTENCE_BOUNDARY.split(normalized) if part.strip()]


def tokenize_lines(text: str) -> List[str]:
    """Split text on line breaks, skipping blank lines."""
    return [line for line in text.splitlines() if line.strip()]


def tokenize_paragraphs(text: str) -> List[str]:
    """Split text on blank lines; newlines inside a paragraph become spaces."""
    paragraphs: List[str] = []
    for block in PARAGRAPH_BREAK.split(text):
        paragraph = INNER_NEWLINE.sub(" ", block).strip()
        if paragraph:
            paragraphs.append(paragraph)
    return paragraphs


def tokenize_regex(text: str, pattern: str) -> List[str]:
    """Split text on pattern matches, discarding the matched delimiters."""
    compiled = compile_pattern(pattern)
    pieces: List[str] = []
    last_end = 0
    # finditer rather than split so capture groups never leak delimiters.
    for match in compiled.finditer(text):
        pieces.append(text[last_end : match.start()])
        last_end = match.end()
    pieces.append(text[last_end:])
    return [piece for piece in pieces if piece]


def segment(text: str, policy: Policy) -> List[str]:
    """Apply a segmentation policy to one NFC-normalized text value."""
    if not text:
        return []
    text = unicodedata.normalize("NFC", text)
    if isinstance(policy, Word):
        return tokenize_words(text, policy.keep_apostrophes, policy.strip_numeric)
    if isinstance(policy, Character):
        return tokenize_characters(text, policy.strip_non_alphanum)
    if isinstance(policy, CharacterShingles):
        return tokenize_character_shingles(
            text, policy.n, policy.n_min, policy.strip_non_alphanum
        )
    if isinstance(policy, NGram):
        return tokenize_ngrams(text, policy.n, policy.n_min)
    if isinstance(policy, Sentence):
        return tokenize_sentences(text)
    if isinstance(policy, Line):
        return tokenize_lines(text)
    if isinstance(policy, Paragraph):
        return tokenize_paragraphs(text)
    if isinstance(policy, Regex):
        return tokenize_regex(text, policy.pattern)
    raise InvalidPolicy(f"Unsupported segmentation policy {policy!r}.")


def _windows(items: List[str], n: int, n_min: int | None) -> List[List[str]]:
    smallest = n if n_min is None else n_min
    windows: List[List[str]] = []
    for start in range(len(items)):
        for size in range(smallest, n + 1):
            end = start + size
            if end > len(items):
                break
            windows.append(items[start:end])
    return windows

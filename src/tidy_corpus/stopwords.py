from __future__ import annotations

import logging
from importlib import import_module, resources
from pathlib import Path
from typing import Any, Callable, FrozenSet, Iterable

import pandas as pd

from .errors import require_columns

StopWordSet = FrozenSet[str]

# Lexicons shipped as text files under tidy_corpus/data.
BUNDLED_LEXICONS = ("snowball",)

LOGGER = logging.getLogger(__name__)

_nltk_words: Callable[[str], list[str]] | None = None


def bundled_stopwords(lexicon: str = "snowball") -> StopWordSet:
    """Return one of the stop word lexicons shipped with the package."""
    name = lexicon.lower().strip()
    if name not in BUNDLED_LEXICONS:
        raise ValueError(
            f"Unknown stop word lexicon '{lexicon}'. "
            f"Available: {', '.join(BUNDLED_LEXICONS)}."
        )
    data_file = resources.files("tidy_corpus") / "data" / f"{name}.txt"
    return frozenset(_parse_lines(data_file.read_text(encoding="utf-8").splitlines()))


def nltk_stopwords(language: str = "english") -> StopWordSet:
    """Return the NLTK stop word list for ``language``."""
    words = _ensure_nltk_stopwords()
    return frozenset(word.lower() for word in words(language))


def load_stopwords(source: str | Path, language: str = "english") -> StopWordSet:
    """
    Resolve a stop word set from a bundled lexicon name, ``"nltk"`` or a file.

    Files hold one word per line; blank lines and ``#`` comments are skipped.
    """
    if isinstance(source, str):
        name = source.lower().strip()
        if name in BUNDLED_LEXICONS:
            return bundled_stopwords(name)
        if name == "nltk":
            return nltk_stopwords(language)
    path = Path(source)
    with path.open("r", encoding="utf-8") as handle:
        words = frozenset(_parse_lines(handle))
    LOGGER.info("Loaded %d stop words from %s", len(words), path)
    return words


def stop_word_table(lexicon: str = "snowball") -> pd.DataFrame:
    """Return a bundled lexicon as a ``[word, lexicon]`` table."""
    words = sorted(bundled_stopwords(lexicon))
    return pd.DataFrame({"word": words, "lexicon": [lexicon] * len(words)})


def anti_join_stopwords(
    table: pd.DataFrame,
    stopwords: Iterable[str] | pd.DataFrame,
    column: str = "word",
) -> pd.DataFrame:
    """Drop rows whose token is a stop word; all other rows pass unchanged."""
    require_columns(table.columns, column)
    if isinstance(stopwords, pd.DataFrame):
        require_columns(stopwords.columns, column)
        values = stopwords[column].tolist()
    else:
        values = list(stopwords)
    mask = table[column].isin(values)
    kept = table.loc[~mask].reset_index(drop=True)
    LOGGER.debug("Removed %d stop word rows of %d", int(mask.sum()), len(table))
    return kept


def _parse_lines(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        word = line.strip()
        if not word or word.startswith("#"):
            continue
        yield word


def _ensure_nltk_stopwords() -> Callable[[str], list[str]]:
    global _nltk_words
    if _nltk_words is None:
        try:
            corpus_module = import_module("nltk.corpus")
        except ModuleNotFoundError as exc:  # pragma: no cover - informative
            raise ImportError(
                "nltk is required for the 'nltk' stop word lexicon. "
                "Install the 'nltk' extra (e.g., `pip install .[nltk]`)."
            ) from exc
        stopwords_reader: Any = getattr(corpus_module, "stopwords")
        _nltk_words = stopwords_reader.words
    return _nltk_words

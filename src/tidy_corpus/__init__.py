"""
tidy_corpus package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import TidyCorpusConfig, config_from_dict, config_from_yaml, load_config
from .errors import InvalidPolicy, MissingField, TidyCorpusError
from .frequencies import (
    add_proportions,
    compare_frequencies,
    count_tokens,
    frequency_correlation,
)
from .models import Document
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
    parse_policy,
)
from .records import (
    annotate_chapters,
    load_documents,
    records_from_documents,
    records_from_lines,
    records_from_text,
)
from .stopwords import (
    StopWordSet,
    anti_join_stopwords,
    bundled_stopwords,
    load_stopwords,
    stop_word_table,
)
from .unnest import unnest_tokens

__all__ = [
    "TidyCorpusConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "TidyCorpusError",
    "InvalidPolicy",
    "MissingField",
    "Policy",
    "Word",
    "Character",
    "CharacterShingles",
    "NGram",
    "Sentence",
    "Line",
    "Paragraph",
    "Regex",
    "parse_policy",
    "Document",
    "records_from_lines",
    "records_from_text",
    "records_from_documents",
    "annotate_chapters",
    "load_documents",
    "unnest_tokens",
    "StopWordSet",
    "anti_join_stopwords",
    "bundled_stopwords",
    "load_stopwords",
    "stop_word_table",
    "count_tokens",
    "add_proportions",
    "compare_frequencies",
    "frequency_correlation",
]

__version__ = "0.1.0"

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd
import typer
import yaml

from .config import TidyCorpusConfig, load_config
from .errors import TidyCorpusError
from .frequencies import compare_frequencies, count_tokens, frequency_correlation
from .records import annotate_chapters, load_documents, records_from_documents
from .stopwords import StopWordSet, anti_join_stopwords, load_stopwords
from .unnest import unnest_tokens

app = typer.Typer(help="Tidy text corpus CLI.", no_args_is_help=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@app.callback()
def configure_logging(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug messages to stderr."
    ),
) -> None:
    """Tokenize local text corpora into one-token-per-row tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT
    )


@app.command()
def tokenize(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    token: str | None = typer.Option(
        None, "--token", "-t", help="Segmentation policy (e.g., 'words' or 'ngrams')."
    ),
    n: int | None = typer.Option(None, "--n", help="N-gram or shingle size."),
    n_min: int | None = typer.Option(None, "--n-min", help="Smallest n-gram size."),
    pattern: str | None = typer.Option(
        None, "--pattern", help="Delimiter pattern for the regex policy."
    ),
    to_lower: bool | None = typer.Option(
        None, "--lower/--no-lower", help="Override config to_lower flag."
    ),
    chapter_pattern: str | None = typer.Option(
        None, "--chapter-pattern", help="Regex marking chapter heading lines."
    ),
    collapse: List[str] | None = typer.Option(
        None,
        "--collapse",
        help="Join consecutive lines sharing this column's value (repeatable).",
    ),
) -> None:
    """Print the tidy token table of the input corpus as TSV."""
    cfg = load_config(config)
    _apply_tokenizer_overrides(
        cfg, token, n, n_min, pattern, to_lower, chapter_pattern, collapse
    )
    tidy = _tidy_table(input_path, cfg)
    _echo_table(tidy)


@app.command()
def count(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    token: str | None = typer.Option(
        None, "--token", "-t", help="Segmentation policy (e.g., 'words' or 'ngrams')."
    ),
    n: int | None = typer.Option(None, "--n", help="N-gram or shingle size."),
    n_min: int | None = typer.Option(None, "--n-min", help="Smallest n-gram size."),
    pattern: str | None = typer.Option(
        None, "--pattern", help="Delimiter pattern for the regex policy."
    ),
    to_lower: bool | None = typer.Option(
        None, "--lower/--no-lower", help="Override config to_lower flag."
    ),
    chapter_pattern: str | None = typer.Option(
        None, "--chapter-pattern", help="Regex marking chapter heading lines."
    ),
    collapse: List[str] | None = typer.Option(
        None,
        "--collapse",
        help="Join consecutive lines sharing this column's value (repeatable).",
    ),
    stopwords: str | None = typer.Option(
        None,
        "--stopwords",
        "-s",
        help="Stop word lexicon name, 'nltk', a file path, or 'none'.",
    ),
    by: List[str] | None = typer.Option(
        None, "--by", help="Count per value of this column (repeatable)."
    ),
    top: int | None = typer.Option(
        None, "--top", help="Keep only the most frequent tokens (per group)."
    ),
) -> None:
    """Print token counts, most frequent first, as TSV."""
    cfg = load_config(config)
    _apply_tokenizer_overrides(
        cfg, token, n, n_min, pattern, to_lower, chapter_pattern, collapse
    )
    _apply_stopword_override(cfg, stopwords)
    tidy = _filtered_table(input_path, cfg)
    group_columns = list(by or [])
    try:
        counts = count_tokens(tidy, column=cfg.output_column, by=group_columns)
    except TidyCorpusError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if top is not None:
        if group_columns:
            counts = counts.groupby(group_columns, sort=False).head(top)
        else:
            counts = counts.head(top)
    _echo_table(counts.reset_index(drop=True))


@app.command()
def compare(
    corpus: List[str] = typer.Option(
        ..., "--corpus", help="Corpus as NAME=PATH; pass at least twice."
    ),
    reference: str | None = typer.Option(
        None, "--reference", "-r", help="Corpus every other corpus is compared to."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    stopwords: str | None = typer.Option(
        None,
        "--stopwords",
        "-s",
        help="Stop word lexicon name, 'nltk', a file path, or 'none'.",
    ),
) -> None:
    """Compare token proportions across corpora."""
    cfg = load_config(config)
    _apply_stopword_override(cfg, stopwords)
    corpora_paths = _parse_corpus_options(corpus)
    if len(corpora_paths) < 2:
        raise typer.BadParameter("Pass --corpus at least twice.")
    tables = {
        name: _filtered_table(path, cfg) for name, path in corpora_paths.items()
    }
    try:
        comparison = compare_frequencies(
            tables, column=cfg.output_column, reference=reference
        )
    except (TidyCorpusError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo_table(comparison)
    if reference is not None:
        correlations = frequency_correlation(
            comparison, reference, column=cfg.output_column
        )
        typer.echo("")
        typer.echo(json.dumps(correlations.to_dict(), indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = TidyCorpusConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _apply_tokenizer_overrides(
    config: TidyCorpusConfig,
    token: str | None,
    n: int | None,
    n_min: int | None,
    pattern: str | None,
    to_lower: bool | None,
    chapter_pattern: str | None,
    collapse: List[str] | None = None,
) -> None:
    """Apply CLI overrides to tokenizer-related config fields when provided."""
    if token:
        config.token = token
    if n is not None:
        config.n = n
    if n_min is not None:
        config.n_min = n_min
    if pattern is not None:
        config.pattern = pattern
    if to_lower is not None:
        config.to_lower = to_lower
    if chapter_pattern:
        config.chapter_pattern = chapter_pattern
    if collapse:
        config.collapse = list(collapse)


def _apply_stopword_override(config: TidyCorpusConfig, stopwords: str | None) -> None:
    if stopwords is None:
        return
    config.stopwords = None if stopwords.lower() == "none" else stopwords


def _parse_corpus_options(values: List[str]) -> Dict[str, Path]:
    """Turn NAME=PATH options into an ordered name -> path mapping."""
    corpora: Dict[str, Path] = {}
    for value in values:
        name, sep, raw_path = value.partition("=")
        if not sep or not name or not raw_path:
            raise typer.BadParameter(f"Expected NAME=PATH, got '{value}'.")
        path = Path(raw_path)
        if not path.exists():
            raise typer.BadParameter(f"Corpus path does not exist: {path}")
        corpora[name] = path
    return corpora


def _tidy_table(input_path: Path, config: TidyCorpusConfig) -> pd.DataFrame:
    """Load documents under input_path and tokenize them per config."""
    records = records_from_documents(load_documents(input_path))
    try:
        if config.chapter_pattern:
            records = annotate_chapters(records, pattern=config.chapter_pattern)
        return unnest_tokens(
            records,
            output=config.output_column,
            token=config.build_policy(),
            to_lower=config.to_lower,
            collapse=_collapse_columns(config),
        )
    except TidyCorpusError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _collapse_columns(config: TidyCorpusConfig) -> List[str] | None:
    """Grouping columns for collapse; chapters stay apart when annotated."""
    if not config.collapse:
        return None
    if isinstance(config.collapse, str):
        columns = [config.collapse]
    else:
        columns = list(config.collapse)
    if config.chapter_pattern and "chapter" not in columns:
        columns.append("chapter")
    return columns


def _filtered_table(input_path: Path, config: TidyCorpusConfig) -> pd.DataFrame:
    """Tokenize input_path and drop stop words when a lexicon is configured."""
    tidy = _tidy_table(input_path, config)
    words = _resolve_stopwords(config)
    if words is None:
        return tidy
    return anti_join_stopwords(tidy, words, column=config.output_column)


def _resolve_stopwords(config: TidyCorpusConfig) -> StopWordSet | None:
    if not config.stopwords:
        return None
    try:
        return load_stopwords(config.stopwords, language=config.stopwords_language)
    except OSError as exc:
        raise typer.BadParameter(
            f"Unable to load stop words from '{config.stopwords}': {exc}"
        ) from exc


def _echo_table(table: pd.DataFrame) -> None:
    typer.echo(table.to_csv(sep="\t", index=False), nl=False)


if __name__ == "__main__":
    main()

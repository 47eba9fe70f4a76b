from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

import pandas as pd

from .errors import require_columns
from .policies import Policy, Word, resolve_policy
from .tokenization import normalize_case, segment

LOGGER = logging.getLogger(__name__)


def unnest_tokens(
    records: pd.DataFrame,
    output: str = "word",
    input: str = "text",
    token: Policy | str = Word(),
    to_lower: bool = True,
    drop: bool = True,
    collapse: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Split a text column into one row per token.

    Parameters
    ----------
    records:
        Table holding one text column plus any metadata columns.
    output:
        Name of the token column in the result.
    input:
        Name of the text column to segment.
    token:
        A segmentation policy or its name (``"words"``, ``"ngrams"``, ...).
    to_lower:
        Lowercase every token.
    drop:
        Remove the text column from the result.
    collapse:
        Join the text of consecutive rows sharing these column values before
        segmenting. Only these columns are carried into the result.

    Returns
    -------
    A new table with the metadata columns of ``records`` followed by the token
    column. Metadata values are repeated once per token of their source row and
    rows keep their input order. ``records`` is not modified.
    """
    require_columns(records.columns, input)
    policy = resolve_policy(token)
    if collapse:
        group_columns = [column for column in collapse if column != input]
        require_columns(records.columns, *group_columns)
        records = _collapse_rows(records, input, group_columns)

    token_lists = [_row_tokens(value, policy, to_lower) for value in records[input]]
    counts = [len(tokens) for tokens in token_lists]
    flat = [token_text for tokens in token_lists for token_text in tokens]

    keep = [
        column
        for column in records.columns
        if column != output and not (drop and column == input)
    ]
    metadata = records.loc[:, keep].reset_index(drop=True)
    tidy = metadata.loc[metadata.index.repeat(counts)].reset_index(drop=True)
    tidy[output] = pd.Series(flat, dtype=object)

    LOGGER.debug(
        "Tokenized %d rows into %d tokens using %r", len(records), len(flat), policy
    )
    return tidy


def _row_tokens(value: Any, policy: Policy, to_lower: bool) -> List[str]:
    tokens = segment(_as_text(value), policy)
    if to_lower:
        return [normalize_case(token_text) for token_text in tokens]
    return tokens


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if _is_missing(value):
        return ""
    return str(value)


def _collapse_rows(
    records: pd.DataFrame, input: str, group_columns: List[str]
) -> pd.DataFrame:
    groups: List[Tuple[Tuple[Any, ...], List[str]]] = []
    keys = records.loc[:, group_columns].itertuples(index=False, name=None)
    for key, value in zip(keys, records[input]):
        text = _as_text(value)
        if groups and _same_key(groups[-1][0], key):
            groups[-1][1].append(text)
        else:
            groups.append((key, [text]))

    data: dict[str, list[Any]] = {
        column: [key[idx] for key, _ in groups]
        for idx, column in enumerate(group_columns)
    }
    # Empty rows stay in so blank lines still separate paragraphs.
    data[input] = ["\n".join(parts) for _, parts in groups]
    return pd.DataFrame(data, columns=[*group_columns, input])


def _same_key(left: Tuple[Any, ...], right: Tuple[Any, ...]) -> bool:
    """Compare group keys, treating missing values as equal to each other."""
    for a, b in zip(left, right):
        a_missing, b_missing = _is_missing(a), _is_missing(b)
        if a_missing or b_missing:
            if not (a_missing and b_missing):
                return False
        elif a != b:
            return False
    return True


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and bool(pd.isna(value)))

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from .errors import MissingField, require_columns

LOGGER = logging.getLogger(__name__)


def count_tokens(
    table: pd.DataFrame,
    column: str = "word",
    by: str | Sequence[str] | None = None,
    sort: bool = True,
) -> pd.DataFrame:
    """
    Count token occurrences, optionally per group.

    Returns a ``[*by, column, n]`` table. With ``sort`` rows are ordered by
    descending ``n``; ties keep the order in which tokens first appeared.
    """
    group_columns = [*_as_list(by), column]
    require_columns(table.columns, *group_columns)
    counts = (
        table.groupby(group_columns, sort=False, dropna=False)
        .size()
        .reset_index(name="n")
    )
    if sort:
        counts = counts.sort_values("n", ascending=False, kind="mergesort")
    return counts.reset_index(drop=True)


def add_proportions(
    counts: pd.DataFrame, by: str | Sequence[str] | None = None
) -> pd.DataFrame:
    """Return a copy of ``counts`` with ``proportion = n / sum(n)`` per group."""
    group_columns = _as_list(by)
    require_columns(counts.columns, "n", *group_columns)
    result = counts.copy()
    if group_columns:
        totals = result.groupby(group_columns, sort=False)["n"].transform("sum")
    else:
        totals = result["n"].sum()
    result["proportion"] = result["n"] / totals
    return result


def compare_frequencies(
    corpora: Mapping[str, pd.DataFrame],
    column: str = "word",
    reference: str | None = None,
) -> pd.DataFrame:
    """
    Outer-join per-corpus token proportions on the token column.

    The wide result has the token column plus one proportion column per
    corpus, in mapping order, sorted by token. Tokens a corpus never uses get
    a proportion of 0.0 there. When ``reference`` names a corpus the result is
    reshaped to ``[column, reference, corpus, proportion]`` rows pairing the
    reference proportion with every other corpus.
    """
    names = list(corpora)
    if not names:
        raise ValueError("compare_frequencies needs at least one corpus.")
    if column in names:
        raise ValueError(f"Corpus name '{column}' clashes with the token column.")
    if reference is not None and reference not in names:
        raise MissingField(reference, names)

    frames: List[pd.DataFrame] = []
    for name in names:
        proportions = add_proportions(
            count_tokens(corpora[name], column=column, sort=False)
        )
        frames.append(
            proportions.loc[:, [column, "proportion"]].rename(
                columns={"proportion": name}
            )
        )
    wide = frames[0]
    for frame in frames[1:]:
        wide = wide.merge(frame, on=column, how="outer")

    wide = wide.fillna({name: 0.0 for name in names})
    wide = wide.sort_values(column, kind="mergesort").reset_index(drop=True)
    LOGGER.debug("Compared %d corpora over %d distinct tokens", len(names), len(wide))
    if reference is None:
        return wide

    others = [name for name in names if name != reference]
    return wide.melt(
        id_vars=[column, reference],
        value_vars=others,
        var_name="corpus",
        value_name="proportion",
    )


def frequency_correlation(
    comparison: pd.DataFrame, reference: str, column: str = "word"
) -> pd.Series:
    """
    Pearson correlation between the reference proportions and each corpus.

    Accepts either shape returned by :func:`compare_frequencies`.
    """
    require_columns(comparison.columns, reference)
    values: Dict[str, float] = {}
    if "corpus" in comparison.columns:
        require_columns(comparison.columns, "proportion")
        for name, group in comparison.groupby("corpus", sort=False):
            values[str(name)] = float(group[reference].corr(group["proportion"]))
    else:
        for name in comparison.columns:
            if name in (column, reference):
                continue
            values[str(name)] = float(
                comparison[reference].corr(comparison[name])
            )
    return pd.Series(values, name="correlation", dtype="float64")


def _as_list(columns: str | Sequence[str] | None) -> List[str]:
    if columns is None:
        return []
    if isinstance(columns, str):
        return [columns]
    return list(columns)

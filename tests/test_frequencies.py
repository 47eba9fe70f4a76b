import pandas as pd
import pytest

from tidy_corpus.errors import MissingField
from tidy_corpus.frequencies import (
    add_proportions,
    compare_frequencies,
    count_tokens,
    frequency_correlation,
)


def _words(*tokens: str) -> pd.DataFrame:
    return pd.DataFrame({"word": list(tokens)})


def test_count_tokens_sorted_by_descending_count():
    counts = count_tokens(_words("b", "a", "b", "c", "a", "b"))
    assert list(counts.columns) == ["word", "n"]
    assert counts["word"].tolist() == ["b", "a", "c"]
    assert counts["n"].tolist() == [3, 2, 1]


def test_count_tokens_ties_keep_first_appearance():
    counts = count_tokens(_words("x", "y", "z", "y", "x"))
    assert counts["word"].tolist() == ["x", "y", "z"]


def test_count_tokens_per_group():
    tidy = pd.DataFrame({"book": ["A", "A", "B"], "word": ["w", "w", "w"]})
    counts = count_tokens(tidy, by="book")
    assert list(counts.columns) == ["book", "word", "n"]
    assert list(counts.itertuples(index=False, name=None)) == [
        ("A", "w", 2),
        ("B", "w", 1),
    ]


def test_count_tokens_missing_column():
    with pytest.raises(MissingField):
        count_tokens(_words("a"), by="book")


def test_add_proportions():
    counts = pd.DataFrame({"word": ["a", "b"], "n": [3, 1]})
    result = add_proportions(counts)
    assert result["proportion"].tolist() == [0.75, 0.25]
    assert "proportion" not in counts.columns


def test_add_proportions_per_group():
    counts = pd.DataFrame(
        {"book": ["A", "A", "B"], "word": ["x", "y", "x"], "n": [1, 3, 5]}
    )
    result = add_proportions(counts, by="book")
    assert result.groupby("book")["proportion"].sum().tolist() == pytest.approx(
        [1.0, 1.0]
    )
    assert result["proportion"].tolist() == pytest.approx([0.25, 0.75, 1.0])


def test_compare_frequencies_outer_joins_with_zero_fill():
    wide = compare_frequencies(
        {"austen": _words("a", "a", "b"), "bronte": _words("a", "c")}
    )
    assert list(wide.columns) == ["word", "austen", "bronte"]
    assert wide["word"].tolist() == ["a", "b", "c"]
    assert wide["austen"].tolist() == pytest.approx([2 / 3, 1 / 3, 0.0])
    assert wide["bronte"].tolist() == pytest.approx([0.5, 0.0, 0.5])


def test_compare_frequencies_long_form_against_reference():
    comparison = compare_frequencies(
        {
            "austen": _words("a", "a", "b"),
            "bronte": _words("a", "c"),
            "wells": _words("d"),
        },
        reference="austen",
    )
    assert list(comparison.columns) == ["word", "austen", "corpus", "proportion"]
    assert comparison["corpus"].unique().tolist() == ["bronte", "wells"]
    assert len(comparison) == 2 * 4
    wells = comparison[comparison["corpus"] == "wells"].set_index("word")
    assert wells.loc["d", "proportion"] == 1.0
    assert wells.loc["d", "austen"] == 0.0


def test_compare_frequencies_validation():
    with pytest.raises(ValueError):
        compare_frequencies({})
    with pytest.raises(MissingField):
        compare_frequencies({"austen": _words("a")}, reference="bronte")
    with pytest.raises(ValueError):
        compare_frequencies({"word": _words("a")})


def test_frequency_correlation_long_and_wide():
    corpora = {
        "austen": _words("a", "a", "b"),
        "bronte": _words("a", "a", "b", "a", "a", "b"),
        "wells": _words("c"),
    }
    long_form = compare_frequencies(corpora, reference="austen")
    correlations = frequency_correlation(long_form, "austen")
    assert correlations.index.tolist() == ["bronte", "wells"]
    assert correlations["bronte"] == pytest.approx(1.0)
    assert correlations["wells"] < 0

    wide = compare_frequencies(corpora)
    wide_correlations = frequency_correlation(wide, "austen")
    assert wide_correlations.to_dict() == pytest.approx(correlations.to_dict())

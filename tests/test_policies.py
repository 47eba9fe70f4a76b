import dataclasses
import re

import pandas as pd
import pytest

from tidy_corpus.errors import InvalidPolicy
from tidy_corpus.policies import (
    CharacterShingles,
    Line,
    NGram,
    Regex,
    Word,
    parse_policy,
    policy_parameters,
    resolve_policy,
)


@pytest.mark.parametrize("kwargs", [{"n": 0}, {"n": -2}, {"n": True}, {"n": 2.0}])
def test_ngram_rejects_bad_sizes(kwargs):
    with pytest.raises(InvalidPolicy):
        NGram(**kwargs)


def test_ngram_accepts_integers_read_from_a_table():
    size = pd.Series([3, 1]).iloc[0]
    assert NGram(n=size, n_min=pd.Series([1]).iloc[0]).n == 3
    assert CharacterShingles(n=size).n == 3


def test_ngram_rejects_n_min_above_n():
    with pytest.raises(InvalidPolicy):
        NGram(n=2, n_min=3)
    with pytest.raises(InvalidPolicy):
        CharacterShingles(n=3, n_min=0)


def test_regex_rejects_invalid_patterns():
    with pytest.raises(InvalidPolicy) as excinfo:
        Regex("(")
    assert isinstance(excinfo.value.__cause__, re.error)
    with pytest.raises(InvalidPolicy):
        Regex("")


def test_invalid_policy_is_a_value_error():
    assert issubclass(InvalidPolicy, ValueError)


def test_policies_are_immutable():
    policy = NGram(n=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.n = 4  # type: ignore[misc]


def test_parse_policy_by_name():
    assert parse_policy("ngrams", n=3) == NGram(n=3)
    assert parse_policy("Words") == Word()
    assert parse_policy("line") == Line()
    assert parse_policy("regex", pattern=";") == Regex(";")


def test_parse_policy_rejects_unknown_names_and_params():
    with pytest.raises(InvalidPolicy):
        parse_policy("tweets")
    with pytest.raises(InvalidPolicy):
        parse_policy("lines", n=2)
    with pytest.raises(InvalidPolicy):
        parse_policy("regex")


def test_policy_parameters():
    assert policy_parameters("ngrams") == {"n", "n_min"}
    assert policy_parameters("sentences") == frozenset()


def test_resolve_policy():
    policy = NGram(n=2)
    assert resolve_policy(policy) is policy
    assert resolve_policy("words") == Word()
    with pytest.raises(InvalidPolicy):
        resolve_policy(42)  # type: ignore[arg-type]

from pathlib import Path

import pytest

from tidy_corpus.config import TidyCorpusConfig, config_from_dict, load_config
from tidy_corpus.errors import InvalidPolicy
from tidy_corpus.policies import NGram, Regex, Word


def test_load_config_defaults():
    cfg = load_config()
    assert cfg == TidyCorpusConfig()
    assert cfg.token == "words"
    assert cfg.stopwords == "snowball"


def test_config_from_yaml_ignores_unknown_keys(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("token: ngrams\nn: 3\nunknown: 1\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.token == "ngrams"
    assert cfg.n == 3


def test_config_from_yaml_reads_collapse_columns(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("token: paragraphs\ncollapse:\n  - doc_id\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.collapse == ["doc_id"]
    assert TidyCorpusConfig().collapse is None


def test_config_from_yaml_requires_mapping(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- words\n- ngrams\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_build_policy_passes_only_accepted_parameters():
    assert config_from_dict({"token": "ngrams", "n": 3}).build_policy() == NGram(n=3)
    assert config_from_dict({"token": "words", "n": 3}).build_policy() == Word()
    assert (
        config_from_dict({"token": "regex", "pattern": ";"}).build_policy()
        == Regex(";")
    )


def test_build_policy_reports_invalid_settings():
    with pytest.raises(InvalidPolicy):
        config_from_dict({"token": "regex"}).build_policy()
    with pytest.raises(InvalidPolicy):
        config_from_dict({"token": "ngrams", "n": 0}).build_policy()


def test_to_dict_round_trips():
    cfg = TidyCorpusConfig(token="sentences", to_lower=False, collapse=["doc_id"])
    assert config_from_dict(cfg.to_dict()) == cfg

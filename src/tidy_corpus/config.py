from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .policies import Policy, parse_policy, policy_parameters


@dataclass(slots=True)
class TidyCorpusConfig:
    """Configuration options for tokenizing and counting a corpus."""

    token: str = "words"
    n: int = 2
    n_min: int | None = None
    pattern: str | None = None
    to_lower: bool = True
    output_column: str = "word"
    stopwords: str | None = "snowball"
    stopwords_language: str = "english"
    chapter_pattern: str | None = None
    collapse: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def build_policy(self) -> Policy:
        """Build the segmentation policy named by ``token``."""
        accepted = policy_parameters(self.token)
        candidates: dict[str, Any] = {"n": self.n, "n_min": self.n_min}
        if self.pattern is not None:
            candidates["pattern"] = self.pattern
        params = {key: value for key, value in candidates.items() if key in accepted}
        return parse_policy(self.token, **params)


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(TidyCorpusConfig)}
    return {key: data[key] for key in data if key in allowed}


def config_from_dict(data: Mapping[str, Any] | None) -> TidyCorpusConfig:
    """Build a TidyCorpusConfig from a dictionary-like input."""
    if data is None:
        return TidyCorpusConfig()
    return TidyCorpusConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> TidyCorpusConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> TidyCorpusConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return TidyCorpusConfig()
    return config_from_yaml(path)

"""
Configuration models and YAML loading.

Example config.yaml:
  data_dir: data
  cache_path: data/local_cache.json
  log_level: INFO
  puzzle:
    size_policy: fixed
    size: 15
    directions: [E, S, SE, NE]
    max_attempts: 100
    seed: 42
  wordlists:
    model: gpt-4o-mini
    temperature: 0.7
    max_tokens: 1024
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .puzzle.models import PuzzleConfig


class WordListConfig(BaseModel):
    """Settings for AI word-list suggestions."""
    model_config = ConfigDict(extra='allow')

    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: Optional[int] = 1024
    # Additional kwargs are allowed and passed to LiteLLM


class AppConfig(BaseModel):
    """Top-level application configuration."""
    data_dir: Path = Path("data")
    cache_path: Optional[Path] = None
    log_level: str = "WARNING"
    puzzle: PuzzleConfig = Field(default_factory=PuzzleConfig)
    wordlists: WordListConfig = Field(default_factory=WordListConfig)

    @property
    def resolved_cache_path(self) -> Path:
        """Cache file location (defaults to a file inside data_dir)."""
        return self.cache_path or self.data_dir / "local_cache.json"


def load_config(config_path: str | Path) -> AppConfig:
    """Load application configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)

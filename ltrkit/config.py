#!/usr/bin/env python3
"""
Configuration
=============
Explicit configuration values for training and generation.

Fields left as None are filled from the `train` and `generate` sections
of app.yaml, so a config object always carries every value the core
operations need and nothing is read from global state afterwards.
"""

from dataclasses import dataclass
from typing import Optional

from .settings import get_setting


def _missing(section: str, values) -> None:
    missing = [name for name, value in values if value is None]
    if missing:
        raise ValueError(f"{section} settings missing in app.yaml: {', '.join(missing)}")


@dataclass
class TrainConfig:
    """Corpus tokenization settings."""
    comment_char: Optional[str] = None      # Rest of a token after this is ignored
    max_token_length: Optional[int] = None  # Longer tokens are split
    min_length: Optional[int] = None        # Shorter cleaned tokens are skipped

    def __post_init__(self):
        cfg = get_setting("train", {}) or {}
        if self.comment_char is None:
            self.comment_char = cfg.get("comment_char")
        if self.max_token_length is None:
            self.max_token_length = cfg.get("max_token_length")
        if self.min_length is None:
            self.min_length = cfg.get("min_length")

        _missing("train", (
            ("comment_char", self.comment_char),
            ("max_token_length", self.max_token_length),
            ("min_length", self.min_length),
        ))
        if self.max_token_length < 1:
            raise ValueError("max_token_length must be positive")
        # start/end counting reads three symbols
        if self.min_length < 3:
            raise ValueError("min_length must be at least 3")


@dataclass
class GenerateConfig:
    """Name generation settings."""
    count: Optional[int] = None
    seed: Optional[int] = None              # None = seed from settings, else fresh entropy
    max_restarts: Optional[int] = None      # Whole-name attempts before GenerationImpossible
    max_name_length: Optional[int] = None
    fix: Optional[bool] = None              # Repair corrupt tables on load

    def __post_init__(self):
        cfg = get_setting("generate", {}) or {}
        if self.count is None:
            self.count = cfg.get("count")
        if self.seed is None:
            self.seed = cfg.get("seed")
        if self.max_restarts is None:
            self.max_restarts = cfg.get("max_restarts")
        if self.max_name_length is None:
            self.max_name_length = cfg.get("max_name_length")
        if self.fix is None:
            self.fix = cfg.get("fix")

        _missing("generate", (
            ("count", self.count),
            ("max_restarts", self.max_restarts),
            ("max_name_length", self.max_name_length),
            ("fix", self.fix),
        ))
        if self.max_restarts < 1:
            raise ValueError("max_restarts must be positive")
        if self.max_name_length < 3:
            raise ValueError("max_name_length must be at least 3")


__all__ = ['TrainConfig', 'GenerateConfig']

#!/usr/bin/env python3
"""
LTR Trainer
===========
Builds an .ltr table from a corpus of example names.

Each accepted name contributes raw counts at every order:
- its first symbols to the start rows,
- its last symbols to the end rows,
- every inner window to the middle rows.

Counts are then normalized per (context, slot) into float32 CDFs. The
cumulative sum runs left to right in symbol index order and skips symbols
that were never observed, so those stay at 0.0 and the last observed
symbol of a row ends at 1.0.

Usage:
    trainer = LtrTrainer()
    table = trainer.train(open('names.txt'))
    print(trainer.report.accepted, trainer.report.warnings)
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from .alphabet import index_of, is_symbol
from .config import TrainConfig
from .table import (
    DTYPE,
    DOUBLES_SHAPE,
    SINGLES_SHAPE,
    TRIPLES_SHAPE,
    LtrTable,
    Slot,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Tokenizing
# =============================================================================

def iter_tokens(source: Union[str, Iterable[str]], max_length: int = 255) -> Iterator[str]:
    """
    Split a corpus into whitespace-delimited tokens.

    Args:
        source: A string, or an iterable of strings such as a list of
                names or an open text file
        max_length: Tokens longer than this are split into consecutive
                    pieces of at most this length

    Yields:
        Raw tokens, in corpus order
    """
    if isinstance(source, str):
        source = [source]

    for chunk in source:
        for token in chunk.split():
            for start in range(0, len(token), max_length):
                yield token[start:start + max_length]


def clean_token(token: str, comment_char: str = '#') -> Tuple[str, List[str]]:
    """
    Lowercase a token, cut it at the comment character and drop
    characters outside the alphabet.

    Returns:
        Tuple of (cleaned token, list of dropped characters)
    """
    if comment_char:
        token = token.split(comment_char, 1)[0]

    kept = []
    dropped = []
    for char in token.lower():
        if is_symbol(char):
            kept.append(char)
        else:
            dropped.append(char)
    return ''.join(kept), dropped


# =============================================================================
# Counting
# =============================================================================

@dataclass
class TrainingCounts:
    """Raw observation counts, same layout as the table."""
    singles: np.ndarray = field(default_factory=lambda: np.zeros(SINGLES_SHAPE, dtype=np.int64))
    doubles: np.ndarray = field(default_factory=lambda: np.zeros(DOUBLES_SHAPE, dtype=np.int64))
    triples: np.ndarray = field(default_factory=lambda: np.zeros(TRIPLES_SHAPE, dtype=np.int64))

    def add(self, word: str) -> None:
        """Count one cleaned word of at least three symbols."""
        w = [index_of(char) for char in word]
        n = len(w)
        if n < 3:
            raise ValueError(f"Word must have at least 3 symbols: {word!r}")

        self.singles[Slot.START, w[0]] += 1
        self.doubles[w[0], Slot.START, w[1]] += 1
        self.triples[w[0], w[1], Slot.START, w[2]] += 1

        self.singles[Slot.END, w[n - 1]] += 1
        self.doubles[w[n - 2], Slot.END, w[n - 1]] += 1
        self.triples[w[n - 3], w[n - 2], Slot.END, w[n - 1]] += 1

        for i in range(1, n - 3):
            self.singles[Slot.MIDDLE, w[i]] += 1
            self.doubles[w[i], Slot.MIDDLE, w[i + 1]] += 1
            self.triples[w[i], w[i + 1], Slot.MIDDLE, w[i + 2]] += 1


def normalize(counts: np.ndarray) -> np.ndarray:
    """
    Turn raw counts into CDFs along the last axis.

    Each count is divided by its row total in float32, then summed left to
    right in float32. Unobserved symbols stay 0.0; rows with no
    observations stay all-zero.
    """
    totals = counts.sum(axis=-1, keepdims=True)
    observed = counts > 0

    probs = np.zeros(counts.shape, dtype=DTYPE)
    np.divide(
        counts.astype(DTYPE),
        np.broadcast_to(totals.astype(DTYPE), counts.shape),
        out=probs,
        where=observed,
    )
    # add.accumulate is sequential; zero entries leave the running sum unchanged
    cdf = np.add.accumulate(probs, axis=-1, dtype=DTYPE)
    cdf[~observed] = 0.0
    return cdf


# =============================================================================
# Trainer
# =============================================================================

MAX_STORED_WARNINGS = 100


@dataclass
class TrainingReport:
    """
    What happened to the tokens of a training run.

    Every warning is logged, but only the first MAX_STORED_WARNINGS are
    kept in `warnings`; the rest are counted in `suppressed`.
    """
    tokens: int = 0
    accepted: int = 0
    too_short: int = 0
    dropped_chars: int = 0
    warnings: List[str] = field(default_factory=list)
    suppressed: int = 0

    def warn(self, message: str) -> None:
        logger.warning(message)
        if len(self.warnings) < MAX_STORED_WARNINGS:
            self.warnings.append(message)
        else:
            self.suppressed += 1


class LtrTrainer:
    """Trains .ltr tables on name corpora"""

    def __init__(self, config: Optional[TrainConfig] = None):
        self.config = config or TrainConfig()
        self.reset()

    def reset(self) -> None:
        """Discard all counts and the report."""
        self.counts = TrainingCounts()
        self.report = TrainingReport()

    def add_token(self, token: str) -> bool:
        """
        Clean and count one raw token.

        Returns:
            True if the token was counted, False if it was skipped
        """
        self.report.tokens += 1
        word, dropped = clean_token(token, self.config.comment_char)

        for char in dropped:
            self.report.dropped_chars += 1
            self.report.warn(
                f"Invalid character {char!r} (U+{ord(char):04X}) in name "
                f"{token!r}. Skipping character."
            )

        if len(word) < self.config.min_length:
            self.report.too_short += 1
            self.report.warn(f"Name {word!r} is too short. Skipping name.")
            return False

        self.counts.add(word)
        self.report.accepted += 1
        return True

    def feed(self, source: Union[str, Iterable[str]]) -> None:
        """Count every token of a corpus."""
        for token in iter_tokens(source, self.config.max_token_length):
            self.add_token(token)

    def build(self) -> LtrTable:
        """Normalize the current counts into a new table."""
        table = LtrTable(
            singles=normalize(self.counts.singles),
            doubles=normalize(self.counts.doubles),
            triples=normalize(self.counts.triples),
        )
        logger.info(
            f"Trained on {self.report.accepted} of {self.report.tokens} names"
        )
        return table

    def train(self, source: Union[str, Iterable[str]]) -> LtrTable:
        """Train a fresh table on a corpus"""
        self.reset()
        self.feed(source)
        return self.build()


def train(source: Union[str, Iterable[str]], config: Optional[TrainConfig] = None) -> LtrTable:
    """Train a table on a corpus with a throwaway trainer."""
    return LtrTrainer(config).train(source)


__all__ = [
    'MAX_STORED_WARNINGS',
    'LtrTrainer',
    'TrainingCounts',
    'TrainingReport',
    'clean_token',
    'iter_tokens',
    'normalize',
    'train',
]

#!/usr/bin/env python3
"""
LTR Table
=========
In-memory model of an .ltr Markov chain table.

For every context of 0, 1 or 2 preceding symbols the table holds one CDF:
three rows of NUM_LETTERS float32 values giving the cumulative probability
of each symbol at the start, in the middle, or at the end of a name.

    singles   (3, 28)           no preceding symbol
    doubles   (28, 3, 28)       indexed by the preceding symbol
    triples   (28, 28, 3, 28)   indexed by the two preceding symbols

A value of 0.0 means the symbol never occurs in that context and slot;
it is not a point of the CDF. For an observed context the last nonzero
value of each row is 1.0 (within rounding).
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Tuple

import numpy as np

from .alphabet import LETTERS, NUM_LETTERS, index_of

DTYPE = np.dtype('<f4')

SINGLES_SHAPE = (3, NUM_LETTERS)
DOUBLES_SHAPE = (NUM_LETTERS, 3, NUM_LETTERS)
TRIPLES_SHAPE = (NUM_LETTERS, NUM_LETTERS, 3, NUM_LETTERS)

VALUE_COUNT = (
    int(np.prod(SINGLES_SHAPE))
    + int(np.prod(DOUBLES_SHAPE))
    + int(np.prod(TRIPLES_SHAPE))
)


class Slot(IntEnum):
    """Position within a name a CDF row scores for."""
    START = 0
    MIDDLE = 1
    END = 2


@dataclass(eq=False)
class LtrTable:
    """Singles, doubles and triples CDFs of an .ltr file."""
    singles: np.ndarray
    doubles: np.ndarray
    triples: np.ndarray

    def __post_init__(self):
        for name, shape in (
            ('singles', SINGLES_SHAPE),
            ('doubles', DOUBLES_SHAPE),
            ('triples', TRIPLES_SHAPE),
        ):
            arr = np.asarray(getattr(self, name), dtype=DTYPE)
            if arr.shape != shape:
                raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
            setattr(self, name, arr)

    @classmethod
    def zeros(cls) -> 'LtrTable':
        """Create an all-zero table."""
        return cls(
            singles=np.zeros(SINGLES_SHAPE, dtype=DTYPE),
            doubles=np.zeros(DOUBLES_SHAPE, dtype=DTYPE),
            triples=np.zeros(TRIPLES_SHAPE, dtype=DTYPE),
        )

    def copy(self) -> 'LtrTable':
        return LtrTable(
            singles=self.singles.copy(),
            doubles=self.doubles.copy(),
            triples=self.triples.copy(),
        )

    def cdf(self, context: str = '') -> np.ndarray:
        """
        Get the (3, NUM_LETTERS) CDF for a context.

        Args:
            context: The 0, 1 or 2 symbols preceding the predicted one

        Returns:
            A view into the table; rows are indexed by Slot
        """
        if len(context) == 0:
            return self.singles
        if len(context) == 1:
            return self.doubles[index_of(context)]
        if len(context) == 2:
            return self.triples[index_of(context[0]), index_of(context[1])]
        raise ValueError(f"Context must have at most 2 symbols, got {context!r}")

    def iter_cdfs(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield (context, cdf) for every context in file order."""
        yield '', self.singles
        for i, first in enumerate(LETTERS):
            yield first, self.doubles[i]
        for i, first in enumerate(LETTERS):
            for j, second in enumerate(LETTERS):
                yield first + second, self.triples[i, j]

    def __eq__(self, other) -> bool:
        if not isinstance(other, LtrTable):
            return NotImplemented
        return (
            self.singles.tobytes() == other.singles.tobytes()
            and self.doubles.tobytes() == other.doubles.tobytes()
            and self.triples.tobytes() == other.triples.tobytes()
        )

    __hash__ = None


__all__ = [
    'LtrTable',
    'Slot',
    'DTYPE',
    'VALUE_COUNT',
    'SINGLES_SHAPE',
    'DOUBLES_SHAPE',
    'TRIPLES_SHAPE',
]

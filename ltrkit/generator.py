#!/usr/bin/env python3
"""
LTR Name Generator
==================
Samples names from an .ltr table the way the game's GetRandomName() does.

1. Pick the first three symbols from the start rows of the singles,
   doubles and triples CDFs.
2. Repeatedly extend the name from the triples CDF of its last two
   symbols. Before each step an end is tried with a chance that grows
   with the name's length (random 0-11 <= length); otherwise, or if the
   end row has no match, a middle symbol is drawn.
3. A context with no match is a dead end: the last symbol is dropped
   and the step retried. Below three symbols, or after more than 100
   dead ends, the whole attempt starts over.

Sampling is by inversion: the first symbol whose CDF value exceeds the
uniform draw wins. Rows are compared as Python floats so the draw keeps
its full precision.
"""

import logging
import random
import secrets
from typing import List, Optional, Protocol, Sequence

from .alphabet import LETTERS
from .config import GenerateConfig
from .errors import GenerationImpossible
from .table import LtrTable, Slot

logger = logging.getLogger(__name__)

MAX_DEAD_ENDS = 100
MIN_NAME_LENGTH = 3
END_ROLL_MAX = 11


class RandomSource(Protocol):
    """Anything that can stand in for random.Random."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


def make_rng(seed: Optional[int] = None) -> RandomSource:
    """
    Create a random source.

    A seed gives a reproducible random.Random; without one the system
    CSPRNG is used.
    """
    if seed is None:
        return secrets.SystemRandom()
    return random.Random(seed)


def first_crossing(row: Sequence[float], p: float) -> Optional[int]:
    """Index of the first CDF value greater than p, or None."""
    for i, value in enumerate(row):
        if p < value:
            return i
    return None


class LtrGenerator:
    """Generates names from a loaded table"""

    def __init__(self,
                 table: LtrTable,
                 rng: Optional[RandomSource] = None,
                 config: Optional[GenerateConfig] = None):
        """
        Args:
            table: Table to sample from; only read
            rng: Random source (default: make_rng(config.seed))
            config: Restart and length limits
        """
        self.config = config or GenerateConfig()
        self.rng = rng if rng is not None else make_rng(self.config.seed)

        self._singles = table.singles.tolist()
        self._doubles = table.doubles.tolist()
        self._triples = table.triples.tolist()

    def _attempt(self) -> Optional[str]:
        """One generation attempt; None on a restart condition."""
        rng = self.rng

        a = first_crossing(self._singles[Slot.START], rng.random())
        if a is None:
            return None
        b = first_crossing(self._doubles[a][Slot.START], rng.random())
        if b is None:
            return None
        c = first_crossing(self._triples[a][b][Slot.START], rng.random())
        if c is None:
            return None

        name: List[int] = [a, b, c]
        dead_ends = 0

        while len(name) < self.config.max_name_length:
            cdf = self._triples[name[-2]][name[-1]]
            p = rng.random()

            if rng.randint(0, END_ROLL_MAX) <= len(name):
                i = first_crossing(cdf[Slot.END], p)
                if i is not None:
                    name.append(i)
                    return ''.join(LETTERS[j] for j in name).capitalize()

            i = first_crossing(cdf[Slot.MIDDLE], p)
            if i is not None:
                name.append(i)
                continue

            name.pop()
            if len(name) < MIN_NAME_LENGTH:
                return None
            dead_ends += 1
            if dead_ends > MAX_DEAD_ENDS:
                return None

        logger.debug(f"Name reached {self.config.max_name_length} symbols, restarting")
        return None

    def generate(self) -> str:
        """
        Generate a single name.

        Raises:
            GenerationImpossible: If max_restarts attempts all failed
        """
        for attempt in range(self.config.max_restarts):
            name = self._attempt()
            if name is not None:
                if attempt:
                    logger.debug(f"Generated {name!r} after {attempt} restarts")
                return name
        raise GenerationImpossible(self.config.max_restarts)

    def generate_batch(self, count: int, unique: bool = False) -> List[str]:
        """
        Generate multiple names.

        Args:
            count: Number of names to generate
            unique: Skip names already generated in this batch; may then
                    return fewer than count names

        Returns:
            List of generated names
        """
        if not unique:
            return [self.generate() for _ in range(count)]

        results = []
        seen = set()
        attempts = 0
        max_attempts = count * 20

        while len(results) < count and attempts < max_attempts:
            attempts += 1
            name = self.generate()
            if name.lower() not in seen:
                seen.add(name.lower())
                results.append(name)

        return results


def generate_one(table: LtrTable,
                 rng: Optional[RandomSource] = None,
                 config: Optional[GenerateConfig] = None) -> str:
    """Generate one name from a table."""
    return LtrGenerator(table, rng, config).generate()


__all__ = [
    'LtrGenerator',
    'RandomSource',
    'first_crossing',
    'generate_one',
    'make_rng',
    'MAX_DEAD_ENDS',
]

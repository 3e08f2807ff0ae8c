"""
Tests for the Name Generator
============================
Tests for sampling, dead-end handling and reproducibility in
ltrkit/generator.py.
"""

import itertools
import random

import pytest

from ltrkit.alphabet import LETTERS, index_of
from ltrkit.config import GenerateConfig
from ltrkit.errors import GenerationImpossible
from ltrkit.generator import (
    LtrGenerator,
    MAX_DEAD_ENDS,
    first_crossing,
    generate_one,
    make_rng,
)
from ltrkit.table import LtrTable, Slot


class ScriptedRandom:
    """Random source replaying fixed values and counting draws."""

    def __init__(self, floats, ints):
        self._floats = itertools.cycle(floats)
        self._ints = itertools.cycle(ints)
        self.float_draws = 0
        self.int_draws = 0

    def random(self):
        self.float_draws += 1
        return next(self._floats)

    def randint(self, a, b):
        assert (a, b) == (0, 11)
        self.int_draws += 1
        return next(self._ints)


def set_point(row, symbol):
    """Make a CDF row select exactly one symbol."""
    row[:] = 0.0
    row[index_of(symbol)] = 1.0


@pytest.fixture
def abc_table():
    """Every name starts with 'abc'."""
    table = LtrTable.zeros()
    set_point(table.cdf('')[Slot.START], 'a')
    set_point(table.cdf('a')[Slot.START], 'b')
    set_point(table.cdf('ab')[Slot.START], 'c')
    return table


class TestFirstCrossing:
    """Tests for inversion sampling on a CDF row."""

    def test_strictly_greater(self):
        """p equal to a CDF value selects the next symbol."""
        assert first_crossing([0.0, 0.5, 1.0], 0.5) == 2
        assert first_crossing([0.0, 0.5, 1.0], 0.49) == 1

    def test_zero_entries_skipped(self):
        assert first_crossing([0.0, 0.0, 1.0], 0.0) == 2

    def test_no_crossing(self):
        assert first_crossing([0.0, 0.5, 0.0], 0.7) is None
        assert first_crossing([0.0] * 28, 0.0) is None


class TestAlgorithm:
    """Step-by-step behaviour with scripted randomness."""

    def test_end_after_start(self, abc_table):
        """A low end roll ends the name right after the start symbols."""
        set_point(abc_table.cdf('bc')[Slot.END], 'd')
        rng = ScriptedRandom([0.5], [0])

        assert LtrGenerator(abc_table, rng).generate() == "Abcd"
        assert rng.float_draws == 4
        assert rng.int_draws == 1

    def test_end_roll_compared_with_length(self, abc_table):
        """End is only tried when the roll is <= the current length."""
        set_point(abc_table.cdf('bc')[Slot.END], 'x')
        set_point(abc_table.cdf('bc')[Slot.MIDDLE], 'e')
        set_point(abc_table.cdf('ce')[Slot.END], 'f')

        # 4 > len("abc"): middle; then 4 <= len("abce"): end
        rng = ScriptedRandom([0.5], [4])
        assert LtrGenerator(abc_table, rng).generate() == "Abcef"

        # 3 <= len("abc"): end right away
        rng = ScriptedRandom([0.5], [3])
        assert LtrGenerator(abc_table, rng).generate() == "Abcx"

    def test_failed_end_falls_back_to_middle(self, abc_table):
        """An end row without a crossing does not stop the name."""
        set_point(abc_table.cdf('bc')[Slot.MIDDLE], 'e')
        set_point(abc_table.cdf('ce')[Slot.END], 'f')
        rng = ScriptedRandom([0.5], [0])
        assert LtrGenerator(abc_table, rng).generate() == "Abcef"

    def test_same_draw_used_for_end_and_middle(self, abc_table):
        """One p per step serves both the end and the middle lookup."""
        row = abc_table.cdf('bc')[Slot.END]
        row[index_of('d')] = 0.3
        set_point(abc_table.cdf('bc')[Slot.MIDDLE], 'e')
        set_point(abc_table.cdf('ce')[Slot.END], 'f')

        # p=0.5 misses the end row (0.3) and hits the middle row
        rng = ScriptedRandom([0.5], [0])
        assert LtrGenerator(abc_table, rng).generate() == "Abcef"

        rng = ScriptedRandom([0.1], [0])
        assert LtrGenerator(abc_table, rng).generate() == "Abcd"

    def test_restart_below_three_symbols(self, abc_table):
        """A dead end right after the start symbols restarts the attempt."""
        rng = ScriptedRandom([0.5], [11])
        gen = LtrGenerator(abc_table, rng, GenerateConfig(max_restarts=3))

        with pytest.raises(GenerationImpossible) as excinfo:
            gen.generate()

        assert excinfo.value.attempts == 3
        # 3 start draws + 1 failed step per attempt
        assert rng.float_draws == 3 * 4

    def test_dead_end_limit(self, abc_table):
        """More than 100 dead ends in one attempt restart it."""
        set_point(abc_table.cdf('bc')[Slot.MIDDLE], 'd')
        rng = ScriptedRandom([0.5], [11])
        gen = LtrGenerator(abc_table, rng, GenerateConfig(max_restarts=2))

        with pytest.raises(GenerationImpossible):
            gen.generate()

        # each cycle appends 'd' then drops it at the dead 'cd' context
        steps = 2 * (MAX_DEAD_ENDS + 1)
        assert rng.float_draws == 2 * (3 + steps)
        assert rng.int_draws == 2 * steps

    def test_dead_end_drops_last_symbol(self, abc_table):
        """After a dead end the shorter context is retried."""
        set_point(abc_table.cdf('bc')[Slot.MIDDLE], 'd')
        set_point(abc_table.cdf('bc')[Slot.END], 'z')
        # middle 'd' (roll 11), dead end at 'cd' (roll 11), then end 'z' (roll 0)
        rng = ScriptedRandom([0.5], [11, 11, 0])
        assert LtrGenerator(abc_table, rng).generate() == "Abcz"

    def test_start_failure_restarts(self, abc_table):
        """A draw past the last CDF value restarts from the first symbol."""
        abc_table.cdf('')[Slot.START, index_of('a')] = 0.9
        set_point(abc_table.cdf('bc')[Slot.END], 'd')
        rng = ScriptedRandom([0.95, 0.5, 0.5, 0.5, 0.5], [0])
        assert LtrGenerator(abc_table, rng).generate() == "Abcd"
        assert rng.float_draws == 5

    def test_name_length_cap(self, abc_table):
        """A name that never ends is abandoned at max_name_length."""
        for first in LETTERS:
            for second in LETTERS:
                set_point(abc_table.cdf(first + second)[Slot.MIDDLE], 'a')
        rng = ScriptedRandom([0.5], [0])
        config = GenerateConfig(max_restarts=2, max_name_length=10)

        with pytest.raises(GenerationImpossible):
            LtrGenerator(abc_table, rng, config).generate()
        assert rng.float_draws == 2 * (3 + 7)

    def test_empty_table(self):
        """A table without any start symbol cannot produce names."""
        with pytest.raises(GenerationImpossible):
            generate_one(LtrTable.zeros(), random.Random(1), GenerateConfig(max_restarts=50))


class TestTrainedGeneration:
    """Generation from a trained table."""

    def test_ten_thousand_names(self, trained_table):
        """Every name is non-empty, in the alphabet, and capitalized."""
        gen = LtrGenerator(trained_table, random.Random(2024))
        names = gen.generate_batch(10000)

        assert len(names) == 10000
        for name in names:
            assert len(name) >= 4
            assert name[0] == name[0].upper()
            assert all(char in LETTERS for char in name.lower())
            assert name[1:] == name[1:].lower()

    def test_seeded_reproducibility(self, trained_table):
        """Same seed and table give the same names."""
        first = LtrGenerator(trained_table, make_rng(42)).generate_batch(50)
        second = LtrGenerator(trained_table, make_rng(42)).generate_batch(50)
        assert first == second

    def test_seed_from_config(self, trained_table):
        config = GenerateConfig(seed=7)
        first = LtrGenerator(trained_table, config=config).generate_batch(20)
        second = LtrGenerator(trained_table, config=GenerateConfig(seed=7)).generate_batch(20)
        assert first == second

    def test_unique_batch(self, trained_table):
        names = LtrGenerator(trained_table, make_rng(3)).generate_batch(30, unique=True)
        assert len({n.lower() for n in names}) == len(names)
        assert 0 < len(names) <= 30

    def test_table_not_modified(self, table, trained_table):
        LtrGenerator(table, make_rng(1)).generate_batch(100)
        assert table == trained_table

    def test_generate_one(self, trained_table):
        assert generate_one(trained_table, make_rng(5)) == LtrGenerator(trained_table, make_rng(5)).generate()

    def test_unseeded_rng(self):
        rng = make_rng()
        assert 0.0 <= rng.random() < 1.0
        assert 0 <= rng.randint(0, 11) <= 11

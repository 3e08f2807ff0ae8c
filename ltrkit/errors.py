#!/usr/bin/env python3
"""
LTR Errors
==========
Exception hierarchy for loading, training and sampling .ltr tables.

All errors derive from LtrError so callers (the CLI in particular) can
catch the whole family in one place.
"""


class LtrError(Exception):
    """Base class for all ltrkit errors."""


class InvalidSymbol(LtrError, ValueError):
    """A character or index outside the 28-symbol alphabet."""

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"Invalid symbol {symbol!r}")


class FormatError(LtrError, ValueError):
    """Data does not follow the .ltr binary layout."""


class UnsupportedAlphabetSize(FormatError):
    """Header declares an alphabet size other than the supported one."""

    def __init__(self, declared: int, supported: int):
        self.declared = declared
        self.supported = supported
        super().__init__(
            f"File built for {declared} letters, only {supported} are supported"
        )


class TruncatedFile(FormatError):
    """Fewer bytes follow the header than the table requires."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unable to read the probability table: expected {expected} bytes, "
            f"got {actual}. Truncated file?"
        )


class GenerationImpossible(LtrError, RuntimeError):
    """No complete name could be sampled within the restart budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"No name could be generated after {attempts} attempts; "
            f"the table has no viable path"
        )


__all__ = [
    'LtrError',
    'InvalidSymbol',
    'FormatError',
    'UnsupportedAlphabetSize',
    'TruncatedFile',
    'GenerationImpossible',
]

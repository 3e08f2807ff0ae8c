#!/usr/bin/env python3
"""
Alphabet
========
The fixed 28-symbol alphabet of .ltr tables: the 26 lowercase letters,
apostrophe and hyphen, in table index order.
"""

import operator

from .errors import InvalidSymbol

LETTERS = "abcdefghijklmnopqrstuvwxyz'-"
NUM_LETTERS = len(LETTERS)

_INDEX = {letter: i for i, letter in enumerate(LETTERS)}


def index_of(symbol: str) -> int:
    """
    Return the table index of a symbol.

    Lookup is exact: callers lowercase before calling.

    Raises:
        InvalidSymbol: If the symbol is not in the alphabet
    """
    try:
        return _INDEX[symbol]
    except (KeyError, TypeError):
        raise InvalidSymbol(symbol) from None


def symbol_at(index: int) -> str:
    """Return the symbol at a table index."""
    try:
        i = operator.index(index)
    except TypeError:
        raise InvalidSymbol(index) from None
    if not 0 <= i < NUM_LETTERS:
        raise InvalidSymbol(index)
    return LETTERS[i]


def is_symbol(char: str) -> bool:
    return char in _INDEX


__all__ = ['LETTERS', 'NUM_LETTERS', 'index_of', 'symbol_at', 'is_symbol']

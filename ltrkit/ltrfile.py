#!/usr/bin/env python3
"""
LTR File Format
===============
Reads and writes the binary .ltr format.

Layout:
    bytes 0-7   magic "LTR V1.0"
    byte  8     alphabet size (must be 28)
    bytes 9-    little-endian float32 values: singles, then doubles
                per first symbol, then triples per symbol pair; each CDF
                as start, middle and end rows of 28 values

Bytes after the table are ignored.
"""

import logging
import struct
from pathlib import Path
from typing import Union

import numpy as np

from .alphabet import NUM_LETTERS
from .errors import FormatError, TruncatedFile, UnsupportedAlphabetSize
from .table import (
    DTYPE,
    DOUBLES_SHAPE,
    SINGLES_SHAPE,
    TRIPLES_SHAPE,
    VALUE_COUNT,
    LtrTable,
)

logger = logging.getLogger(__name__)

MAGIC = b"LTR V1.0"
HEADER = struct.Struct("<8sB")
TABLE_SIZE = VALUE_COUNT * DTYPE.itemsize
FILE_SIZE = HEADER.size + TABLE_SIZE

_SINGLES_END = int(np.prod(SINGLES_SHAPE))
_DOUBLES_END = _SINGLES_END + int(np.prod(DOUBLES_SHAPE))


def loads(data: bytes) -> LtrTable:
    """
    Parse an .ltr table from bytes.

    Raises:
        FormatError: Missing or wrong magic tag
        UnsupportedAlphabetSize: Header alphabet size is not 28
        TruncatedFile: Not enough data for the full table
    """
    if len(data) < HEADER.size:
        raise FormatError("Data has no valid LTR header")

    magic, num_letters = HEADER.unpack_from(data, 0)
    if magic != MAGIC:
        raise FormatError(f"Data has no valid LTR header (magic {magic!r})")
    if num_letters != NUM_LETTERS:
        raise UnsupportedAlphabetSize(num_letters, NUM_LETTERS)

    available = len(data) - HEADER.size
    if available < TABLE_SIZE:
        raise TruncatedFile(TABLE_SIZE, available)
    if available > TABLE_SIZE:
        logger.debug(f"Ignoring {available - TABLE_SIZE} trailing bytes")

    values = np.frombuffer(data, dtype=DTYPE, count=VALUE_COUNT, offset=HEADER.size)
    return LtrTable(
        singles=values[:_SINGLES_END].reshape(SINGLES_SHAPE).copy(),
        doubles=values[_SINGLES_END:_DOUBLES_END].reshape(DOUBLES_SHAPE).copy(),
        triples=values[_DOUBLES_END:].reshape(TRIPLES_SHAPE).copy(),
    )


def dumps(table: LtrTable) -> bytes:
    """Serialize a table to the .ltr byte layout."""
    return b''.join((
        HEADER.pack(MAGIC, NUM_LETTERS),
        table.singles.astype(DTYPE, copy=False).tobytes(),
        table.doubles.astype(DTYPE, copy=False).tobytes(),
        table.triples.astype(DTYPE, copy=False).tobytes(),
    ))


def load(path: Union[str, Path]) -> LtrTable:
    """Load an .ltr file from disk."""
    path = Path(path)
    table = loads(path.read_bytes())
    logger.debug(f"Loaded {path}")
    return table


def save(path: Union[str, Path], table: LtrTable) -> Path:
    """Write a table to disk, returning the path written."""
    path = Path(path)
    path.write_bytes(dumps(table))
    logger.debug(f"Saved {path}")
    return path


__all__ = ['MAGIC', 'FILE_SIZE', 'TABLE_SIZE', 'loads', 'dumps', 'load', 'save']

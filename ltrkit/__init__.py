#!/usr/bin/env python3
"""
ltrkit - .ltr Name Table Toolkit
================================

Builds, repairs and samples the Markov chain name tables (.ltr files)
used by the Neverwinter Nights GetRandomName() function.

Quick Start
-----------
    import ltrkit

    table = ltrkit.load("names.ltr")
    ltrkit.repair(table)
    rng = ltrkit.make_rng(42)
    print(ltrkit.generate_one(table, rng))

    table = ltrkit.train(open("names.txt"))
    ltrkit.save("names.ltr", table)

Modules
-------
    ltrkit.alphabet  - The 28-symbol alphabet
    ltrkit.table     - LtrTable data model
    ltrkit.ltrfile   - Binary file format
    ltrkit.repair    - Fix for corrupted historical tables
    ltrkit.trainer   - Table training from word lists
    ltrkit.generator - Name sampling
    ltrkit.presenter - Human readable output

CLI Usage
---------
    python -m ltrkit build names.ltr < names.txt
    python -m ltrkit generate names.ltr -n 20
"""

__version__ = "1.0.0"

from .alphabet import LETTERS, NUM_LETTERS, index_of, symbol_at
from .errors import (
    LtrError,
    InvalidSymbol,
    FormatError,
    UnsupportedAlphabetSize,
    TruncatedFile,
    GenerationImpossible,
)
from .table import LtrTable, Slot
from .ltrfile import load, save, loads, dumps
from .repair import RepairReport, detect_corruption, repair
from .config import TrainConfig, GenerateConfig
from .trainer import LtrTrainer, TrainingReport, train
from .generator import LtrGenerator, generate_one, make_rng
from .presenter import iter_rows, format_rows, render_table

__all__ = [
    '__version__',
    # Alphabet
    'LETTERS',
    'NUM_LETTERS',
    'index_of',
    'symbol_at',
    # Errors
    'LtrError',
    'InvalidSymbol',
    'FormatError',
    'UnsupportedAlphabetSize',
    'TruncatedFile',
    'GenerationImpossible',
    # Data model and IO
    'LtrTable',
    'Slot',
    'load',
    'save',
    'loads',
    'dumps',
    # Repair
    'RepairReport',
    'detect_corruption',
    'repair',
    # Config
    'TrainConfig',
    'GenerateConfig',
    # Training and generation
    'LtrTrainer',
    'TrainingReport',
    'train',
    'LtrGenerator',
    'generate_one',
    'make_rng',
    # Presentation
    'iter_rows',
    'format_rows',
    'render_table',
]

#!/usr/bin/env python3
"""
Table Repair
============
Detects and corrects the accumulator-reset defect in historical .ltr files.

The tool that produced the original game tables reset its running sum
whenever a symbol had zero frequency while building the singles middle
and end CDFs. Every value after such a gap is then relative to the gap
instead of to the start of the row, so the row never reaches 1.0.

The fix re-adds the accumulated value at each gap. Arithmetic is float32
in symbol index order, the same order the defect was introduced in.
Other rows are never affected by the defect and are left alone.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict

import numpy as np

from .alphabet import LETTERS
from .table import LtrTable, Slot

logger = logging.getLogger(__name__)

CONVERGENCE_LOW = 0.9999
CONVERGENCE_HIGH = 1.0001

REPAIRABLE_SLOTS = (Slot.MIDDLE, Slot.END)


def _reaches_one(value) -> bool:
    return CONVERGENCE_LOW <= float(value) <= CONVERGENCE_HIGH


@dataclass
class SlotRepair:
    """Outcome of repairing one singles row."""
    slot: Slot
    accumulator: float
    converged: bool


@dataclass
class RepairReport:
    """Which singles rows were corrupt and how the repair ended."""
    corrupt: Dict[Slot, bool] = field(default_factory=dict)
    repairs: Dict[Slot, SlotRepair] = field(default_factory=dict)

    @property
    def any_corrupt(self) -> bool:
        return any(self.corrupt.values())

    @property
    def residual(self) -> bool:
        """True if a repaired row still did not end near 1.0."""
        return any(not r.converged for r in self.repairs.values())


def is_corrupt(row: np.ndarray) -> bool:
    """A row is corrupt if no value lies within [0.9999, 1.0001]."""
    return not any(_reaches_one(value) for value in row)


def detect_corruption(table: LtrTable) -> Dict[Slot, bool]:
    """Report corruption of the singles middle and end rows without changing them."""
    return {slot: is_corrupt(table.singles[slot]) for slot in REPAIRABLE_SLOTS}


def repair_row(row: np.ndarray) -> np.float32:
    """
    Undo the accumulator reset in one CDF row, in place.

    Returns:
        The final accumulator value
    """
    accumulator = np.float32(0.0)
    correction = np.float32(0.0)
    previous = np.float32(0.0)

    for i in range(len(row)):
        raw = row[i]
        if raw != 0.0:
            if i > 0 and previous == 0.0:
                correction = accumulator
            accumulator = np.float32(raw + correction)
            row[i] = accumulator
        logger.debug(
            f"ltr: {LETTERS[i]}, original: {raw:f}, corrected: {row[i]:f}, "
            f"acc: {accumulator:f}, offset: {correction:f}"
        )
        previous = raw

    return accumulator


def repair(table: LtrTable) -> RepairReport:
    """
    Detect and fix corruption in the singles middle and end rows.

    The table is modified in place. A row that does not converge to 1.0
    after fixing is logged as a warning and kept as is.
    """
    report = RepairReport(corrupt=detect_corruption(table))

    for slot in REPAIRABLE_SLOTS:
        if not report.corrupt[slot]:
            continue

        name = slot.name.lower()
        logger.info(f"Correcting errors in singles.{name} probability table...")
        accumulator = repair_row(table.singles[slot])
        converged = _reaches_one(accumulator)
        if not converged:
            logger.warning(
                f"During fixing of singles.{name}, accumulator ended up at "
                f"an incorrect value of {accumulator:f}"
            )
        report.repairs[slot] = SlotRepair(
            slot=slot,
            accumulator=float(accumulator),
            converged=converged,
        )

    if report.any_corrupt:
        logger.info("Corrections completed.")

    return report


__all__ = [
    'RepairReport',
    'SlotRepair',
    'detect_corruption',
    'is_corrupt',
    'repair',
    'repair_row',
]

#!/usr/bin/env python3
"""
Table Presenter
===============
Human readable views of an .ltr table.

Each row shows a symbol sequence (context + predicted symbol) with the
CDF value and point probability for start, middle and end. The point
probability is the CDF value minus the last nonzero CDF value seen
earlier in the same context and slot.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from .alphabet import LETTERS, NUM_LETTERS
from .table import LtrTable, Slot


@dataclass(frozen=True)
class PresenterRow:
    """CDF and probability of one symbol in one context."""
    sequence: str
    cdf: Tuple[float, float, float]          # start, middle, end
    probability: Tuple[float, float, float]  # start, middle, end

    @property
    def order(self) -> int:
        return len(self.sequence)

    @property
    def is_zero(self) -> bool:
        return not any(self.cdf)


def iter_rows(table: LtrTable,
              order: Optional[int] = None,
              nonzero: bool = False) -> Iterator[PresenterRow]:
    """
    Iterate over every (context, symbol) of a table in file order.

    Args:
        table: Table to read
        order: Only rows of this sequence length (1, 2 or 3)
        nonzero: Skip rows whose three CDF values are all zero
    """
    for context, cdf in table.iter_cdfs():
        if order is not None and len(context) + 1 != order:
            continue

        rows = cdf.tolist()
        last = [0.0, 0.0, 0.0]
        for k in range(NUM_LETTERS):
            values = tuple(rows[slot][k] for slot in Slot)
            probs = tuple(
                0.0 if value == 0.0 else value - last[slot]
                for slot, value in zip(Slot, values)
            )
            for slot, value in zip(Slot, values):
                if value > 0.0:
                    last[slot] = value

            row = PresenterRow(context + LETTERS[k], values, probs)
            if nonzero and row.is_zero:
                continue
            yield row


HEADER = "Sequence | CDF(start)  P(start) | CDF(middle)  P(middle) | CDF(end)  P(end)"


def format_row(row: PresenterRow) -> str:
    (cs, cm, ce), (ps, pm, pe) = row.cdf, row.probability
    return (
        f"{row.sequence:<9}|{cs: .5f}    {ps: .5f}  "
        f"|{cm: .5f}     {pm: .5f}   "
        f"|{ce: .5f}  {pe: .5f}"
    )


def format_rows(rows: Iterable[PresenterRow]) -> Iterator[str]:
    """Render rows in the fixed-width text layout, header first."""
    yield f"Num letters: {NUM_LETTERS}"
    yield HEADER
    for row in rows:
        yield format_row(row)


def render_table(rows: Iterable[PresenterRow],
                 console: Optional[Console] = None,
                 title: Optional[str] = None) -> Table:
    """Print rows as a rich table and return it."""
    console = console or Console()

    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Sequence", style="bold")
    for slot in Slot:
        label = slot.name.lower()
        table.add_column(f"CDF({label})", justify="right")
        table.add_column(f"P({label})", justify="right", style="cyan")

    for row in rows:
        cells = [row.sequence]
        for value, prob in zip(row.cdf, row.probability):
            cells.append(f"{value:.5f}")
            cells.append(f"{prob:.5f}" if value else "[dim]-[/dim]")
        table.add_row(*cells)

    console.print(table)
    return table


__all__ = ['PresenterRow', 'iter_rows', 'format_row', 'format_rows', 'render_table', 'HEADER']

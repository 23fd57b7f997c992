from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True, slots=True)
class TileMask:
    """Per-cell enabled flags defining the playable shape of a level.

    ``cells[column][row]`` with row 0 at the bottom. Immutable once built.
    """
    columns: int
    rows: int
    cells: Tuple[Tuple[bool, ...], ...]

    @classmethod
    def from_rows(cls, rows_top_first: Sequence[Sequence[int]]) -> "TileMask":
        """Build a mask from a row-major array supplied top row first."""
        rows = len(rows_top_first)
        columns = len(rows_top_first[0]) if rows else 0
        cells = tuple(
            tuple(bool(rows_top_first[rows - 1 - row][column]) for row in range(rows))
            for column in range(columns)
        )
        return cls(columns=columns, rows=rows, cells=cells)

    @classmethod
    def filled(cls, columns: int, rows: int) -> "TileMask":
        return cls(columns=columns, rows=rows, cells=tuple((True,) * rows for _ in range(columns)))

    def is_enabled(self, column: int, row: int) -> bool:
        if not (0 <= column < self.columns and 0 <= row < self.rows):
            raise IndexError(f"Cell ({column}, {row}) outside {self.columns}x{self.rows} tile mask")
        return self.cells[column][row]

    def enabled_count(self) -> int:
        return sum(sum(column) for column in self.cells)

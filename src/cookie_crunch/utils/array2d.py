from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class Array2D(Generic[T]):
    """Fixed-size sparse grid addressed by ``(column, row)``.

    Row 0 is the bottom row. Every cell starts empty (``None``); out-of-range
    coordinates raise ``IndexError`` rather than being clamped.
    """

    __slots__ = ("columns", "rows", "_cells")

    def __init__(self, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self._cells: List[Optional[T]] = [None] * (columns * rows)

    def _index(self, column: int, row: int) -> int:
        if not (0 <= column < self.columns and 0 <= row < self.rows):
            raise IndexError(f"Cell ({column}, {row}) outside {self.columns}x{self.rows} grid")
        return row * self.columns + column

    def get(self, column: int, row: int) -> Optional[T]:
        return self._cells[self._index(column, row)]

    def set(self, column: int, row: int, value: Optional[T]) -> None:
        self._cells[self._index(column, row)] = value

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def values(self) -> Iterator[T]:
        """Yield every non-empty cell value, bottom row first."""
        for value in self._cells:
            if value is not None:
                yield value

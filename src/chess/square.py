"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Rows run from Black's back rank (0) to White's back rank (7)
BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_index(cls, index: int) -> Square:
        """Index into the flat 64-slot board: row * 8 + col"""
        return cls(index // BOARD_SIZE, index % BOARD_SIZE)

    def to_index(self) -> int:
        assert self.is_within_bounds(), f"square out of bounds: {self}"
        return self.row * BOARD_SIZE + self.col

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square reached by stepping along a vector. Might fall off the board, callers check bounds."""
        return Square(self.row + d_row, self.col + d_col)

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square.from_index(index) for index in range(BOARD_SIZE * BOARD_SIZE)
)

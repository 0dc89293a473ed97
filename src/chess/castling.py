"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self

from src.chess.pieces import Color
from src.chess.square import Square


class CastlingSide(Enum):
    KING_SIDE = "O-O"
    QUEEN_SIDE = "O-O-O"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: the king passes through `king_path`, which includes its destination. Those squares may not be attacked.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def on_row(cls, row: int, king_to: int, rook_from: int, rook_to: int) -> Self:
        """Convenience method: to make mapping shown below more readable. The king always starts on column 4."""
        return cls(
            king_from=Square(row, 4),
            king_to=Square(row, king_to),
            rook_from=Square(row, rook_from),
            rook_to=Square(row, rook_to),
        )

    @property
    def king_path(self) -> list[Square]:
        step = 1 if self.king_to.col > self.king_from.col else -1
        return [
            Square(self.king_from.row, col)
            for col in range(self.king_from.col + step, self.king_to.col + step, step)
        ]

    @property
    def squares_between(self) -> list[Square]:
        """Squares strictly between the king and the rook. They must all be empty."""
        low, high = sorted((self.king_from.col, self.rook_from.col))
        return [Square(self.king_from.row, col) for col in range(low + 1, high)]


# The moves (in classical chess) made when castling. White's back rank is row 7, Black's is row 0
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingSquares.on_row(7, 6, 7, 5),
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingSquares.on_row(7, 2, 0, 3),
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingSquares.on_row(0, 6, 7, 5),
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingSquares.on_row(0, 2, 0, 3),
}


def castling_side_of(from_square: Square, to_square: Square) -> Optional[CastlingSide]:
    """A king move of two files along its row is a castling move. Which side?"""
    if from_square.row != to_square.row or abs(to_square.col - from_square.col) != 2:
        return None
    return (
        CastlingSide.KING_SIDE
        if to_square.col > from_square.col
        else CastlingSide.QUEEN_SIDE
    )

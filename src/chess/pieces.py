"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


AVAILABLE_COLOR_NAMES: list[str] = [color.name for color in Color]

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}

# Back rank, from column 0 to column 7, for both colors
BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True)
class Piece:
    """
    A piece is a value: moving or promoting it means placing a new Piece on the board.

    NOTE: has_moved only matters for kings and rooks (castling eligibility), but is tracked for every piece.
    """

    type: PieceType
    color: Color
    has_moved: bool = False

    @classmethod
    def from_symbol(cls, character: str, has_moved: bool = False) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = SYMBOL_TO_PIECE[character.lower()]
        return cls(piece_type, color, has_moved)

    def to_symbol(self) -> str:
        return (
            PIECE_TO_SYMBOL[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_SYMBOL[self.type].lower()
        )

    def moved(self) -> Self:
        return replace(self, has_moved=True)

    def promoted_to(self, new_type: PieceType) -> Self:
        """The piece that replaces this one after promotion. Always counts as moved."""
        return replace(self, type=new_type, has_moved=True)

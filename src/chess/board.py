"""The Game board: a fixed 8x8 grid of optional pieces. Pure data, every update returns a new Board."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import BACK_RANK_ORDER, Color, Piece, PieceType
from src.chess.square import ALL_SQUARES, BOARD_SIZE, Square

EMPTY_SYMBOL = "."

Cells = tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class Board:
    """
    Flat array of 64 slots, indexed by row * 8 + col.

    Copying the board for a simulated move is just building a new tuple,
    so there is no need for an undo mechanism.
    """

    cells: Cells

    def __post_init__(self) -> None:
        assert len(self.cells) == BOARD_SIZE * BOARD_SIZE, (
            f"board needs {BOARD_SIZE * BOARD_SIZE} cells, got {len(self.cells)}"
        )

    @classmethod
    def empty(cls) -> Self:
        return cls((None,) * (BOARD_SIZE * BOARD_SIZE))

    @classmethod
    def initial(cls) -> Self:
        """
        Standard starting position.
        * row 0: black back rank, row 1: black pawns
        * row 6: white pawns, row 7: white back rank
        """
        cells: list[Optional[Piece]] = [None] * (BOARD_SIZE * BOARD_SIZE)
        for col, piece_type in enumerate(BACK_RANK_ORDER):
            cells[Square(0, col).to_index()] = Piece(piece_type, Color.BLACK)
            cells[Square(1, col).to_index()] = Piece(PieceType.PAWN, Color.BLACK)
            cells[Square(6, col).to_index()] = Piece(PieceType.PAWN, Color.WHITE)
            cells[Square(7, col).to_index()] = Piece(piece_type, Color.WHITE)
        return cls(tuple(cells))

    @classmethod
    def from_layout(cls, rows: list[str]) -> Self:
        """Construct a board from 8 strings of 8 characters, row 0 first.

        ex. standard starting position:
        ["rnbqkbnr", "pppppppp", "........", "........",
         "........", "........", "PPPPPPPP", "RNBQKBNR"]
        means:
        * black pieces (lower case) fill row 0 and row 1
        * white pieces (upper case) fill row 6 and row 7
        * a dot is an empty square

        Every piece is created as not having moved yet.
        """
        assert len(rows) == BOARD_SIZE, f"layout needs {BOARD_SIZE} rows"
        cells: list[Optional[Piece]] = []
        for row in rows:
            assert len(row) == BOARD_SIZE, f"layout row {row!r} must be {BOARD_SIZE} wide"
            cells.extend(
                None if character == EMPTY_SYMBOL else Piece.from_symbol(character)
                for character in row
            )
        return cls(tuple(cells))

    def to_layout(self) -> list[str]:
        """Reverse operation: one string per row"""
        return [
            "".join(
                self._symbol(Square(row, col)) for col in range(BOARD_SIZE)
            )
            for row in range(BOARD_SIZE)
        ]

    def _symbol(self, square: Square) -> str:
        piece = self.piece_at(square)
        return piece.to_symbol() if piece else EMPTY_SYMBOL

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.cells[square.to_index()]

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def squares_of(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in zip(ALL_SQUARES, self.cells)
            if piece is not None and piece.color == color
        ]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square, piece in zip(ALL_SQUARES, self.cells)
            if piece is not None and piece.type == piece_type and piece.color == color
        ]

    def with_piece(self, square: Square, piece: Optional[Piece]) -> Self:
        """New board with the square overwritten (None clears it)"""
        cells = list(self.cells)
        cells[square.to_index()] = piece
        return type(self)(tuple(cells))

    def with_move_applied(self, from_square: Square, to_square: Square) -> Self:
        """New board with the piece relocated. Whatever stood on the target square is gone."""
        piece_that_moved = self.piece_at(from_square)
        assert piece_that_moved is not None, f"no piece to move on {from_square}"
        cells = list(self.cells)
        cells[from_square.to_index()] = None
        cells[to_square.to_index()] = piece_that_moved.moved()
        return type(self)(tuple(cells))

"""Unit tests for /src/chess/legality.py"""

import pytest

from src.chess.board import Board
from src.chess.castling import CastlingSide
from src.chess.check import is_king_in_check
from src.chess.legality import (
    all_legal_moves,
    apply_move,
    has_any_legal_move,
    is_legal,
    legal_destinations,
    legal_moves,
    promotion_row,
)
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

EMPTY_ROW = "." * 8


def board_with(*placements: tuple[str, int, int]) -> Board:
    """Empty board with the given (symbol, row, col) pieces on it"""
    rows = [list(EMPTY_ROW) for _ in range(8)]
    for symbol, row, col in placements:
        rows[row][col] = symbol
    return Board.from_layout(["".join(row) for row in rows])


# --- APPLYING MOVES ---
def test_apply_regular_move() -> None:
    board = Board.initial()
    new_board = apply_move(board, Move(Square(7, 6), Square(5, 5)))
    assert new_board.piece_at(Square(5, 5)) == Piece(PieceType.KNIGHT, Color.WHITE, has_moved=True)
    assert new_board.is_empty(Square(7, 6))


@pytest.mark.parametrize(
    "king_from, king_to, rook_from, rook_to",
    [
        (Square(7, 4), Square(7, 6), Square(7, 7), Square(7, 5)),
        (Square(7, 4), Square(7, 2), Square(7, 0), Square(7, 3)),
        (Square(0, 4), Square(0, 6), Square(0, 7), Square(0, 5)),
        (Square(0, 4), Square(0, 2), Square(0, 0), Square(0, 3)),
    ],
)
def test_apply_castling_moves_the_rook(
    castling_board: Board,
    king_from: Square,
    king_to: Square,
    rook_from: Square,
    rook_to: Square,
) -> None:
    """The castling side is derived from the two-file king move, not from the Move's label"""
    color = castling_board.piece_at(king_from).color
    new_board = apply_move(castling_board, Move(king_from, king_to))
    assert new_board.piece_at(king_to) == Piece(PieceType.KING, color, has_moved=True)
    assert new_board.piece_at(rook_to) == Piece(PieceType.ROOK, color, has_moved=True)
    assert new_board.is_empty(king_from)
    assert new_board.is_empty(rook_from)


@pytest.mark.parametrize(
    "symbol, from_square, to_square, color",
    [
        ("P", Square(1, 2), Square(0, 2), Color.WHITE),
        ("p", Square(6, 5), Square(7, 5), Color.BLACK),
    ],
)
def test_apply_promotion_to_queen(
    symbol: str, from_square: Square, to_square: Square, color: Color
) -> None:
    board = board_with(("k", 0, 7), ("K", 7, 0), (symbol, from_square.row, from_square.col))
    new_board = apply_move(board, Move(from_square, to_square))
    assert to_square.row == promotion_row(color)
    assert new_board.piece_at(to_square) == Piece(PieceType.QUEEN, color, has_moved=True)


def test_apply_promotion_by_capture() -> None:
    board = board_with(("k", 0, 7), ("K", 7, 0), ("P", 1, 2), ("r", 0, 3))
    new_board = apply_move(board, Move(Square(1, 2), Square(0, 3)))
    assert new_board.piece_at(Square(0, 3)) == Piece(PieceType.QUEEN, Color.WHITE, has_moved=True)


def test_apply_move_leaves_original_board_untouched() -> None:
    board = Board.initial()
    apply_move(board, Move(Square(6, 4), Square(4, 4)))
    assert board == Board.initial()


# --- FILTERING ---
def test_pinned_piece_cannot_leave_the_pin() -> None:
    """White bishop on (6, 4) is pinned to the king by a rook on the same file"""
    board = board_with(("k", 0, 0), ("r", 2, 4), ("B", 6, 4), ("K", 7, 4))
    assert legal_moves(board, Square(6, 4)) == []
    assert not is_legal(board, Move(Square(6, 4), Square(5, 3)))


def test_pinned_rook_may_move_along_the_pin() -> None:
    board = board_with(("k", 0, 0), ("r", 2, 4), ("R", 6, 4), ("K", 7, 4))
    assert legal_destinations(board, Square(6, 4)) == {
        Square(5, 4),
        Square(4, 4),
        Square(3, 4),
        Square(2, 4),
    }


def test_king_cannot_step_into_attack() -> None:
    """Black rook on column 7 covers (6, 7) and (7, 7) for the king on (7, 6)"""
    board = board_with(("r", 0, 7), ("K", 7, 6), ("k", 3, 3))
    assert legal_destinations(board, Square(7, 6)) == {Square(7, 5), Square(6, 5), Square(6, 6)}


def test_king_cannot_capture_protected_piece() -> None:
    board = board_with(("k", 0, 0), ("r", 6, 4), ("r", 0, 4), ("K", 7, 4))
    assert Square(6, 4) not in legal_destinations(board, Square(7, 4))


def test_king_can_capture_unprotected_checking_piece() -> None:
    board = board_with(("k", 0, 0), ("q", 6, 4), ("K", 7, 4))
    assert Square(6, 4) in legal_destinations(board, Square(7, 4))


def test_must_answer_check() -> None:
    """In check: only moves that block, capture or step away are legal"""
    board = board_with(("k", 0, 0), ("r", 2, 4), ("N", 7, 1), ("K", 7, 4), ("P", 6, 0))
    moves = all_legal_moves(board, Color.WHITE)
    # neither the knight nor the pawn can reach the file between rook and king
    assert moves
    assert all(move.from_square == Square(7, 4) for move in moves)


def test_every_legal_move_keeps_own_king_safe() -> None:
    """Own-king safety, checked for every generated move of a busy middlegame position"""
    board = Board.from_layout(
        [
            "r...k..r",
            "ppp..ppp",
            "..n.b...",
            "...qp...",
            "..B.P.b.",
            "..NP.N..",
            "PPP..PPP",
            "R..QK..R",
        ]
    )
    for color in Color:
        for move in all_legal_moves(board, color):
            assert not is_king_in_check(apply_move(board, move), color)


def test_has_any_legal_move_in_starting_position() -> None:
    board = Board.initial()
    assert has_any_legal_move(board, Color.WHITE)
    assert len(all_legal_moves(board, Color.WHITE)) == 20


def test_castling_is_a_legal_move(castling_board: Board) -> None:
    moves = legal_moves(castling_board, Square(7, 4))
    assert Move(Square(7, 4), Square(7, 6), castling_side=CastlingSide.KING_SIDE) in moves
    assert Move(Square(7, 4), Square(7, 2), castling_side=CastlingSide.QUEEN_SIDE) in moves

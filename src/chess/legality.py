"""
Legal move filtering
---

A candidate move is legal if, after playing it, your own king is not in check.
Pins and discovered checks are handled here: the move is played on a copy of the
board, exactly as it would be committed, and the copy is checked.
"""

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, castling_side_of
from src.chess.check import is_king_in_check
from src.chess.moves import Move, candidate_moves
from src.chess.pieces import Color, PieceType
from src.chess.square import BOARD_SIZE, Square


def promotion_row(color: Color) -> int:
    """The opponent's back rank"""
    return 0 if color == Color.WHITE else BOARD_SIZE - 1


def is_castling_move(move: Move, board: Board) -> bool:
    """A king moving two files. Derived from the board so moves built from taps (row/col only) are recognized too."""
    piece = board.piece_at(move.from_square)
    return (
        piece is not None
        and piece.type == PieceType.KING
        and castling_side_of(move.from_square, move.to_square) is not None
    )


def is_promotion_move(move: Move, board: Board) -> bool:
    piece = board.piece_at(move.from_square)
    return (
        piece is not None
        and piece.type == PieceType.PAWN
        and move.to_square.row == promotion_row(piece.color)
    )


def apply_move(board: Board, move: Move) -> Board:
    """
    The board after the move. Used both to simulate a candidate and to commit a move, so both always agree.
    ---

    1. castling: move the king, then move the rook of that side next to it
    2. otherwise relocate the piece (capturing whatever stood on the target square)
    3. a pawn reaching the opponent's back rank becomes a Queen. No other choice is offered.
    """
    piece = board.piece_at(move.from_square)
    assert piece is not None, f"no piece to move on {move.from_square}"

    if is_castling_move(move, board):
        side = castling_side_of(move.from_square, move.to_square)
        assert side is not None
        rule = CASTLING_RULES[(piece.color, side)]
        return board.with_move_applied(rule.king_from, rule.king_to).with_move_applied(
            rule.rook_from, rule.rook_to
        )

    new_board = board.with_move_applied(move.from_square, move.to_square)
    if is_promotion_move(move, board):
        new_board = new_board.with_piece(
            move.to_square, piece.promoted_to(PieceType.QUEEN)
        )
    return new_board


def is_legal(board: Board, move: Move) -> bool:
    """Return True if the move does not put (or leave) you in check"""
    piece = board.piece_at(move.from_square)
    assert piece is not None, f"no piece to move on {move.from_square}"
    return not is_king_in_check(apply_move(board, move), piece.color)


def legal_moves(board: Board, square: Square) -> list[Move]:
    """Candidate moves of the piece on the square, minus the ones that leave its king in check"""
    return [move for move in candidate_moves(square, board) if is_legal(board, move)]


def legal_destinations(board: Board, square: Square) -> frozenset[Square]:
    return frozenset(move.to_square for move in legal_moves(board, square))


def all_legal_moves(board: Board, color: Color) -> list[Move]:
    moves: list[Move] = []
    for square in board.squares_of(color):
        moves.extend(legal_moves(board, square))
    return moves


def has_any_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first legal move found"""
    return any(
        is_legal(board, move)
        for square in board.squares_of(color)
        for move in candidate_moves(square, board)
    )

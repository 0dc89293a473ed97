"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define candidate move sets for each piece type.

Candidates ignore whether the move would leave your own king in check.
That is filtered later (see legality.py).
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, CastlingSide
from src.chess.check import (
    DIAGONALS,
    KING_STEPS,
    KNIGHT_JUMPS,
    STRAIGHTS,
    Vector,
    is_square_attacked,
    pawn_capture_vectors,
    pawn_direction,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    castling_side: Optional[CastlingSide] = None

    @property
    def is_castling(self) -> bool:
        return self.castling_side is not None


def _moving_piece(square: Square, board: Board) -> Piece:
    piece = board.piece_at(square)
    assert piece is not None, f"no piece on {square}"
    return piece


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    * empty square: add it, keep going
    * opponent's piece: add it (capture), stop
    * own piece: stop without adding it
    """
    player_color = _moving_piece(square, board).color

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                if piece_found.color != player_color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = _moving_piece(square, board).color
    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece_at(target_square)
        if piece_found is None or piece_found.color != player_color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def pawn_starting_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - can move by two from its starting row, if both squares are empty.
    - takes diagonally forward, only if an opponent's piece is there.

    NOTE: No en passant.
    """
    pawn = _moving_piece(square, board)
    direction = pawn_direction(pawn.color)
    moves: list[Move] = []

    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * direction, 0)
        if square.row == pawn_starting_row(pawn.color) and board.is_empty(two_steps):
            moves.append(Move(from_square=square, to_square=two_steps))

    for d_row, d_col in pawn_capture_vectors(pawn.color):
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue
        piece_found = board.piece_at(target_square)
        if piece_found is not None and piece_found.color != pawn.color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_JUMPS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_bishop_moves(square, board) + candidate_rook_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move of two files.
    """
    moves = single_step_move(square, board, KING_STEPS)
    moves.extend(candidate_castling_moves(square, board))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(square: Square, board: Board) -> list[Move]:
    """Dispatch to the movement rule of whatever piece stands on the square"""
    movement_rule = MOVEMENT_RULES[_moving_piece(square, board).type]
    return movement_rule(square, board)


# -- CASTLING MOVES ---
def can_castle(square: Square, board: Board, side: CastlingSide) -> bool:
    """
    You are allowed to castle to the given side if
    ---

    * The king has not moved, and stands on its starting square.
    * The rook on that side is still on its starting square and has not moved.
    * All squares in between king and rook are empty.
    * The king is not in check (you cannot castle out of check).
    * None of the squares the king passes through (destination included) is under attack.
    """
    king = _moving_piece(square, board)
    if king.type != PieceType.KING or king.has_moved:
        return False

    rule = CASTLING_RULES[(king.color, side)]
    if square != rule.king_from:
        return False

    rook = board.piece_at(rule.rook_from)
    if (
        rook is None
        or rook.type != PieceType.ROOK
        or rook.color != king.color
        or rook.has_moved
    ):
        return False

    if not all(board.is_empty(between) for between in rule.squares_between):
        return False

    opponent_color = king.color.opponent()
    if is_square_attacked(rule.king_from, opponent_color, board):
        return False

    return not any(
        is_square_attacked(passing, opponent_color, board)
        for passing in rule.king_path
    )


def candidate_castling_moves(square: Square, board: Board) -> list[Move]:
    """Use CASTLING_RULES to construct the castling moves available to the king on the square"""
    king = _moving_piece(square, board)
    moves: list[Move] = []
    for side in CastlingSide:
        if can_castle(square, board, side):
            rule = CASTLING_RULES[(king.color, side)]
            moves.append(Move(rule.king_from, rule.king_to, castling_side=side))
    if moves:
        logger.debug(
            "%s king on %s may castle: %s",
            king.color.name,
            square,
            [move.castling_side.name for move in moves if move.castling_side],
        )
    return moves

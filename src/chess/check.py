"""
Attack detection: is a square (usually a king's) in the line of sight of the opponent?

Key idea: instead of generating every opponent move, look outward from the target square
along the geometry of each piece type and check what the first piece found is.
Used on its own to find checks, and by the move generator to test castling paths.
"""

from typing import Callable

from src.chess.board import Board
from src.chess.pieces import Color, PieceType
from src.chess.square import Square

Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_STEPS: list[Vector] = DIAGONALS + STRAIGHTS


def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN"""
    return -1 if color == Color.WHITE else 1


def pawn_capture_vectors(color: Color) -> list[Vector]:
    return [(pawn_direction(color), -1), (pawn_direction(color), 1)]


def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and type
    that is allowed to move along the given direction?"_

    Walk along each direction until we hit a piece or the edge of the board.
    Only the first piece found matters: anything behind it is blocked.
    """
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_within_bounds():
            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                if piece_found.color == by_color and piece_found.type == by_piece_type:
                    return True
                break
            target_square = target_square.offset(d_row, d_col)
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights
    that only reach a single square along each vector.
    """
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece_at(target_square)
        if (
            piece_found is not None
            and piece_found.color == by_color
            and piece_found.type == by_piece_type
        ):
            return True
    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric. To check if a white pawn attacks your square, look one row DOWN the board:
    "Could a white pawn, that moves UP the board, take on the specified square?"
    Hence the vectors are exactly opposite to the pawn's own capture vectors.

    A pawn push is never an attack, so only the capture geometry is used here.
    """
    inverse_capture_deltas: list[Vector] = [
        (-d_row, -d_col) for d_row, d_col in pawn_capture_vectors(by_color)
    ]
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, inverse_capture_deltas
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_JUMPS)


def is_attacked_by_bishop(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.BISHOP, board, DIAGONALS)


def is_attacked_by_rook(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.ROOK, board, STRAIGHTS)


def is_attacked_by_queen(square: Square, by_color: Color, board: Board) -> bool:
    """The Queen combines the rook lines and the bishop diagonals"""
    return raycasting_attack(
        square, by_color, PieceType.QUEEN, board, STRAIGHTS + DIAGONALS
    )


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    """Only the adjacent squares. Castling never captures anything."""
    return single_step_attack(square, by_color, PieceType.KING, board, KING_STEPS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}


def is_square_attacked(square: Square, by_color: Color, board: Board) -> bool:
    return any(
        is_attacked_by(square, by_color, board)
        for is_attacked_by in ATTACK_RULES.values()
    )


def locate_king(board: Board, color: Color) -> Square:
    kings = board.locate_pieces(PieceType.KING, color)
    assert len(kings) == 1, f"expected exactly one {color.name} king, found {len(kings)}"
    return kings[0]


def is_king_in_check(board: Board, color: Color) -> bool:
    king_square = locate_king(board, color)
    return is_square_attacked(king_square, color.opponent(), board)

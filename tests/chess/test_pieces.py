"""Unit tests for /src/chess/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from src.chess.pieces import PIECE_TO_SYMBOL, SYMBOL_TO_PIECE, Color, Piece, PieceType


@pytest.mark.parametrize("char", [char.upper() for char in SYMBOL_TO_PIECE.keys()])
def test_creating_white_piece_from_symbol(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_symbol(char)
    assert piece.type == SYMBOL_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE
    assert not piece.has_moved


@pytest.mark.parametrize("char", [char.lower() for char in SYMBOL_TO_PIECE.keys()])
def test_creating_black_piece_from_symbol(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_symbol(char)
    assert piece.type == SYMBOL_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_symbol(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_symbol() == PIECE_TO_SYMBOL[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_symbol() == PIECE_TO_SYMBOL[piece_type].lower()


def test_opponent_color() -> None:
    assert Color.WHITE.opponent() == Color.BLACK
    assert Color.BLACK.opponent() == Color.WHITE


def test_pieces_are_immutable() -> None:
    """Pieces get replaced, never changed in place"""
    piece = Piece(PieceType.ROOK, Color.WHITE)
    with pytest.raises(FrozenInstanceError):
        piece.has_moved = True  # type: ignore[misc]


def test_moved_returns_new_piece() -> None:
    piece = Piece(PieceType.KING, Color.BLACK)
    moved = piece.moved()
    assert moved.has_moved
    assert not piece.has_moved
    assert (moved.type, moved.color) == (piece.type, piece.color)


@pytest.mark.parametrize("color", list(Color))
def test_promotion_to_queen(color: Color) -> None:
    """Promotion keeps the color and the new piece counts as moved"""
    pawn = Piece(PieceType.PAWN, color, has_moved=True)
    queen = pawn.promoted_to(PieceType.QUEEN)
    assert queen == Piece(PieceType.QUEEN, color, has_moved=True)
    assert pawn.type == PieceType.PAWN

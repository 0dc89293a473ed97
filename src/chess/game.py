"""
The Game class will be the entrypoint into the domain layer for the service layer (or any UI).
It owns the current board, whose turn it is, the selection, the captured pieces and the game status,
and orchestrates all the rules required to play a turn.

Callers only go through the public operations below and read snapshots afterwards:
the board is immutable, so handing it out never exposes internal state.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import EMPTY_SYMBOL, Board
from src.chess.castling import castling_side_of
from src.chess.check import is_king_in_check
from src.chess.legality import apply_move, has_any_legal_move, legal_destinations
from src.chess.moves import Move
from src.chess.pieces import (
    AVAILABLE_COLOR_NAMES,
    SYMBOL_TO_PIECE,
    Color,
    Piece,
    PieceType,
)
from src.chess.square import BOARD_SIZE, Square
from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


class StatusKind(Enum):
    PLAYING = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


@dataclass(frozen=True)
class GameStatus:
    kind: StatusKind
    winner: Optional[Color] = None

    @classmethod
    def playing(cls) -> Self:
        return cls(StatusKind.PLAYING)

    @classmethod
    def checkmate(cls, winner: Color) -> Self:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> Self:
        return cls(StatusKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind != StatusKind.PLAYING


@dataclass(frozen=True)
class Selection:
    square: Square
    destinations: frozenset[Square]


@dataclass(frozen=True)
class PendingMove:
    """A move that has been accepted but not committed yet. The caller can animate from `before` to `after`."""

    move: Move
    piece: Piece
    captured: Optional[Piece]
    before: Board
    after: Board


@dataclass(frozen=True)
class MoveRecord:
    """What the last committed move did. Enough for a UI to pick a move/capture/check notification."""

    move: Move
    piece: Piece
    captured: Optional[Piece]
    gives_check: bool

    @property
    def is_capture(self) -> bool:
        return self.captured is not None


def _empty_captures() -> dict[Color, list[Piece]]:
    return {color: [] for color in Color}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE / UI ---

    board: Board
    active_color: Color
    status: GameStatus
    captured: dict[Color, list[Piece]] = field(default_factory=_empty_captures)
    selection: Optional[Selection] = None
    pending: Optional[PendingMove] = None
    in_check: bool = False
    last_move: Optional[MoveRecord] = None

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, white to move."""
        logger.info("Starting a new game")
        return cls(
            board=Board.initial(),
            active_color=Color.WHITE,
            status=GameStatus.playing(),
        )

    @classmethod
    def from_position(cls, board: Board, active_color: Color) -> Self:
        """Start from an arbitrary position. Check / checkmate / stalemate are evaluated right away."""
        game = cls(board=board, active_color=active_color, status=GameStatus.playing())
        game._evaluate_position()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in [status.value for status in Status]:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        active_color = _parse_color(model.active_color)
        winner = _parse_color(model.winner) if model.winner else None
        board = _parse_board(model.layout, model.moved_squares)

        if model.status == Status.CHECKMATE:
            if winner is None:
                raise GameStateError("A game in checkmate needs a winner.")
            status = GameStatus.checkmate(winner)
        elif winner is not None:
            raise GameStateError(f"Only a game in checkmate has a winner, got status {model.status!r}.")
        elif model.status == Status.STALEMATE:
            status = GameStatus.stalemate()
        else:
            status = GameStatus.playing()

        captured = {
            color: [
                _parse_piece(symbol) for symbol in model.captured.get(color.name.lower(), "")
            ]
            for color in Color
        }

        game = cls(
            board=board,
            active_color=active_color,
            status=status,
            captured=captured,
            in_check=is_king_in_check(board, active_color),
        )
        if model.selected is not None:
            if not 0 <= model.selected < BOARD_SIZE * BOARD_SIZE:
                raise GameStateError(f"Selected square index {model.selected} is off the board.")
            game.select(Square.from_index(model.selected))
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            layout="".join(self.board.to_layout()),
            moved_squares=[
                index
                for index, piece in enumerate(self.board.cells)
                if piece is not None and piece.has_moved
            ],
            active_color=self.active_color.name.lower(),
            status=self.status.kind.name.lower(),
            winner=self.status.winner.name.lower() if self.status.winner else None,
            captured={
                color.name.lower(): "".join(piece.to_symbol() for piece in pieces)
                for color, pieces in self.captured.items()
            },
            selected=self.selection.square.to_index() if self.selection else None,
        )

    # --- SNAPSHOTS FOR THE PRESENTATION LAYER ---
    def current_board(self) -> Board:
        return self.board

    def legal_destinations(self) -> frozenset[Square]:
        """Destinations of the selected piece (empty if nothing is selected)"""
        return self.selection.destinations if self.selection else frozenset()

    def captured_pieces(self, color: Color) -> tuple[Piece, ...]:
        """Pieces captured BY the given color, in the order they were taken"""
        return tuple(self.captured[color])

    @property
    def winner(self) -> Optional[Color]:
        return self.status.winner

    # --- INPUT EVENTS ---
    def select(self, square: Square) -> None:
        """
        Select a piece to move
        ---

        * selecting the already selected square clears the selection
        * selecting a piece of the active color (re)places the selection
        * anything else is ignored
        """
        assert square.is_within_bounds(), f"square out of bounds: {square}"
        if not self._is_accepting_input():
            return

        if self.selection and self.selection.square == square:
            self._clear_selection()
            return

        if self._is_own_piece(square):
            self.selection = Selection(square, legal_destinations(self.board, square))
            logger.debug(
                "Selected %s with %d legal destinations",
                square,
                len(self.selection.destinations),
            )

    def move_to(self, square: Square) -> Optional[MoveRecord]:
        """
        Move the selected piece to the square, if that is one of its legal destinations.
        Anything else just drops the selection.
        """
        assert square.is_within_bounds(), f"square out of bounds: {square}"
        if self.selection is None or square not in self.selection.destinations:
            self._clear_selection()
            return None

        pending = self.begin_move(self.selection.square, square)
        if pending is None:
            return None
        return self.commit()

    def tap(self, square: Square) -> Optional[MoveRecord]:
        """
        Single entrypoint for a tap on the board
        ---

        1. Nothing selected? --> try to select
        2. Tapped the selection or another of your pieces? --> (de)select
        3. Otherwise --> attempt to move there
        """
        if self.selection is None:
            self.select(square)
            return None

        if self.selection.square == square or self._is_own_piece(square):
            self.select(square)
            return None

        return self.move_to(square)

    def begin_move(self, from_square: Square, to_square: Square) -> Optional[PendingMove]:
        """
        Accept a move without committing it yet
        ---

        Returns the boards before and after the move, so a caller can animate it,
        and then call `commit()`. Illegal / out-of-turn moves are refused (None) and clear the selection.
        """
        if not self._is_accepting_input() or not self._is_own_piece(from_square):
            self._clear_selection()
            return None

        if to_square not in legal_destinations(self.board, from_square):
            self._clear_selection()
            return None

        piece = self.board.piece_at(from_square)
        assert piece is not None
        castling_side = (
            castling_side_of(from_square, to_square)
            if piece.type == PieceType.KING
            else None
        )
        move = Move(from_square, to_square, castling_side=castling_side)
        self.pending = PendingMove(
            move=move,
            piece=piece,
            captured=self.board.piece_at(to_square),
            before=self.board,
            after=apply_move(self.board, move),
        )
        self._clear_selection()
        return self.pending

    def commit(self) -> Optional[MoveRecord]:
        """
        Perform the state transition of the pending move
        -----

        1. record the capture (if any)
        2. commit the new board (castling / promotion already applied)
        3. switch turn
        4. update game status: check, checkmate, stalemate for the player now to move
        """
        pending = self.pending
        if pending is None:
            return None

        mover = self.active_color
        if pending.captured is not None:
            self.captured[mover].append(pending.captured)

        self.board = pending.after
        self.pending = None
        self.active_color = mover.opponent()
        self._evaluate_position()

        self.last_move = MoveRecord(
            move=pending.move,
            piece=pending.piece,
            captured=pending.captured,
            gives_check=self.in_check,
        )
        logger.debug(
            "%s %s %s -> %s%s",
            mover.name,
            pending.piece.type.name,
            pending.move.from_square,
            pending.move.to_square,
            " (capture)" if pending.captured else "",
        )
        return self.last_move

    def reset(self) -> None:
        """Back to the starting position. Captures, selection and status are cleared."""
        logger.info("Resetting game")
        self.board = Board.initial()
        self.active_color = Color.WHITE
        self.status = GameStatus.playing()
        self.captured = _empty_captures()
        self.selection = None
        self.pending = None
        self.in_check = False
        self.last_move = None

    # -- PRIVATE HELPERS ---
    def _is_accepting_input(self) -> bool:
        return not self.status.is_terminal and self.pending is None

    def _is_own_piece(self, square: Square) -> bool:
        piece = self.board.piece_at(square)
        return piece is not None and piece.color == self.active_color

    def _clear_selection(self) -> None:
        self.selection = None

    def _evaluate_position(self) -> None:
        """Is the player to move in check? Do they have any legal move left?"""
        self.in_check = is_king_in_check(self.board, self.active_color)
        if has_any_legal_move(self.board, self.active_color):
            return

        if self.in_check:
            self.status = GameStatus.checkmate(winner=self.active_color.opponent())
        else:
            self.status = GameStatus.stalemate()
        logger.info(
            "Game over: %s%s",
            self.status.kind.name.lower(),
            f", {self.status.winner.name.lower()} wins" if self.status.winner else "",
        )


# --- PARSING HELPERS (boundary data -> domain) ---
def _parse_color(name: str) -> Color:
    if name.upper() not in AVAILABLE_COLOR_NAMES:
        raise GameStateError(
            f"Unknown color {name!r}. Pick one from {','.join(c.lower() for c in AVAILABLE_COLOR_NAMES)}."
        )
    return Color[name.upper()]


def _parse_piece(symbol: str, has_moved: bool = False) -> Piece:
    if symbol.lower() not in SYMBOL_TO_PIECE:
        raise GameStateError(f"Unknown piece symbol: {symbol!r}")
    return Piece.from_symbol(symbol, has_moved)


def _parse_board(layout: str, moved_squares: list[int]) -> Board:
    if len(layout) != BOARD_SIZE * BOARD_SIZE:
        raise GameStateError(
            f"Board layout needs {BOARD_SIZE * BOARD_SIZE} characters, got {len(layout)}."
        )
    moved = set(moved_squares)
    board = Board(
        tuple(
            None
            if symbol == EMPTY_SYMBOL
            else _parse_piece(symbol, has_moved=index in moved)
            for index, symbol in enumerate(layout)
        )
    )
    for color in Color:
        kings = board.locate_pieces(PieceType.KING, color)
        if len(kings) != 1:
            raise GameStateError(
                f"Board needs exactly one {color.name.lower()} king, found {len(kings)}."
            )
    return board

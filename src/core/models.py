"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PieceSymbols = str


@dataclass
class GameModel:
    """
    Transport-safe representation of a game session used between API, Service, DB, and Game layers.

    * layout: 64 characters, row 0 first. Upper case white, lower case black, "." empty.
    * moved_squares: flat indices (row * 8 + col) of the pieces that have moved at least once.
    * captured: for each color, the symbols of the pieces it captured, in order.
    * selected: flat index of the selected square, if any.
    """

    layout: str
    moved_squares: list[int]
    active_color: PieceColor
    status: str
    winner: Optional[PieceColor] = None
    captured: dict[PieceColor, PieceSymbols] = field(
        default_factory=lambda: {"white": "", "black": ""}
    )
    selected: Optional[int] = None

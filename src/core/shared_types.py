"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    PLAYING = "playing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


# --- The domain layer has its own Color (src/chess/pieces.py).
# --- NOTE this string-valued version is what crosses the boundaries (requests, responses, database).


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import os

# Point the application's own engine at a throwaway database before anything imports src.db.database
os.environ.setdefault("CHESS_DATABASE_URL", "sqlite:///:memory:")

from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import StaticPool, create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from src.chess.board import Board  # noqa: E402
from src.db.schema import Base  # noqa: E402

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

EMPTY_ROW = "." * 8


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def kings_only_board() -> Board:
    """
    A board with only the kings on their starting squares.
    Because every move involves checking if a king is under attack, moves cannot be played on a board without both kings.
    """
    return Board.from_layout(
        ["....k..."] + [EMPTY_ROW] * 6 + ["....K..."]
    )


@pytest.fixture
def castling_board() -> Board:
    """Only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return Board.from_layout(
        ["r...k..r"] + [EMPTY_ROW] * 6 + ["R...K..R"]
    )

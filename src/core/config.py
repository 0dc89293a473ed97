"""Settings read from the environment, with defaults that work for local play."""

import logging
import os
from typing import Optional

DATABASE_URL = os.environ.get("CHESS_DATABASE_URL", "sqlite:///./chess.db")
DB_ECHO = os.environ.get("CHESS_DB_ECHO", "0").lower() in ("1", "true", "yes")
LOG_LEVEL = os.environ.get("CHESS_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Root logger setup. Hook for the entrypoint that hosts the service.
    Nothing under src/ calls it: modules only log through their own logger and never configure handlers on import.
    """
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)

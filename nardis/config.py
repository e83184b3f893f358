"""Runtime configuration for Nardis."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Default database path
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "nardis.db"


@dataclass
class Settings:
    """Tunable game settings.

    Attributes:
        starting_gold: Gold every player starts with.
        opponents: Number of computer opponents in a new game.
        victory_gold: Gold a player must exceed to win.
        start_range: Maximum route distance before range upgrades.
        database_path: SQLite file used by the SQL storage.
        log_level: Logging level name.
    """

    starting_gold: int = 1000
    opponents: int = 3
    victory_gold: int = 10000
    start_range: int = 150
    database_path: Path = DEFAULT_DB_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment and an optional .env file."""
        load_dotenv()
        db_path_str = os.getenv("NARDIS_DATABASE_PATH")
        return cls(
            starting_gold=int(os.getenv("NARDIS_STARTING_GOLD", cls.starting_gold)),
            opponents=int(os.getenv("NARDIS_OPPONENTS", cls.opponents)),
            victory_gold=int(os.getenv("NARDIS_VICTORY_GOLD", cls.victory_gold)),
            start_range=int(os.getenv("NARDIS_START_RANGE", cls.start_range)),
            database_path=Path(db_path_str) if db_path_str else DEFAULT_DB_PATH,
            log_level=os.getenv("NARDIS_LOG_LEVEL", cls.log_level).upper(),
        )

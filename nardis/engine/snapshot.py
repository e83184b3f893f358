"""Snapshot encoding for saved games.

Every category of state lives under its own storage key as base64-encoded
JSON, so any key/value store that holds text can keep a game.
"""

import base64
import json
from enum import Enum
from typing import Any

Snapshot = dict[str, str]


class LocalKey(Enum):
    """Storage key of each saved category."""

    HAS_ACTIVE_GAME = "nardis_has_active_game"
    TRAINS = "nardis_trains"
    RESOURCES = "nardis_resources"
    UPGRADES = "nardis_upgrades"
    CITIES = "nardis_cities"
    PLAYERS = "nardis_players"
    CURRENT_PLAYER = "nardis_current_player"
    TURN = "nardis_turn"
    STOCKS = "nardis_stocks"


def encode(records: Any) -> str:
    """JSON-encode records and make the result text-safe."""
    raw = json.dumps(records, separators=(",", ":")).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode(value: str) -> Any:
    """Reverse :func:`encode`."""
    return json.loads(base64.b64decode(value.encode("ascii")).decode("utf-8"))


def encode_turn(turn: int) -> str:
    return base64.b64encode(str(turn).encode("ascii")).decode("ascii")


def decode_turn(value: str) -> int:
    return int(base64.b64decode(value.encode("ascii")).decode("ascii"))

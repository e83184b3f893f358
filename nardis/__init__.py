"""Nardis: turn-based simulation engine for a rail-trading game."""

from .config import Settings
from .engine import Nardis, generate_data
from .exceptions import NardisError, NoActiveGameError

__all__ = [
    "Nardis",
    "NardisError",
    "NoActiveGameError",
    "Settings",
    "generate_data",
]

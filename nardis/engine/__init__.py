"""Game engine for Nardis."""

from .nardis import Nardis
from .generator import generate_data
from .pricing import (
    get_adjusted_train_cost,
    get_net_worth,
    get_potential_route_cost,
    get_range_turn_cost,
    get_stock_value,
)
from .snapshot import LocalKey

__all__ = [
    "Nardis",
    "generate_data",
    "get_adjusted_train_cost",
    "get_net_worth",
    "get_potential_route_cost",
    "get_range_turn_cost",
    "get_stock_value",
    "LocalKey",
]

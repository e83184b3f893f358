"""Game models for Nardis."""

from .resource import Resource
from .city import City
from .train import Train
from .upgrade import Upgrade, UpgradeType
from .route import Route, RouteCargo, RoutePlanCargo
from .finance import Finance, FinanceEntry, FinancePeriod, FinanceType
from .player import Player, PlayerType, QueuedRoute
from .stock import Stock, StockMarket
from .game_data import (
    AdjustedTrain,
    BuyableRoute,
    GameData,
    HandleTurnInfo,
    PlayerData,
    PotentialRoute,
)

__all__ = [
    "Resource",
    "City",
    "Train",
    "Upgrade",
    "UpgradeType",
    "Route",
    "RouteCargo",
    "RoutePlanCargo",
    "Finance",
    "FinanceEntry",
    "FinancePeriod",
    "FinanceType",
    "Player",
    "PlayerType",
    "QueuedRoute",
    "Stock",
    "StockMarket",
    "AdjustedTrain",
    "BuyableRoute",
    "GameData",
    "HandleTurnInfo",
    "PlayerData",
    "PotentialRoute",
]

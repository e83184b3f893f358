"""Player model for Nardis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .city import City
from .finance import Finance, FinanceType
from .resource import Resource
from .route import Route
from .train import Train
from .upgrade import Upgrade, UpgradeType, apply_discounts

if TYPE_CHECKING:
    from nardis.ai.base_ai import BaseAI
    from nardis.engine.nardis import Nardis

    from .game_data import HandleTurnInfo

logger = logging.getLogger(__name__)


class PlayerType(Enum):
    """Type of player in the game."""

    HUMAN = "human"
    COMPUTER = "computer"


@dataclass
class QueuedRoute:
    """A paid-for route waiting for its build time to elapse."""

    route: Route
    turn_cost: int


@dataclass
class Player:
    """Represents a player in the game.

    Attributes:
        id: Unique identifier for the player.
        name: Display name of the player.
        player_type: Human or computer.
        gold: Current gold balance.
        range: Maximum distance of a route this player can buy.
        start_city: City the player starts from.
        routes: Active routes.
        queue: Routes paid for but still being built.
        upgrades: Upgrades owned, in purchase order.
        finance: Income and expense ledger.
        net_worth: Valuation from the last turn, backs the player's stock.
        strategy: Decision policy used on computer turns.
    """

    id: str
    name: str
    player_type: PlayerType
    gold: int = 0
    range: int = 150
    start_city: City | None = None
    routes: list[Route] = field(default_factory=list)
    queue: list[QueuedRoute] = field(default_factory=list)
    upgrades: list[Upgrade] = field(default_factory=list)
    finance: Finance = field(default_factory=Finance)
    net_worth: int = 0
    strategy: BaseAI | None = field(default=None, repr=False, compare=False)

    def get_routes(self) -> list[Route]:
        return self.routes

    def get_queue(self) -> list[QueuedRoute]:
        return self.queue

    def get_upgrades(self) -> list[Upgrade]:
        return self.upgrades

    def get_range(self) -> int:
        return self.range

    def get_finance(self) -> Finance:
        return self.finance

    def get_strategy(self) -> BaseAI:
        """Get the decision policy, creating the default one on first use."""
        if self.strategy is None:
            from nardis.ai.rule_based_ai import RuleBasedAI

            self.strategy = RuleBasedAI()
        return self.strategy

    def equals(self, other: Player | None) -> bool:
        """Check identity, not structure."""
        return other is not None and self.id == other.id

    def is_computer(self) -> bool:
        return self.player_type == PlayerType.COMPUTER

    # Gold

    def add_gold(self, amount: int) -> None:
        """Add gold to player."""
        self.gold += amount

    def remove_gold(self, amount: int) -> None:
        """Remove gold from player."""
        if amount > self.gold:
            raise ValueError(f"Cannot remove {amount}, only have {self.gold}")
        self.gold -= amount

    def can_afford(self, amount: int) -> bool:
        """Check if player can afford an amount."""
        return self.gold >= amount

    # Routes and upgrades

    def add_route_to_queue(self, route: Route, turn_cost: int) -> None:
        """Queue a route to become active after turn_cost turns."""
        self.queue.append(QueuedRoute(route=route, turn_cost=turn_cost))

    def remove_route_from_queue(self, route_id: str) -> Route | None:
        """Remove a queued route.

        Returns:
            The removed route, or None if it was not queued.
        """
        for index, queued in enumerate(self.queue):
            if queued.route.id == route_id:
                return self.queue.pop(index).route
        return None

    def get_queued_route(self, route_id: str) -> Route | None:
        return next((q.route for q in self.queue if q.route.id == route_id), None)

    def get_route(self, route_id: str) -> Route | None:
        return next((route for route in self.routes if route.id == route_id), None)

    def remove_route(self, route_id: str) -> Route | None:
        """Remove an active route.

        Returns:
            The removed route, or None if it was not active.
        """
        route = self.get_route(route_id)
        if route:
            self.routes.remove(route)
        return route

    def all_routes(self) -> list[Route]:
        """Get active and queued routes."""
        return self.routes + [queued.route for queued in self.queue]

    def add_upgrade(self, upgrade: Upgrade) -> None:
        """Grant an upgrade to this player."""
        self.upgrades.append(upgrade)
        if upgrade.upgrade_type == UpgradeType.MAX_RANGE_INCREASE:
            self.range += int(upgrade.value)

    def has_upgrade(self, upgrade_id: str) -> bool:
        return any(upgrade.id == upgrade_id for upgrade in self.upgrades)

    # Turn handling

    def handle_turn(self, info: HandleTurnInfo, game: Nardis | None = None) -> None:
        """Run this player's part of a turn.

        Every player ticks its queue and operates its active routes. Computer
        players then hand control to their strategy, which acts through the
        orchestrator passed in as game.
        """
        self._advance_queue(info.turn)
        self._operate_routes()
        if self.is_computer() and game is not None:
            self.get_strategy().take_turn(game, self, info)
        self.finance.close_period(info.turn)

    def _advance_queue(self, turn: int) -> None:
        still_queued = []
        for queued in self.queue:
            queued.turn_cost -= 1
            if queued.turn_cost <= 0:
                self.routes.append(queued.route)
                logger.info(f"{self.name}: route {queued.route.name} active on turn {turn}")
            else:
                still_queued.append(queued)
        self.queue = still_queued

    def _operate_routes(self) -> None:
        for route in self.routes:
            for resource_id, (units, unit_value) in route.get_income().items():
                if units <= 0:
                    continue
                self.finance.add_to_finance_income(
                    FinanceType.CARGO, resource_id, units, unit_value
                )
                self.gold += units * unit_value
            upkeep = apply_discounts(
                route.train.upkeep, self.upgrades, UpgradeType.TRAIN_UPKEEP_CHEAPER
            )
            self.finance.add_to_finance_expense(FinanceType.UPKEEP, route.id, 1, upkeep)
            # Upkeep may take gold below zero
            self.gold -= upkeep
        logger.debug(f"{self.name}: operated {len(self.routes)} routes, gold {self.gold}")

    # Persistence

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "player_type": self.player_type.value,
            "gold": self.gold,
            "range": self.range,
            "start_city": self.start_city.id if self.start_city else None,
            "routes": [route.to_dict() for route in self.routes],
            "queue": [
                {"route": q.route.to_dict(), "turn_cost": q.turn_cost}
                for q in self.queue
            ],
            "upgrades": [upgrade.to_dict() for upgrade in self.upgrades],
            "finance": self.finance.to_dict(),
            "net_worth": self.net_worth,
        }

    @classmethod
    def from_dict(
        cls,
        record: dict[str, Any],
        cities: list[City],
        trains: list[Train],
        resources: list[Resource],
    ) -> Player:
        """Rebuild a player against the reconstructed catalogs."""
        start_city = next(
            (city for city in cities if city.id == record.get("start_city")), None
        )
        return cls(
            id=record["id"],
            name=record["name"],
            player_type=PlayerType(record["player_type"]),
            gold=record["gold"],
            range=record["range"],
            start_city=start_city,
            routes=[
                Route.from_dict(r, cities, trains, resources) for r in record["routes"]
            ],
            queue=[
                QueuedRoute(
                    route=Route.from_dict(q["route"], cities, trains, resources),
                    turn_cost=q["turn_cost"],
                )
                for q in record["queue"]
            ],
            # range already includes MAX_RANGE_INCREASE bonuses
            upgrades=[Upgrade.from_dict(u) for u in record["upgrades"]],
            finance=Finance.from_dict(record["finance"]),
            net_worth=record.get("net_worth", 0),
        )

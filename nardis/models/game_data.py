"""Shared value types passed between the orchestrator and turn-aware entities."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .city import City
from .resource import Resource
from .route import RoutePlanCargo
from .train import Train
from .upgrade import Upgrade

if TYPE_CHECKING:
    from .route import Route


@dataclass
class GameData:
    """Static catalog data of a game.

    Attributes:
        trains: Train catalog.
        upgrades: Upgrade catalog.
        resources: Resource catalog.
        cities: Every city on the map.
    """

    trains: list[Train] = field(default_factory=list)
    upgrades: list[Upgrade] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)
    cities: list[City] = field(default_factory=list)

    def get_city(self, city_id: str) -> City | None:
        return next((city for city in self.cities if city.id == city_id), None)

    def get_train(self, train_id: str) -> Train | None:
        return next((t for t in self.trains if t.id == train_id), None)

    def get_upgrade(self, upgrade_id: str) -> Upgrade | None:
        return next((u for u in self.upgrades if u.id == upgrade_id), None)


@dataclass
class PlayerData:
    """Routes and upgrades of the acting player."""

    routes: list["Route"]
    upgrades: list[Upgrade]


@dataclass
class HandleTurnInfo:
    """Payload handed to every turn-aware entity."""

    turn: int
    data: GameData
    player_data: PlayerData


@dataclass
class PotentialRoute:
    """A priced route proposal, not yet bought."""

    city_one: City
    city_two: City
    distance: int
    gold_cost: int
    turn_cost: int
    purchased_on_turn: int


@dataclass
class BuyableRoute(PotentialRoute):
    """A route proposal with a chosen train and cargo plan."""

    train: Train | None = None
    train_cost: int = 0
    route_plan: RoutePlanCargo = field(default_factory=RoutePlanCargo)

    @classmethod
    def from_potential(
        cls,
        potential: PotentialRoute,
        train: Train,
        train_cost: int,
        route_plan: RoutePlanCargo,
    ) -> "BuyableRoute":
        return cls(
            city_one=potential.city_one,
            city_two=potential.city_two,
            distance=potential.distance,
            gold_cost=potential.gold_cost,
            turn_cost=potential.turn_cost,
            purchased_on_turn=potential.purchased_on_turn,
            train=train,
            train_cost=train_cost,
            route_plan=route_plan,
        )

    @property
    def total_cost(self) -> int:
        return self.gold_cost + self.train_cost


@dataclass
class AdjustedTrain:
    """A catalog train priced for one player."""

    train: Train
    cost: int

"""Route model for Nardis."""

import uuid
from dataclasses import dataclass, field
from typing import Any

from .city import City
from .resource import Resource
from .train import Train


@dataclass
class RouteCargo:
    """Units of one resource loaded for a single direction of a route."""

    resource: Resource
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"resource": self.resource.id, "amount": self.amount}


@dataclass
class RoutePlanCargo:
    """Cargo plan for both directions of a route.

    Attributes:
        city_one: Cargo loaded at the first city and delivered to the second.
        city_two: Cargo loaded at the second city and delivered to the first.
    """

    city_one: list[RouteCargo] = field(default_factory=list)
    city_two: list[RouteCargo] = field(default_factory=list)

    def load(self, cargo: list[RouteCargo]) -> int:
        """Get cargo space used by one direction."""
        return sum(item.amount * item.resource.weight for item in cargo)

    def fits(self, train: Train) -> bool:
        """Check if both directions fit inside the train."""
        return (
            self.load(self.city_one) <= train.cargo_space
            and self.load(self.city_two) <= train.cargo_space
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "city_one": [item.to_dict() for item in self.city_one],
            "city_two": [item.to_dict() for item in self.city_two],
        }

    @classmethod
    def from_dict(
        cls, record: dict[str, Any], resources: list[Resource]
    ) -> "RoutePlanCargo":
        by_id = {resource.id: resource for resource in resources}
        return cls(
            city_one=[
                RouteCargo(resource=by_id[item["resource"]], amount=item["amount"])
                for item in record.get("city_one", [])
            ],
            city_two=[
                RouteCargo(resource=by_id[item["resource"]], amount=item["amount"])
                for item in record.get("city_two", [])
            ],
        )


@dataclass
class Route:
    """An owned trade link between two cities.

    A route sits in its owner's queue until its turn cost elapses, then
    becomes active and operates every turn.

    Attributes:
        name: Display name, "<city one> <--> <city two>".
        city_one: Departure city.
        city_two: Arrival city.
        train: Assigned catalog train.
        route_plan: Cargo plan for both directions.
        distance: Distance between the two cities.
        cost: Gold paid for the track.
        train_cost: Gold paid for the train after upgrades.
        purchased_on_turn: Turn the route was bought.
        id: Unique identifier for the route.
    """

    name: str
    city_one: City
    city_two: City
    train: Train
    route_plan: RoutePlanCargo
    distance: int
    cost: int
    train_cost: int
    purchased_on_turn: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if self.city_one.equals(self.city_two):
            raise ValueError(f"Route {self.name} connects {self.city_one.name} to itself")
        if self.distance <= 0:
            raise ValueError(f"Route {self.name} has invalid distance {self.distance}")
        if not self.route_plan.fits(self.train):
            raise ValueError(
                f"Cargo plan exceeds {self.train.name} capacity of {self.train.cargo_space}"
            )

    def change_train(self, train: Train, route_plan: RoutePlanCargo, train_cost: int) -> None:
        """Swap the train and cargo plan of this route."""
        if not route_plan.fits(train):
            raise ValueError(
                f"Cargo plan exceeds {train.name} capacity of {train.cargo_space}"
            )
        self.train = train
        self.route_plan = route_plan
        self.train_cost = train_cost

    def get_income(self) -> dict[str, tuple[int, int]]:
        """Get cargo income for one turn of operation.

        Returns:
            Dictionary of resource_id -> (units delivered, unit value).
        """
        income: dict[str, tuple[int, int]] = {}
        for item in self.route_plan.city_one + self.route_plan.city_two:
            units, _ = income.get(item.resource.id, (0, 0))
            income[item.resource.id] = (units + item.amount, item.resource.value)
        return income

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "city_one": self.city_one.id,
            "city_two": self.city_two.id,
            "train": self.train.id,
            "route_plan": self.route_plan.to_dict(),
            "distance": self.distance,
            "cost": self.cost,
            "train_cost": self.train_cost,
            "purchased_on_turn": self.purchased_on_turn,
        }

    @classmethod
    def from_dict(
        cls,
        record: dict[str, Any],
        cities: list[City],
        trains: list[Train],
        resources: list[Resource],
    ) -> "Route":
        """Rebuild a route against the reconstructed catalogs."""
        cities_by_id = {city.id: city for city in cities}
        trains_by_id = {train.id: train for train in trains}
        return cls(
            id=record["id"],
            name=record["name"],
            city_one=cities_by_id[record["city_one"]],
            city_two=cities_by_id[record["city_two"]],
            train=trains_by_id[record["train"]],
            route_plan=RoutePlanCargo.from_dict(record["route_plan"], resources),
            distance=record["distance"],
            cost=record["cost"],
            train_cost=record["train_cost"],
            purchased_on_turn=record["purchased_on_turn"],
        )

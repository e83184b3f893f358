"""Resource model for Nardis."""

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .game_data import HandleTurnInfo


@dataclass
class Resource:
    """A tradeable good carried between cities.

    Attributes:
        id: Unique identifier for the resource.
        name: Display name.
        value: Current price per unit.
        base_value: Price the value fluctuates around.
        weight: Cargo space one unit occupies.
        volatility: Maximum fractional swing of the value per turn.
    """

    id: str
    name: str
    value: int
    base_value: int
    weight: int = 1
    volatility: float = 0.1

    def handle_turn(self, info: "HandleTurnInfo") -> None:
        """Regenerate the value for a new turn.

        The draw is seeded from the resource id and the turn so replaying a
        turn yields the same price.
        """
        rng = random.Random(f"{self.id}:{info.turn}")
        swing = rng.uniform(-self.volatility, self.volatility)
        self.value = max(1, round(self.base_value * (1 + swing)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "base_value": self.base_value,
            "weight": self.weight,
            "volatility": self.volatility,
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Resource":
        return cls(
            id=record["id"],
            name=record["name"],
            value=record["value"],
            base_value=record["base_value"],
            weight=record.get("weight", 1),
            volatility=record.get("volatility", 0.1),
        )

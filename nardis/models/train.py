"""Train model for Nardis."""

from dataclasses import dataclass
from typing import Any


# Train catalog for a new game
TRAIN_DEFINITIONS = {
    "pioneer": {
        "name": "Pioneer",
        "cost": 100,
        "upkeep": 10,
        "speed": 1,
        "cargo_space": 4,
    },
    "courier": {
        "name": "Courier",
        "cost": 180,
        "upkeep": 15,
        "speed": 2,
        "cargo_space": 6,
    },
    "hauler": {
        "name": "Hauler",
        "cost": 300,
        "upkeep": 25,
        "speed": 2,
        "cargo_space": 10,
    },
    "express": {
        "name": "Express",
        "cost": 450,
        "upkeep": 35,
        "speed": 3,
        "cargo_space": 12,
    },
    "titan": {
        "name": "Titan",
        "cost": 700,
        "upkeep": 50,
        "speed": 3,
        "cargo_space": 18,
    },
}


@dataclass(frozen=True)
class Train:
    """A catalog train. Never mutated, only referenced.

    Attributes:
        id: Unique identifier for this train model.
        name: Display name.
        cost: Base purchase cost.
        upkeep: Gold spent per turn while operating.
        speed: Speed class.
        cargo_space: Units of cargo carried per direction.
    """

    id: str
    name: str
    cost: int
    upkeep: int
    speed: int
    cargo_space: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cost": self.cost,
            "upkeep": self.upkeep,
            "speed": self.speed,
            "cargo_space": self.cargo_space,
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Train":
        return cls(**record)


def create_trains() -> list[Train]:
    """Create the train catalog."""
    return [
        Train(id=train_id, **definition)
        for train_id, definition in TRAIN_DEFINITIONS.items()
    ]

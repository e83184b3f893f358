"""Upgrade model for Nardis."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class UpgradeType(Enum):
    """Kind of modifier an upgrade applies."""

    TRAIN_VALUE_CHEAPER = "train_value_cheaper"
    TRACK_VALUE_CHEAPER = "track_value_cheaper"
    TURN_COST_CHEAPER = "turn_cost_cheaper"
    TRAIN_UPKEEP_CHEAPER = "train_upkeep_cheaper"
    MAX_RANGE_INCREASE = "max_range_increase"


# Upgrade catalog for a new game: (name, type, value, cost)
UPGRADE_DEFINITIONS = {
    "cheaper_track_1": ("Surveyors", UpgradeType.TRACK_VALUE_CHEAPER, 0.1, 400),
    "cheaper_track_2": ("Steel Foundry", UpgradeType.TRACK_VALUE_CHEAPER, 0.15, 900),
    "cheaper_trains_1": ("Engine Works", UpgradeType.TRAIN_VALUE_CHEAPER, 0.1, 500),
    "cheaper_trains_2": ("Rolling Mill", UpgradeType.TRAIN_VALUE_CHEAPER, 0.2, 1200),
    "faster_build_1": ("Work Crews", UpgradeType.TURN_COST_CHEAPER, 1, 600),
    "faster_build_2": ("Track Layers", UpgradeType.TURN_COST_CHEAPER, 1, 1400),
    "cheaper_upkeep_1": ("Depot Network", UpgradeType.TRAIN_UPKEEP_CHEAPER, 0.25, 700),
    "range_1": ("Telegraph", UpgradeType.MAX_RANGE_INCREASE, 50, 500),
    "range_2": ("Signal Towers", UpgradeType.MAX_RANGE_INCREASE, 100, 1100),
}


@dataclass(frozen=True)
class Upgrade:
    """A permanent modifier to a player's cost and range formulas.

    Attributes:
        id: Unique identifier for the upgrade.
        name: Display name.
        upgrade_type: What the upgrade modifies.
        value: Fractional discount or flat amount depending on type.
        cost: Purchase cost in gold.
    """

    id: str
    name: str
    upgrade_type: UpgradeType
    value: float
    cost: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "upgrade_type": self.upgrade_type.value,
            "value": self.value,
            "cost": self.cost,
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Upgrade":
        return cls(
            id=record["id"],
            name=record["name"],
            upgrade_type=UpgradeType(record["upgrade_type"]),
            value=record["value"],
            cost=record["cost"],
        )


def create_upgrades() -> list[Upgrade]:
    """Create the upgrade catalog."""
    return [
        Upgrade(id=upgrade_id, name=name, upgrade_type=kind, value=value, cost=cost)
        for upgrade_id, (name, kind, value, cost) in UPGRADE_DEFINITIONS.items()
    ]


def apply_discounts(cost: int, upgrades: list[Upgrade], upgrade_type: UpgradeType) -> int:
    """Apply every upgrade of a type to a cost, in list order.

    Each upgrade takes floor(cost * value) off the running cost.
    """
    for upgrade in upgrades:
        if upgrade.upgrade_type == upgrade_type:
            cost -= math.floor(cost * upgrade.value)
    return cost

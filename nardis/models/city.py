"""City model for Nardis."""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .resource import Resource

if TYPE_CHECKING:
    from .game_data import HandleTurnInfo

# Supply of a resource never regenerates beyond size times this factor
SUPPLY_CAP_FACTOR = 10


@dataclass
class City:
    """A city on the map that supplies and demands resources.

    Attributes:
        id: Unique identifier for the city.
        name: Display name.
        x: Horizontal map position.
        y: Vertical map position.
        size: Growth class; drives supply regeneration.
        supply: Dictionary of resource_id -> units available.
        demand: Dictionary of resource_id -> units wanted.
        resources: Dictionary of resource_id -> Resource known to this city.
    """

    id: str
    name: str
    x: int
    y: int
    size: int = 1
    supply: dict[str, int] = field(default_factory=dict)
    demand: dict[str, int] = field(default_factory=dict)
    resources: dict[str, Resource] = field(default_factory=dict, repr=False)

    def distance_to(self, other: "City") -> int:
        """Get the rounded straight-line distance to another city."""
        return round(math.hypot(self.x - other.x, self.y - other.y))

    def supplies(self) -> list[Resource]:
        """Get the resources this city supplies."""
        return [self.resources[rid] for rid in self.supply if rid in self.resources]

    def demands(self) -> list[Resource]:
        """Get the resources this city demands."""
        return [self.resources[rid] for rid in self.demand if rid in self.resources]

    def handle_turn(self, info: "HandleTurnInfo") -> None:
        """Regenerate supply for a new turn."""
        cap = self.size * SUPPLY_CAP_FACTOR
        for resource_id, amount in self.supply.items():
            self.supply[resource_id] = min(cap, amount + self.size)

    def equals(self, other: "City") -> bool:
        return self.id == other.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "supply": dict(self.supply),
            "demand": dict(self.demand),
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any], resources: list[Resource]) -> "City":
        """Rebuild a city, resolving its resources against the catalog."""
        by_id = {resource.id: resource for resource in resources}
        wanted = set(record.get("supply", {})) | set(record.get("demand", {}))
        return cls(
            id=record["id"],
            name=record["name"],
            x=record["x"],
            y=record["y"],
            size=record.get("size", 1),
            supply=dict(record.get("supply", {})),
            demand=dict(record.get("demand", {})),
            resources={rid: by_id[rid] for rid in wanted if rid in by_id},
        )

"""Fresh catalog generation for new games."""

import logging
import random

from nardis.models.city import City
from nardis.models.game_data import GameData
from nardis.models.resource import Resource
from nardis.models.train import create_trains
from nardis.models.upgrade import create_upgrades

logger = logging.getLogger(__name__)

# resource_id -> (name, base value, weight)
RESOURCE_DEFINITIONS = {
    "grain": ("Grain", 8, 1),
    "timber": ("Timber", 10, 2),
    "coal": ("Coal", 12, 2),
    "iron": ("Iron", 15, 2),
    "cloth": ("Cloth", 18, 1),
    "spice": ("Spice", 25, 1),
    "tools": ("Tools", 30, 1),
}

CITY_NAMES = [
    "Ardmore",
    "Bexley",
    "Corvale",
    "Dunmere",
    "Eastwick",
    "Fallowmoor",
    "Glenhaven",
    "Harrowgate",
    "Ivybridge",
    "Kestrel",
    "Lowmarsh",
    "Millbrook",
    "Northcliff",
    "Oakridge",
    "Pellham",
    "Ravensworth",
]

MAP_WIDTH = 400
MAP_HEIGHT = 300


def create_resources() -> list[Resource]:
    """Create the resource catalog."""
    return [
        Resource(id=rid, name=name, value=value, base_value=value, weight=weight)
        for rid, (name, value, weight) in RESOURCE_DEFINITIONS.items()
    ]


def create_cities(resources: list[Resource], rng: random.Random) -> list[City]:
    """Place every city on the map with its supply and demand."""
    cities = []
    taken: set[tuple[int, int]] = set()
    for index, name in enumerate(CITY_NAMES):
        while True:
            position = (rng.randint(0, MAP_WIDTH), rng.randint(0, MAP_HEIGHT))
            if position not in taken:
                taken.add(position)
                break
        size = rng.randint(1, 3)
        picks = rng.sample(resources, 4)
        supplied, demanded = picks[:2], picks[2:]
        cities.append(
            City(
                id=f"city_{index + 1}",
                name=name,
                x=position[0],
                y=position[1],
                size=size,
                supply={r.id: size * 5 for r in supplied},
                demand={r.id: size * 3 for r in demanded},
                resources={r.id: r for r in picks},
            )
        )
    return cities


def generate_data(seed: int | None = None) -> GameData:
    """Generate the static catalog of a new game.

    Args:
        seed: Seed for city placement. Same seed, same map.

    Returns:
        GameData with trains, upgrades, resources and cities.
    """
    rng = random.Random(seed)
    resources = create_resources()
    data = GameData(
        trains=create_trains(),
        upgrades=create_upgrades(),
        resources=resources,
        cities=create_cities(resources, rng),
    )
    logger.debug(
        f"Generated {len(data.cities)} cities, {len(data.resources)} resources, "
        f"{len(data.trains)} trains, {len(data.upgrades)} upgrades"
    )
    return data

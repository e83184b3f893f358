"""Route, train and valuation pricing for Nardis."""

import math

from nardis.models.player import Player
from nardis.models.upgrade import Upgrade, UpgradeType, apply_discounts

# Gold per unit of distance for new track
TRACK_COST_PER_DISTANCE = 2

# No route is ever cheaper than this
MIN_ROUTE_GOLD_COST = 10

# TURN_COST_CHEAPER only applies while the turn cost is at least this
MIN_DISCOUNTABLE_TURN_COST = 2

# (max distance, turns to build)
TURN_COST_STEPS = [
    (50, 1),
    (100, 2),
    (200, 3),
    (300, 4),
]
MAX_TURN_COST = 5

# Share of the purchase price a train keeps as an asset
TRAIN_ASSET_FACTOR = 0.5

# Share of the track and train price paid back when an active route is sold
ROUTE_RECOUP_FACTOR = 0.5

# Net worth per unit of share price
STOCK_VALUE_DIVISOR = 10


def get_range_turn_cost(distance: int) -> int:
    """Get the base number of turns it takes to build a route."""
    for max_distance, turns in TURN_COST_STEPS:
        if distance <= max_distance:
            return turns
    return MAX_TURN_COST


def get_potential_route_cost(distance: int, upgrades: list[Upgrade]) -> tuple[int, int]:
    """Get gold and turn cost for a route of a given distance.

    TRACK_VALUE_CHEAPER upgrades apply in list order, each taking
    floor(gold * value) off; a reduction that would leave less than
    MIN_ROUTE_GOLD_COST sets the cost to exactly that. TURN_COST_CHEAPER
    upgrades subtract their flat value only while the turn cost is at least
    MIN_DISCOUNTABLE_TURN_COST, and the final turn cost is at least 1.

    Args:
        distance: Distance between the two cities.
        upgrades: Upgrades owned by the buyer, in purchase order.

    Returns:
        Tuple of (gold cost, turn cost).
    """
    gold_cost = distance * TRACK_COST_PER_DISTANCE
    turn_cost = get_range_turn_cost(distance)

    for upgrade in upgrades:
        if upgrade.upgrade_type != UpgradeType.TRACK_VALUE_CHEAPER:
            continue
        reduction = math.floor(gold_cost * upgrade.value)
        if gold_cost - reduction < MIN_ROUTE_GOLD_COST:
            gold_cost = MIN_ROUTE_GOLD_COST
        else:
            gold_cost -= reduction

    for upgrade in upgrades:
        if upgrade.upgrade_type != UpgradeType.TURN_COST_CHEAPER:
            continue
        if turn_cost >= MIN_DISCOUNTABLE_TURN_COST:
            turn_cost -= int(upgrade.value)

    return max(gold_cost, MIN_ROUTE_GOLD_COST), max(turn_cost, 1)


def get_adjusted_train_cost(cost: int, upgrades: list[Upgrade]) -> int:
    """Get a train's price after TRAIN_VALUE_CHEAPER upgrades."""
    return apply_discounts(cost, upgrades, UpgradeType.TRAIN_VALUE_CHEAPER)


def get_route_recoup_value(route_cost: int, train_cost: int) -> int:
    """Get the gold paid back for selling an active route."""
    return max(0, math.floor((route_cost + train_cost) * ROUTE_RECOUP_FACTOR))


def get_net_worth(player: Player) -> int:
    """Get gold plus the asset value of every active and queued route."""
    route_value = sum(route.cost for route in player.all_routes())
    train_value = sum(
        math.floor(route.train_cost * TRAIN_ASSET_FACTOR)
        for route in player.all_routes()
    )
    return player.gold + route_value + train_value


def get_stock_value(net_worth: int) -> int:
    """Get the share price backed by a net worth."""
    return max(1, net_worth // STOCK_VALUE_DIVISOR)

"""Tests for route, train and valuation pricing."""

from nardis.engine.pricing import (
    MIN_ROUTE_GOLD_COST,
    get_adjusted_train_cost,
    get_net_worth,
    get_potential_route_cost,
    get_range_turn_cost,
    get_route_recoup_value,
    get_stock_value,
)
from nardis.models import Player, PlayerType, Upgrade, UpgradeType


def _upgrade(kind: UpgradeType, value: float, upgrade_id: str = "u") -> Upgrade:
    return Upgrade(id=upgrade_id, name=upgrade_id, upgrade_type=kind, value=value, cost=1)


def test_range_turn_cost_is_monotonic():
    """Longer routes never take fewer turns to build."""
    costs = [get_range_turn_cost(d) for d in range(1, 600)]
    assert costs == sorted(costs)
    assert get_range_turn_cost(10) == 1
    assert get_range_turn_cost(100) == 2
    assert get_range_turn_cost(250) == 4
    assert get_range_turn_cost(1000) == 5


def test_route_cost_without_upgrades():
    """Base gold cost is twice the distance."""
    assert get_potential_route_cost(10, []) == (20, 1)
    assert get_potential_route_cost(150, []) == (300, 3)


def test_route_cost_never_below_minimums():
    """Every distance and upgrade stack yields gold >= 10 and turns >= 1."""
    stacks = [
        [],
        [_upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.5)] * 3,
        [_upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.99)] * 10,
        [_upgrade(UpgradeType.TURN_COST_CHEAPER, 1)] * 6,
        [_upgrade(UpgradeType.TURN_COST_CHEAPER, 3)] * 2,
    ]
    for upgrades in stacks:
        for distance in range(1, 500):
            gold_cost, turn_cost = get_potential_route_cost(distance, upgrades)
            assert gold_cost >= MIN_ROUTE_GOLD_COST
            assert turn_cost >= 1


def test_track_discount_clamps_to_exactly_ten():
    """A reduction that would go below 10 sets the cost to 10."""
    upgrades = [_upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.9)] * 10
    gold_cost, _ = get_potential_route_cost(100, upgrades)
    assert gold_cost == 10


def test_track_discounts_apply_in_order():
    """Each discount is taken from the already-discounted cost."""
    upgrades = [
        _upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.1),
        _upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.25),
    ]
    # 200 -> 180 -> 135
    assert get_potential_route_cost(100, upgrades)[0] == 135


def test_turn_discount_stops_below_two():
    """Turn discounts only apply while the turn cost is at least 2."""
    one = [_upgrade(UpgradeType.TURN_COST_CHEAPER, 1)]
    assert get_potential_route_cost(250, one * 2)[1] == 2
    assert get_potential_route_cost(250, one * 3)[1] == 1
    assert get_potential_route_cost(250, one * 4)[1] == 1
    big = [_upgrade(UpgradeType.TURN_COST_CHEAPER, 3)]
    assert get_potential_route_cost(100, big)[1] == 1


def test_other_upgrades_do_not_change_route_cost():
    upgrades = [
        _upgrade(UpgradeType.TRAIN_VALUE_CHEAPER, 0.5),
        _upgrade(UpgradeType.MAX_RANGE_INCREASE, 100),
    ]
    assert get_potential_route_cost(100, upgrades) == (200, 2)


def test_adjusted_train_cost():
    """Train discounts apply sequentially with floor."""
    upgrades = [
        _upgrade(UpgradeType.TRAIN_VALUE_CHEAPER, 0.1),
        _upgrade(UpgradeType.TRAIN_VALUE_CHEAPER, 0.2),
        _upgrade(UpgradeType.TRACK_VALUE_CHEAPER, 0.5),
    ]
    # 100 -> 90 -> 72
    assert get_adjusted_train_cost(100, upgrades) == 72
    assert get_adjusted_train_cost(100, []) == 100


def test_net_worth_and_stock_value():
    player = Player(id="p", name="P", player_type=PlayerType.HUMAN, gold=1000)
    assert get_net_worth(player) == 1000
    assert get_stock_value(1000) == 100
    assert get_stock_value(5) == 1
    assert get_stock_value(-300) == 1


def test_route_recoup_value():
    """Selling a route pays back half of its track and train price."""
    assert get_route_recoup_value(20, 100) == 60
    assert get_route_recoup_value(25, 0) == 12
    assert get_route_recoup_value(0, 0) == 0

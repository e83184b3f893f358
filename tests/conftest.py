"""Shared fixtures for Nardis tests."""

import pytest

from nardis.engine.nardis import Nardis
from nardis.models import (
    BuyableRoute,
    City,
    FinanceType,
    GameData,
    Player,
    PlayerType,
    Resource,
    RoutePlanCargo,
    StockMarket,
)
from nardis.models.train import create_trains
from nardis.models.upgrade import create_upgrades


def _make_resources() -> list[Resource]:
    return [
        Resource(id="grain", name="Grain", value=8, base_value=8),
        Resource(id="coal", name="Coal", value=12, base_value=12, weight=2),
    ]


def _make_cities(resources: list[Resource]) -> list[City]:
    by_id = {r.id: r for r in resources}
    return [
        City(
            id="a", name="Alpha", x=0, y=0, size=2,
            supply={"grain": 10}, demand={"coal": 6}, resources=dict(by_id),
        ),
        City(
            id="b", name="Beta", x=10, y=0, size=1,
            supply={"coal": 5}, demand={"grain": 3}, resources=dict(by_id),
        ),
        City(
            id="c", name="Gamma", x=100, y=0, size=2,
            supply={"grain": 10}, demand={"coal": 4}, resources=dict(by_id),
        ),
        City(
            id="d", name="Delta", x=400, y=0, size=3,
            supply={"coal": 15}, demand={"grain": 9}, resources=dict(by_id),
        ),
    ]


@pytest.fixture
def game() -> Nardis:
    """A small game: human Alice at Alpha, computer Bob at Gamma, 1000 gold each."""
    resources = _make_resources()
    cities = _make_cities(resources)
    data = GameData(
        trains=create_trains(),
        upgrades=create_upgrades(),
        resources=resources,
        cities=cities,
    )
    alice = Player(
        id="p1", name="Alice", player_type=PlayerType.HUMAN,
        gold=1000, range=150, start_city=cities[0],
    )
    bob = Player(
        id="p2", name="Bob", player_type=PlayerType.COMPUTER,
        gold=1000, range=150, start_city=cities[2],
    )
    stocks = StockMarket()
    stocks.add_player("p1", 100)
    stocks.add_player("p2", 100)
    return Nardis(data, [alice, bob], stocks)


@pytest.fixture
def buyable():
    """Build a BuyableRoute from a game's current player to a target city."""

    def _buyable(game: Nardis, target_id: str = "b", train_id: str = "pioneer") -> BuyableRoute:
        player = game.get_current_player()
        origin = player.start_city
        potential = next(
            p for p in game.get_array_of_possible_routes(origin)
            if p.city_two.id == target_id
        )
        adjusted = next(
            t for t in game.get_array_of_adjusted_trains() if t.train.id == train_id
        )
        return BuyableRoute.from_potential(
            potential, adjusted.train, adjusted.cost, RoutePlanCargo()
        )

    return _buyable


@pytest.fixture
def ledger_balanced():
    """Check TRACK + TRAIN expenses equal the cost of every owned route."""

    def _ledger_balanced(player: Player) -> bool:
        finance = player.get_finance()
        recorded = finance.total_expense(FinanceType.TRACK) + finance.total_expense(
            FinanceType.TRAIN
        )
        owned = sum(route.cost + route.train_cost for route in player.all_routes())
        return recorded == owned

    return _ledger_balanced

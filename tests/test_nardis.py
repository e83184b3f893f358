"""Tests for the Nardis turn orchestrator."""

import pytest

from nardis.ai.base_ai import BaseAI
from nardis.engine.nardis import Nardis
from nardis.engine.snapshot import LocalKey
from nardis.models import BuyableRoute, FinanceType, RoutePlanCargo, Train


class FailingAI(BaseAI):
    """Strategy that always blows up."""

    def take_turn(self, game, player, info):
        raise RuntimeError("strategy failure")


def test_accessors(game):
    assert game.get_current_player().id == "p1"
    assert game.get_current_turn() == 1


def test_possible_routes_respect_range(game):
    """Only cities at 0 < distance <= range are offered."""
    origin = game.data.get_city("a")
    routes = game.get_array_of_possible_routes(origin)

    assert sorted(r.city_two.id for r in routes) == ["b", "c"]
    to_beta = next(r for r in routes if r.city_two.id == "b")
    assert to_beta.city_one is origin
    assert (to_beta.distance, to_beta.gold_cost, to_beta.turn_cost) == (10, 20, 1)
    assert to_beta.purchased_on_turn == 1


def test_adjusted_trains_do_not_mutate_catalog(game):
    assert game.add_upgrade_to_player("cheaper_trains_1")
    adjusted = {a.train.id: a.cost for a in game.get_array_of_adjusted_trains()}

    assert adjusted["pioneer"] == 90
    assert next(t for t in game.data.trains if t.id == "pioneer").cost == 100


def test_route_purchase_and_cancel(game, buyable, ledger_balanced):
    """Buying records Track and Train expenses; cancelling removes both."""
    player = game.get_current_player()
    route_proposal = buyable(game, "b")
    assert (route_proposal.gold_cost, route_proposal.turn_cost) == (20, 1)

    assert game.add_route_to_player_queue(route_proposal)
    route = player.get_queue()[0].route
    finance = player.get_finance()
    assert finance.get_expense(FinanceType.TRACK, route.id).value == 20
    assert finance.get_expense(FinanceType.TRAIN, "pioneer").value == 100
    assert player.gold == 880
    assert ledger_balanced(player)

    assert game.remove_route_from_player_queue(route.id, "pioneer")
    assert finance.get_expense(FinanceType.TRACK, route.id) is None
    assert finance.get_expense(FinanceType.TRAIN, "pioneer") is None
    assert finance.expense == {}
    assert player.gold == 1000
    assert player.get_queue() == []
    assert ledger_balanced(player)


def test_cancel_unknown_route_changes_nothing(game, buyable):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "b"))
    route = player.get_queue()[0].route
    before = player.get_finance().to_dict()

    assert not game.remove_route_from_player_queue("missing", "pioneer")
    assert not game.remove_route_from_player_queue(route.id, "titan")
    assert player.get_finance().to_dict() == before
    assert len(player.get_queue()) == 1
    assert player.gold == 880


def test_invalid_route_records_nothing(game):
    """A proposal that cannot form a route raises before any entry is written."""
    player = game.get_current_player()
    alpha = game.data.get_city("a")
    train = game.data.trains[0]
    proposal = BuyableRoute(
        city_one=alpha,
        city_two=alpha,
        distance=10,
        gold_cost=20,
        turn_cost=1,
        purchased_on_turn=1,
        train=train,
        train_cost=train.cost,
        route_plan=RoutePlanCargo(),
    )

    with pytest.raises(ValueError):
        game.add_route_to_player_queue(proposal)
    assert player.get_finance().expense == {}
    assert player.gold == 1000


def test_unaffordable_route_rejected(game, buyable):
    player = game.get_current_player()
    player.gold = 50

    assert not game.add_route_to_player_queue(buyable(game, "b"))
    assert player.get_finance().expense == {}
    assert player.get_queue() == []


def test_add_upgrade(game):
    player = game.get_current_player()

    assert not game.add_upgrade_to_player("no_such_upgrade")
    assert game.add_upgrade_to_player("range_1")
    assert player.get_range() == 200
    assert player.gold == 500
    assert player.get_finance().get_expense(FinanceType.UPGRADE, "range_1").value == 500
    assert not game.add_upgrade_to_player("range_1")
    assert not game.add_upgrade_to_player("cheaper_trains_2")
    assert [u.id for u in player.get_upgrades()] == ["range_1"]


def test_upgrades_change_offered_prices(game):
    game.get_current_player().gold = 5000
    assert game.add_upgrade_to_player("cheaper_track_1")
    assert game.get_potential_route_cost(100) == (180, 2)


def test_has_any_player_won(game):
    alice, bob = game.players
    assert game.has_any_player_won() is None

    bob.gold = 10001
    assert game.has_any_player_won() is bob

    alice.gold = 20000
    assert game.has_any_player_won() is alice

    alice.gold = 10000
    assert game.has_any_player_won() is bob


def test_start_turn_order(game, monkeypatch):
    """Cities tick before resources, and the current player ticks last."""
    calls = []
    for city in game.data.cities:
        monkeypatch.setattr(city, "handle_turn", lambda info, c=city: calls.append(c.id))
    for resource in game.data.resources:
        monkeypatch.setattr(
            resource, "handle_turn", lambda info, r=resource: calls.append(r.id)
        )
    player = game.get_current_player()
    monkeypatch.setattr(
        player, "handle_turn", lambda info, **kwargs: calls.append(player.id)
    )

    game.start_turn()

    assert calls == ["a", "b", "c", "d", "grain", "coal", "p1"]


def test_queued_route_activates_and_operates(game, buyable, ledger_balanced):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "b"))
    route = player.get_queue()[0].route

    game.start_turn()

    assert player.get_queue() == []
    assert player.get_routes() == [route]
    # Empty cargo plan: only the Pioneer's upkeep of 10
    assert player.gold == 870
    assert player.get_finance().get_expense(FinanceType.UPKEEP, route.id).value == 10
    assert ledger_balanced(player)


def test_route_stays_queued_until_turn_cost_elapses(game, buyable):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "c"))
    assert player.get_queue()[0].turn_cost == 2

    game.start_turn()
    assert player.get_queue()[0].turn_cost == 1
    assert player.get_routes() == []

    game.end_turn()
    game.start_turn()
    assert player.get_queue() == []
    assert len(player.get_routes()) == 1


def test_sell_active_route(game, buyable, ledger_balanced):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "b"))
    game.start_turn()
    route = player.get_routes()[0]

    assert not game.remove_route_from_player_routes("missing")
    assert game.remove_route_from_player_routes(route.id)
    assert player.get_routes() == []
    # Half of the 20 gold track and the 100 gold train comes back
    assert player.gold == 930
    assert player.get_finance().get_income(FinanceType.RECOUP, route.id).value == 60
    assert ledger_balanced(player)


def test_change_active_route(game, buyable, ledger_balanced):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "b"))
    game.start_turn()
    route = player.get_routes()[0]
    courier = next(t for t in game.data.trains if t.id == "courier")

    assert game.change_active_player_route(route.id, courier, RoutePlanCargo())
    assert route.train is courier
    assert player.gold == 870 - 180
    finance = player.get_finance()
    assert finance.get_expense(FinanceType.TRAIN, "pioneer") is None
    assert finance.get_expense(FinanceType.TRAIN, "courier").value == 180
    assert ledger_balanced(player)

    assert not game.change_active_player_route("missing", courier, RoutePlanCargo())
    player.gold = 100
    assert not game.change_active_player_route(route.id, courier, RoutePlanCargo())
    assert route.train is courier


def test_end_turn_advances_and_keeps_current_player(game):
    current = game.get_current_player()

    game.end_turn()

    assert game.get_current_turn() == 2
    assert game.get_current_player() is current
    assert game.storage.get_item(LocalKey.HAS_ACTIVE_GAME.value) == "1"


def test_computer_failure_propagates_without_leaking_context(game):
    """A failing computer turn surfaces to the caller; the current player is untouched."""
    alice, bob = game.players
    bob.strategy = FailingAI()

    with pytest.raises(RuntimeError, match="strategy failure"):
        game.end_turn()

    assert game.get_current_player() is alice
    assert game.get_current_turn() == 1
    assert game.storage.get_item(LocalKey.HAS_ACTIVE_GAME.value) is None


def _proposal(game, target_id, train, **prices) -> BuyableRoute:
    """A proposal from Alpha carrying whatever prices the caller claims."""
    claimed = dict(distance=10, gold_cost=20, turn_cost=1, purchased_on_turn=1, train_cost=100)
    claimed.update(prices)
    return BuyableRoute(
        city_one=game.data.get_city("a"),
        city_two=game.data.get_city(target_id),
        train=train,
        route_plan=RoutePlanCargo(),
        **claimed,
    )


def test_route_purchase_is_priced_by_the_engine(game, ledger_balanced):
    """Claimed prices on a proposal are ignored in favour of the real ones."""
    player = game.get_current_player()
    pioneer = game.data.get_train("pioneer")
    proposal = _proposal(
        game, "b", pioneer, distance=1, gold_cost=-5000, turn_cost=0, train_cost=0
    )

    assert game.add_route_to_player_queue(proposal)

    queued = player.get_queue()[0]
    assert (queued.route.distance, queued.route.cost, queued.route.train_cost) == (10, 20, 100)
    assert queued.turn_cost == 1
    assert player.gold == 880
    assert player.get_finance().get_expense(FinanceType.TRACK, queued.route.id).value == 20
    assert ledger_balanced(player)


def test_route_purchase_uses_catalog_train(game):
    player = game.get_current_player()
    forged = Train(id="pioneer", name="Pioneer", cost=-5000, upkeep=0, speed=1, cargo_space=4)

    assert game.add_route_to_player_queue(_proposal(game, "b", forged, train_cost=-5000))
    assert player.get_queue()[0].route.train is game.data.get_train("pioneer")
    assert player.gold == 880

    unknown = Train(id="ghost", name="Ghost", cost=1, upkeep=0, speed=1, cargo_space=4)
    with pytest.raises(ValueError):
        game.add_route_to_player_queue(_proposal(game, "b", unknown))
    assert len(player.get_queue()) == 1


def test_route_purchase_out_of_range_rejected(game):
    """Delta is 400 away, beyond Alice's range of 150, whatever distance is claimed."""
    player = game.get_current_player()
    proposal = _proposal(game, "d", game.data.get_train("pioneer"), distance=10)

    assert not game.add_route_to_player_queue(proposal)
    assert player.get_finance().expense == {}
    assert player.gold == 1000
    assert player.get_queue() == []


def test_change_active_route_uses_catalog_price(game, buyable, ledger_balanced):
    player = game.get_current_player()
    game.add_route_to_player_queue(buyable(game, "b"))
    game.start_turn()
    route = player.get_routes()[0]
    forged = Train(id="courier", name="Courier", cost=-1000, upkeep=0, speed=2, cargo_space=6)

    assert game.change_active_player_route(route.id, forged, RoutePlanCargo())

    assert route.train is game.data.get_train("courier")
    assert route.train_cost == 180
    assert player.gold == 870 - 180
    assert ledger_balanced(player)
    unknown = Train(id="ghost", name="Ghost", cost=1, upkeep=0, speed=1, cargo_space=4)
    assert not game.change_active_player_route(route.id, unknown, RoutePlanCargo())


def test_computer_current_player_acts_on_start_turn(game):
    """A computer holding the current seat takes its turn in start_turn."""
    seen = []

    class RecordingAI(BaseAI):
        def take_turn(self, game, player, info):
            seen.append((player.id, info.turn))

    alice, bob = game.players
    bob.strategy = RecordingAI()
    bob_seat = Nardis(game.data, [alice, bob], game.stocks, current_player=bob)

    bob_seat.start_turn()
    bob_seat.end_turn()

    assert seen == [("p2", 1)]
    assert bob_seat.get_current_player() is bob

"""Turn orchestrator for Nardis."""

from __future__ import annotations

import logging
import random

from nardis.config import Settings
from nardis.database.storage import InMemoryStorage, Storage
from nardis.exceptions import NoActiveGameError
from nardis.models.city import City
from nardis.models.finance import FinanceType
from nardis.models.game_data import (
    AdjustedTrain,
    BuyableRoute,
    GameData,
    HandleTurnInfo,
    PlayerData,
    PotentialRoute,
)
from nardis.models.player import Player, PlayerType
from nardis.models.resource import Resource
from nardis.models.route import Route, RoutePlanCargo
from nardis.models.stock import StockMarket
from nardis.models.train import Train
from nardis.models.upgrade import Upgrade

from . import pricing, snapshot
from .generator import generate_data
from .snapshot import LocalKey, Snapshot

OPPONENT_NAMES = ["Hartley", "Vance", "Moreau", "Okafor", "Lindqvist", "Sato"]


class Nardis:
    """Authoritative game state and turn orchestration.

    Every player-scoped operation takes an optional player. It defaults to
    the current player; computer turns pass their own player explicitly, so
    the current player is never reassigned while they act.

    Attributes:
        data: Static catalog data.
        players: Every player, in turn order.
        stocks: Stock registry keyed by owning player id.
        storage: Where save_game writes snapshots.
        settings: Game settings.
    """

    def __init__(
        self,
        data: GameData,
        players: list[Player],
        stocks: StockMarket,
        current_player: Player | None = None,
        turn: int = 1,
        storage: Storage | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            data: Static catalog data.
            players: Every player, in turn order.
            stocks: Stock registry.
            current_player: Player whose turn it is. Defaults to the first.
            turn: Current turn number.
            storage: Storage for saves. Defaults to in-memory storage.
            settings: Game settings. Defaults to Settings().
        """
        if not players:
            raise ValueError("Need at least 1 player")
        self.data = data
        self.players = players
        self.stocks = stocks
        self.storage: Storage = storage if storage is not None else InMemoryStorage()
        self.settings = settings or Settings()
        self._current_player = current_player or players[0]
        self._turn = turn
        self.logger = logging.getLogger(__name__)

    def get_current_player(self) -> Player:
        return self._current_player

    def get_current_turn(self) -> int:
        return self._turn

    # Turn cycle

    def start_turn(self) -> None:
        """Run turn-start handling for cities, then resources, then the current player.

        Resources may read city state updated earlier in the same pass. A
        computer current player acts here, since end_turn skips it.
        """
        info = self._turn_info(self._current_player)
        for city in self.data.cities:
            city.handle_turn(info)
        for resource in self.data.resources:
            resource.handle_turn(info)
        self._current_player.handle_turn(info, game=self)
        self.logger.info(
            f"Turn {self._turn} started for {self._current_player.name}"
        )

    def end_turn(self) -> None:
        """Finish the human turn: computer turns, valuations, advance, save."""
        self.logger.info(f"{self._current_player.name} ended turn {self._turn}")
        self._handle_computer_turns()
        self._update_players_net_worth()
        self._update_stocks()
        self._turn += 1
        self.save_game()

    def _handle_computer_turns(self) -> None:
        for player in self.players:
            if player.equals(self._current_player) or not player.is_computer():
                continue
            self.logger.debug(f"Handling computer turn for {player.name}")
            player.handle_turn(self._turn_info(player), game=self)

    def _turn_info(self, player: Player) -> HandleTurnInfo:
        return HandleTurnInfo(
            turn=self._turn,
            data=self.data,
            player_data=PlayerData(
                routes=player.get_routes(), upgrades=player.get_upgrades()
            ),
        )

    def has_any_player_won(self) -> Player | None:
        """Get the first player whose gold exceeds the victory threshold."""
        return next(
            (p for p in self.players if p.gold > self.settings.victory_gold), None
        )

    # Pricing

    def get_potential_route_cost(
        self, distance: int, player: Player | None = None
    ) -> tuple[int, int]:
        """Get (gold cost, turn cost) of a route with the player's upgrades applied."""
        player = player or self._current_player
        return pricing.get_potential_route_cost(distance, player.get_upgrades())

    def get_array_of_possible_routes(
        self, origin: City, player: Player | None = None
    ) -> list[PotentialRoute]:
        """Get priced routes from origin to every city within the player's range."""
        player = player or self._current_player
        constraint = player.get_range()
        potential_routes = []
        for city in self.data.cities:
            distance = city.distance_to(origin)
            if 0 < distance <= constraint:
                gold_cost, turn_cost = self.get_potential_route_cost(distance, player)
                potential_routes.append(
                    PotentialRoute(
                        city_one=origin,
                        city_two=city,
                        distance=distance,
                        gold_cost=gold_cost,
                        turn_cost=turn_cost,
                        purchased_on_turn=self._turn,
                    )
                )
        return potential_routes

    def get_array_of_adjusted_trains(
        self, player: Player | None = None
    ) -> list[AdjustedTrain]:
        """Get every catalog train priced with the player's upgrades."""
        player = player or self._current_player
        return [
            AdjustedTrain(
                train=train,
                cost=pricing.get_adjusted_train_cost(train.cost, player.get_upgrades()),
            )
            for train in self.data.trains
        ]

    # Transactions

    def add_route_to_player_queue(
        self, buyable_route: BuyableRoute, player: Player | None = None
    ) -> bool:
        """Buy a route and queue it on the player.

        Only the cities, train and cargo plan of the proposal are used, with
        cities and train resolved against the catalog by id. Distance, gold
        cost, turn cost and train cost are priced again for the buying player
        on the current turn.

        Raises:
            ValueError: If the proposal cannot form a valid route. Nothing
                is recorded in that case.

        Returns:
            True if the route was bought, False if it is out of range or the
            player cannot afford it.
        """
        player = player or self._current_player
        if buyable_route.train is None:
            raise ValueError("Buyable route has no train")
        train = self.data.get_train(buyable_route.train.id)
        if train is None:
            raise ValueError(f"Train {buyable_route.train.id} is not in the catalog")
        city_one = self.data.get_city(buyable_route.city_one.id)
        city_two = self.data.get_city(buyable_route.city_two.id)
        if city_one is None or city_two is None:
            raise ValueError("Route cities must be on the map")
        distance = city_one.distance_to(city_two)
        gold_cost, turn_cost = self.get_potential_route_cost(distance, player)
        train_cost = pricing.get_adjusted_train_cost(train.cost, player.get_upgrades())
        route = Route(
            name=f"{city_one.name} <--> {city_two.name}",
            city_one=city_one,
            city_two=city_two,
            train=train,
            route_plan=buyable_route.route_plan,
            distance=distance,
            cost=gold_cost,
            train_cost=train_cost,
            purchased_on_turn=self._turn,
        )
        if distance > player.get_range():
            self.logger.warning(
                f"{player.name} cannot reach {route.name}: {distance} > {player.get_range()}"
            )
            return False
        total_cost = gold_cost + train_cost
        if not player.can_afford(total_cost):
            self.logger.warning(f"{player.name} cannot afford {route.name} for {total_cost}")
            return False

        finance = player.get_finance()
        finance.add_to_finance_expense(FinanceType.TRACK, route.id, 1, route.cost)
        finance.add_to_finance_expense(
            FinanceType.TRAIN, route.train.id, 1, route.train_cost
        )
        player.remove_gold(total_cost)
        player.add_route_to_queue(route, turn_cost)
        self.logger.info(
            f"{player.name} bought {route.name} with {route.train.name} "
            f"for {total_cost}, ready in {turn_cost} turns"
        )
        return True

    def remove_route_from_player_queue(
        self, route_id: str, train_id: str, player: Player | None = None
    ) -> bool:
        """Cancel a queued route, reversing its expenses and refunding its cost.

        Returns:
            True if the route was cancelled, False if no queued route with
            that id and train exists.
        """
        player = player or self._current_player
        route = player.get_queued_route(route_id)
        if route is None or route.train.id != train_id:
            return False
        player.remove_route_from_queue(route_id)
        self._reverse_route_expenses(player, route)
        player.add_gold(route.cost + route.train_cost)
        self.logger.info(f"{player.name} cancelled {route.name}")
        return True

    def remove_route_from_player_routes(
        self, route_id: str, player: Player | None = None
    ) -> bool:
        """Sell an active route back for a share of what it cost.

        Returns:
            True if the route was sold, False if it is not active.
        """
        player = player or self._current_player
        route = player.remove_route(route_id)
        if route is None:
            return False
        value = pricing.get_route_recoup_value(route.cost, route.train_cost)
        self._reverse_route_expenses(player, route)
        if value > 0:
            player.get_finance().add_to_finance_income(
                FinanceType.RECOUP, route.id, 1, value
            )
            player.add_gold(value)
        self.logger.info(f"{player.name} sold {route.name} for {value}")
        return True

    def change_active_player_route(
        self,
        route_id: str,
        train: Train,
        route_plan: RoutePlanCargo,
        player: Player | None = None,
    ) -> bool:
        """Replace the train and cargo plan of an active route.

        The train is resolved against the catalog by id and the player pays
        its price after upgrades.

        Returns:
            True if the route was changed.
        """
        player = player or self._current_player
        train = self.data.get_train(train.id)
        route = player.get_route(route_id)
        if train is None or route is None:
            return False
        cost = pricing.get_adjusted_train_cost(train.cost, player.get_upgrades())
        if not player.can_afford(cost) or not route_plan.fits(train):
            return False
        finance = player.get_finance()
        finance.remove_from_finance_expense(
            FinanceType.TRAIN, route.train.id, 1, route.train_cost
        )
        finance.add_to_finance_expense(FinanceType.TRAIN, train.id, 1, cost)
        player.remove_gold(cost)
        route.change_train(train, route_plan, cost)
        self.logger.info(f"{player.name} changed {route.name} to {train.name}")
        return True

    def _reverse_route_expenses(self, player: Player, route: Route) -> None:
        finance = player.get_finance()
        finance.remove_from_finance_expense(FinanceType.TRACK, route.id, 1, route.cost)
        finance.remove_from_finance_expense(
            FinanceType.TRAIN, route.train.id, 1, route.train_cost
        )

    def add_upgrade_to_player(
        self, upgrade_id: str, player: Player | None = None
    ) -> bool:
        """Buy an upgrade from the catalog.

        Returns:
            True if the upgrade was granted.
        """
        player = player or self._current_player
        upgrade: Upgrade | None = self.data.get_upgrade(upgrade_id)
        if upgrade is None or player.has_upgrade(upgrade_id):
            return False
        if not player.can_afford(upgrade.cost):
            self.logger.warning(f"{player.name} cannot afford upgrade {upgrade.name}")
            return False
        player.add_upgrade(upgrade)
        player.get_finance().add_to_finance_expense(
            FinanceType.UPGRADE, upgrade.id, 1, upgrade.cost
        )
        player.remove_gold(upgrade.cost)
        self.logger.info(f"{player.name} bought upgrade {upgrade.name}")
        return True

    # Stocks

    def buy_stock(self, owner_id: str, player: Player | None = None) -> bool:
        """Buy one share of the stock backed by owner_id.

        Returns:
            True if the share was bought.
        """
        player = player or self._current_player
        stock = self.stocks.get_stock(owner_id)
        if stock is None or not player.can_afford(stock.value) or stock.available <= 0:
            return False
        stock.buy(player.id)
        player.remove_gold(stock.value)
        player.get_finance().add_to_finance_expense(
            FinanceType.STOCK, owner_id, 1, stock.value
        )
        self.logger.info(f"{player.name} bought a share of {owner_id} at {stock.value}")
        return True

    def sell_stock(self, owner_id: str, player: Player | None = None) -> bool:
        """Sell one share of the stock backed by owner_id.

        Returns:
            True if the share was sold.
        """
        player = player or self._current_player
        stock = self.stocks.get_stock(owner_id)
        if stock is None or stock.get_held(player.id) <= 0:
            return False
        stock.sell(player.id)
        player.add_gold(stock.value)
        player.get_finance().add_to_finance_income(
            FinanceType.STOCK, owner_id, 1, stock.value
        )
        self.logger.info(f"{player.name} sold a share of {owner_id} at {stock.value}")
        return True

    def _update_players_net_worth(self) -> None:
        for player in self.players:
            player.net_worth = pricing.get_net_worth(player)

    def _update_stocks(self) -> None:
        for player in self.players:
            stock = self.stocks.get_stock(player.id)
            if stock:
                stock.value = pricing.get_stock_value(player.net_worth)

    # Persistence

    def serialize(self) -> Snapshot:
        """Get the full game state as a storage snapshot."""
        return {
            LocalKey.HAS_ACTIVE_GAME.value: "1",
            LocalKey.TRAINS.value: snapshot.encode([t.to_dict() for t in self.data.trains]),
            LocalKey.RESOURCES.value: snapshot.encode(
                [r.to_dict() for r in self.data.resources]
            ),
            LocalKey.UPGRADES.value: snapshot.encode(
                [u.to_dict() for u in self.data.upgrades]
            ),
            LocalKey.CITIES.value: snapshot.encode([c.to_dict() for c in self.data.cities]),
            LocalKey.PLAYERS.value: snapshot.encode([p.to_dict() for p in self.players]),
            LocalKey.CURRENT_PLAYER.value: snapshot.encode(self._current_player.to_dict()),
            LocalKey.TURN.value: snapshot.encode_turn(self._turn),
            LocalKey.STOCKS.value: snapshot.encode(self.stocks.to_dict()),
        }

    def save_game(self) -> None:
        """Write the full game state to storage."""
        for key, value in self.serialize().items():
            self.storage.set_item(key, value)
        self.logger.info(f"Saved game on turn {self._turn}")

    def clear_storage(self) -> None:
        """Remove every saved key."""
        for key in LocalKey:
            self.storage.remove_item(key.value)

    @classmethod
    def restore(
        cls,
        saved: Snapshot,
        storage: Storage | None = None,
        settings: Settings | None = None,
    ) -> Nardis:
        """Rebuild a game from a snapshot.

        Catalogs come first, then cities, then players, then stocks; the
        current player is resolved by id against the rebuilt players.

        Raises:
            NoActiveGameError: If the snapshot has no active-game marker or
                its current player is not one of its players.
        """
        if not saved.get(LocalKey.HAS_ACTIVE_GAME.value):
            raise NoActiveGameError("Cannot recreate from empty storage")

        def load(key: LocalKey):
            return snapshot.decode(saved[key.value])

        trains = [Train.from_dict(r) for r in load(LocalKey.TRAINS)]
        upgrades = [Upgrade.from_dict(r) for r in load(LocalKey.UPGRADES)]
        resources = [Resource.from_dict(r) for r in load(LocalKey.RESOURCES)]
        cities = [City.from_dict(r, resources) for r in load(LocalKey.CITIES)]
        players = [
            Player.from_dict(r, cities, trains, resources)
            for r in load(LocalKey.PLAYERS)
        ]
        stocks = StockMarket.from_dict(load(LocalKey.STOCKS))
        current_id = load(LocalKey.CURRENT_PLAYER)["id"]
        current_player = next((p for p in players if p.id == current_id), None)
        if current_player is None:
            raise NoActiveGameError(f"Saved current player {current_id} is not a saved player")
        turn = snapshot.decode_turn(saved[LocalKey.TURN.value])

        return cls(
            GameData(
                trains=trains, upgrades=upgrades, resources=resources, cities=cities
            ),
            players,
            stocks,
            current_player=current_player,
            turn=turn,
            storage=storage,
            settings=settings,
        )

    @classmethod
    def create_from_storage(
        cls, storage: Storage, settings: Settings | None = None
    ) -> Nardis:
        """Rebuild the game saved in storage.

        Raises:
            NoActiveGameError: If storage holds no active game.
        """
        if not storage.get_item(LocalKey.HAS_ACTIVE_GAME.value):
            raise NoActiveGameError("Cannot recreate from empty storage")
        saved = {}
        for key in LocalKey:
            value = storage.get_item(key.value)
            if value is not None:
                saved[key.value] = value
        return cls.restore(saved, storage=storage, settings=settings)

    @classmethod
    def create_from_player(
        cls,
        name: str,
        gold: int | None = None,
        opponents: int | None = None,
        storage: Storage | None = None,
        settings: Settings | None = None,
        seed: int | None = None,
    ) -> Nardis:
        """Create a new game for a human player and computer opponents.

        Args:
            name: Name of the human player.
            gold: Starting gold. Defaults to settings.starting_gold.
            opponents: Number of computer opponents. Defaults to settings.opponents.
            storage: Storage for saves.
            settings: Game settings.
            seed: Seed for map generation and start cities.

        Returns:
            The new game, on turn 1 with the human player to act.
        """
        settings = settings or Settings()
        gold = settings.starting_gold if gold is None else gold
        opponents = settings.opponents if opponents is None else opponents
        if opponents < 0 or opponents > len(OPPONENT_NAMES):
            raise ValueError(f"Opponents must be between 0 and {len(OPPONENT_NAMES)}")

        data = generate_data(seed)
        rng = random.Random(seed)
        start_cities = rng.sample(data.cities, opponents + 1)

        players = [
            Player(
                id="player_1",
                name=name,
                player_type=PlayerType.HUMAN,
                gold=gold,
                range=settings.start_range,
                start_city=start_cities[0],
            )
        ]
        for index in range(opponents):
            players.append(
                Player(
                    id=f"player_{index + 2}",
                    name=OPPONENT_NAMES[index],
                    player_type=PlayerType.COMPUTER,
                    gold=gold,
                    range=settings.start_range,
                    start_city=start_cities[index + 1],
                )
            )

        stocks = StockMarket()
        for player in players:
            player.net_worth = pricing.get_net_worth(player)
            stocks.add_player(player.id, pricing.get_stock_value(player.net_worth))

        logging.getLogger(__name__).info(
            f"Created game for {name} with {opponents} opponents and {gold} gold each"
        )
        return cls(data, players, stocks, storage=storage, settings=settings)

"""Rule-based AI for Nardis."""

import logging
from typing import TYPE_CHECKING

from nardis.models.game_data import AdjustedTrain, BuyableRoute, PotentialRoute
from nardis.models.route import RouteCargo, RoutePlanCargo
from nardis.models.upgrade import UpgradeType, apply_discounts

from .base_ai import BaseAI

if TYPE_CHECKING:
    from nardis.engine.nardis import Nardis
    from nardis.models.city import City
    from nardis.models.game_data import HandleTurnInfo
    from nardis.models.player import Player
    from nardis.models.train import Train


class RuleBasedAI(BaseAI):
    """Rule-based AI using heuristics for decisions.

    Each turn it considers, in order: one upgrade, one new route and one
    share of stock, always keeping a gold reserve.

    Attributes:
        aggressiveness: How aggressive the AI plays (0.0-1.0).
        reserve: Gold the AI tries never to spend below.
    """

    def __init__(self, aggressiveness: float = 0.5, reserve: int = 200) -> None:
        """Initialize rule-based AI.

        Args:
            aggressiveness: Aggression level (0=conservative, 1=aggressive).
            reserve: Gold kept back after every purchase.
        """
        super().__init__()
        self.aggressiveness = max(0.0, min(1.0, aggressiveness))
        self.reserve = reserve
        self.logger = logging.getLogger(__name__)

    @property
    def max_queue(self) -> int:
        """Routes the AI is willing to have under construction at once."""
        return 1 + round(self.aggressiveness * 2)

    def take_turn(self, game: "Nardis", player: "Player", info: "HandleTurnInfo") -> None:
        reasons = []
        if self._consider_upgrade(game, player):
            reasons.append("bought upgrade")
        if self._consider_route(game, player):
            reasons.append("bought route")
        if self._consider_stock(game, player):
            reasons.append("bought stock")
        self.last_reasoning = ", ".join(reasons) or f"holding gold {player.gold}"
        self.logger.debug(f"{player.name} turn {info.turn}: {self.last_reasoning}")

    def _consider_upgrade(self, game: "Nardis", player: "Player") -> bool:
        """Buy the cheapest upgrade not owned, once some routes are running."""
        if not player.get_routes():
            return False
        candidates = sorted(
            (u for u in game.data.upgrades if not player.has_upgrade(u.id)),
            key=lambda u: u.cost,
        )
        reserve = self.reserve * (3 - 2 * self.aggressiveness)
        for upgrade in candidates:
            if player.gold - upgrade.cost >= reserve:
                return game.add_upgrade_to_player(upgrade.id, player=player)
        return False

    def _consider_route(self, game: "Nardis", player: "Player") -> bool:
        """Buy the affordable route with the best income per gold spent."""
        if len(player.get_queue()) >= self.max_queue:
            return False
        trains = sorted(game.get_array_of_adjusted_trains(player=player), key=lambda t: t.cost)
        owned = {
            frozenset((route.city_one.id, route.city_two.id))
            for route in player.all_routes()
        }

        best: BuyableRoute | None = None
        best_score = 0.0
        for origin in self._origins(player):
            for potential in game.get_array_of_possible_routes(origin, player=player):
                pair = frozenset((potential.city_one.id, potential.city_two.id))
                if pair in owned:
                    continue
                candidate = self._evaluate(potential, trains, player)
                if candidate is None:
                    continue
                buyable, profit = candidate
                if player.gold - buyable.total_cost < self.reserve:
                    continue
                score = profit / buyable.total_cost
                if score > best_score:
                    best, best_score = buyable, score

        if best is None:
            return False
        return game.add_route_to_player_queue(best, player=player)

    def _origins(self, player: "Player") -> list["City"]:
        origins = [player.start_city] if player.start_city else []
        for route in player.all_routes():
            for city in (route.city_one, route.city_two):
                if all(not city.equals(known) for known in origins):
                    origins.append(city)
        return origins

    def _evaluate(
        self,
        potential: PotentialRoute,
        trains: list[AdjustedTrain],
        player: "Player",
    ) -> tuple[BuyableRoute, int] | None:
        """Pick the train giving the most profit per turn on a route."""
        best: tuple[BuyableRoute, int] | None = None
        for adjusted in trains:
            plan = RoutePlanCargo(
                city_one=self._plan_cargo(potential.city_one, potential.city_two, adjusted.train),
                city_two=self._plan_cargo(potential.city_two, potential.city_one, adjusted.train),
            )
            income = sum(
                item.amount * item.resource.value for item in plan.city_one + plan.city_two
            )
            upkeep = apply_discounts(
                adjusted.train.upkeep, player.get_upgrades(), UpgradeType.TRAIN_UPKEEP_CHEAPER
            )
            profit = income - upkeep
            if profit <= 0:
                continue
            if best is None or profit > best[1]:
                best = (
                    BuyableRoute.from_potential(potential, adjusted.train, adjusted.cost, plan),
                    profit,
                )
        return best

    def _plan_cargo(self, source: "City", target: "City", train: "Train") -> list[RouteCargo]:
        """Fill a train with what source supplies, demanded goods first."""
        supplied = source.supplies()
        supplied.sort(key=lambda r: (r.id not in target.demand, -r.value))
        space = train.cargo_space
        cargo = []
        for resource in supplied:
            amount = min(space // resource.weight, source.supply.get(resource.id, 0))
            if amount <= 0:
                continue
            cargo.append(RouteCargo(resource=resource, amount=amount))
            space -= amount * resource.weight
        return cargo

    def _consider_stock(self, game: "Nardis", player: "Player") -> bool:
        """Buy one share of the strongest company when gold is plentiful."""
        threshold = self.reserve * (6 - 3 * self.aggressiveness)
        if player.gold < threshold:
            return False
        stocks = sorted(game.stocks.stocks.values(), key=lambda s: s.value, reverse=True)
        for stock in stocks:
            if stock.available > 0 and player.gold - stock.value >= threshold / 2:
                return game.buy_stock(stock.owner_id, player=player)
        return False

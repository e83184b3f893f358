"""Stock model for Nardis."""

from dataclasses import dataclass, field
from typing import Any

# Shares issued per player
STOCK_SUPPLY = 10


@dataclass
class Stock:
    """Tradeable equity in one player's company.

    Attributes:
        owner_id: Player whose net worth backs this stock.
        value: Current price of one share.
        supply: Total shares issued.
        holdings: Dictionary mapping player_id to shares held.
    """

    owner_id: str
    value: int = 1
    supply: int = STOCK_SUPPLY
    holdings: dict[str, int] = field(default_factory=dict)

    @property
    def total_held(self) -> int:
        """Get total shares held by players."""
        return sum(self.holdings.values())

    @property
    def available(self) -> int:
        """Get shares still available to buy."""
        return self.supply - self.total_held

    def get_held(self, player_id: str) -> int:
        """Get number of shares held by a player."""
        return self.holdings.get(player_id, 0)

    def buy(self, player_id: str, count: int = 1) -> bool:
        """Player takes shares from the available supply."""
        if count > self.available:
            return False
        self.holdings[player_id] = self.get_held(player_id) + count
        return True

    def sell(self, player_id: str, count: int = 1) -> bool:
        """Player returns shares to the available supply."""
        current = self.get_held(player_id)
        if count > current or count <= 0:
            return False
        self.holdings[player_id] = current - count
        if self.holdings[player_id] == 0:
            del self.holdings[player_id]
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "value": self.value,
            "supply": self.supply,
            "holdings": dict(self.holdings),
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Stock":
        return cls(
            owner_id=record["owner_id"],
            value=record["value"],
            supply=record.get("supply", STOCK_SUPPLY),
            holdings=dict(record.get("holdings", {})),
        )


class StockMarket:
    """Registry of every player's stock.

    Attributes:
        stocks: Dictionary mapping owner player_id to Stock.
    """

    def __init__(self, stocks: dict[str, Stock] | None = None) -> None:
        self.stocks: dict[str, Stock] = stocks or {}

    def add_player(self, player_id: str, value: int = 1) -> Stock:
        """Issue stock for a player."""
        stock = Stock(owner_id=player_id, value=value)
        self.stocks[player_id] = stock
        return stock

    def get_stock(self, owner_id: str) -> Stock | None:
        """Get the stock backed by a player."""
        return self.stocks.get(owner_id)

    def get_player_portfolio(self, player_id: str) -> dict[str, int]:
        """Get all shares held by a player, keyed by stock owner."""
        portfolio = {}
        for owner_id, stock in self.stocks.items():
            shares = stock.get_held(player_id)
            if shares > 0:
                portfolio[owner_id] = shares
        return portfolio

    def to_dict(self) -> list[dict[str, Any]]:
        return [stock.to_dict() for stock in self.stocks.values()]

    @classmethod
    def from_dict(cls, records: list[dict[str, Any]]) -> "StockMarket":
        stocks = [Stock.from_dict(record) for record in records]
        return cls({stock.owner_id: stock for stock in stocks})

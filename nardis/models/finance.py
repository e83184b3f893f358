"""Finance ledger for Nardis players."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FinanceType(Enum):
    """Ledger category of an income or expense entry."""

    TRACK = "track"
    TRAIN = "train"
    UPGRADE = "upgrade"
    UPKEEP = "upkeep"
    CARGO = "cargo"
    STOCK = "stock"
    RECOUP = "recoup"


@dataclass
class FinanceEntry:
    """Merged ledger entry.

    Attributes:
        quantity: Number of units recorded.
        value: Summed quantity * unit cost of every unit recorded.
    """

    quantity: int
    value: int


@dataclass
class FinancePeriod:
    """Income and expense recorded during one closed turn."""

    turn: int
    income: int
    expense: int

    @property
    def net(self) -> int:
        return self.income - self.expense


LedgerKey = tuple[FinanceType, str]

# Closed periods kept in the history
HISTORY_LIMIT = 20


@dataclass
class Finance:
    """Per-player ledger of income and expense entries.

    Entries are keyed by (category, subject id). Adding to an existing key
    merges into it; removing takes units back out. Totals are always derived
    from the entries.

    Attributes:
        income: Dictionary of (category, subject_id) -> FinanceEntry.
        expense: Dictionary of (category, subject_id) -> FinanceEntry.
        history: The most recent closed turn periods, oldest first.
        closed_income: Total income at the last period close.
        closed_expense: Total expense at the last period close.
    """

    income: dict[LedgerKey, FinanceEntry] = field(default_factory=dict)
    expense: dict[LedgerKey, FinanceEntry] = field(default_factory=dict)
    history: list[FinancePeriod] = field(default_factory=list)
    closed_income: int = 0
    closed_expense: int = 0

    def add_to_finance_expense(
        self, finance_type: FinanceType, subject_id: str, quantity: int, unit_cost: int
    ) -> None:
        """Record an expense, merging with an existing entry."""
        self._add(self.expense, finance_type, subject_id, quantity, unit_cost)

    def add_to_finance_income(
        self, finance_type: FinanceType, subject_id: str, quantity: int, unit_cost: int
    ) -> None:
        """Record an income, merging with an existing entry."""
        self._add(self.income, finance_type, subject_id, quantity, unit_cost)

    def remove_from_finance_expense(
        self,
        finance_type: FinanceType,
        subject_id: str,
        quantity: int = 1,
        unit_cost: int | None = None,
    ) -> bool:
        """Take units back out of an expense entry.

        Args:
            finance_type: Ledger category.
            subject_id: Id of the route, train or upgrade.
            quantity: Units to remove.
            unit_cost: Cost each unit was recorded at. If None, the whole
                entry is removed.

        Returns:
            True if the entry existed and held enough units.
        """
        return self._remove(self.expense, finance_type, subject_id, quantity, unit_cost)

    def remove_from_finance_income(
        self,
        finance_type: FinanceType,
        subject_id: str,
        quantity: int = 1,
        unit_cost: int | None = None,
    ) -> bool:
        """Take units back out of an income entry."""
        return self._remove(self.income, finance_type, subject_id, quantity, unit_cost)

    def get_expense(self, finance_type: FinanceType, subject_id: str) -> FinanceEntry | None:
        return self.expense.get((finance_type, subject_id))

    def get_income(self, finance_type: FinanceType, subject_id: str) -> FinanceEntry | None:
        return self.income.get((finance_type, subject_id))

    def total_expense(self, finance_type: FinanceType | None = None) -> int:
        """Get summed expense, optionally for one category."""
        return self._total(self.expense, finance_type)

    def total_income(self, finance_type: FinanceType | None = None) -> int:
        """Get summed income, optionally for one category."""
        return self._total(self.income, finance_type)

    def net_for_turn(self) -> int:
        """Get the net recorded since the last closed period."""
        return (self.total_income() - self.closed_income) - (
            self.total_expense() - self.closed_expense
        )

    def close_period(self, turn: int) -> FinancePeriod:
        """Close the current turn and append it to the history."""
        income, expense = self.total_income(), self.total_expense()
        period = FinancePeriod(
            turn=turn,
            income=income - self.closed_income,
            expense=expense - self.closed_expense,
        )
        self.closed_income, self.closed_expense = income, expense
        self.history.append(period)
        del self.history[:-HISTORY_LIMIT]
        return period

    def _add(
        self,
        ledger: dict[LedgerKey, FinanceEntry],
        finance_type: FinanceType,
        subject_id: str,
        quantity: int,
        unit_cost: int,
    ) -> None:
        if quantity <= 0:
            raise ValueError(f"Cannot record {quantity} units of {finance_type.value}")
        entry = ledger.get((finance_type, subject_id))
        if entry:
            entry.quantity += quantity
            entry.value += quantity * unit_cost
        else:
            ledger[(finance_type, subject_id)] = FinanceEntry(
                quantity=quantity, value=quantity * unit_cost
            )

    def _remove(
        self,
        ledger: dict[LedgerKey, FinanceEntry],
        finance_type: FinanceType,
        subject_id: str,
        quantity: int,
        unit_cost: int | None,
    ) -> bool:
        entry = ledger.get((finance_type, subject_id))
        if not entry:
            return False
        if unit_cost is None:
            del ledger[(finance_type, subject_id)]
            return True
        if quantity > entry.quantity:
            return False
        entry.quantity -= quantity
        entry.value -= quantity * unit_cost
        if entry.quantity == 0:
            del ledger[(finance_type, subject_id)]
        return True

    @staticmethod
    def _total(
        ledger: dict[LedgerKey, FinanceEntry], finance_type: FinanceType | None
    ) -> int:
        return sum(
            entry.value
            for (kind, _), entry in ledger.items()
            if finance_type is None or kind == finance_type
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "income": self._ledger_to_records(self.income),
            "expense": self._ledger_to_records(self.expense),
            "history": [
                {"turn": p.turn, "income": p.income, "expense": p.expense}
                for p in self.history
            ],
            "closed_income": self.closed_income,
            "closed_expense": self.closed_expense,
        }

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Finance":
        return cls(
            income=cls._records_to_ledger(record.get("income", [])),
            expense=cls._records_to_ledger(record.get("expense", [])),
            history=[FinancePeriod(**p) for p in record.get("history", [])],
            closed_income=record.get("closed_income", 0),
            closed_expense=record.get("closed_expense", 0),
        )

    @staticmethod
    def _ledger_to_records(ledger: dict[LedgerKey, FinanceEntry]) -> list[dict[str, Any]]:
        return [
            {
                "type": kind.value,
                "id": subject_id,
                "quantity": entry.quantity,
                "value": entry.value,
            }
            for (kind, subject_id), entry in ledger.items()
        ]

    @staticmethod
    def _records_to_ledger(records: list[dict[str, Any]]) -> dict[LedgerKey, FinanceEntry]:
        return {
            (FinanceType(r["type"]), r["id"]): FinanceEntry(
                quantity=r["quantity"], value=r["value"]
            )
            for r in records
        }

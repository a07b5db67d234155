"""Holdings model and rebalancing actions.

This module defines the in-memory representation of an account's positions
and the per-symbol actions produced by the allocation engine.

Responsibilities:
- Normalize provider records into one position per symbol per account
- Apply the user's ignore list once, right after loading
- Describe the outcome for each symbol as a tagged action
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Set

from investment_adjuster.utils.exceptions import DataInconsistentError
from investment_adjuster.utils.logging import get_logger

if TYPE_CHECKING:
    from investment_adjuster.data.base import HoldingRecord
    from investment_adjuster.data.providers import Provider

logger = get_logger(__name__)

ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert a numeric value to Decimal.

    Floats go through str() so that 33.3 becomes Decimal("33.3") rather
    than its binary approximation.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Cannot convert {value!r} to Decimal") from e
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    return result


class ActionType(Enum):
    """Rebalancing action kinds."""

    NOTHING = "NOTHING"
    IGNORE = "IGNORE"
    SELL = "SELL"
    BUY = "BUY"


@dataclass(frozen=True)
class Action:
    """Outcome of rebalancing for a single symbol.

    Attributes:
        kind: What to do with the symbol
        amount: Dollar amount to buy or sell. Always zero for NOTHING and IGNORE.
    """

    kind: ActionType
    amount: Decimal = ZERO

    def __post_init__(self):
        """Validate amount against the action kind."""
        if self.kind in (ActionType.BUY, ActionType.SELL):
            if self.amount <= 0:
                raise ValueError(
                    f"{self.kind.value} amount must be positive, got {self.amount}"
                )
        elif self.amount != 0:
            raise ValueError(
                f"{self.kind.value} action cannot carry an amount, got {self.amount}"
            )

    @classmethod
    def nothing(cls) -> "Action":
        return cls(ActionType.NOTHING)

    @classmethod
    def ignore(cls) -> "Action":
        return cls(ActionType.IGNORE)

    @classmethod
    def sell(cls, amount: Decimal) -> "Action":
        return cls(ActionType.SELL, amount)

    @classmethod
    def buy(cls, amount: Decimal) -> "Action":
        return cls(ActionType.BUY, amount)

    def __str__(self) -> str:
        if self.kind in (ActionType.BUY, ActionType.SELL):
            return f"{self.kind.value.title()}({self.amount:.2f})"
        return self.kind.value.title()


@dataclass
class Position:
    """One holding inside one account.

    Attributes:
        symbol: Ticker with any provider marker (such as the core suffix) removed
        current_value: Current dollar value
        is_core: True if this is the account's cash/core reserve
        ignored: Set from the ignore list after loading
    """

    symbol: str
    current_value: Decimal
    is_core: bool = False
    ignored: bool = False

    def __post_init__(self):
        """Validate position fields."""
        if not self.symbol:
            raise ValueError("symbol must not be empty")
        self.current_value = to_decimal(self.current_value)


class AccountHoldings:
    """Positions held in a single account, one per symbol.

    Positions keep the order in which their symbols were first seen.

    Example:
        >>> holdings = AccountHoldings("X12345678", [
        ...     Position("SPAXX", Decimal("1000"), is_core=True),
        ...     Position("VTI", Decimal("4000")),
        ... ])
        >>> holdings.set_ignored({"vti"})
        >>> holdings.get("VTI").ignored
        True
    """

    def __init__(
        self,
        account_number: str,
        positions: Optional[Iterable[Position]] = None,
    ) -> None:
        self.account_number = account_number
        self._positions: Dict[str, Position] = {}
        self.ignore_list: Set[str] = set()
        for position in positions or []:
            self.add(position)

    def add(self, position: Position) -> None:
        """Add a position, merging it into an existing one with the same symbol.

        Merging sums current values and keeps the core flag if either row
        carries it. Brokerage exports may split one holding across rows
        (pending activity, for example).
        """
        existing = self._positions.get(position.symbol)
        if existing is None:
            self._positions[position.symbol] = Position(
                symbol=position.symbol,
                current_value=position.current_value,
                is_core=position.is_core,
                ignored=position.ignored,
            )
            return

        logger.debug(
            "Merging duplicate %s row in account %s", position.symbol, self.account_number
        )
        existing.current_value += position.current_value
        existing.is_core = existing.is_core or position.is_core
        existing.ignored = existing.ignored or position.ignored

    def set_ignored(self, symbols: Iterable[str]) -> None:
        """Flag positions whose symbol matches the ignore list.

        Matching is case-insensitive. Symbols not held in this account are
        accepted and kept in ignore_list, upper-cased, so that targets the
        account does not hold yet can still be checked against them.

        Args:
            symbols: Symbols to exclude from rebalancing
        """
        wanted = {symbol.strip().upper() for symbol in symbols if symbol.strip()}
        self.ignore_list |= wanted
        matched = set()
        for position in self._positions.values():
            if position.symbol.upper() in wanted:
                position.ignored = True
                matched.add(position.symbol.upper())

        unmatched = wanted - matched
        if unmatched:
            logger.debug(
                "Ignored symbols not held in account %s: %s",
                self.account_number,
                sorted(unmatched),
            )

    def get(self, symbol: str) -> Optional[Position]:
        return self._positions.get(symbol)

    @property
    def positions(self) -> List[Position]:
        return list(self._positions.values())

    @property
    def ignored_symbols(self) -> List[str]:
        return [p.symbol for p in self._positions.values() if p.ignored]

    @property
    def total_value(self) -> Decimal:
        """Total value of every position, ignored ones included."""
        return sum((p.current_value for p in self._positions.values()), ZERO)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._positions

    def __repr__(self) -> str:
        return (
            f"AccountHoldings(account_number={self.account_number!r}, "
            f"positions={self.positions!r})"
        )


@dataclass
class Portfolio:
    """Holdings for every account found in a positions export.

    Attributes:
        accounts: Account number -> AccountHoldings, in order of appearance
    """

    accounts: Dict[str, AccountHoldings] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: Iterable["HoldingRecord"]) -> "Portfolio":
        """Group provider records by account, merging duplicate symbols."""
        portfolio = cls()
        for record in records:
            holdings = portfolio.accounts.get(record.account_number)
            if holdings is None:
                holdings = AccountHoldings(record.account_number)
                portfolio.accounts[record.account_number] = holdings
            holdings.add(
                Position(
                    symbol=record.symbol,
                    current_value=record.current_value,
                    is_core=record.is_core,
                )
            )
        return portfolio

    @classmethod
    def load_from_file(cls, path: str | Path, provider: "Provider") -> "Portfolio":
        """Load a positions export with the given provider.

        Args:
            path: Path to the provider's export file
            provider: Which brokerage format the file uses

        Returns:
            Portfolio with one AccountHoldings per account in the file
        """
        from investment_adjuster.data.providers import get_provider

        records = get_provider(provider).load_holdings(path)
        portfolio = cls.from_records(records)
        logger.info(
            "Loaded %d positions across %d accounts from %s",
            sum(len(h) for h in portfolio.accounts.values()),
            len(portfolio.accounts),
            path,
        )
        return portfolio

    def get_account(self, account_number: str) -> AccountHoldings:
        """Return holdings for one account.

        Raises:
            DataInconsistentError: If the account is not in this portfolio
        """
        holdings = self.accounts.get(account_number)
        if holdings is None:
            raise DataInconsistentError(
                f"No holdings found for account {account_number}. "
                f"Accounts in file: {', '.join(self.accounts) or 'none'}"
            )
        return holdings

    def set_ignored(self, symbols: Iterable[str]) -> None:
        """Apply the ignore list to every account."""
        symbols = list(symbols)
        for holdings in self.accounts.values():
            holdings.set_ignored(symbols)

"""User-friendly Portfolio API for rebalancing an account.

This module provides a simple, high-level interface that loads a positions
export, applies the ignore list, and runs the allocation engine against a
target policy.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from investment_adjuster.data.providers import Provider
from investment_adjuster.portfolio.allocation_engine import adjust_allocations
from investment_adjuster.portfolio.base import (
    ZERO,
    AccountHoldings,
    Action,
    ActionType,
    Portfolio,
)
from investment_adjuster.portfolio.target import TargetPolicy
from investment_adjuster.utils.config import load_target_policy
from investment_adjuster.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RebalanceResult:
    """Result of rebalancing one account.

    Attributes:
        policy: Target policy that was applied
        holdings: Holdings the actions were computed from
        actions: (symbol, Action) pairs in engine order
    """

    policy: TargetPolicy
    holdings: AccountHoldings
    actions: List[Tuple[str, Action]] = field(default_factory=list)

    def by_kind(self, kind: ActionType) -> List[Tuple[str, Action]]:
        """Actions of one kind, in engine order."""
        return [(symbol, action) for symbol, action in self.actions if action.kind == kind]

    @property
    def sells(self) -> List[Tuple[str, Action]]:
        return self.by_kind(ActionType.SELL)

    @property
    def buys(self) -> List[Tuple[str, Action]]:
        return self.by_kind(ActionType.BUY)

    @property
    def ignored(self) -> List[str]:
        return [symbol for symbol, _ in self.by_kind(ActionType.IGNORE)]

    @property
    def total_sell_amount(self) -> Decimal:
        return sum((action.amount for _, action in self.sells), ZERO)

    @property
    def total_buy_amount(self) -> Decimal:
        return sum((action.amount for _, action in self.buys), ZERO)


class PortfolioAPI:
    """High-level API for computing rebalancing actions.

    Example:
        >>> from investment_adjuster.api import PortfolioAPI
        >>>
        >>> api = PortfolioAPI()
        >>> result = api.rebalance_file(
        ...     "Portfolio_Positions.csv",
        ...     target_path="target.yml",
        ...     ignore=["GOOG"],
        ... )
        >>> for symbol, action in result.sells:
        ...     print(symbol, action.amount)
    """

    def __init__(self, provider: Provider | str = Provider.FIDELITY):
        """Initialize PortfolioAPI.

        Args:
            provider: Brokerage export format to read (defaults to Fidelity)
        """
        self.provider = provider if isinstance(provider, Provider) else Provider(str(provider).lower())
        logger.debug("PortfolioAPI initialized with %s provider", self.provider.value)

    def load_portfolio(
        self,
        positions_path: str | Path,
        ignore: Optional[Iterable[str]] = None,
    ) -> Portfolio:
        """Load a positions export and apply the ignore list.

        Args:
            positions_path: Path to the brokerage export
            ignore: Symbols to exclude from rebalancing (case-insensitive)

        Returns:
            Portfolio with ignored positions flagged
        """
        portfolio = Portfolio.load_from_file(positions_path, self.provider)
        if ignore:
            portfolio.set_ignored(ignore)
        return portfolio

    def rebalance(self, policy: TargetPolicy, portfolio: Portfolio) -> RebalanceResult:
        """Compute actions for the account the policy targets.

        Args:
            policy: Validated target policy
            portfolio: Loaded portfolio containing the policy's account

        Returns:
            RebalanceResult with the engine's actions

        Raises:
            DataInconsistentError: If the account or its core position is missing
            ConfigurationError: If the core position is also a target
            InsufficientFundsError: If the account cannot cover the core minimum
        """
        holdings = portfolio.get_account(policy.account_number)
        actions = adjust_allocations(policy, holdings)
        logger.info(
            "Computed %d actions for account %s", len(actions), policy.account_number
        )
        return RebalanceResult(policy=policy, holdings=holdings, actions=actions)

    def rebalance_file(
        self,
        positions_path: str | Path,
        target_path: str | Path,
        ignore: Optional[Iterable[str]] = None,
    ) -> RebalanceResult:
        """Load the export and target file, then compute actions.

        Args:
            positions_path: Path to the brokerage export
            target_path: Path to the YAML target file
            ignore: Symbols to exclude from rebalancing

        Returns:
            RebalanceResult for the target file's account
        """
        policy = load_target_policy(target_path)
        portfolio = self.load_portfolio(positions_path, ignore=ignore)
        return self.rebalance(policy, portfolio)

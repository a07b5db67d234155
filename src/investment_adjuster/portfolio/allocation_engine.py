"""Allocation engine: reconcile holdings against a target policy.

Algorithm:
1. Check preconditions (core position present and flagged, core not a
   target, no targeted symbol ignored)
2. Merge target symbols and held symbols into one working map
3. Sum non-ignored values and subtract the core minimum to get the
   distributable pool
4. Compare each symbol's share of the pool with its current value
5. Sweep core cash above the minimum into the pool (or top it up when
   it has fallen below)

The engine is a pure function of its inputs. Ignored positions never enter
the pool and are reported as IGNORE.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from investment_adjuster.portfolio.base import ZERO, AccountHoldings, Action
from investment_adjuster.portfolio.target import HUNDRED, TargetPolicy
from investment_adjuster.utils.exceptions import (
    ConfigurationError,
    DataInconsistentError,
    InsufficientFundsError,
)
from investment_adjuster.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass
class PositionAdjustment:
    """Working entry for one symbol during reconciliation."""

    current_value: Decimal
    desired_percent: Decimal
    ignored: bool = False


def adjust_allocations(
    policy: TargetPolicy,
    holdings: AccountHoldings,
) -> List[Tuple[str, Action]]:
    """Compute the action needed for every symbol to reach the target policy.

    Args:
        policy: Validated target policy for the account
        holdings: Current holdings with the ignore list already applied

    Returns:
        (symbol, Action) pairs, one per symbol in the policy or the holdings.
        Target symbols come first in declared order, followed by symbols
        that are only held.

    Raises:
        DataInconsistentError: Core position missing, not flagged as core
            or ignored, or a targeted symbol is on the ignore list
        ConfigurationError: Core symbol is listed as a target
        InsufficientFundsError: Non-ignored value cannot cover the core minimum

    Example:
        >>> actions = adjust_allocations(policy, holdings)
        >>> for symbol, action in actions:
        ...     print(symbol, action)
        VTI Buy(1700.00)
        BND Sell(1200.00)
        CASH Sell(500.00)
    """
    core_symbol = policy.core_position.symbol
    core_minimum = policy.core_position.minimum

    _check_preconditions(policy, holdings)

    adjustments = _build_adjustments(policy, holdings)

    total_value = sum(
        (adj.current_value for adj in adjustments.values() if not adj.ignored), ZERO
    )
    to_distribute = total_value - core_minimum
    if to_distribute < 0:
        raise InsufficientFundsError(
            f"Not enough money to maintain core position minimum for account "
            f"{policy.account_number}: total {total_value} < minimum {core_minimum}"
        )

    actions: List[Tuple[str, Action]] = []
    for symbol, adj in adjustments.items():
        if adj.ignored:
            action = Action.ignore()
        elif symbol == core_symbol:
            action = _core_action(adj.current_value, core_minimum)
        else:
            desired_value = to_distribute * (adj.desired_percent / HUNDRED)
            action = _classify(desired_value - adj.current_value)
        actions.append((symbol, action))

    log_with_context(
        logger,
        "debug",
        "Processed allocations",
        account=policy.account_number,
        total_value=total_value,
        to_distribute=to_distribute,
        actions=[(symbol, str(action)) for symbol, action in actions],
    )
    return actions


def _check_preconditions(policy: TargetPolicy, holdings: AccountHoldings) -> None:
    core_symbol = policy.core_position.symbol

    core = holdings.get(core_symbol)
    if core is None:
        raise DataInconsistentError(
            f"Failed to find an entry for core position {core_symbol} "
            f"for account {policy.account_number}"
        )
    if not core.is_core:
        raise DataInconsistentError(
            f"Found position {core_symbol} but it is not marked as the core position"
        )
    if core.ignored:
        raise DataInconsistentError(
            f"Core position {core_symbol} cannot be ignored"
        )
    if core_symbol in policy.targets:
        raise ConfigurationError(
            f"Core position {core_symbol} cannot be in target list"
        )

    ignored = {symbol.upper() for symbol in holdings.ignored_symbols}
    ignored |= holdings.ignore_list
    ignored_targets = [symbol for symbol in policy.targets if symbol.upper() in ignored]
    if ignored_targets:
        raise DataInconsistentError(
            f"Cannot ignore positions that have a target allocation: "
            f"{', '.join(ignored_targets)}"
        )


def _build_adjustments(
    policy: TargetPolicy,
    holdings: AccountHoldings,
) -> Dict[str, PositionAdjustment]:
    adjustments: Dict[str, PositionAdjustment] = {}
    for symbol, percent in policy.targets.items():
        adjustments[symbol] = PositionAdjustment(
            current_value=ZERO,
            desired_percent=percent,
        )

    # Held symbols without a target drift toward zero weight
    for position in holdings:
        entry = adjustments.get(position.symbol)
        if entry is None:
            adjustments[position.symbol] = PositionAdjustment(
                current_value=position.current_value,
                desired_percent=ZERO,
                ignored=position.ignored,
            )
        else:
            entry.current_value = position.current_value
            entry.ignored = position.ignored

    return adjustments


def _core_action(current_value: Decimal, minimum: Decimal) -> Action:
    if current_value > minimum:
        return Action.sell(current_value - minimum)
    if current_value < minimum:
        return Action.buy(minimum - current_value)
    return Action.nothing()


def _classify(delta: Decimal) -> Action:
    if delta > 0:
        return Action.buy(abs(delta))
    if delta < 0:
        return Action.sell(abs(delta))
    return Action.nothing()

"""Portfolio Layer.

This layer holds the normalized holdings model, the target allocation
policy, and the allocation engine that reconciles the two.

Components:
- AccountHoldings / Portfolio: Positions per account
- TargetPolicy: Validated target weights plus core minimum
- adjust_allocations: Per-symbol buy/sell/ignore/nothing actions
"""

from investment_adjuster.portfolio.allocation_engine import adjust_allocations
from investment_adjuster.portfolio.base import (
    AccountHoldings,
    Action,
    ActionType,
    Portfolio,
    Position,
)
from investment_adjuster.portfolio.target import (
    CorePosition,
    PositionTarget,
    TargetPolicy,
)

__all__ = [
    "AccountHoldings",
    "Action",
    "ActionType",
    "CorePosition",
    "Portfolio",
    "Position",
    "PositionTarget",
    "TargetPolicy",
    "adjust_allocations",
]

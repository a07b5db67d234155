"""User-friendly APIs for Investment Adjuster.

Components:
- PortfolioAPI: Load holdings, apply ignore list, compute actions
- RebalanceResult: Actions for one account with summary helpers
"""

from investment_adjuster.api.portfolio_api import PortfolioAPI, RebalanceResult

__all__ = [
    "PortfolioAPI",
    "RebalanceResult",
]

"""Unit tests for PortfolioAPI."""

from decimal import Decimal
from pathlib import Path

import pytest

from investment_adjuster.api.portfolio_api import PortfolioAPI, RebalanceResult
from investment_adjuster.data.providers import Provider
from investment_adjuster.portfolio.base import AccountHoldings, Action, Portfolio, Position
from investment_adjuster.portfolio.target import CorePosition, TargetPolicy
from investment_adjuster.utils.exceptions import DataInconsistentError

POSITIONS_CSV = """\
Account Number,Account Name,Symbol,Description,Quantity,Last Price,Last Price Change,Current Value,Today's Gain/Loss Dollar,Today's Gain/Loss Percent,Total Gain/Loss Dollar,Total Gain/Loss Percent,Percent Of Account,Cost Basis Total,Average Cost Basis,Type
A1,Individual,CASH**,HELD IN MONEY MARKET,,,,$1000.00,,,,,10.00%,,,Cash
A1,Individual,VTI,VANGUARD TOTAL STOCK MKT,16,$250.00,,"$4,000.00",,,,,40.00%,,,Cash
A1,Individual,BND,VANGUARD TOTAL BOND MKT,70,$71.43,,"$5,000.00",,,,,50.00%,,,Cash
"""

TARGET_YAML = """\
AccountNumber: A1
CorePosition:
  Symbol: CASH
  Minimum: 500
Targets:
  VTI: 60
  BND: 40
"""


@pytest.fixture
def positions_file(tmp_path: Path) -> Path:
    path = tmp_path / "positions.csv"
    path.write_text(POSITIONS_CSV)
    return path


@pytest.fixture
def target_file(tmp_path: Path) -> Path:
    path = tmp_path / "target.yml"
    path.write_text(TARGET_YAML)
    return path


class TestPortfolioAPI:
    """Test cases for PortfolioAPI."""

    def test_default_provider(self) -> None:
        """Test API defaults to the Fidelity provider."""
        assert PortfolioAPI().provider == Provider.FIDELITY
        assert PortfolioAPI(provider="FIDELITY").provider == Provider.FIDELITY

    def test_rebalance_file(self, positions_file: Path, target_file: Path) -> None:
        """Test the end-to-end scenario from files."""
        result = PortfolioAPI().rebalance_file(positions_file, target_file)

        assert dict(result.actions) == {
            "VTI": Action.buy(Decimal("1700")),
            "BND": Action.sell(Decimal("1200")),
            "CASH": Action.sell(Decimal("500")),
        }
        assert result.total_buy_amount == Decimal("1700")
        assert result.total_sell_amount == Decimal("1700")

    def test_rebalance_file_with_ignore(
        self, positions_file: Path, tmp_path: Path
    ) -> None:
        """Test ignore list is applied before the engine runs."""
        target_file = tmp_path / "vti_only.yml"
        target_file.write_text(TARGET_YAML.replace("  VTI: 60\n  BND: 40\n", "  VTI: 100\n"))

        result = PortfolioAPI().rebalance_file(positions_file, target_file, ignore=["bnd"])

        assert result.ignored == ["BND"]
        assert dict(result.buys) == {"VTI": Action.buy(Decimal("500"))}
        assert dict(result.sells) == {"CASH": Action.sell(Decimal("500"))}

    def test_load_portfolio(self, positions_file: Path) -> None:
        """Test loading a portfolio without an ignore list."""
        portfolio = PortfolioAPI().load_portfolio(positions_file)

        holdings = portfolio.get_account("A1")
        assert holdings.get("CASH").is_core is True
        assert holdings.ignored_symbols == []

    def test_rebalance_unknown_account(self) -> None:
        """Test a policy for an account not in the file fails."""
        policy = TargetPolicy("Z9", CorePosition("CASH", Decimal("0")), {"VTI": Decimal("100")})
        portfolio = Portfolio({"A1": AccountHoldings("A1", [Position("CASH", Decimal("1"), is_core=True)])})

        with pytest.raises(DataInconsistentError, match="No holdings found for account Z9"):
            PortfolioAPI().rebalance(policy, portfolio)


class TestRebalanceResult:
    """Test cases for RebalanceResult helpers."""

    def test_grouping(self) -> None:
        """Test actions are grouped by kind in engine order."""
        policy = TargetPolicy("A1", CorePosition("CASH", Decimal("0")), {"VTI": Decimal("100")})
        result = RebalanceResult(
            policy=policy,
            holdings=AccountHoldings("A1"),
            actions=[
                ("VTI", Action.buy(Decimal("10"))),
                ("BND", Action.sell(Decimal("4"))),
                ("GOOG", Action.ignore()),
                ("CASH", Action.sell(Decimal("6"))),
                ("GLD", Action.nothing()),
            ],
        )

        assert [s for s, _ in result.sells] == ["BND", "CASH"]
        assert [s for s, _ in result.buys] == ["VTI"]
        assert result.ignored == ["GOOG"]
        assert result.total_sell_amount == Decimal("10")
        assert result.total_buy_amount == Decimal("10")

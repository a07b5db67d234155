"""Rich rendering of target policies and rebalancing actions."""

from decimal import Decimal
from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from investment_adjuster.api.portfolio_api import RebalanceResult
from investment_adjuster.portfolio.base import Action
from investment_adjuster.portfolio.target import TargetPolicy


def format_dollars(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def create_targets_table(policy: TargetPolicy) -> Table:
    """Create target allocation table.

    Args:
        policy: Target policy to show

    Returns:
        Rich Table with one row per target plus the core minimum
    """
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Target", justify="right")

    for symbol, percent in policy.targets.items():
        table.add_row(symbol, f"{percent:.1f}%")

    core = policy.core_position
    table.add_row(
        f"{core.symbol} (core)",
        f"{format_dollars(core.minimum)} minimum",
        style="dim",
    )
    return table


def create_actions_table(
    title: str,
    actions: List[Tuple[str, Action]],
    style: str,
) -> Table:
    """Create a table of buy or sell amounts.

    Args:
        title: Table title ("Sell" or "Buy")
        actions: (symbol, Action) pairs to list
        style: Rich style for the amount column

    Returns:
        Rich Table with a total row when there are actions
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan", no_wrap=True)
    table.add_column("Amount", justify="right", style=style)

    if not actions:
        table.add_row("None", "")
        return table

    total = Decimal("0")
    for symbol, action in actions:
        table.add_row(symbol, format_dollars(action.amount))
        total += action.amount

    table.add_section()
    table.add_row("Total", format_dollars(total), style="bold")
    return table


def print_report(result: RebalanceResult, console: Optional[Console] = None) -> None:
    """Print targets and the actions needed to reach them.

    Args:
        result: Rebalancing result for one account
        console: Console to print to (defaults to stdout)
    """
    console = console or Console()

    console.print(
        f"Allocation targets for account {result.policy.account_number}",
        style="bold",
    )
    console.print(create_targets_table(result.policy))
    console.print()
    console.print(
        "In order to maintain your target allocations, "
        "the following actions are necessary."
    )
    console.print(create_actions_table("Sell", result.sells, style="red"))
    console.print(create_actions_table("Buy", result.buys, style="green"))

    if result.ignored:
        console.print(f"Ignored: {', '.join(result.ignored)}", style="yellow")

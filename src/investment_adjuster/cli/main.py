"""CLI entry point: investment-adjuster CURRENT_ALLOCATIONS.

Reads a brokerage positions export and a target allocation file, then
prints the buys and sells needed to reach the targets.

Usage:
    investment-adjuster Portfolio_Positions.csv
    investment-adjuster Portfolio_Positions.csv --target target.yml
    investment-adjuster Portfolio_Positions.csv -i GOOG,AMZN --log-level debug
"""

from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console

from investment_adjuster.api.portfolio_api import PortfolioAPI
from investment_adjuster.cli.output import print_report
from investment_adjuster.data.providers import Provider
from investment_adjuster.utils.config import default_target_path
from investment_adjuster.utils.exceptions import InvestmentAdjusterError
from investment_adjuster.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_ignore(values: tuple) -> list[str]:
    """Split repeated and comma-delimited --ignore values.

    Args:
        values: Raw option values, e.g. ("GOOG,AMZN", "TSLA")

    Returns:
        Symbols with blanks removed
    """
    symbols = []
    for value in values:
        symbols.extend(part.strip() for part in value.split(",") if part.strip())
    return symbols


@click.command()
@click.argument(
    "current_allocations",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--target",
    "-t",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="INVESTMENT_ADJUSTER_TARGET",
    help="Target allocation file (default: target.yml in the app config directory).",
)
@click.option(
    "--ignore",
    "-i",
    multiple=True,
    help="Ignore the specified holdings when calculating target allocations (comma-separated).",
)
@click.option(
    "--provider",
    type=click.Choice([p.value for p in Provider], case_sensitive=False),
    default=Provider.FIDELITY.value,
    show_default=True,
    help="Brokerage that produced CURRENT_ALLOCATIONS.",
)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="INVESTMENT_ADJUSTER_LOG_LEVEL",
    show_default=True,
    help="Logging level: DEBUG/INFO/WARNING/ERROR.",
)
def cli(
    current_allocations: Path,
    target: Optional[Path],
    ignore: tuple,
    provider: str,
    log_level: str,
) -> None:
    """Compute buys and sells to bring an account back to its target allocation.

    CURRENT_ALLOCATIONS: Positions CSV downloaded from your brokerage
    """
    setup_logging(level=log_level)

    target_path = target or default_target_path()
    ignored = parse_ignore(ignore)
    logger.debug("Using target file %s, ignoring %s", target_path, ignored)

    api = PortfolioAPI(provider=provider)
    try:
        result = api.rebalance_file(current_allocations, target_path, ignore=ignored)
    except (InvestmentAdjusterError, FileNotFoundError) as e:
        logger.debug("Rebalance failed", exc_info=True)
        raise click.ClickException(str(e)) from e

    print_report(result, Console())


def main() -> None:
    """Console script entry point."""
    load_dotenv()
    cli()


if __name__ == "__main__":
    main()

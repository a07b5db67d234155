"""Fidelity positions export provider.

This module implements the HoldingsProvider interface for the
"Portfolio_Positions" CSV that Fidelity offers for download.

Layout notes:
- Money columns carry "$", "," and "+"/"-" signs
- The core (cash sweep) position is marked with a trailing "**" on its symbol
- "Pending Activity" rows hold cash that has not settled into the core
  position yet
- The file ends with free-text disclaimer lines
"""

from decimal import Decimal
from pathlib import Path
from typing import List

import pandas as pd

from investment_adjuster.data.base import HoldingRecord, HoldingsProvider
from investment_adjuster.data.validation import HoldingsValidator
from investment_adjuster.portfolio.base import to_decimal
from investment_adjuster.utils.exceptions import DataProviderError, DataQualityError
from investment_adjuster.utils.logging import get_logger

logger = get_logger(__name__)

CORE_MARKER = "**"
PENDING_ACTIVITY = "pending activity"

COLUMN_MAP = {
    "Account Number": "account_number",
    "Symbol": "symbol",
    "Current Value": "current_value",
}


def parse_dollar(value: str) -> Decimal:
    """Parse a Fidelity money cell such as "$1,234.56" or "-$250.00".

    Raises:
        ValueError: If the cell is not a dollar amount
    """
    cleaned = value.strip().replace("$", "").replace(",", "").replace("+", "")
    return to_decimal(cleaned)


class FidelityProvider(HoldingsProvider):
    """Fidelity CSV holdings provider.

    Example:
        >>> provider = FidelityProvider()
        >>> records = provider.load_holdings("Portfolio_Positions_Jan-02-2024.csv")
        >>> records[0]
        HoldingRecord(account_number='X12345678', symbol='SPAXX', ...)
    """

    def load_holdings(self, path: str | Path) -> List[HoldingRecord]:
        """Read position records from a Fidelity positions CSV.

        Args:
            path: Path to the downloaded CSV

        Returns:
            Records in file order, with pending activity folded into the
            core position of its account

        Raises:
            DataProviderError: If the file cannot be read
            DataQualityError: If columns are missing or values are malformed
        """
        path = Path(path)
        logger.info("Loading Fidelity positions from %s", path)

        if not path.exists():
            raise DataProviderError(f"Positions file not found: {path}")

        try:
            raw = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                index_col=False,
                skip_blank_lines=True,
                on_bad_lines="skip",
                encoding="utf-8-sig",
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
            error_msg = f"Failed to read positions file {path}: {e}"
            logger.error(error_msg)
            raise DataProviderError(error_msg) from e
        except pd.errors.EmptyDataError as e:
            raise DataQualityError(f"Positions file is empty: {path}") from e

        df = self._standardize_dataframe(raw, path.name)
        pending_mask = df["symbol"].str.lower() == PENDING_ACTIVITY
        HoldingsValidator.validate(df[~pending_mask], path.name)

        records = self._to_records(df, path.name)
        logger.info("Loaded %d position records from %s", len(records), path.name)
        return records

    def _standardize_dataframe(self, raw: pd.DataFrame, source: str) -> pd.DataFrame:
        """Rename, filter and parse the raw export columns."""
        raw = raw.rename(columns=lambda col: str(col).strip())

        missing_columns = [col for col in COLUMN_MAP if col not in raw.columns]
        if missing_columns:
            error_msg = (
                f"Missing required columns in {source}: {missing_columns}. "
                f"Available columns: {list(raw.columns)}"
            )
            logger.error(error_msg)
            raise DataQualityError(error_msg)

        df = raw[list(COLUMN_MAP)].rename(columns=COLUMN_MAP).fillna("").copy()
        for column in df.columns:
            df[column] = df[column].astype(str).str.strip()

        # Disclaimer footer lines only fill the first column
        df = df[(df["account_number"] != "") & (df["current_value"] != "")].copy()

        try:
            df["current_value"] = df["current_value"].map(parse_dollar)
        except ValueError as e:
            raise DataQualityError(f"Invalid Current Value in {source}: {e}") from e

        is_core = df["symbol"].str.endswith(CORE_MARKER).astype(bool)
        df["symbol"] = df["symbol"].where(~is_core, df["symbol"].str[: -len(CORE_MARKER)])
        df["is_core"] = is_core
        return df.reset_index(drop=True)

    def _to_records(self, df: pd.DataFrame, source: str) -> List[HoldingRecord]:
        """Convert rows to records, folding pending activity into core positions."""
        core_symbols = (
            df[df["is_core"]].groupby("account_number", sort=False)["symbol"].first()
        )

        records = []
        for row in df.itertuples(index=False):
            symbol = row.symbol
            is_core = bool(row.is_core)
            if symbol.lower() == PENDING_ACTIVITY:
                if row.account_number not in core_symbols.index:
                    logger.warning(
                        "Dropping pending activity of %s in %s: account %s has no core position",
                        row.current_value,
                        source,
                        row.account_number,
                    )
                    continue
                symbol = core_symbols[row.account_number]
                is_core = True
                logger.debug(
                    "Adding pending activity of %s to core position %s",
                    row.current_value,
                    symbol,
                )
            records.append(
                HoldingRecord(
                    account_number=row.account_number,
                    symbol=symbol,
                    current_value=row.current_value,
                    is_core=is_core,
                )
            )

        return records

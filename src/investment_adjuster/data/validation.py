"""Data validation module for loaded position tables."""

from typing import List

import pandas as pd

from investment_adjuster.utils.exceptions import DataQualityError
from investment_adjuster.utils.logging import get_logger

logger = get_logger(__name__)


class HoldingsValidator:
    """Validator for normalized position tables.

    Expects a DataFrame with columns account_number, symbol,
    current_value (numeric) and is_core.
    """

    REQUIRED_COLUMNS = ["account_number", "symbol", "current_value", "is_core"]

    @classmethod
    def validate(cls, df: pd.DataFrame, source: str) -> None:
        """Run all validation checks.

        Args:
            df: Normalized positions
            source: File name or label for messages

        Raises:
            DataQualityError: If validation fails critically
        """
        if df is None or df.empty:
            raise DataQualityError(f"No positions found in {source}")

        cls.validate_schema(df, source)
        cls.validate_integrity(df, source)
        cls.detect_anomalies(df, source)

    @classmethod
    def validate_schema(cls, df: pd.DataFrame, source: str) -> None:
        """Check for required columns."""
        missing = [col for col in cls.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DataQualityError(f"Missing columns in {source}: {missing}")

    @classmethod
    def validate_integrity(cls, df: pd.DataFrame, source: str) -> None:
        """Check data integrity rules."""
        # Rule 1: Every row has a symbol
        if (df["symbol"].str.len() == 0).any():
            raise DataQualityError(f"Found position without a symbol in {source}")

        # Rule 2: At most one core position per account
        core_counts = df[df["is_core"]].groupby("account_number")["symbol"].nunique()
        multiple = core_counts[core_counts > 1]
        if not multiple.empty:
            raise DataQualityError(
                f"Multiple core positions in {source} for accounts: "
                f"{multiple.index.tolist()}"
            )

    @classmethod
    def detect_anomalies(cls, df: pd.DataFrame, source: str) -> List[str]:
        """Detect potential anomalies (warnings only).

        Returns:
            Symbols with a negative current value
        """
        negative = df[df["current_value"] < 0]
        symbols = negative["symbol"].tolist()
        if symbols:
            logger.warning(
                "Negative current value in %s for: %s", source, symbols
            )
        return symbols

"""Abstract base class for holdings providers.

This module defines the HoldingsProvider interface that every brokerage
export loader must implement, and the provider-neutral record it yields.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List


@dataclass(frozen=True)
class HoldingRecord:
    """One position row, normalized by a provider.

    Attributes:
        account_number: Account the position belongs to
        symbol: Ticker with provider markers removed
        current_value: Current dollar value
        is_core: True if the provider marks this as the core (cash) position
    """

    account_number: str
    symbol: str
    current_value: Decimal
    is_core: bool = False


class HoldingsProvider(ABC):
    """Abstract interface for brokerage position exports.

    Concrete providers translate their brokerage's file layout into
    HoldingRecord rows. They do not merge duplicate symbols; that is
    done when records are grouped into a Portfolio.

    Example:
        >>> class MyProvider(HoldingsProvider):
        ...     def load_holdings(self, path):
        ...         # Implementation here
        ...         pass
    """

    @abstractmethod
    def load_holdings(self, path: str | Path) -> List[HoldingRecord]:
        """Read position records from an export file.

        Args:
            path: Path to the export file

        Returns:
            Records for every account in the file, in file order

        Raises:
            DataProviderError: If the file cannot be read
            DataQualityError: If the file does not have the expected layout
        """
        pass

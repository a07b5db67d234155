"""Data Layer - Loading brokerage position exports.

Components:
- HoldingRecord: Provider-neutral position row
- HoldingsProvider: Interface implemented by each brokerage loader
- Provider / get_provider: Closed set of supported brokerages
"""

from investment_adjuster.data.base import HoldingRecord, HoldingsProvider
from investment_adjuster.data.providers import Provider, get_provider

__all__ = [
    "HoldingRecord",
    "HoldingsProvider",
    "Provider",
    "get_provider",
]

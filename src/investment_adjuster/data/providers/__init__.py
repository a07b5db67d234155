"""Holdings Providers - Brokerage export loaders.

Each supported brokerage is a member of the Provider enum, mapped to the
class that reads its export format.
"""

from enum import Enum

from investment_adjuster.data.base import HoldingsProvider
from investment_adjuster.data.providers.fidelity_provider import FidelityProvider


class Provider(Enum):
    """Supported brokerage export formats."""

    FIDELITY = "fidelity"


_PROVIDERS = {
    Provider.FIDELITY: FidelityProvider,
}


def get_provider(provider: Provider | str) -> HoldingsProvider:
    """Get a loader instance for a provider.

    Args:
        provider: Provider member or its name (case-insensitive)

    Returns:
        HoldingsProvider for that brokerage

    Raises:
        ValueError: If the provider is unknown
    """
    if not isinstance(provider, Provider):
        try:
            provider = Provider(str(provider).lower())
        except ValueError:
            available = ", ".join(p.value for p in Provider)
            raise ValueError(
                f"Unknown provider: {provider}. Available: {available}"
            ) from None
    return _PROVIDERS[provider]()


__all__ = [
    "FidelityProvider",
    "Provider",
    "get_provider",
]

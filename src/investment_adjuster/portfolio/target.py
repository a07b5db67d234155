"""Target allocation policy for one account.

A policy declares the percentage weight of each non-core holding and the
minimum dollar amount to keep in the core (cash) position. Policies are
validated when they are built, so a policy object that exists is always
internally consistent.

Target file layout (YAML):

    AccountNumber: X12345678
    CorePosition:
      Symbol: SPAXX
      Minimum: 500
    Positions:
      - Symbol: VTI
        Percent: 60
      - Symbol: BND
        Percent: 40

A ``Targets`` mapping (``{VTI: 60, BND: 40}``) may be used instead of
``Positions``.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from investment_adjuster.portfolio.base import ZERO, to_decimal
from investment_adjuster.utils.exceptions import ConfigurationError

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class CorePosition:
    """Cash/core reserve settings.

    Attributes:
        symbol: Symbol of the core position (without any provider marker)
        minimum: Minimum amount to retain in the core position in dollars
    """

    symbol: str
    minimum: Decimal


@dataclass(frozen=True)
class PositionTarget:
    """Declared weight for a single symbol."""

    symbol: str
    percent: Decimal


@dataclass(frozen=True)
class TargetPolicy:
    """Validated target allocation for one account.

    Attributes:
        account_number: Account the policy applies to
        core_position: Core position symbol and minimum
        targets: Symbol -> percent, in declared order, summing to exactly 100

    Raises:
        ConfigurationError: On construction if any invariant is violated
    """

    account_number: str
    core_position: CorePosition
    targets: Dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self):
        """Validate the policy."""
        if not self.account_number:
            raise ConfigurationError("Account number must not be empty")
        if not self.core_position.symbol:
            raise ConfigurationError("Core position symbol must not be empty")
        if self.core_position.minimum < 0:
            raise ConfigurationError(
                f"Core position minimum must be non-negative, "
                f"got {self.core_position.minimum}"
            )

        for symbol, percent in self.targets.items():
            if not symbol:
                raise ConfigurationError("Target symbol must not be empty")
            if not 0 <= percent <= HUNDRED:
                raise ConfigurationError(
                    f"Target percent for {symbol} must be in [0, 100], got {percent}"
                )

        # Exact comparison, no tolerance
        total_percent = sum(self.targets.values(), ZERO)
        if total_percent != HUNDRED:
            raise ConfigurationError(
                f"Target positions do not add up to 100% (got {total_percent}%)"
            )

    @classmethod
    def from_targets(
        cls,
        account_number: str,
        core_position: CorePosition,
        targets: List[PositionTarget],
    ) -> "TargetPolicy":
        """Build a policy from a list of position targets.

        Raises:
            ConfigurationError: If a symbol is listed twice or the policy is invalid
        """
        target_map: Dict[str, Decimal] = {}
        for target in targets:
            if target.symbol in target_map:
                raise ConfigurationError(
                    f"Duplicate target symbol: {target.symbol}"
                )
            target_map[target.symbol] = target.percent
        return cls(
            account_number=account_number,
            core_position=core_position,
            targets=target_map,
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TargetPolicy":
        """Build a policy from a deserialized target document.

        Args:
            raw: Mapping with AccountNumber, CorePosition and Positions (or Targets)

        Returns:
            Validated TargetPolicy

        Raises:
            ConfigurationError: If keys are missing, values are malformed,
                or the policy is invalid
        """
        if not isinstance(raw, Mapping):
            raise ConfigurationError(
                f"Target document must be a mapping, got {type(raw).__name__}"
            )

        account_number = _require(raw, "AccountNumber")
        core_raw = _require(raw, "CorePosition")
        if not isinstance(core_raw, Mapping):
            raise ConfigurationError("CorePosition must be a mapping with Symbol and Minimum")

        core_position = CorePosition(
            symbol=str(_require(core_raw, "Symbol", "CorePosition.")).strip(),
            minimum=_decimal(_require(core_raw, "Minimum", "CorePosition."), "CorePosition.Minimum"),
        )

        if "Positions" in raw:
            entries = raw["Positions"] or []
            if not isinstance(entries, list):
                raise ConfigurationError("Positions must be a list of {Symbol, Percent}")
            targets = []
            for index, entry in enumerate(entries):
                if not isinstance(entry, Mapping):
                    raise ConfigurationError(f"Positions[{index}] must be a mapping")
                symbol = str(_require(entry, "Symbol", f"Positions[{index}].")).strip()
                percent = _decimal(
                    _require(entry, "Percent", f"Positions[{index}]."),
                    f"Positions[{index}].Percent",
                )
                targets.append(PositionTarget(symbol=symbol, percent=percent))
        elif "Targets" in raw:
            mapping = raw["Targets"] or {}
            if not isinstance(mapping, Mapping):
                raise ConfigurationError("Targets must be a mapping of symbol to percent")
            targets = [
                PositionTarget(symbol=str(symbol).strip(), percent=_decimal(percent, f"Targets.{symbol}"))
                for symbol, percent in mapping.items()
            ]
        else:
            raise ConfigurationError("Target document needs a Positions list or a Targets mapping")

        return cls.from_targets(
            account_number=str(account_number).strip(),
            core_position=core_position,
            targets=targets,
        )

    def position_targets(self) -> List[PositionTarget]:
        """Targets as a list, in declared order."""
        return [PositionTarget(symbol, percent) for symbol, percent in self.targets.items()]


def _require(raw: Mapping[str, Any], key: str, prefix: str = "") -> Any:
    if key not in raw or raw[key] is None:
        raise ConfigurationError(f"Missing required key: {prefix}{key}")
    return raw[key]


def _decimal(value: Any, name: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e

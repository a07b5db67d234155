"""Configuration management for Investment Adjuster.

This module provides YAML loading for target allocation files and the
default location where the command-line tool looks for one.
"""

from pathlib import Path
from typing import Any

import click
import yaml

from investment_adjuster.portfolio.target import TargetPolicy
from investment_adjuster.utils.exceptions import ConfigurationError
from investment_adjuster.utils.logging import get_logger

logger = get_logger(__name__)

APP_NAME = "investment-adjuster"
DEFAULT_TARGET_FILENAME = "target.yml"


class Config:
    """Read-only view over a YAML document.

    Nested keys are reached with dots, so target files can be inspected
    without walking the dictionaries by hand.

    Example:
        >>> config = Config.from_file("target.yml")
        >>> config.get("CorePosition.Symbol")
        'SPAXX'
    """

    def __init__(self, config_dict: dict[str, Any]) -> None:
        self._config = config_dict

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Config":
        """Parse a YAML file whose top level is a mapping.

        An empty file yields an empty Config.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the YAML is malformed or its top level
                is not a mapping
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        try:
            document = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {filepath}: {e}") from e

        if document is None:
            return cls({})
        if not isinstance(document, dict):
            raise ConfigurationError(
                f"Configuration file must be a YAML mapping, got {type(document).__name__}"
            )
        return cls(document)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as "CorePosition.Minimum".

        Args:
            key: Dot-separated path into the document
            default: Returned when any part of the path is absent or null

        Returns:
            The value at ``key``, or ``default``
        """
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def __getitem__(self, key: str) -> Any:
        """Like get(), but a missing key raises KeyError."""
        value = self.get(key)
        if value is None:
            raise KeyError(f"Configuration key not found: {key}")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the whole document."""
        return dict(self._config)


def default_target_path() -> Path:
    """Platform-standard location of the target allocation file.

    For example ``~/.config/investment-adjuster/target.yml`` on Linux.
    """
    return Path(click.get_app_dir(APP_NAME)) / DEFAULT_TARGET_FILENAME


def load_target_policy(filepath: str | Path) -> TargetPolicy:
    """Load and validate a target allocation file.

    Args:
        filepath: Path to the YAML target file

    Returns:
        Validated TargetPolicy

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is malformed or the targets are invalid
    """
    config = Config.from_file(filepath)
    policy = TargetPolicy.from_dict(config.to_dict())
    logger.debug(
        "Loaded targets for account %s from %s: %s",
        policy.account_number,
        filepath,
        {symbol: str(percent) for symbol, percent in policy.targets.items()},
    )
    return policy

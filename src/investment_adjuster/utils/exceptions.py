"""Custom exceptions for Investment Adjuster.

This module defines the exception hierarchy for the application.
"""


class InvestmentAdjusterError(Exception):
    """Base exception for all Investment Adjuster errors.

    All custom exceptions in the application should inherit from this class.
    """

    pass


class ConfigurationError(InvestmentAdjusterError):
    """Raised when the target allocation configuration is invalid.

    Examples:
        - Target percentages do not add up to 100
        - Core position symbol also listed as a target
        - Missing or malformed keys in the target file
    """

    pass


class DataError(InvestmentAdjusterError):
    """Base exception for data layer errors.

    Parent class for all holdings-loading exceptions.
    """

    pass


class DataProviderError(DataError):
    """Raised when a provider cannot read its source.

    Examples:
        - Positions file cannot be opened
        - File is not valid CSV
    """

    pass


class DataQualityError(DataError):
    """Raised when loaded holdings fail quality checks.

    Examples:
        - Required columns missing from the export
        - Current value is not a number
    """

    pass


class PortfolioError(InvestmentAdjusterError):
    """Base exception for allocation errors.

    Parent class for all portfolio-related exceptions.
    """

    pass


class DataInconsistentError(PortfolioError):
    """Raised when holdings contradict the target policy.

    Examples:
        - Core position not found for the account
        - Matching position not flagged as the core position
        - Ignored symbol is also a declared target
    """

    pass


class InsufficientFundsError(PortfolioError):
    """Raised when the account cannot cover the core position minimum.

    Examples:
        - Non-ignored account value is below the core minimum
    """

    pass

"""Core exceptions for the funkybit SDK."""


class FunkybitSdkError(Exception):
    """Base exception for all SDK errors."""

    pass


class ConfigurationError(FunkybitSdkError):
    """Raised when configuration is invalid."""

    pass


class InvalidFeeRateError(FunkybitSdkError):
    """Raised when a fee rate of 100% or more is used to gross up a notional."""

    pass


class InvalidMarketError(FunkybitSdkError):
    """Raised when a market cannot be quoted or is unknown."""

    pass


class MarketDataUnavailableError(FunkybitSdkError):
    """Raised when no order book or AMM snapshot is available for a market."""

    pass


class QuoteUnavailableError(FunkybitSdkError):
    """Raised when the available liquidity cannot fill the requested amount."""

    pass


class ApiError(FunkybitSdkError):
    """Raised when a backend API call fails."""

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code

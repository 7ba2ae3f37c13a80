"""funkybit REST API client for reference data."""

from typing import Any

import requests
from pydantic import ValidationError

from src.funkybit_sdk.config.settings import Settings
from src.funkybit_sdk.core.enums import MarketType
from src.funkybit_sdk.core.exceptions import ApiError, ConfigurationError, InvalidMarketError
from src.funkybit_sdk.models.api import ApiErrors, ConfigurationApiResponse
from src.funkybit_sdk.models.market import MarketWithSymbolInfos, Symbol
from src.funkybit_sdk.utils.logger import get_logger

logger = get_logger(__name__)


class FunkybitApiClient:
    """Client for the unauthenticated funkybit REST endpoints."""

    def __init__(self, api_url: str, timeout_seconds: float = 10.0):
        """Initialize API client.

        Args:
            api_url: funkybit API base URL
            timeout_seconds: Timeout applied to every request

        Raises:
            ValueError: If api_url is not an http(s) URL
        """
        if not api_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API URL: {api_url}")

        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FunkybitApiClient":
        """Create a client from loaded settings."""
        return cls(api_url=settings.api_url, timeout_seconds=settings.request_timeout_seconds)

    def _get(self, path: str) -> Any:
        """Send a GET request and return the decoded JSON body.

        Raises:
            ApiError: If the request fails or the backend returns an error status
        """
        url = f"{self.api_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
        except requests.exceptions.RequestException as e:
            logger.error("API request failed", url=url, error=str(e))
            raise ApiError(f"Request to {path} failed: {e}") from e

        if not response.ok:
            raise self._error_from_response(path, response)

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON returned by {path}", status_code=response.status_code
            ) from e

    @staticmethod
    def _error_from_response(path: str, response: requests.Response) -> ApiError:
        try:
            errors = ApiErrors.model_validate(response.json())
        except (ValueError, ValidationError):
            logger.warning("API error", path=path, status_code=response.status_code)
            return ApiError(
                f"Request to {path} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        logger.warning(
            "API error",
            path=path,
            status_code=response.status_code,
            code=errors.code,
            message=errors.message,
        )
        return ApiError(
            f"Request to {path} failed: {errors.message}",
            code=errors.code,
            status_code=response.status_code,
        )

    def get_configuration(self) -> ConfigurationApiResponse:
        """Fetch chains, symbols, markets and fee rates.

        Raises:
            ApiError: If the request fails or the payload is malformed
        """
        payload = self._get("/v1/config")
        try:
            return ConfigurationApiResponse.model_validate(payload)
        except ValidationError as e:
            raise ApiError(f"Malformed configuration response: {e}") from e

    def get_coin_market(self, name: str) -> MarketWithSymbolInfos:
        """Fetch the market of a launched coin.

        Args:
            name: Coin symbol name

        Raises:
            ValueError: If name is empty
            ApiError: If the request fails or the payload is malformed
        """
        if not name:
            raise ValueError("Coin name cannot be empty")

        payload = self._get(f"/v1/coin/{name}/market")
        try:
            return MarketWithSymbolInfos.model_validate(payload)
        except ValidationError as e:
            raise ApiError(f"Malformed market response for {name}: {e}") from e

    @staticmethod
    def find_symbol_by_name(config: ConfigurationApiResponse, name: str) -> Symbol | None:
        """Find a symbol across all configured chains."""
        for chain in config.chains:
            for symbol in chain.symbols:
                if symbol.name == name:
                    return symbol
        return None

    def adapter_market(self, config: ConfigurationApiResponse) -> MarketWithSymbolInfos:
        """Build the adapter market (the first configured CLOB market) with its symbols.

        Raises:
            ConfigurationError: If no market is configured
            InvalidMarketError: If the market references an unknown symbol
        """
        if not config.markets:
            raise ConfigurationError("No markets configured")

        market = config.markets[0]
        base_symbol = self.find_symbol_by_name(config, market.base_symbol)
        quote_symbol = self.find_symbol_by_name(config, market.quote_symbol)
        if base_symbol is None or quote_symbol is None:
            raise InvalidMarketError(f"Market {market.id} references an unknown symbol")

        return MarketWithSymbolInfos(
            id=market.id,
            base_symbol=base_symbol,
            quote_symbol=quote_symbol,
            tick_size=market.tick_size,
            last_price=market.last_price,
            min_fee=market.min_fee,
            fee_rate=market.fee_rate,
            type=MarketType.CLOB,
        )

"""Core interfaces for the funkybit SDK."""

from abc import ABC, abstractmethod

from src.funkybit_sdk.models.amm import AmmState
from src.funkybit_sdk.models.orderbook import OrderBook


class MarketDataSource(ABC):
    """Interface for the latest real-time market snapshots."""

    @abstractmethod
    def get_amm_state(self, market_id: str) -> AmmState | None:
        """Get the latest AMM state for a market.

        Args:
            market_id: Market identifier

        Returns:
            AmmState: Latest snapshot, or None if none received yet
        """
        pass

    @abstractmethod
    def get_order_book(self, market_id: str) -> OrderBook | None:
        """Get the latest order book for a market.

        Args:
            market_id: Market identifier

        Returns:
            OrderBook: Latest snapshot, or None if none received yet
        """
        pass

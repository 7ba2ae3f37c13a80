"""Latest market snapshots fed by real-time publications."""

from typing import Any

from pydantic import ValidationError

from src.funkybit_sdk.core.interfaces import MarketDataSource
from src.funkybit_sdk.models.amm import AmmState, MarketAmmState
from src.funkybit_sdk.models.orderbook import OrderBook
from src.funkybit_sdk.utils.logger import get_logger

logger = get_logger(__name__)


class MarketStateCache(MarketDataSource):
    """Keep the most recent order book and AMM state per market.

    Snapshots are replaced wholesale on every publication; callers receive
    the stored objects and must not mutate them.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._order_books: dict[str, OrderBook] = {}
        self._amm_states: dict[str, AmmState] = {}

    def handle_publish(self, payload: dict[str, Any]) -> bool:
        """Store a decoded publication payload.

        Args:
            payload: Publication data as decoded from the websocket JSON message

        Returns:
            True if the payload updated a snapshot, False if it was ignored

        Raises:
            pydantic.ValidationError: If an OrderBook or MarketAmmState payload is malformed
        """
        message_type = payload.get("type")
        if message_type not in ("OrderBook", "MarketAmmState"):
            logger.debug("Ignoring publication", type=message_type)
            return False

        try:
            if message_type == "OrderBook":
                self.update_order_book(OrderBook.model_validate(payload))
            else:
                amm_message = MarketAmmState.model_validate(payload)
                self.update_amm_state(amm_message.market_id, amm_message.amm_state)
        except ValidationError as e:
            logger.error("Malformed publication", type=message_type, error=str(e))
            raise

        return True

    def update_order_book(self, order_book: OrderBook) -> None:
        """Replace the order book snapshot for its market."""
        self._order_books[order_book.market_id] = order_book

    def update_amm_state(self, market_id: str, amm_state: AmmState) -> None:
        """Replace the AMM state snapshot for a market."""
        self._amm_states[market_id] = amm_state

    def get_amm_state(self, market_id: str) -> AmmState | None:
        """Get the latest AMM state for a market."""
        return self._amm_states.get(market_id)

    def get_order_book(self, market_id: str) -> OrderBook | None:
        """Get the latest order book for a market."""
        return self._order_books.get(market_id)

    def clear(self) -> None:
        """Drop all stored snapshots."""
        self._order_books.clear()
        self._amm_states.clear()

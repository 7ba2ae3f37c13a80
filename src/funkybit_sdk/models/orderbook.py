"""Order book snapshot models."""

from decimal import Decimal, InvalidOperation
from typing import Literal

from pydantic import Field, field_validator

from src.funkybit_sdk.core.enums import Direction
from src.funkybit_sdk.models.base import FunkybitModel


class OrderBookEntry(FunkybitModel):
    """A single price level in the order book.

    Attributes:
        price: Price at this level as a decimal string
        size: Total base size available at this price
    """

    price: str
    size: Decimal

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: str) -> str:
        """Validate price is a positive decimal string."""
        try:
            parsed = Decimal(v)
        except InvalidOperation as e:
            raise ValueError(f"price {v!r} can't be parsed into Decimal") from e
        if not parsed.is_finite() or parsed <= 0:
            raise ValueError("price must be positive")
        return v

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: Decimal) -> Decimal:
        """Validate size is non-negative."""
        if v < 0:
            raise ValueError("size must be non-negative")
        return v


class LastTrade(FunkybitModel):
    """Last trade marker published with the book."""

    price: str
    direction: Direction


class OrderBook(FunkybitModel):
    """Order book snapshot, replaced wholesale on every update.

    The backend publishes bids best-first and asks highest-first, so bids are
    walked from the front and asks from the back.

    Attributes:
        market_id: Market identifier
        buy: Bid levels, best (highest) price first
        sell: Ask levels, best (lowest) price last
        last: Last trade marker
    """

    type: Literal["OrderBook"] = "OrderBook"
    market_id: str
    buy: list[OrderBookEntry] = Field(default_factory=list)
    sell: list[OrderBookEntry] = Field(default_factory=list)
    last: LastTrade | None = None

    @property
    def best_bid(self) -> Decimal | None:
        """Get the best (highest) bid price, or None if no bids."""
        if not self.buy:
            return None
        return Decimal(self.buy[0].price)

    @property
    def best_ask(self) -> Decimal | None:
        """Get the best (lowest) ask price, or None if no asks."""
        if not self.sell:
            return None
        return Decimal(self.sell[-1].price)

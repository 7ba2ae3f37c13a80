"""Order book walking math for CLOB markets.

Every function works on an immutable order book snapshot and returns ``None``
when the book is too shallow to fill the requested amount.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from src.funkybit_sdk.models.market import FeeRates, MarketWithSymbolInfos
from src.funkybit_sdk.models.orderbook import OrderBook, OrderBookEntry
from src.funkybit_sdk.pricing.fees import (
    adjust_quote_to_exclude_fee,
    adjust_quote_to_include_fee,
    calculate_fee,
)
from src.funkybit_sdk.utils.logger import get_logger
from src.funkybit_sdk.utils.units import (
    bigint_to_scaled_decimal,
    calculate_notional,
    high_precision,
    parse_units,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Level:
    """Order book level scaled to fundamental units."""

    price: int
    size: int


def _scaled_levels(
    entries: Iterable[OrderBookEntry], market: MarketWithSymbolInfos
) -> Iterator[_Level]:
    for entry in entries:
        yield _Level(
            price=parse_units(entry.price, market.quote_symbol.decimals),
            size=parse_units(entry.size, market.base_symbol.decimals),
        )


def _bid_levels(order_book: OrderBook, market: MarketWithSymbolInfos) -> Iterator[_Level]:
    return _scaled_levels(order_book.buy, market)


def _ask_levels(order_book: OrderBook, market: MarketWithSymbolInfos) -> Iterator[_Level]:
    return _scaled_levels(reversed(order_book.sell), market)


def base_amount_from_notional_and_price(
    notional: int,
    price: int,
    base_decimals: int,
    rounding: Literal["up", "down"],
) -> int:
    """Base amount worth ``notional`` at ``price``, rounded up or down."""
    scaled_notional = notional * 10**base_decimals
    if rounding == "up":
        return -(-scaled_notional // price)
    return scaled_notional // price


def base_amount_to_sell_to_get_quote_amount(
    quote_amount: int,
    market: MarketWithSymbolInfos,
    order_book: OrderBook,
    fee_rates: FeeRates,
) -> int | None:
    """Base to sell into the bids so that proceeds net of taker fee cover ``quote_amount``.

    The partially consumed level is rounded up so the seller always gives
    enough base.

    Returns:
        Base amount in fundamental units, or None if the bids are too shallow
    """
    remaining_quote = adjust_quote_to_include_fee(quote_amount, fee_rates.taker)
    base_amount = 0

    for level in _bid_levels(order_book, market):
        notional_at_level = calculate_notional(level.price, level.size, market.base_symbol.decimals)

        if notional_at_level >= remaining_quote:
            return base_amount + base_amount_from_notional_and_price(
                remaining_quote, level.price, market.base_symbol.decimals, rounding="up"
            )

        base_amount += level.size
        remaining_quote -= notional_at_level

    if remaining_quote > 0:
        logger.debug(
            "Insufficient bid liquidity",
            market=market.id,
            quote_amount=quote_amount,
            missing_quote=remaining_quote,
        )
        return None

    return base_amount


def base_amount_to_get_for_quote_amount(
    quote_amount: int,
    market: MarketWithSymbolInfos,
    order_book: OrderBook,
    fee_rates: FeeRates,
) -> int | None:
    """Base received by spending ``quote_amount`` (fee included) against the asks.

    The partially consumed level is rounded down so the buyer never receives
    more base than the funds cover.

    Returns:
        Base amount in fundamental units, or None if the asks are too shallow
    """
    remaining_quote = adjust_quote_to_exclude_fee(quote_amount, fee_rates.taker)
    base_amount = 0

    for level in _ask_levels(order_book, market):
        notional_at_level = calculate_notional(level.price, level.size, market.base_symbol.decimals)

        if notional_at_level >= remaining_quote:
            return base_amount + base_amount_from_notional_and_price(
                remaining_quote, level.price, market.base_symbol.decimals, rounding="down"
            )

        base_amount += level.size
        remaining_quote -= notional_at_level

    if remaining_quote > 0:
        logger.debug(
            "Insufficient ask liquidity",
            market=market.id,
            quote_amount=quote_amount,
            missing_quote=remaining_quote,
        )
        return None

    return base_amount


def quote_amount_to_get_from_selling_base_amount(
    base_amount: int,
    market: MarketWithSymbolInfos,
    order_book: OrderBook,
    fee_rates: FeeRates,
) -> int | None:
    """Quote proceeds, net of taker fee, from selling ``base_amount`` into the bids.

    Returns:
        Quote amount in fundamental units, or None if the bids cannot absorb the base
    """
    remaining_base = base_amount
    quote_amount = 0

    for level in _bid_levels(order_book, market):
        if level.size < remaining_base:
            quote_amount += calculate_notional(level.price, level.size, market.base_symbol.decimals)
            remaining_base -= level.size
        else:
            quote_amount += calculate_notional(
                level.price, remaining_base, market.base_symbol.decimals
            )
            remaining_base = 0
            break

    if remaining_base > 0:
        logger.debug(
            "Insufficient bid liquidity",
            market=market.id,
            base_amount=base_amount,
            missing_base=remaining_base,
        )
        return None

    return quote_amount - calculate_fee(quote_amount, fee_rates.taker)


def _average_price(
    quote_amount: int,
    base_amount: int,
    market: MarketWithSymbolInfos,
    rounding: str,
) -> Decimal:
    with high_precision():
        price = bigint_to_scaled_decimal(
            quote_amount, market.quote_symbol.decimals
        ) / bigint_to_scaled_decimal(base_amount, market.base_symbol.decimals)
        return price.quantize(Decimal(1).scaleb(-market.quote_symbol.decimals), rounding=rounding)


def get_market_price_for_sell(
    base_amount: int,
    market: MarketWithSymbolInfos,
    order_book: OrderBook,
    fee_rates: FeeRates,
    rounding: str = ROUND_HALF_UP,
) -> Decimal | None:
    """Average price, net of fee, received for selling ``base_amount``.

    Args:
        rounding: ``decimal`` rounding mode applied at quote-asset precision

    Returns:
        Decimal: Price, or None if no proceeds can be computed
    """
    quote_amount = quote_amount_to_get_from_selling_base_amount(
        base_amount, market, order_book, fee_rates
    )
    if not quote_amount:
        return None
    return _average_price(quote_amount, base_amount, market, rounding)


def get_market_price_for_buy(
    quote_amount: int,
    market: MarketWithSymbolInfos,
    order_book: OrderBook,
    fee_rates: FeeRates,
    rounding: str = ROUND_HALF_UP,
) -> Decimal | None:
    """Average price, fee included, paid when spending ``quote_amount``.

    Args:
        rounding: ``decimal`` rounding mode applied at quote-asset precision

    Returns:
        Decimal: Price, or None if no base can be bought
    """
    base_amount = base_amount_to_get_for_quote_amount(quote_amount, market, order_book, fee_rates)
    if not base_amount:
        return None
    return _average_price(quote_amount, base_amount, market, rounding)

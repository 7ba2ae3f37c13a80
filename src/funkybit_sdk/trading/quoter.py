"""Quote service combining market snapshots with the pricing engine."""

from src.funkybit_sdk.core.enums import MarketType, OrderSide, QuoteAsset
from src.funkybit_sdk.core.exceptions import (
    InvalidMarketError,
    MarketDataUnavailableError,
    QuoteUnavailableError,
)
from src.funkybit_sdk.core.interfaces import MarketDataSource
from src.funkybit_sdk.models.market import FeeRates, MarketWithSymbolInfos
from src.funkybit_sdk.models.quote import AdapterMarketState, Quote
from src.funkybit_sdk.pricing.quotes import (
    quote_amount_minus_fee_to_receive_for_selling_base,
    quote_amount_required_for_buying_base_including_fee,
)
from src.funkybit_sdk.utils.logger import get_logger

logger = get_logger(__name__)


class Quoter:
    """Compute quotes for AMM-backed markets.

    Example:
        ```python
        cache = MarketStateCache()
        quoter = Quoter(market_data=cache, fee_rates=config.fee_rates,
                        adapter_market=client.adapter_market(config))

        quote = quoter.get_quote(market, OrderSide.BUY, 1_000_000, QuoteAsset.BTC)
        ```
    """

    def __init__(
        self,
        market_data: MarketDataSource,
        fee_rates: FeeRates,
        adapter_market: MarketWithSymbolInfos | None = None,
    ):
        """Initialize quoter.

        Args:
            market_data: Source of the latest AMM states and order books
            fee_rates: Fee rates applied to the adapter hop
            adapter_market: CLOB market converting between a settlement asset
                and the AMM quote asset (e.g., BTC/USDC)
        """
        self.market_data = market_data
        self.fee_rates = fee_rates
        self.adapter_market = adapter_market

    def _adapter_market_state(self, in_asset: QuoteAsset) -> AdapterMarketState | None:
        """Adapter state when the settlement asset is the adapter's base asset."""
        if self.adapter_market is None or self.adapter_market.base_symbol.name != in_asset.value:
            return None

        order_book = self.market_data.get_order_book(self.adapter_market.id)
        if order_book is None:
            raise MarketDataUnavailableError(
                f"No order book available for adapter market {self.adapter_market.id}"
            )

        return AdapterMarketState(
            market=self.adapter_market,
            order_book=order_book,
            fee_rates=self.fee_rates,
        )

    def get_quote(
        self,
        market: MarketWithSymbolInfos,
        side: OrderSide,
        amount: int,
        in_asset: QuoteAsset,
    ) -> Quote:
        """Quote buying or selling ``amount`` base of an AMM-backed market.

        Args:
            market: Market to quote
            side: Buy or sell
            amount: Base amount in fundamental units
            in_asset: Asset the user pays or receives

        Returns:
            Quote: Amount to pay (buy) or receive (sell) in ``in_asset``

        Raises:
            ValueError: If amount is negative
            InvalidMarketError: If the market is a CLOB market
            MarketDataUnavailableError: If a required snapshot is missing
            QuoteUnavailableError: If liquidity cannot fill the amount
        """
        if amount < 0:
            raise ValueError("Amount must be non-negative")

        if market.type == MarketType.CLOB:
            raise InvalidMarketError(f"Market {market.id} is not backed by an AMM")

        amm_state = self.market_data.get_amm_state(market.id)
        if amm_state is None:
            raise MarketDataUnavailableError(f"No AMM state available for market {market.id}")

        adapter_market_state = self._adapter_market_state(in_asset)

        if side == OrderSide.BUY:
            quote_amount = quote_amount_required_for_buying_base_including_fee(
                amount, market, amm_state, adapter_market_state
            )
        else:
            quote_amount = quote_amount_minus_fee_to_receive_for_selling_base(
                amount, market, amm_state, adapter_market_state
            )

        if quote_amount is None:
            logger.warning(
                "Unable to get quote",
                market=market.id,
                side=side.value,
                amount=amount,
                in_asset=in_asset.value,
            )
            raise QuoteUnavailableError(
                f"Unable to get quote for {side.value} {amount} on {market.id}"
            )

        logger.info(
            "Quote computed",
            market=market.id,
            side=side.value,
            amount=amount,
            quote=quote_amount,
            in_asset=in_asset.value,
            routed=adapter_market_state is not None,
        )

        return Quote(
            market=market,
            side=side,
            amount=amount,
            quote=quote_amount,
            in_asset=in_asset,
        )

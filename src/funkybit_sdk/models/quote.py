"""Quote request and result models."""

from pydantic import ConfigDict, Field

from src.funkybit_sdk.core.enums import OrderSide, QuoteAsset
from src.funkybit_sdk.models.base import FunkybitModel
from src.funkybit_sdk.models.market import FeeRates, MarketWithSymbolInfos
from src.funkybit_sdk.models.orderbook import OrderBook


class AdapterMarketState(FunkybitModel):
    """CLOB market used as a second hop between the settlement asset and an AMM quote asset.

    Attributes:
        market: Adapter market; its base asset is the user's settlement asset
        order_book: Current adapter order book snapshot
        fee_rates: Fee rates applied to the adapter hop
    """

    market: MarketWithSymbolInfos
    order_book: OrderBook
    fee_rates: FeeRates


class Quote(FunkybitModel):
    """Computed quote for buying or selling ``amount`` of a market's base asset.

    Attributes:
        market: Quoted market
        side: Buy or sell
        amount: Base amount in fundamental units
        quote: Amount to pay (buy) or receive (sell) in ``in_asset`` fundamental units
        in_asset: Settlement asset
    """

    model_config = ConfigDict(frozen=True)

    market: MarketWithSymbolInfos
    side: OrderSide
    amount: int = Field(..., ge=0)
    quote: int = Field(..., ge=0)
    in_asset: QuoteAsset

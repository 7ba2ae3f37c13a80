"""Quote composition for AMM-backed markets.

The primary hop prices the trade against the market's AMM state. When an
adapter market state is supplied, the AMM quote amount is converted through
the adapter's order book so the user settles in the adapter's base asset.
A ``None`` from either hop makes the whole quote ``None``.
"""

from src.funkybit_sdk.models.amm import (
    AmmState,
    BondingCurveAmmState,
    ConstantProductAmmState,
)
from src.funkybit_sdk.models.market import MarketWithSymbolInfos
from src.funkybit_sdk.models.quote import AdapterMarketState
from src.funkybit_sdk.pricing.amm import (
    bonding_curve_base_for_quote,
    bonding_curve_buy_cost,
    bonding_curve_sell_proceeds,
    cp_base_for_quote,
    get_cp_best_buy_estimate,
    get_cp_best_sell_estimate,
)
from src.funkybit_sdk.pricing.clob import (
    base_amount_to_get_for_quote_amount,
    base_amount_to_sell_to_get_quote_amount,
    quote_amount_to_get_from_selling_base_amount,
)


def _unsupported_amm_state(amm_state: object) -> TypeError:
    return TypeError(f"Unsupported AMM state: {type(amm_state).__name__}")


def quote_amount_required_for_buying_base_including_fee(
    base_amount: int,
    market: MarketWithSymbolInfos,
    amm_state: AmmState,
    adapter_market_state: AdapterMarketState | None = None,
) -> int | None:
    """Quote (or adapter base) the buyer pays, fee included, for ``base_amount``.

    With an adapter, the result is the adapter base amount to sell into the
    adapter bids to raise the AMM quote amount.

    Returns:
        Amount in fundamental units, or None if liquidity is insufficient
    """
    if base_amount == 0:
        return 0

    if isinstance(amm_state, BondingCurveAmmState):
        quote_required = bonding_curve_buy_cost(base_amount, market, amm_state)
    elif isinstance(amm_state, ConstantProductAmmState):
        best_buy_estimate = get_cp_best_buy_estimate(base_amount, amm_state)
        if best_buy_estimate is None:
            return None
        quote_required = best_buy_estimate.notional + best_buy_estimate.fee
    else:
        raise _unsupported_amm_state(amm_state)

    if adapter_market_state is None:
        return quote_required

    return base_amount_to_sell_to_get_quote_amount(
        quote_required,
        adapter_market_state.market,
        adapter_market_state.order_book,
        adapter_market_state.fee_rates,
    )


def quote_amount_minus_fee_to_receive_for_selling_base(
    base_amount: int,
    market: MarketWithSymbolInfos,
    amm_state: AmmState,
    adapter_market_state: AdapterMarketState | None = None,
) -> int | None:
    """Quote (or adapter base) the seller receives, fee deducted, for ``base_amount``.

    With an adapter, the AMM proceeds are spent buying adapter base from the
    adapter asks.

    Returns:
        Amount in fundamental units, or None if liquidity is insufficient
    """
    if base_amount == 0:
        return 0

    if isinstance(amm_state, BondingCurveAmmState):
        quote_to_receive = bonding_curve_sell_proceeds(base_amount, market, amm_state)
    elif isinstance(amm_state, ConstantProductAmmState):
        best_sell_estimate = get_cp_best_sell_estimate(base_amount, amm_state)
        if best_sell_estimate is None:
            return None
        quote_to_receive = abs(best_sell_estimate.notional - best_sell_estimate.fee)
    else:
        raise _unsupported_amm_state(amm_state)

    if adapter_market_state is None:
        return quote_to_receive

    return base_amount_to_get_for_quote_amount(
        quote_to_receive,
        adapter_market_state.market,
        adapter_market_state.order_book,
        adapter_market_state.fee_rates,
    )


def base_amount_to_receive_for_selling_quote_including_fee(
    quote_amount: int,
    market: MarketWithSymbolInfos,
    amm_state: AmmState,
    adapter_market_state: AdapterMarketState | None = None,
) -> int | None:
    """Base bought by spending ``quote_amount``, fee included.

    With an adapter, ``quote_amount`` is denominated in the adapter base asset
    and is first sold into the adapter bids for AMM quote.

    Returns:
        Base amount in fundamental units, or None if liquidity is insufficient
    """
    if adapter_market_state is None:
        actual_quote_amount: int | None = quote_amount
    else:
        actual_quote_amount = quote_amount_to_get_from_selling_base_amount(
            quote_amount,
            adapter_market_state.market,
            adapter_market_state.order_book,
            adapter_market_state.fee_rates,
        )

    if actual_quote_amount is None:
        return None

    if isinstance(amm_state, BondingCurveAmmState):
        return bonding_curve_base_for_quote(actual_quote_amount, market, amm_state)
    elif isinstance(amm_state, ConstantProductAmmState):
        return cp_base_for_quote(actual_quote_amount, amm_state)
    else:
        raise _unsupported_amm_state(amm_state)

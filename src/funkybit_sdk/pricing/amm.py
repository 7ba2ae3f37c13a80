"""Pricing math for bonding curve and constant-product AMM markets.

Cost formulas add one fundamental unit on top of floor-divided results so the
liquidity side is never under-charged by rounding, even when the division is
exact.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.funkybit_sdk.core.enums import OrderSide
from src.funkybit_sdk.models.amm import (
    BondingCurveAmmState,
    ConstantProductAmmState,
    LiquidityPoolState,
)
from src.funkybit_sdk.models.market import MarketWithSymbolInfos
from src.funkybit_sdk.pricing.fees import adjust_quote_to_exclude_fee, calculate_fee
from src.funkybit_sdk.utils.logger import get_logger
from src.funkybit_sdk.utils.units import (
    bigint_to_scaled_decimal,
    high_precision,
    scaled_decimal_to_bigint,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class LiquidityAdjustmentEstimate:
    """Pool reserve changes for a base liquidity delta.

    ``base_delta`` is negative when base leaves the pool (a buy);
    ``quote_delta`` then is the positive quote the pool must receive.
    """

    base_delta: int
    quote_delta: int
    fee: int


@dataclass(frozen=True)
class LiquidityPoolTradeEstimate:
    """Trade priced against a single pool."""

    pool: LiquidityPoolState
    base_amount: int
    notional: int
    fee: int
    side: OrderSide


# ===== Bonding curve =====


def bonding_curve_cost_for(
    amount: Decimal,
    market: MarketWithSymbolInfos,
    bonding_curve: BondingCurveAmmState,
) -> int:
    """Quote cost, before fee, of moving ``amount`` base through the curve.

    A positive ``amount`` leaves the curve (a buy), a negative one enters it.

    Computes ``|amount| * virtual_quote / (virtual_base - amount)`` plus one
    base-precision unit, floored to quote fundamental units.
    """
    with high_precision():
        virtual_quote_reserves = bigint_to_scaled_decimal(
            bonding_curve.virtual_quote_reserves, market.quote_symbol.decimals
        )
        virtual_base_reserves = bigint_to_scaled_decimal(
            bonding_curve.virtual_base_reserves, market.base_symbol.decimals
        )
        cost = abs(amount) * (
            virtual_quote_reserves / (virtual_base_reserves - amount)
        ) + bigint_to_scaled_decimal(1, market.base_symbol.decimals)
        return scaled_decimal_to_bigint(cost, market.quote_symbol.decimals)


def bonding_curve_buy_cost(
    base_amount: int,
    market: MarketWithSymbolInfos,
    bonding_curve: BondingCurveAmmState,
) -> int:
    """Quote cost including fee of buying ``base_amount``, capped at the real base reserves."""
    safe_amount = min(base_amount, bonding_curve.real_base_reserves)
    cost = bonding_curve_cost_for(
        bigint_to_scaled_decimal(safe_amount, market.base_symbol.decimals),
        market,
        bonding_curve,
    )
    return cost + calculate_fee(cost, bonding_curve.fee_rate)


def bonding_curve_sell_proceeds(
    base_amount: int,
    market: MarketWithSymbolInfos,
    bonding_curve: BondingCurveAmmState,
) -> int:
    """Quote received minus fee for selling ``base_amount`` into the curve."""
    cost = bonding_curve_cost_for(
        -bigint_to_scaled_decimal(base_amount, market.base_symbol.decimals),
        market,
        bonding_curve,
    )
    return cost - calculate_fee(cost, bonding_curve.fee_rate)


def bonding_curve_base_for_quote(
    quote_amount: int,
    market: MarketWithSymbolInfos,
    bonding_curve: BondingCurveAmmState,
) -> int:
    """Base bought with ``quote_amount`` (fee included), capped at the real base reserves."""
    quote_decimals = market.quote_symbol.decimals
    base_decimals = market.base_symbol.decimals

    with high_precision():
        virtual_quote_reserves = bigint_to_scaled_decimal(
            bonding_curve.virtual_quote_reserves, quote_decimals
        )
        virtual_base_reserves = bigint_to_scaled_decimal(
            bonding_curve.virtual_base_reserves, base_decimals
        )
        quote_amount_less_fee = bigint_to_scaled_decimal(
            adjust_quote_to_exclude_fee(quote_amount, bonding_curve.fee_rate), quote_decimals
        )
        product = virtual_quote_reserves * virtual_base_reserves
        new_base_reserves = product / (virtual_quote_reserves + quote_amount_less_fee)
        raw_base = scaled_decimal_to_bigint(
            virtual_base_reserves - new_base_reserves, base_decimals
        )

    return min(raw_base, bonding_curve.real_base_reserves)


# ===== Constant product pools =====


def estimate_pool_base_liquidity_adjustment(
    pool: LiquidityPoolState,
    base_delta: int,
) -> LiquidityAdjustmentEstimate | None:
    """Estimate a pool's quote change when its base liquidity moves by ``base_delta``.

    Returns:
        LiquidityAdjustmentEstimate, or None if the pool would be drained
    """
    new_base_liquidity = pool.base_liquidity + base_delta
    if new_base_liquidity <= 0:
        return None

    product = pool.base_liquidity * pool.quote_liquidity
    new_quote_liquidity = product // new_base_liquidity
    if new_quote_liquidity == 0:
        return None

    quote_delta = new_quote_liquidity - pool.quote_liquidity + 1
    return LiquidityAdjustmentEstimate(
        base_delta=base_delta,
        quote_delta=quote_delta,
        fee=calculate_fee(quote_delta, pool.fee_rate),
    )


def base_amount_to_remove_to_increase_pool_quote_by_delta(
    pool: LiquidityPoolState,
    quote_delta: int,
) -> int | None:
    """Largest base amount a pool gives out for at most ``quote_delta`` more quote.

    Starts from the closed-form estimate and bisects on the base amount until
    the interval width reaches one unit.

    Returns:
        Base amount, or None if no amount keeps the quote increase within ``quote_delta``
    """
    new_quote_liquidity = pool.quote_liquidity + quote_delta
    if new_quote_liquidity <= 0:
        return None

    product = pool.base_liquidity * pool.quote_liquidity
    new_base_liquidity = product // new_quote_liquidity
    if new_base_liquidity == 0:
        return None

    rough_base_delta = new_base_liquidity - pool.base_liquidity
    rough_estimate = estimate_pool_base_liquidity_adjustment(pool, rough_base_delta)
    if rough_estimate is None:
        return None

    rough_base_amount = abs(rough_base_delta)
    if rough_estimate.quote_delta == quote_delta:
        return rough_base_amount

    # Bracket the answer, then keep the largest base amount whose quote delta
    # does not exceed the target
    if rough_estimate.quote_delta < quote_delta:
        left, right = rough_base_amount, rough_base_amount * 2
    else:
        left, right = rough_base_amount // 2, rough_base_amount

    last_acceptable: LiquidityAdjustmentEstimate | None = None

    while right - left > 1:
        middle = (left + right) // 2

        estimate = estimate_pool_base_liquidity_adjustment(pool, -middle)
        if estimate is None:
            return None

        if estimate.quote_delta == quote_delta:
            last_acceptable = estimate
            break
        elif estimate.quote_delta < quote_delta:
            last_acceptable = estimate
            left = middle
        else:
            right = middle

    return abs(last_acceptable.base_delta) if last_acceptable else None


def get_cp_best_buy_estimate(
    buy_amount: int,
    amm_state: ConstantProductAmmState,
) -> LiquidityPoolTradeEstimate | None:
    """Cheapest single pool (notional + fee) to buy ``buy_amount`` base from."""
    best_trade: LiquidityPoolTradeEstimate | None = None

    for pool in amm_state.liquidity_pools:
        estimate = estimate_pool_base_liquidity_adjustment(pool, -buy_amount)
        if estimate is None:
            continue

        trade = LiquidityPoolTradeEstimate(
            pool=pool,
            base_amount=abs(estimate.base_delta),
            notional=estimate.quote_delta,
            fee=estimate.fee,
            side=OrderSide.BUY,
        )
        if best_trade is None or trade.notional + trade.fee < best_trade.notional + best_trade.fee:
            best_trade = trade

    if best_trade is None:
        logger.debug("No pool can fill buy", buy_amount=buy_amount)

    return best_trade


def get_cp_best_sell_estimate(
    sell_amount: int,
    amm_state: ConstantProductAmmState,
) -> LiquidityPoolTradeEstimate | None:
    """Single pool to sell ``sell_amount`` base into.

    A candidate replaces the current best when its notional plus fee exceeds
    the best's notional minus fee.
    """
    best_trade: LiquidityPoolTradeEstimate | None = None

    for pool in amm_state.liquidity_pools:
        estimate = estimate_pool_base_liquidity_adjustment(pool, sell_amount)
        if estimate is None:
            continue

        trade = LiquidityPoolTradeEstimate(
            pool=pool,
            base_amount=estimate.base_delta,
            notional=abs(estimate.quote_delta),
            fee=abs(estimate.fee),
            side=OrderSide.SELL,
        )
        if best_trade is None or trade.notional + trade.fee > best_trade.notional - best_trade.fee:
            best_trade = trade

    if best_trade is None:
        logger.debug("No pool can absorb sell", sell_amount=sell_amount)

    return best_trade


def cp_base_for_quote(
    quote_amount: int,
    amm_state: ConstantProductAmmState,
) -> int | None:
    """Most base any single pool gives for ``quote_amount`` (fee included).

    Returns:
        Base amount, or None if no pool yields a positive amount
    """
    largest_base_amount = 0

    for pool in amm_state.liquidity_pools:
        estimate = base_amount_to_remove_to_increase_pool_quote_by_delta(
            pool, adjust_quote_to_exclude_fee(quote_amount, pool.fee_rate)
        )
        if estimate is not None and estimate > largest_base_amount:
            largest_base_amount = estimate

    if largest_base_amount == 0:
        logger.debug("No pool yields base for quote", quote_amount=quote_amount)
        return None

    return largest_base_amount

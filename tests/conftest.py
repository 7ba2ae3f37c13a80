"""Pytest configuration and shared fixtures."""

from decimal import Decimal
from typing import Any

import pytest

from src.funkybit_sdk.models.amm import (
    BondingCurveAmmState,
    ConstantProductAmmState,
    LiquidityPoolState,
)
from src.funkybit_sdk.models.market import FeeRates, MarketWithSymbolInfos
from src.funkybit_sdk.models.orderbook import OrderBook
from src.funkybit_sdk.models.quote import AdapterMarketState
from tests.fixtures.liquidity import (
    SAMPLE_BONDING_CURVE_STATE,
    SAMPLE_CONSTANT_PRODUCT_STATE,
    SAMPLE_ORDER_BOOK_BTC_USDC,
)
from tests.fixtures.markets import (
    SAMPLE_MARKET_BTC_USDC,
    SAMPLE_MARKET_MEME_USDC_AMM,
    SAMPLE_MARKET_MEME_USDC_BONDING_CURVE,
)

# ===== Pytest Markers =====


def pytest_configure(config: Any) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")


# ===== Market Fixtures =====


@pytest.fixture
def btc_usdc_market() -> MarketWithSymbolInfos:
    """BTC/USDC CLOB market (8 base decimals, 6 quote decimals)."""
    return MarketWithSymbolInfos.model_validate(SAMPLE_MARKET_BTC_USDC)


@pytest.fixture
def bonding_curve_market() -> MarketWithSymbolInfos:
    """MEME/USDC bonding curve market (6 base decimals, 6 quote decimals)."""
    return MarketWithSymbolInfos.model_validate(SAMPLE_MARKET_MEME_USDC_BONDING_CURVE)


@pytest.fixture
def amm_market() -> MarketWithSymbolInfos:
    """MEME/USDC constant-product AMM market."""
    return MarketWithSymbolInfos.model_validate(SAMPLE_MARKET_MEME_USDC_AMM)


@pytest.fixture
def zero_fee_rates() -> FeeRates:
    """Fee rates with no maker or taker fee."""
    return FeeRates(maker=0, taker=0)


@pytest.fixture
def one_percent_fee_rates() -> FeeRates:
    """Fee rates with a 1% taker fee."""
    return FeeRates(maker=5_000, taker=10_000)


# ===== Liquidity Fixtures =====


@pytest.fixture
def order_book() -> OrderBook:
    """Two-level BTC/USDC book: bids 100 x1, 90 x2; asks 110 x1, 120 x2."""
    return OrderBook.model_validate(SAMPLE_ORDER_BOOK_BTC_USDC)


@pytest.fixture
def empty_order_book() -> OrderBook:
    """BTC/USDC book with no levels."""
    return OrderBook(market_id="BTC/USDC", buy=[], sell=[])


@pytest.fixture
def bonding_curve_state() -> BondingCurveAmmState:
    """Curve with 1000/1000 virtual reserves, 800 real base and a 1% fee."""
    return BondingCurveAmmState.model_validate(SAMPLE_BONDING_CURVE_STATE)


@pytest.fixture
def zero_fee_bonding_curve_state(bonding_curve_state: BondingCurveAmmState) -> BondingCurveAmmState:
    """Same curve without fee."""
    return bonding_curve_state.model_copy(update={"fee_rate": Decimal("0")})


@pytest.fixture
def pool_a() -> LiquidityPoolState:
    """1_000_000 / 1_000_000 pool without fee."""
    return LiquidityPoolState(id="pool-a", base_liquidity=1_000_000, quote_liquidity=1_000_000)


@pytest.fixture
def constant_product_state() -> ConstantProductAmmState:
    """Pool A (1M/1M, no fee) and pool B (2M/2M, 1% fee)."""
    return ConstantProductAmmState.model_validate(SAMPLE_CONSTANT_PRODUCT_STATE)


@pytest.fixture
def single_pool_state(pool_a: LiquidityPoolState) -> ConstantProductAmmState:
    """Constant-product state backed by pool A only."""
    return ConstantProductAmmState(liquidity_pools=[pool_a])


@pytest.fixture
def adapter_market_state(
    btc_usdc_market: MarketWithSymbolInfos, zero_fee_rates: FeeRates
) -> AdapterMarketState:
    """BTC/USDC adapter with one bid and one ask at 50 USDC for 1 BTC."""
    book = OrderBook.model_validate(
        {
            "marketId": "BTC/USDC",
            "buy": [{"price": "50", "size": "1"}],
            "sell": [{"price": "50", "size": "1"}],
        }
    )
    return AdapterMarketState(market=btc_usdc_market, order_book=book, fee_rates=zero_fee_rates)

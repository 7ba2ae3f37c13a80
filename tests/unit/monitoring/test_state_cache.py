"""Unit tests for the market state cache."""

import pytest
from pydantic import ValidationError

from src.funkybit_sdk.core.interfaces import MarketDataSource
from src.funkybit_sdk.models.amm import BondingCurveAmmState, ConstantProductAmmState
from src.funkybit_sdk.monitoring.state_cache import MarketStateCache
from tests.fixtures.liquidity import (
    SAMPLE_BONDING_CURVE_STATE,
    SAMPLE_MARKET_AMM_STATE_PUBLISH,
    SAMPLE_ORDER_BOOK_BTC_USDC,
)


@pytest.fixture
def cache():
    """Create an empty MarketStateCache."""
    return MarketStateCache()


class TestMarketStateCache:
    """Test snapshot storage."""

    def test_implements_market_data_source(self, cache):
        """Should be usable wherever a MarketDataSource is expected."""
        assert isinstance(cache, MarketDataSource)

    def test_empty_cache_returns_none(self, cache):
        """Should return None for markets without snapshots."""
        assert cache.get_order_book("BTC/USDC") is None
        assert cache.get_amm_state("MEME/USDC") is None

    def test_update_order_book_replaces_snapshot(self, cache, order_book, empty_order_book):
        """Should keep only the latest order book per market."""
        cache.update_order_book(order_book)
        cache.update_order_book(empty_order_book)

        assert cache.get_order_book("BTC/USDC") is empty_order_book

    def test_update_amm_state(self, cache, bonding_curve_state):
        """Should store AMM state per market id."""
        cache.update_amm_state("MEME/USDC", bonding_curve_state)

        assert cache.get_amm_state("MEME/USDC") is bonding_curve_state
        assert cache.get_amm_state("OTHER/USDC") is None

    def test_clear(self, cache, order_book, bonding_curve_state):
        """Should drop every stored snapshot."""
        cache.update_order_book(order_book)
        cache.update_amm_state("MEME/USDC", bonding_curve_state)

        cache.clear()

        assert cache.get_order_book("BTC/USDC") is None
        assert cache.get_amm_state("MEME/USDC") is None


class TestHandlePublish:
    """Test decoding of publication payloads."""

    def test_stores_order_book(self, cache):
        """Should parse and store OrderBook publications."""
        assert cache.handle_publish(SAMPLE_ORDER_BOOK_BTC_USDC) is True

        book = cache.get_order_book("BTC/USDC")
        assert book is not None
        assert len(book.buy) == 2

    def test_stores_market_amm_state(self, cache):
        """Should parse and store MarketAmmState publications."""
        assert cache.handle_publish(SAMPLE_MARKET_AMM_STATE_PUBLISH) is True

        assert isinstance(cache.get_amm_state("MEME/USDC"), ConstantProductAmmState)

    def test_newer_amm_state_replaces_older(self, cache):
        """Should replace the AMM state when a new publication arrives."""
        cache.handle_publish(SAMPLE_MARKET_AMM_STATE_PUBLISH)
        cache.handle_publish(
            {
                "type": "MarketAmmState",
                "marketId": "MEME/USDC",
                "ammState": SAMPLE_BONDING_CURVE_STATE,
            }
        )

        assert isinstance(cache.get_amm_state("MEME/USDC"), BondingCurveAmmState)

    def test_ignores_other_publications(self, cache):
        """Should ignore publication types it does not track."""
        assert cache.handle_publish({"type": "Prices", "market": "BTC/USDC"}) is False
        assert cache.handle_publish({}) is False

    def test_raises_on_malformed_payload(self, cache):
        """Should raise ValidationError and keep the previous snapshot."""
        cache.handle_publish(SAMPLE_ORDER_BOOK_BTC_USDC)

        with pytest.raises(ValidationError):
            cache.handle_publish({"type": "OrderBook", "marketId": "BTC/USDC", "buy": "bad"})

        assert len(cache.get_order_book("BTC/USDC").buy) == 2

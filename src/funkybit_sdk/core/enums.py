"""Core enumerations for the funkybit SDK."""

from enum import Enum


class OrderSide(str, Enum):
    """Order side (buy or sell)."""

    BUY = "Buy"
    SELL = "Sell"


class MarketType(str, Enum):
    """How a market's liquidity is provided."""

    CLOB = "Clob"
    BONDING_CURVE = "BondingCurve"
    AMM = "Amm"


class QuoteAsset(str, Enum):
    """Asset the user settles a quote in."""

    BTC = "BTC"
    USDC = "USDC"


class GraduationStatus(str, Enum):
    """Bonding curve graduation status."""

    NOT_READY = "NotReady"
    INITIATED = "Initiated"
    COMPLETED = "Completed"
    FAILED = "Failed"


class Direction(str, Enum):
    """Direction of the last trade relative to the previous one."""

    UP = "Up"
    DOWN = "Down"
    UNCHANGED = "Unchanged"

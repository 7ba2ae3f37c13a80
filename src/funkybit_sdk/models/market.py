"""Market reference data models."""

from decimal import Decimal

from pydantic import Field, field_validator

from src.funkybit_sdk.config.constants import FEE_RATE_PIPS_MAX_VALUE
from src.funkybit_sdk.core.enums import MarketType
from src.funkybit_sdk.models.base import FunkybitModel
from src.funkybit_sdk.pricing.fees import fee_rate_to_pips


class Symbol(FunkybitModel):
    """A tradable asset on one chain.

    Attributes:
        name: Symbol name (e.g., "BTC", "USDC")
        decimals: Fixed-point scale used for every amount of this asset
        contract_address: Token contract address, None for native assets
        withdrawal_fee: Withdrawal fee in fundamental units
    """

    name: str
    description: str = ""
    contract_address: str | None = None
    decimals: int = Field(..., ge=0)
    faucet_supported: bool = False
    icon_url: str = ""
    withdrawal_fee: int = 0
    chain_id: str = ""
    chain_name: str = ""
    name_on_chain: str | None = None


class Market(FunkybitModel):
    """Market as listed in the backend configuration (symbols by name)."""

    id: str
    base_symbol: str
    quote_symbol: str
    tick_size: Decimal
    last_price: Decimal
    min_fee: int = 0
    fee_rate: Decimal = Decimal("0")

    @field_validator("tick_size")
    @classmethod
    def validate_tick_size(cls, v: Decimal) -> Decimal:
        """Validate tick size is positive."""
        if v <= 0:
            raise ValueError("tick_size must be positive")
        return v


class MarketWithSymbolInfos(FunkybitModel):
    """Market descriptor with full symbol information.

    Attributes:
        id: Market identifier (e.g., "BTC:0/USDC:1")
        base_symbol: Base asset
        quote_symbol: Quote asset
        tick_size: Minimum price increment
        fee_rate: Market fee rate as a decimal fraction
        type: Liquidity mechanism backing the market
    """

    id: str
    base_symbol: Symbol
    quote_symbol: Symbol
    tick_size: Decimal
    last_price: Decimal = Decimal("0")
    min_fee: int = 0
    fee_rate: Decimal = Decimal("0")
    type: MarketType = MarketType.CLOB

    @field_validator("tick_size")
    @classmethod
    def validate_tick_size(cls, v: Decimal) -> Decimal:
        """Validate tick size is positive."""
        if v <= 0:
            raise ValueError("tick_size must be positive")
        return v


class FeeRates(FunkybitModel):
    """Maker and taker fee rates in pips (1_000_000 pips = 100%)."""

    maker: int
    taker: int

    @field_validator("maker", "taker")
    @classmethod
    def validate_pips(cls, v: int) -> int:
        """Validate fee rate is within [0, 100%]."""
        if v < 0 or v > FEE_RATE_PIPS_MAX_VALUE:
            raise ValueError(f"fee rate must be between 0 and {FEE_RATE_PIPS_MAX_VALUE} pips")
        return v

    @classmethod
    def from_decimal_rates(cls, maker: Decimal | str, taker: Decimal | str) -> "FeeRates":
        """Build fee rates from decimal fractions (e.g., "0.01" for 1%)."""
        return cls(
            maker=fee_rate_to_pips(Decimal(maker)),
            taker=fee_rate_to_pips(Decimal(taker)),
        )

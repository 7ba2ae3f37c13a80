"""AMM state snapshot models.

``AmmState`` is a closed union discriminated on ``type``; every pricing
function handles both variants explicitly.
"""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter, model_validator

from src.funkybit_sdk.core.enums import GraduationStatus
from src.funkybit_sdk.models.base import FunkybitModel


class BondingCurveAmmState(FunkybitModel):
    """Virtual-reserve constant-product curve backing a launch market.

    Attributes:
        real_base_reserves: Base actually held by the curve, caps any buy
        virtual_base_reserves: Virtual base reserves of the curve
        virtual_quote_reserves: Virtual quote reserves of the curve
        fee_rate: Curve fee rate as a decimal fraction
    """

    type: Literal["BondingCurve"] = "BondingCurve"
    real_base_reserves: int = Field(..., ge=0)
    virtual_base_reserves: int = Field(..., gt=0)
    real_quote_reserves: int = Field(default=0, ge=0)
    virtual_quote_reserves: int = Field(..., gt=0)
    progress: Decimal = Decimal("0")
    graduation_status: GraduationStatus = GraduationStatus.NOT_READY
    fee_rate: Decimal = Decimal("0")

    @model_validator(mode="after")
    def validate_reserves(self) -> "BondingCurveAmmState":
        """Validate real base reserves never exceed virtual base reserves."""
        if self.real_base_reserves > self.virtual_base_reserves:
            raise ValueError("real_base_reserves cannot exceed virtual_base_reserves")
        return self


class LiquidityPoolState(FunkybitModel):
    """One constant-product pool of an AMM market."""

    id: str = ""
    base_liquidity: int = Field(..., ge=0)
    quote_liquidity: int = Field(..., ge=0)
    fee_rate: Decimal = Decimal("0")


class ConstantProductAmmState(FunkybitModel):
    """Parallel constant-product pools; a trade is routed to a single pool."""

    type: Literal["ConstantProduct"] = "ConstantProduct"
    liquidity_pools: list[LiquidityPoolState] = Field(default_factory=list)


AmmState = Annotated[
    BondingCurveAmmState | ConstantProductAmmState,
    Field(discriminator="type"),
]

amm_state_adapter: TypeAdapter[BondingCurveAmmState | ConstantProductAmmState] = TypeAdapter(
    AmmState
)


class MarketAmmState(FunkybitModel):
    """AMM state publication for one market."""

    type: Literal["MarketAmmState"] = "MarketAmmState"
    market_id: str
    amm_state: AmmState

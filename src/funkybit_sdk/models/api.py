"""REST API payload models."""

from decimal import Decimal
from typing import Any

from pydantic import Field, field_validator

from src.funkybit_sdk.models.base import FunkybitModel
from src.funkybit_sdk.models.market import FeeRates, Market, Symbol


class Contract(FunkybitModel):
    """Exchange contract deployed on a chain."""

    name: str
    address: str
    native_deposit_address: str | None = None
    token_deposit_address: str | None = None


class Chain(FunkybitModel):
    """Chain configuration with its contracts and symbols."""

    id: str
    name: str
    contracts: list[Contract] = Field(default_factory=list)
    symbols: list[Symbol] = Field(default_factory=list)
    json_rpc_url: str = ""
    block_explorer_net_name: str = ""
    block_explorer_url: str = ""


class ConfigurationApiResponse(FunkybitModel):
    """Response of ``GET /v1/config``.

    Fee rates arrive as decimal fractions and are stored as pips.
    """

    chains: list[Chain] = Field(default_factory=list)
    markets: list[Market] = Field(default_factory=list)
    fee_rates: FeeRates
    minimum_rune: str | None = None

    @field_validator("fee_rates", mode="before")
    @classmethod
    def parse_fee_rates(cls, v: Any) -> Any:
        """Convert decimal fee fractions to pips."""
        if isinstance(v, dict):
            return FeeRates.from_decimal_rates(
                maker=Decimal(str(v["maker"])),
                taker=Decimal(str(v["taker"])),
            )
        return v


class ApiErrors(FunkybitModel):
    """Error body returned by the backend on failed requests."""

    code: str
    message: str
    details: dict[str, Any] | None = None

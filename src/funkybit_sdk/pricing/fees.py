"""Fixed-point fee arithmetic.

Fee rates are either integer pips (parts-per-million) or ``Decimal`` fractions.
Decimal rates are rescaled to pips with ``floor(rate * 1_000_000)``.
"""

from decimal import ROUND_FLOOR, Decimal

from src.funkybit_sdk.config.constants import FEE_RATE_PIPS_MAX_VALUE
from src.funkybit_sdk.core.exceptions import InvalidFeeRateError

FeeRate = int | Decimal


def fee_rate_to_pips(fee_rate: FeeRate) -> int:
    """Convert a fee rate to integer pips.

    Examples:
        >>> fee_rate_to_pips(Decimal("0.005"))
        5000
        >>> fee_rate_to_pips(5000)
        5000
    """
    if isinstance(fee_rate, Decimal):
        pips = (fee_rate * FEE_RATE_PIPS_MAX_VALUE).to_integral_value(rounding=ROUND_FLOOR)
        return int(pips)
    return int(fee_rate)


def calculate_fee(notional: int, fee_rate: FeeRate) -> int:
    """Fee charged on ``notional``.

    The magnitude is floored, so a negative notional (quote leaving a pool)
    yields the negated fee of its absolute value.
    """
    pips = fee_rate_to_pips(fee_rate)
    fee = abs(notional) * pips // FEE_RATE_PIPS_MAX_VALUE
    return -fee if notional < 0 else fee


def adjust_quote_to_exclude_fee(notional_including_fee: int, fee_rate: FeeRate) -> int:
    """Back the fee out of a notional that already includes it."""
    return (notional_including_fee * FEE_RATE_PIPS_MAX_VALUE) // (
        FEE_RATE_PIPS_MAX_VALUE + fee_rate_to_pips(fee_rate)
    )


def adjust_quote_to_include_fee(notional: int, fee_rate: FeeRate) -> int:
    """Gross amount that nets ``notional`` once the fee is deducted.

    Raises:
        InvalidFeeRateError: If the fee rate is 100% or more
    """
    pips = fee_rate_to_pips(fee_rate)
    if pips >= FEE_RATE_PIPS_MAX_VALUE:
        raise InvalidFeeRateError(
            f"Fee rate of {pips} pips must be below {FEE_RATE_PIPS_MAX_VALUE} pips"
        )
    return (notional * FEE_RATE_PIPS_MAX_VALUE) // (FEE_RATE_PIPS_MAX_VALUE - pips)

"""Fixed-point amount conversions.

Amounts travel through the SDK as plain ``int`` values scaled by the asset's
decimal count (``1 BTC == 100_000_000`` with 8 decimals). Ratio math happens on
``Decimal`` values and is converted back to integers only at the edges.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, localcontext

from src.funkybit_sdk.config.constants import DECIMAL_PRECISION


@contextmanager
def high_precision() -> Iterator[None]:
    """Run decimal arithmetic with enough digits for 18-decimal assets."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        yield


def bigint_to_scaled_decimal(amount: int, decimals: int) -> Decimal:
    """Convert a fixed-point integer to its decimal value.

    Examples:
        >>> bigint_to_scaled_decimal(150_000_000, 8)
        Decimal('1.50000000')
    """
    with high_precision():
        return Decimal(amount).scaleb(-decimals)


def scaled_decimal_to_bigint(value: Decimal, decimals: int, round: bool = False) -> int:
    """Convert a decimal value to a fixed-point integer.

    Args:
        value: Decimal value to scale
        decimals: Decimal count of the asset
        round: Round half up instead of truncating toward zero

    Returns:
        int: Scaled integer amount
    """
    with high_precision():
        scaled = value.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_HALF_UP if round else ROUND_DOWN))


def calculate_notional(price: int, base_amount: int, base_decimals: int) -> int:
    """Quote notional of ``base_amount`` at a fixed-point ``price``, floored."""
    return (price * base_amount) // 10**base_decimals


def parse_units(value: str | Decimal, decimals: int) -> int:
    """Parse a decimal string into a fixed-point integer.

    Digits beyond ``decimals`` are rounded half up.

    Raises:
        ValueError: If value is not a decimal number
    """
    try:
        parsed = Decimal(value)
    except ArithmeticError as e:
        raise ValueError(f"{value!r} can't be parsed into Decimal") from e
    if not parsed.is_finite():
        raise ValueError(f"{value!r} is not a finite number")
    return scaled_decimal_to_bigint(parsed, decimals, round=True)


def from_fundamental_units(value: int, decimals: int) -> str:
    """Format a fixed-point integer as a decimal string.

    Examples:
        >>> from_fundamental_units(105, 2)
        '1.05'
        >>> from_fundamental_units(5, 0)
        '5'
    """
    if decimals == 0:
        return str(value)

    sign = "-" if value < 0 else ""
    digits = str(abs(value)).rjust(decimals + 1, "0")
    return f"{sign}{digits[:-decimals]}.{digits[-decimals:]}"

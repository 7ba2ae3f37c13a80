"""Constants for the funkybit SDK."""

# API Configuration
DEFAULT_API_URL = "https://prod-api.funkybit.fun"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0

# Fee rates are integers in parts-per-million (pips); 1_000_000 pips = 100%
FEE_RATE_PIPS_MAX_VALUE = 1_000_000

# Significant digits used for scaled-decimal arithmetic.
# 18-decimal assets multiplied together need well over the default 28.
DECIMAL_PRECISION = 80

"""Command-line entry point for quoting funkybit coins."""

import json
import sys
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from src.funkybit_sdk.config.settings import Settings
from src.funkybit_sdk.connectors.api_client import FunkybitApiClient
from src.funkybit_sdk.core.enums import OrderSide, QuoteAsset
from src.funkybit_sdk.models.amm import amm_state_adapter
from src.funkybit_sdk.models.market import MarketWithSymbolInfos
from src.funkybit_sdk.monitoring.state_cache import MarketStateCache
from src.funkybit_sdk.trading.quoter import Quoter
from src.funkybit_sdk.utils.logger import configure_logging, get_logger
from src.funkybit_sdk.utils.units import from_fundamental_units, parse_units

logger = get_logger(__name__)


def _read_json(path: str) -> dict[str, Any]:
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


def load_snapshots(
    cache: MarketStateCache,
    market: MarketWithSymbolInfos,
    amm_state_file: str,
    adapter_book_file: str | None,
) -> None:
    """Load saved snapshots into the cache.

    The AMM state file holds either a ``MarketAmmState`` publication or a bare
    AMM state, which is then stored for ``market``. The adapter book file holds
    an ``OrderBook`` publication.
    """
    payload = _read_json(amm_state_file)
    if payload.get("type") == "MarketAmmState":
        cache.handle_publish(payload)
    else:
        cache.update_amm_state(market.id, amm_state_adapter.validate_python(payload))

    if adapter_book_file:
        cache.handle_publish(_read_json(adapter_book_file))


@click.command()
@click.argument("coin")
@click.option(
    "--side",
    type=click.Choice([side.value for side in OrderSide], case_sensitive=False),
    default=OrderSide.BUY.value,
    help="Quote a buy or a sell of the coin (default: Buy)",
)
@click.option("--amount", required=True, help="Coin amount as a decimal (e.g., 1000.5)")
@click.option(
    "--in-asset",
    type=click.Choice([asset.value for asset in QuoteAsset], case_sensitive=False),
    default=QuoteAsset.BTC.value,
    help="Asset to pay or receive (default: BTC)",
)
@click.option(
    "--amm-state",
    "amm_state_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="JSON file with the coin's MarketAmmState publication or AMM state",
)
@click.option(
    "--adapter-book",
    "adapter_book_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with the adapter market OrderBook publication",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=".env",
    help="Path to .env file (default: .env)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Logging level (default: WARNING)",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Output logs in JSON format instead of human-readable format",
)
def main(
    coin: str,
    side: str,
    amount: str,
    in_asset: str,
    amm_state_file: str,
    adapter_book_file: str | None,
    env_file: str,
    log_level: str,
    json_logs: bool,
) -> None:
    """Quote buying or selling COIN against saved AMM and adapter snapshots.

    Market reference data and fee rates are fetched from the funkybit API;
    configuration is loaded from environment variables or a .env file.
    """
    load_dotenv(env_file)
    configure_logging(log_level=log_level, json_logs=json_logs)

    try:
        settings = Settings()
        client = FunkybitApiClient.from_settings(settings)

        config = client.get_configuration()
        market = client.get_coin_market(coin)
        adapter_market = client.adapter_market(config)

        cache = MarketStateCache()
        load_snapshots(cache, market, amm_state_file, adapter_book_file)

        quoter = Quoter(
            market_data=cache, fee_rates=config.fee_rates, adapter_market=adapter_market
        )
        quote_asset = QuoteAsset(in_asset.upper())
        quote = quoter.get_quote(
            market,
            OrderSide(side.capitalize()),
            parse_units(amount, market.base_symbol.decimals),
            quote_asset,
        )

        if adapter_market.base_symbol.name == quote_asset.value:
            quote_decimals = adapter_market.base_symbol.decimals
        else:
            quote_decimals = market.quote_symbol.decimals

    except Exception as e:
        logger.error("Quote failed", coin=coin, error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"{quote.side.value} {amount} {coin}: "
        f"{from_fundamental_units(quote.quote, quote_decimals)} {quote.in_asset.value}"
    )


if __name__ == "__main__":
    main()

"""Entry point for the launchpad quote tool.

Prices a trade against a curve described on the command line, using an
in-memory ledger as the reserve source.

Usage:
    python -m launchpad.main --curve-type linear --base-price 0.001 --slope 0.00001 \
        --total-supply 1000000 --current-supply 500000 --amount 1000
    python -m launchpad.main --config config/launchpad.yaml --curve-type exponential \
        --base-price 0.001 --exponent 0.5 --total-supply 1000000 --amount 1000 --direction sell
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from decimal import Decimal

from launchpad.core.config import LaunchpadConfig, load_config
from launchpad.core.service import CurveTradingService
from launchpad.domain.curves import parse_curve_config
from launchpad.domain.errors import LaunchpadError
from launchpad.domain.trades import Quote
from launchpad.domain.types import TradeDirection
from launchpad.ledger.memory import InMemoryLedger
from launchpad.monitoring.metrics import MetricsCollector

CLI_CURVE_ID = "cli"


def setup_logging(level: str, log_file: str | None = None) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to write logs to
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        handlers=handlers,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bonding curve quote tool",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to configuration file",
    )

    parser.add_argument(
        "--curve-type",
        "-t",
        choices=["linear", "exponential", "logarithmic"],
        required=True,
        help="Curve shape",
    )

    parser.add_argument("--base-price", type=Decimal, required=True, help="Price at zero supply")
    parser.add_argument("--slope", type=Decimal, help="Linear slope")
    parser.add_argument("--exponent", type=Decimal, help="Exponential growth rate")
    parser.add_argument("--log-base", type=Decimal, help="Logarithmic scale factor")

    parser.add_argument("--total-supply", type=int, required=True, help="Supply ceiling")
    parser.add_argument("--current-supply", type=int, default=0, help="Tokens already issued")
    parser.add_argument(
        "--reserves",
        type=Decimal,
        default=Decimal("0"),
        help="Reserve currency backing the curve",
    )

    parser.add_argument("--amount", "-a", type=Decimal, required=True, help="Trade size in tokens")
    parser.add_argument(
        "--direction",
        "-d",
        choices=["buy", "sell"],
        default="buy",
        help="Trade direction",
    )

    parser.add_argument(
        "--log-level",
        "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Log file path",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> LaunchpadConfig:
    """Build configuration from file and command line args.

    Args:
        args: Parsed command line arguments

    Returns:
        Merged configuration
    """
    config = load_config(args.config)

    if args.log_level:
        config.log_level = args.log_level

    if args.log_file:
        config.log_file = args.log_file

    return config


def curve_record(args: argparse.Namespace) -> dict[str, object]:
    """Build the stored curve record from command line args."""
    record: dict[str, object] = {
        "curve_type": args.curve_type,
        "base_price": args.base_price,
    }
    for name in ("slope", "exponent", "log_base"):
        value = getattr(args, name)
        if value is not None:
            record[name] = value
    return record


def format_quote(quote: Quote) -> str:
    """Render a quote for the terminal."""
    return "\n".join(
        [
            f"curve:            {quote.curve_id}",
            f"direction:        {quote.direction.value}",
            f"amount:           {quote.amount}",
            f"spot price:       {quote.spot_price}",
            f"adjusted price:   {quote.adjusted_spot_price}",
            f"price impact (%): {quote.price_impact_percent}",
            f"total cost:       {quote.total_cost}",
        ]
    )


async def main_async(config: LaunchpadConfig, args: argparse.Namespace) -> int:
    """Async main entry point.

    Args:
        config: Engine configuration
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    ledger = InMemoryLedger()
    ledger.register_curve(
        CLI_CURVE_ID,
        parse_curve_config(curve_record(args)),
        total_supply=args.total_supply,
        current_supply=args.current_supply,
        sol_reserves=args.reserves,
    )
    metrics = MetricsCollector(prefix=config.metrics.prefix, enabled=config.metrics.enabled)
    service = CurveTradingService(ledger, ledger, ledger, ledger, config=config, metrics=metrics)

    try:
        quote = await service.get_quote(CLI_CURVE_ID, args.amount, TradeDirection(args.direction))
    except LaunchpadError as e:
        logging.error(f"Quote failed ({e.kind.value if e.kind else 'error'}): {e}")
        return 1

    print(format_quote(quote))
    if quote.is_high_impact(config.quote.high_impact_warning_percent):
        print(f"warning: price impact above {config.quote.high_impact_warning_percent}%")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)

    try:
        return asyncio.run(main_async(config, args))
    except LaunchpadError as e:
        logging.error(f"Invalid curve: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

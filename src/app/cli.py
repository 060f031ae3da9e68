"""
Command-line interface for the Stock Quote Normalizer.
Provides commands for normalizing a quote and inspecting configuration.
"""

import argparse
import json
import sys

from loguru import logger

from src.core.logging import configure_logging


# (label, attribute) pairs shown by the quote command
DISPLAY_FIELDS = [
    ("Price", "current_price"),
    ("Prev Close", "previous_close"),
    ("Market Cap", "market_cap"),
    ("P/E", "pe_ratio"),
    ("EPS", "eps"),
    ("Book Value", "book_value"),
    ("Div Yield", "dividend_yield"),
    ("Div Rate", "dividend_rate"),
    ("Beta", "beta"),
    ("Free CF", "free_cashflow"),
    ("Revenue", "total_revenue"),
    ("Margins", "profit_margins"),
    ("Op. CF", "operating_cashflow"),
    ("Shares", "shares_outstanding"),
    ("EV", "enterprise_value"),
    ("P/S", "price_to_sales"),
    ("PEG", "peg_ratio"),
]


def format_value(value) -> str:
    """Render a metric for the terminal; missing values show as n/a."""
    if value is None:
        return "n/a"
    if abs(value) >= 1_000_000:
        return f"{value:,.0f}"
    return f"{value:,.4g}" if abs(value) < 1 else f"{value:,.2f}"


def cmd_quote(args):
    """Handle quote command."""
    from src.app.normalizer import normalize
    from src.core.errors import QuoteNormalizerError

    try:
        quote = normalize(args.symbol)
    except QuoteNormalizerError as e:
        logger.error(f"Failed to fetch stock data for {args.symbol}: {e.message}")
        sys.exit(1)

    if args.json:
        print(json.dumps(quote.model_dump(mode="json", by_alias=True), indent=2))
        return

    print(f"\n{'='*50}")
    print(f"  {quote.symbol} Quote")
    print(f"{'='*50}")
    for label, attr in DISPLAY_FIELDS:
        print(f"  {label + ':':<12} {format_value(getattr(quote, attr))}")
    print(f"  {'Time:':<12} {quote.timestamp.strftime('%Y-%m-%d %H:%M:%S')} UTC")
    print(f"{'='*50}\n")


def cmd_config(args):
    """Print effective configuration."""
    from src.core.config import settings

    print(f"\n{'='*50}")
    print("  Configuration")
    print(f"{'='*50}")
    print(f"    CHART_BASE_URL:  {settings.chart_base_url}")
    print(f"    SUMMARY_HOSTS:   {', '.join(settings.summary_hosts)}")
    print(f"    SUMMARY_MODULES: {', '.join(settings.summary_modules)}")
    print(f"    USER_AGENT:      {settings.user_agent}")
    print(f"    REQUEST_TIMEOUT: {settings.request_timeout}s")
    print(f"    LOG_LEVEL:       {settings.log_level}")
    print(f"{'='*50}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Normalized stock price and fundamentals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.app.cli quote AAPL
  python -m src.app.cli quote msft --json
  python -m src.app.cli config
        """
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    quote_parser = subparsers.add_parser("quote", help="Get the normalized quote for a symbol")
    quote_parser.add_argument("symbol", help="Stock ticker symbol (e.g., AAPL)")
    quote_parser.add_argument("--json", action="store_true", help="Output as JSON")
    quote_parser.set_defaults(func=cmd_quote)

    config_parser = subparsers.add_parser("config", help="Show effective configuration")
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level="DEBUG" if args.verbose else "INFO", json_output=False)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()

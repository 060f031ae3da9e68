"""
Quote normalizer combining the chart and quoteSummary resources.
Produces one flat NormalizedQuote per symbol.
"""

from datetime import datetime, timezone
from typing import Optional

from src.core.logging import get_logger
from src.core.errors import InvalidRequestError, UpstreamError
from src.core.fundamentals import apply_derivations, extract_fundamentals, extract_price
from src.core.models import NormalizedQuote, PriceSnapshot, canonical_symbol
from src.data_sources.yahoo_api import YahooAPIClient, YahooAPIError


class QuoteNormalizer:
    """
    Turns a ticker symbol into a NormalizedQuote.

    The price fetch is mandatory and fails the request; the fundamentals
    fetch is best-effort and degrades to null fields.
    """

    def __init__(self, client: Optional[YahooAPIClient] = None):
        self.client = client or YahooAPIClient()

    def get_price(self, symbol: str) -> PriceSnapshot:
        """
        Resolve the price snapshot for a canonical symbol.

        Raises:
            UpstreamError: If the chart resource fails or carries no price
        """
        log = get_logger(symbol)
        try:
            meta = self.client.get_chart_meta(symbol)
        except YahooAPIError as e:
            log.bind(status=e.status_code).error(f"Price fetch failed for {symbol}: {e.message}")
            raise UpstreamError(
                e.message,
                details={"symbol": symbol, "status": e.status_code, "url": e.url},
            ) from e

        current_price, previous_close = extract_price(meta)
        if current_price is None:
            log.error(f"No usable price in chart result for {symbol}")
            raise UpstreamError(
                "No usable price in chart result", details={"symbol": symbol}
            )

        return PriceSnapshot(current_price=current_price, previous_close=previous_close)

    def normalize(self, symbol: Optional[str]) -> NormalizedQuote:
        """
        Build the normalized quote for a symbol.

        Args:
            symbol: Raw ticker as received (any case, may be padded)

        Returns:
            NormalizedQuote

        Raises:
            InvalidRequestError: If the symbol is missing or blank
            UpstreamError: If the price resource is unusable
        """
        ticker = canonical_symbol(symbol)
        if not ticker:
            raise InvalidRequestError("Symbol parameter is required")

        price = self.get_price(ticker)
        bundle = self.client.get_quote_summary(ticker)

        values = extract_fundamentals(bundle)
        values["current_price"] = price.current_price
        values = apply_derivations(values)

        quote = NormalizedQuote(
            symbol=ticker,
            previous_close=price.previous_close,
            timestamp=datetime.now(timezone.utc),
            **values,
        )

        get_logger(ticker).info(
            f"Processed {ticker}: price={quote.current_price}, pe={quote.pe_ratio}, "
            f"eps={quote.eps}, book={quote.book_value}"
        )
        return quote


# Module-level instance
quote_normalizer = QuoteNormalizer()


def normalize(symbol: Optional[str]) -> NormalizedQuote:
    """Convenience function to normalize a quote."""
    return quote_normalizer.normalize(symbol)

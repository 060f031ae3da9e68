"""
Pydantic models for normalized stock quotes.
Defines PriceSnapshot, Fundamentals, NormalizedQuote and ErrorRecord models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def canonical_symbol(symbol: Optional[str]) -> str:
    """Trim and upper-case a ticker symbol. Returns '' for missing input."""
    return str(symbol or "").strip().upper()


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceSnapshot(CamelModel):
    """Price fields taken from the provider's chart resource."""

    current_price: Optional[float] = Field(default=None, description="Live price or best fallback")
    previous_close: Optional[float] = Field(default=None, description="Previous session close")


class Fundamentals(CamelModel):
    """Non-price metrics. Every field is null unless the provider supplied it."""

    market_cap: Optional[float] = None
    pe_ratio: Optional[float] = None
    book_value: Optional[float] = None
    eps: Optional[float] = None
    dividend_yield: Optional[float] = None
    dividend_rate: Optional[float] = None
    beta: Optional[float] = None
    free_cashflow: Optional[float] = None
    total_revenue: Optional[float] = None
    profit_margins: Optional[float] = None
    operating_cashflow: Optional[float] = None
    shares_outstanding: Optional[float] = None
    enterprise_value: Optional[float] = None
    price_to_sales: Optional[float] = None
    peg_ratio: Optional[float] = None


class NormalizedQuote(Fundamentals):
    """Flat quote record returned to API clients."""

    symbol: str = Field(..., min_length=1, description="Canonical ticker symbol (e.g., AAPL)")
    current_price: Optional[float] = Field(default=None, description="Current stock price")
    previous_close: Optional[float] = Field(default=None, description="Previous close")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Time the request was processed",
    )


class ErrorRecord(BaseModel):
    """Error body returned when a quote cannot be produced."""

    error: str = Field(..., description="Error category")
    symbol: Optional[str] = Field(default=None, description="Symbol, when known")
    message: Optional[str] = Field(default=None, description="Underlying failure")

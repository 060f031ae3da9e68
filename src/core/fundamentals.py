"""
Field extraction and bounded derivation for quoteSummary bundles.

Every output field maps to an ordered list of (module, key) locations; the
first location holding a usable number wins. Missing fields stay None.
"""

import math
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional, Tuple

# Ordered fallback chains: output field -> ((module, key), ...)
FIELD_SOURCES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "pe_ratio": (("summaryDetail", "trailingPE"), ("defaultKeyStatistics", "forwardPE")),
    "book_value": (("defaultKeyStatistics", "bookValue"),),
    "eps": (("defaultKeyStatistics", "trailingEps"),),
    "dividend_yield": (("summaryDetail", "dividendYield"),),
    "dividend_rate": (("summaryDetail", "dividendRate"),),
    "beta": (("summaryDetail", "beta"), ("defaultKeyStatistics", "beta")),
    "free_cashflow": (("financialData", "freeCashflow"),),
    "total_revenue": (("financialData", "totalRevenue"),),
    "profit_margins": (("financialData", "profitMargins"),),
    "operating_cashflow": (("financialData", "operatingCashflow"),),
    "shares_outstanding": (("defaultKeyStatistics", "sharesOutstanding"),),
    "enterprise_value": (("defaultKeyStatistics", "enterpriseValue"),),
    "price_to_sales": (("summaryDetail", "priceToSalesTrailing12Months"),),
    "peg_ratio": (("defaultKeyStatistics", "pegRatio"),),
    "market_cap": (("price", "marketCap"), ("summaryDetail", "marketCap")),
}

# Chart meta fallback chain for the current price
PRICE_SOURCES: Tuple[str, ...] = ("regularMarketPrice", "previousClose", "chartPreviousClose")


def extract_raw(envelope: Any) -> Optional[float]:
    """
    Unwrap a provider value into a number.

    Accepts ``{"raw": 1.5, "fmt": "1.50"}`` envelopes and bare numbers.
    Anything else (strings, booleans, NaN, ints too large for a float,
    empty envelopes) yields None.
    """
    if isinstance(envelope, Mapping):
        envelope = envelope.get("raw")
    if isinstance(envelope, bool) or not isinstance(envelope, (int, float)):
        return None
    try:
        number = float(envelope)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return envelope


def first_raw(values: Any) -> Optional[float]:
    """Return the first value in an iterable that unwraps to a number."""
    for value in values:
        number = extract_raw(value)
        if number is not None:
            return number
    return None


def _lookup(bundle: Mapping[str, Any], module: str, key: str) -> Any:
    section = bundle.get(module)
    if not isinstance(section, Mapping):
        return None
    return section.get(key)


def extract_fundamentals(bundle: Optional[Mapping[str, Any]]) -> Dict[str, Optional[float]]:
    """
    Pull every known field out of a quoteSummary result.

    Args:
        bundle: ``quoteSummary.result[0]`` (may be empty or None)

    Returns:
        Dict with one entry per field in FIELD_SOURCES
    """
    bundle = bundle or {}
    return {
        field: first_raw(_lookup(bundle, module, key) for module, key in sources)
        for field, sources in FIELD_SOURCES.items()
    }


def extract_price(meta: Mapping[str, Any]) -> Tuple[Optional[float], Optional[float]]:
    """
    Read (current_price, previous_close) from chart meta.

    The current price walks PRICE_SOURCES in order; previous close is read
    on its own.
    """
    current_price = first_raw(meta.get(key) for key in PRICE_SOURCES)
    previous_close = extract_raw(meta.get("previousClose"))
    return current_price, previous_close


class Derivation(NamedTuple):
    """A permitted computation of one field from others."""

    name: str
    target: str
    inputs: Tuple[str, ...]
    compute: Callable[..., Optional[float]]


def _shares_from_market_cap(market_cap: float, current_price: float) -> Optional[float]:
    if current_price == 0:
        return None
    return market_cap / current_price


# The complete set of permitted derivations, applied in order.
DERIVATIONS: Tuple[Derivation, ...] = (
    Derivation(
        name="market_cap_from_shares",
        target="market_cap",
        inputs=("shares_outstanding", "current_price"),
        compute=lambda shares_outstanding, current_price: shares_outstanding * current_price,
    ),
    Derivation(
        name="shares_from_market_cap",
        target="shares_outstanding",
        inputs=("market_cap", "current_price"),
        compute=_shares_from_market_cap,
    ),
)


def apply_derivations(values: Dict[str, Optional[float]]) -> Dict[str, Optional[float]]:
    """
    Fill missing fields using DERIVATIONS.

    A derivation fires only when its target is None and all inputs are
    present. Returns a new dict; the input is not modified.
    """
    result = dict(values)
    for derivation in DERIVATIONS:
        if result.get(derivation.target) is not None:
            continue
        args = [result.get(name) for name in derivation.inputs]
        if any(arg is None for arg in args):
            continue
        derived = derivation.compute(*args)
        if derived is not None:
            result[derivation.target] = derived
    return result

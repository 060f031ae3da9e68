"""
Pytest fixtures for testing the Stock Quote Normalizer.
"""

from datetime import datetime, timezone
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient

from src.app.normalizer import QuoteNormalizer
from src.core.config import DEFAULT_SUMMARY_MODULES, DEFAULT_USER_AGENT, Settings
from src.core.models import NormalizedQuote
from src.data_sources.yahoo_api import YahooAPIClient


class FakeYahoo:
    """
    Scripted Yahoo endpoints for httpx.MockTransport.

    ``chart`` and each host in ``summary`` is either a payload dict, an int
    status code, or an exception instance to raise.
    """

    def __init__(self, chart=None, summary=None):
        self.chart = chart
        self.summary = summary or {}
        self.requests: list[httpx.Request] = []

    @property
    def chart_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if "/v8/finance/chart/" in r.url.path]

    @property
    def summary_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if "/v10/finance/quoteSummary/" in r.url.path]

    def _respond(self, request: httpx.Request, behaviour) -> httpx.Response:
        if isinstance(behaviour, Exception):
            raise behaviour
        if isinstance(behaviour, int):
            return httpx.Response(behaviour, json={"error": "scripted"})
        if isinstance(behaviour, str):
            return httpx.Response(200, text=behaviour)
        return httpx.Response(200, json=behaviour)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if "/v8/finance/chart/" in request.url.path:
            return self._respond(request, self.chart)
        host = f"{request.url.scheme}://{request.url.host}"
        return self._respond(request, self.summary.get(host, 404))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def chart_payload(**meta) -> dict:
    """Build a chart response with the given meta fields."""
    return {"chart": {"result": [{"meta": meta, "timestamp": []}], "error": None}}


def summary_payload(**modules) -> dict:
    """Build a quoteSummary response with the given modules."""
    return {"quoteSummary": {"result": [modules], "error": None}}


def raw(value) -> dict:
    """Wrap a number in the provider's raw/fmt envelope."""
    return {"raw": value, "fmt": f"{value}"}


QUERY1 = "https://query1.finance.yahoo.com"
QUERY2 = "https://query2.finance.yahoo.com"


def make_settings(**overrides) -> Settings:
    """Build Settings from explicit values so the environment cannot leak in."""
    values = dict(
        chart_base_url=f"{QUERY1}/v8/finance/chart",
        summary_hosts=[QUERY2, QUERY1],
        summary_modules=list(DEFAULT_SUMMARY_MODULES),
        user_agent=DEFAULT_USER_AGENT,
        request_timeout=10.0,
        log_level="INFO",
    )
    values.update(overrides)
    by_alias = {Settings.model_fields[name].alias: value for name, value in values.items()}
    return Settings(_env_file=None, **by_alias)


@pytest.fixture
def test_settings():
    """Settings with the default provider endpoints, ignoring env and .env."""
    return make_settings()


@pytest.fixture
def make_normalizer(test_settings):
    """Factory returning (normalizer, fake) for scripted provider behaviour."""

    def _make(chart=None, summary=None):
        fake = FakeYahoo(chart=chart, summary=summary)
        client = YahooAPIClient(settings=test_settings, transport=fake.transport())
        return QuoteNormalizer(client=client), fake

    return _make


@pytest.fixture
def test_client():
    """Create a test client for the FastAPI app."""
    from src.app.api import app
    return TestClient(app)


@pytest.fixture
def sample_quote():
    """Create a sample NormalizedQuote for testing."""
    return NormalizedQuote(
        symbol="AAPL",
        current_price=150.25,
        previous_close=148.0,
        timestamp=datetime(2024, 1, 15, 15, 30, tzinfo=timezone.utc),
        pe_ratio=28.4,
        shares_outstanding=16_000_000_000,
        market_cap=150.25 * 16_000_000_000,
    )


@pytest.fixture
def mock_normalizer(sample_quote):
    """Mock the quote normalizer for API tests."""
    with patch("src.app.api.quote_normalizer") as mock:
        mock.normalize.return_value = sample_quote
        yield mock

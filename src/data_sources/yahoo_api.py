"""
Yahoo Finance JSON API client.
Fetches chart metadata and quoteSummary fundamentals using httpx.
"""

from typing import Any, Dict, Iterator, List, NamedTuple, Optional
from urllib.parse import quote

import httpx
from loguru import logger

from src.core.config import Settings, settings as default_settings


class YahooAPIError(Exception):
    """Custom exception for Yahoo Finance API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url


class SummaryEndpoint(NamedTuple):
    """One candidate quoteSummary host."""

    host: str
    url: str


def encode_symbol(symbol: str) -> str:
    """Percent-encode a canonical symbol for use as a URL path segment."""
    return quote(symbol, safe="")


class YahooAPIClient:
    """
    Client for the Yahoo Finance chart and quoteSummary endpoints.

    The chart call is a single request. The quoteSummary call walks the
    configured hosts in order and adopts the first usable result.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or default_settings
        self.transport = transport
        self.headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        label: str = "Endpoint",
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Args:
            url: Absolute URL
            params: Optional query parameters
            label: Resource name used in error messages

        Raises:
            YahooAPIError: On network failure, non-2xx status or malformed JSON
        """
        try:
            with httpx.Client(
                timeout=self.settings.request_timeout,
                headers=self.headers,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = client.get(url, params=params)
        except httpx.RequestError as e:
            raise YahooAPIError(f"Request failed for {url}: {e}", url=url) from e

        if not response.is_success:
            raise YahooAPIError(
                f"{label} returned {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise YahooAPIError(
                f"{label} returned malformed JSON",
                status_code=response.status_code,
                url=url,
            ) from e

    def get_chart_meta(self, symbol: str) -> Dict[str, Any]:
        """
        Get the ``meta`` object of the first chart result.

        Args:
            symbol: Canonical ticker symbol

        Returns:
            The meta dict (possibly empty)

        Raises:
            YahooAPIError: If the chart resource is unusable
        """
        url = f"{self.settings.chart_base_url}/{encode_symbol(symbol)}"
        logger.info(f"Fetching chart: {url}")

        payload = self._get_json(url, label="Chart endpoint")
        result = _first_result(payload, "chart")
        if result is None:
            raise YahooAPIError("No chart result from Yahoo", url=url)

        meta = result.get("meta")
        return meta if isinstance(meta, dict) else {}

    def summary_endpoints(self, symbol: str) -> List[SummaryEndpoint]:
        """Build the ordered candidate list for a symbol."""
        encoded = encode_symbol(symbol)
        return [
            SummaryEndpoint(
                host=host,
                url=f"{host.rstrip('/')}/v10/finance/quoteSummary/{encoded}",
            )
            for host in self.settings.summary_hosts
        ]

    def _iter_summary_results(self, symbol: str) -> Iterator[Dict[str, Any]]:
        """Lazily try each candidate, yielding only usable results."""
        params = {"modules": ",".join(self.settings.summary_modules)}

        for endpoint in self.summary_endpoints(symbol):
            logger.info(f"Trying fundamentals endpoint: {endpoint.url}")
            try:
                payload = self._get_json(
                    endpoint.url, params=params, label="Fundamentals endpoint"
                )
            except YahooAPIError as e:
                logger.bind(symbol=symbol, status=e.status_code).warning(
                    f"{endpoint.host} failed: {e.message}"
                )
                continue

            result = _first_result(payload, "quoteSummary")
            if not result:
                logger.bind(symbol=symbol).warning(
                    f"Fundamentals endpoint {endpoint.host} returned no result"
                )
                continue

            yield result

    def get_quote_summary(self, symbol: str) -> Dict[str, Any]:
        """
        Get the quoteSummary bundle from the first candidate that works.

        Args:
            symbol: Canonical ticker symbol

        Returns:
            Module-keyed bundle, or an empty dict if every candidate failed
        """
        result = next(self._iter_summary_results(symbol), None)
        if result is None:
            logger.bind(symbol=symbol).warning(
                f"All fundamentals endpoints failed for {symbol}; continuing with price only"
            )
            return {}
        return result


def _first_result(payload: Any, root: str) -> Optional[Dict[str, Any]]:
    """Return ``payload[root]["result"][0]`` if it is a dict, else None."""
    if not isinstance(payload, dict):
        return None
    container = payload.get(root)
    if not isinstance(container, dict):
        return None
    results = container.get("result")
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    return first if isinstance(first, dict) else None

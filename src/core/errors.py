"""
Error types raised by the quote normalizer.
"""

from typing import Optional


class QuoteNormalizerError(Exception):
    """Base exception for the quote normalizer."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRequestError(QuoteNormalizerError):
    """The inbound request is unusable (e.g. no symbol)."""
    pass


class UpstreamError(QuoteNormalizerError):
    """The provider's price resource could not deliver a usable result."""
    pass

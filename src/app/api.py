"""
FastAPI REST API for the Stock Quote Normalizer.
Serves normalized price and fundamentals records per ticker symbol.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from loguru import logger

from src.core.errors import InvalidRequestError
from src.core.models import ErrorRecord, NormalizedQuote, canonical_symbol
from src.app.normalizer import quote_normalizer


FETCH_FAILED = "Failed to fetch stock data"


# ============================================================================
# API Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime


class MessageResponse(BaseModel):
    """Error body for client errors."""
    error: str


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Stock Quote Normalizer",
    description="Flat price and fundamentals records for a ticker symbol",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# Registered after CORSMiddleware so it runs first: OPTIONS on the quote
# route is always an empty 200, whatever the preflight asks for.
@app.middleware("http")
async def stocks_preflight(request: Request, call_next):
    """Answer OPTIONS /api/stocks with an empty 200."""
    if request.method == "OPTIONS" and request.url.path == "/api/stocks":
        return Response(status_code=200, headers=CORS_HEADERS)
    return await call_next(request)


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Stock Quote Normalizer",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Shallow health check; makes no outbound calls."""
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))


@app.api_route(
    "/api/stocks",
    methods=["GET", "POST"],
    response_model=NormalizedQuote,
    responses={400: {"model": MessageResponse}, 500: {"model": ErrorRecord}},
    tags=["Quotes"],
)
def get_stock(
    symbol: Optional[str] = Query(default=None, description="Ticker symbol (e.g., AAPL)"),
):
    """
    Get the normalized quote for a stock symbol.

    - **symbol**: Stock symbol, case-insensitive (e.g., aapl, MSFT)
    """
    try:
        return quote_normalizer.normalize(symbol)
    except InvalidRequestError as e:
        logger.warning(f"Rejected request: {e.message}")
        return JSONResponse(
            status_code=400,
            content=MessageResponse(error=e.message).model_dump(),
        )
    except Exception as e:
        ticker = canonical_symbol(symbol) or None
        logger.bind(symbol=ticker).error(f"Error in /api/stocks for {ticker}: {e}")
        record = ErrorRecord(error=FETCH_FAILED, symbol=ticker, message=str(e))
        return JSONResponse(status_code=500, content=record.model_dump(exclude_none=True))


# ============================================================================
# Run with: uvicorn src.app.api:app --reload
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    from src.core.config import settings
    from src.core.logging import configure_logging

    configure_logging(level=settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)

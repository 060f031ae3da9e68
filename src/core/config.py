"""
Configuration module for the Stock Quote Normalizer.
Loads environment variables and provides settings for the provider endpoints.
"""

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

DEFAULT_SUMMARY_MODULES = [
    "price",
    "summaryDetail",
    "defaultKeyStatistics",
    "financialData",
    "earnings",
    "balanceSheetHistory",
    "assetProfile",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Provider endpoints
    chart_base_url: str = Field(
        default="https://query1.finance.yahoo.com/v8/finance/chart",
        alias="CHART_BASE_URL",
    )
    summary_hosts: List[str] = Field(
        default=[
            "https://query2.finance.yahoo.com",
            "https://query1.finance.yahoo.com",
        ],
        alias="SUMMARY_HOSTS",
    )
    summary_modules: List[str] = Field(
        default=list(DEFAULT_SUMMARY_MODULES), alias="SUMMARY_MODULES"
    )

    # Outbound requests
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="USER_AGENT")
    request_timeout: float = Field(default=10.0, alias="REQUEST_TIMEOUT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


# Global settings instance
settings = Settings()

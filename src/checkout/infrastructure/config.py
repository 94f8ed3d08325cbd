"""Runtime configuration loaded from the environment (``CHECKOUT_*``) or ``.env``."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storefront backend (ledger, inventory, delivery terms)
    api_base_url: str = Field("http://localhost:4001", description="Storefront backend URL")
    api_timeout: float = Field(15.0, description="Seconds before a backend call is abandoned")
    stock_check_timeout: float = Field(10.0, description="Upper bound for the stock check")

    # Currency
    primary_currency: str = Field("KWD", description="Currency orders are priced in")
    display_currency: str = Field("USD", description="Secondary currency for display and card capture")
    fallback_rate: Decimal = Field(Decimal("3.25"), description="Rate used when no live or cached rate exists")
    rate_ttl_hours: int = Field(24, description="Freshness window of a cached rate")
    fx_base_url: str = Field("https://open.er-api.com/v6/latest", description="Exchange-rate API")
    rate_fetch_timeout: float = Field(5.0, description="Upper bound for a live rate fetch")

    # Card processor
    paypal_base_url: str = Field("https://api-m.sandbox.paypal.com", description="PayPal REST API")
    paypal_client_id: str = Field("", description="PayPal REST client id")
    paypal_client_secret: str = Field("", description="PayPal REST client secret")

    # Local state
    data_dir: Path = Field(_DEFAULT_DATA_DIR, description="Where the rate cache file lives")
    log_level: str = Field("INFO", description="Root log level")

    @property
    def rate_cache_path(self) -> Path:
        return self.data_dir / "rates.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

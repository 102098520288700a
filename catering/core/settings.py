# catering/core/settings.py
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    COMPANY_NAME: str = "Soul Train's Eatery"
    ADMIN_EMAIL: str = "soultrainseatery@gmail.com"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./catering.db"

    # --- Estimates / invoices ---
    DEFAULT_TAX_RATE: Decimal = Decimal("8.0")  # percent
    INVOICE_DUE_DAYS: int = 30
    PRICING_TIERS_PATH: str = str(PACKAGE_DIR / "estimates" / "pricing_tiers.yaml")

    # --- Backend functions (email, pdf, contracts) ---
    FUNCTIONS_BASE_URL: Optional[str] = None
    FUNCTIONS_SERVICE_KEY: Optional[str] = None
    FUNCTIONS_TIMEOUT_SEC: float = 30.0
    FUNCTIONS_RETRY_ATTEMPTS: int = 3

    # --- HTTP ---
    ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]
    QUOTE_INTAKE_RATE_LIMIT: str = "10/minute"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()  # reads .env

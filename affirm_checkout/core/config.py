"""Affirm Checkout Configuration"""

import os
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from dotenv import load_dotenv


# Resolved from the package so the working directory does not matter
ENV_FILE = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "config", ".env")
)

# Load environment variables before settings are built
load_dotenv(ENV_FILE)


AFFIRM_BASE_URLS = {
    "sandbox": "https://sandbox.affirm.com/api/v2",
    "production": "https://api.affirm.com/api/v2",
}


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Affirm Checkout"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Affirm Configuration
    affirm_public_api_key: str = ""
    affirm_private_api_key: str = ""
    affirm_product_key: Optional[str] = None
    affirm_environment: str = "sandbox"
    affirm_base_url: Optional[str] = None  # Overrides the environment URL
    affirm_timeout: float = 30.0
    affirm_payment_method_id: str = "affirm"

    def get_affirm_base_url(self) -> str:
        """Get the Affirm API URL for the configured environment"""
        if self.affirm_base_url:
            return self.affirm_base_url.rstrip("/")

        try:
            return AFFIRM_BASE_URLS[self.affirm_environment]
        except KeyError:
            raise ValueError(
                f"Unknown Affirm environment: {self.affirm_environment!r}"
            ) from None

    @property
    def affirm_credentials_configured(self) -> bool:
        """Check if Affirm API keys are configured"""
        return bool(self.affirm_public_api_key and self.affirm_private_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()

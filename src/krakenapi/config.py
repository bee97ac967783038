"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class KrakenSettings(BaseSettings):
    """Kraken REST API connection settings."""

    model_config = SettingsConfigDict(env_prefix="KRAKEN_")

    api_key: SecretStr = SecretStr("")
    api_secret: SecretStr = SecretStr("")  # base64, as shown on the Kraken API key page
    base_url: str = "https://api.kraken.com"
    api_version: str = "0"
    user_agent: str = "krakenapi-python"
    timeout: float = 10.0  # seconds, enforced by the HTTP transport


class AppSettings(BaseSettings):
    """Root settings, composing all sub-settings.

    ``log_level`` is applied by ``krakenapi.api.create_api`` through
    ``setup_logging``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    kraken: KrakenSettings = KrakenSettings()

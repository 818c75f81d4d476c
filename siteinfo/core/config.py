from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # /site-info
    default_site_url: str = "http://example.com"
    only_basic_info: bool = False

    # HTTP fetcher
    http_timeout_ms: int = 5000
    http_proxy: str = ""
    http_verify_ssl: bool = True  # only applied together with http_proxy

    # Logging
    log_level: str = "INFO"


settings = Settings()

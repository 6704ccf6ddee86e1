"""ViralGif-Engine configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_DEFAULTS = {
    "secret_key": "insecure-dev-key-change-me",
}


class ViralGifSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VIRALGIF_")

    environment: str = "development"
    secret_key: str = "insecure-dev-key-change-me"
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/viralgif.db"
    db_pool_size: int = 10
    db_max_overflow: int = 0
    db_pool_timeout: float = 5.0  # seconds waiting for a free connection
    db_connect_timeout: float = 5.0

    # API
    api_title: str = "ViralGif-Engine"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    trust_forwarded_for: bool = False

    # Text generation (OpenAI)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 30.0
    ai_template_selection: bool = True

    # Media retrieval (Giphy)
    giphy_api_key: str = ""
    giphy_base_url: str = "https://api.giphy.com/v1/gifs"
    giphy_timeout: float = 5.0
    giphy_rating: str = "g"

    # Quota
    anonymous_lifetime_limit: int = 1
    registered_daily_limit: int = 3

    # Identity
    anon_cookie_name: str = "anon_user_id"
    anon_cookie_max_age: int = 365 * 24 * 3600  # 1 year
    session_ttl: int = 7 * 24 * 3600  # 7 days

    # Reference data; empty means the files bundled with the package
    data_dir: str = ""

    @property
    def is_production_like(self) -> bool:
        return self.environment != "development"

    def validate_for_production(self) -> None:
        """Raise if insecure defaults are used in non-development environments."""
        insecure_fields = [
            field
            for field, default in _INSECURE_DEFAULTS.items()
            if getattr(self, field) == default
        ]

        if self.is_production_like and insecure_fields:
            env_vars = ", ".join(f"VIRALGIF_{f.upper()}" for f in insecure_fields)
            raise RuntimeError(
                f"Insecure default values detected in '{self.environment}' environment. "
                f"Set these environment variables to secure values: {env_vars}. "
                "Generate secrets with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )

        if insecure_fields:
            warnings.warn(
                "Using insecure default secret key; set VIRALGIF_SECRET_KEY for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> ViralGifSettings:
    settings = ViralGifSettings()
    settings.validate_for_production()
    return settings

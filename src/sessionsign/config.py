"""Settings for sessionsign.

Values come from ``SESSIONSIGN_*`` environment variables or a ``.env`` file
in the working directory. The signature secret is managed outside this
package; it is only read here.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SESSIONSIGN_",
        env_file=".env",
        extra="ignore",
    )

    signature_secret: str = Field(default="", description="HMAC signing secret (min 15 chars)")

    # Cookie
    cookie_name: str = "sessionsign_session"
    cookie_max_age_days: int = Field(default=1, ge=1)
    cookie_secure: bool = True
    cookie_samesite: str = "strict"

    # Reject tokens whose timestep is older than this many days (None = no check)
    max_token_age_days: int | None = Field(default=None, ge=0, le=255)

    @classmethod
    def load(cls) -> Settings:
        """Read settings fresh from the environment."""
        return cls()


@lru_cache
def get_settings() -> Settings:
    return Settings.load()

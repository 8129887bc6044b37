"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    auth_provider: Literal["mock", "firebase"] = "firebase"
    firebase_project_id: str | None = None
    firebase_api_key: str | None = None
    admin_emails: list[str] = Field(default_factory=list)
    mock_accounts: dict[str, str] = Field(default_factory=dict)
    session_cookie_name: str = "portfolio_session"
    session_cookie_secure: bool = True
    login_path: str = "/admin/login"

    model_config = SettingsConfigDict(env_prefix="PORTFOLIO_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

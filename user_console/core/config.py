"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available to the composition root
(``user_console.main``); components receive the directory endpoint
explicitly instead of importing it.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote directory service
    DIRECTORY_BASE_URL: str = "http://localhost:3000"
    DIRECTORY_USER_PATH: str = "/api/user"
    # Unset means the transport default applies
    DIRECTORY_TIMEOUT_SECONDS: float | None = None

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def directory_endpoint(self) -> str:
        """Absolute URL of the user collection."""
        base = self.DIRECTORY_BASE_URL.rstrip("/")
        path = "/" + self.DIRECTORY_USER_PATH.lstrip("/")
        return f"{base}{path}"


settings = Settings()

"""Console configuration loaded via pydantic settings."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Strongly-typed console settings with environment overrides."""

    # Application
    APP_NAME: str = "Catalog Admin Console"
    APP_VERSION: str = "0.1.0"

    # Backend API
    API_BASE_URL: str = "http://localhost:8080/api"
    # None disables the client-side timeout; failures surface from the backend
    REQUEST_TIMEOUT: Optional[float] = None

    # Session persistence
    SESSION_FILE_PATH: Optional[str] = "./.catalog_admin/session.json"

    # Only the most recently issued load() may replace a collection
    LOAD_SEQUENCING: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_LEVELS: str = "TRACE,ERROR,WARNING,INFO"
    LOG_FILE_PATH: Optional[str] = None

    class Config:
        """Configure environment file loading behavior."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()

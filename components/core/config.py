from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database settings
    DB_URL: Optional[str] = None  # Optional full DB URL
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "nikahprep"
    CREATE_TABLES_ON_STARTUP: bool = True

    # API settings
    API_VERSION: str = "v1"
    SERVICE_NAME: str = "NikahPrep API"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    # Auth settings
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60
    INVITATION_EXPIRE_DAYS: int = 7

    # Client behaviour
    AUTOSAVE_DEBOUNCE_MS: int = 1000
    CACHE_TTL_SECONDS: int = 300
    CURRENCY_MAX: float = 10_000_000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def async_db_url(self) -> str:
        """Get asynchronous database URL."""
        if self.DB_URL:
            return self.DB_URL
        return f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def autosave_delay(self) -> float:
        """Autosave idle delay in seconds."""
        return self.AUTOSAVE_DEBOUNCE_MS / 1000


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()


settings = get_settings()

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    # Application Settings
    APP_NAME: str = "Course API"
    APP_VERSION: str = "1.0.2"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    @property
    def debug(self) -> bool:
        return self.DEBUG

    @property
    def docs_enabled(self) -> bool:
        return self.ENVIRONMENT == "development"

    # API Settings
    API_PREFIX: str = ""

    # Database
    DATABASE_URL: str = "sqlite:///./dev.db"
    DATABASE_ECHO: bool = False

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS Settings
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3333

    @property
    def host(self) -> str:
        return self.HOST

    @property
    def port(self) -> int:
        return self.PORT

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

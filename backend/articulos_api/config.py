from typing import List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"

    # discrete PostgreSQL settings; used only when DB_NAME is set
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 30
    DB_CONNECT_TIMEOUT: int = 2

    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 3000
    FRONTEND_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 1000
    MAX_PAGE: int = 1_000_000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @model_validator(mode="after")
    def _build_postgres_url(self):
        """
        Build DATABASE_URL from the DB_* settings when DB_NAME is given and
        DATABASE_URL was left at its default.
        """
        if self.DB_NAME and "DATABASE_URL" not in self.model_fields_set:
            self.DATABASE_URL = URL.create(
                "postgresql+psycopg",
                username=self.DB_USER,
                password=self.DB_PASSWORD,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return self


settings = Settings()

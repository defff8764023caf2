from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

class Settings(BaseSettings):
    PROJECT_NAME: str = "InterpretLab API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # MySQL
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "password"
    DB_NAME: str = "interpretlab"

    # Full SQLAlchemy URL, takes precedence over the DB_* parts
    # (e.g. sqlite+aiosqlite:///./data/interpretlab.db)
    DATABASE_URL: Optional[str] = None

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        # password may contain characters such as @
        encoded_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{encoded_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"

    UPLOAD_DIR: str = "./data/uploads"
    MAX_UPLOAD_SIZE: int = 500 * 1024 * 1024

    # "permissive" accepts any declared status from any status,
    # "lifecycle" enforces the conventional upload/analysis lifecycle
    STATUS_MACHINE: str = "permissive"

    ALLOWED_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

@lru_cache
def get_settings():
    return Settings()

settings = get_settings()

# employee_api/core/config.py
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Employee API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "CRUD de empleados sobre una tabla relacional."

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # MySQL
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_DB: str = "employees"
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_CHARSET: str = "utf8mb4"

    # URL completa; si viene, ignora las MYSQL_*
    DATABASE_URL: Optional[str] = None

    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 9090

    # segundos por request
    CONTEXT_TIMEOUT: float = 2.0

    RUN_MIGRATIONS: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
            f"?charset={self.MYSQL_CHARSET}"
        )

    @property
    def database_name(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL.rsplit("/", 1)[-1].split("?", 1)[0]
        return self.MYSQL_DB


@lru_cache
def get_settings() -> Settings:
    return Settings()

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./taskcal.db"
    DATABASE_SSL: bool = False
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    API_PORT: int = 8000

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        url = self.DATABASE_URL
        scheme, sep, rest = url.partition("://")
        if not sep or "+" in scheme:
            return url
        if scheme in ("postgres", "postgresql"):
            return f"postgresql+asyncpg://{rest}"
        if scheme == "sqlite":
            return f"sqlite+aiosqlite://{rest}"
        return url

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

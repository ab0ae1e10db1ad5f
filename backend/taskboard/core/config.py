from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    DATABASE_URL: str
    DATABASE_SSL: bool = False
    DATABASE_ECHO: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]
    CLIENT_DIST_DIR: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "dev"

    class Config:
        env_file = ".env"

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """DATABASE_URL with the asyncpg driver and without libpq-only query args."""
        url = make_url(self.DATABASE_URL)
        if url.drivername not in ("postgres", "postgresql"):
            return self.DATABASE_URL
        url = url.set(drivername="postgresql+asyncpg").difference_update_query(["sslmode"])
        return url.render_as_string(hide_password=False)

    @property
    def database_ssl_mode(self) -> Optional[str]:
        """asyncpg ``ssl`` argument: the URL's sslmode verbatim, else "require" when DATABASE_SSL is set."""
        sslmode = make_url(self.DATABASE_URL).query.get("sslmode")
        if sslmode:
            return sslmode
        return "require" if self.DATABASE_SSL else None


settings = Settings()

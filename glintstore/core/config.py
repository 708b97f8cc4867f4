# glintstore/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    db_driver: str = "postgresql+psycopg2"
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "glint"
    db_password: str = ""
    db_name: str = "glint"
    db_sslmode: str = "prefer"   # "disable" sends credentials in plaintext
    db_pool_size: int = 5
    db_pool_timeout: float = 30.0

    # Full URL, e.g. "sqlite:///glint.db"; when set the db_* parts are ignored
    database_url: str | None = None

    # werkzeug method string: "scrypt", "pbkdf2:sha256:600000", ...
    password_hash_method: str = "scrypt"

    log_level: str = "INFO"

    # Tell pydantic-settings to load from .env at project root
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore any extra stuff in .env
    )

    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        query = {}
        if self.db_driver.startswith("postgresql") and self.db_sslmode:
            query["sslmode"] = self.db_sslmode
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query=query,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

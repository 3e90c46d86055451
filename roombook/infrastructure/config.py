from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ROOMBOOK_")

    database_url: str = "sqlite+pysqlite:///./roombook.db"
    directory_seed_path: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None


settings = Settings()

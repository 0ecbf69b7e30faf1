from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PARCELTRACK_")

    database_url: str = "sqlite+pysqlite:///tracker.db"
    echo_sql: bool = False
    create_schema: bool = True
    enforce_status_transitions: bool = False
    log_level: str = "INFO"


settings = Settings()

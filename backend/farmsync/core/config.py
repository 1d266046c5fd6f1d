from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage (async driver URL)
    DATABASE_URL: str = "sqlite+aiosqlite:///./farmsync.db"

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # Dashboard defaults
    WEATHER_LOCATION: str = "Current Location"
    CURRENCY_SYMBOL: str = "$"
    SEED_DEMO_DATA: bool = False

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

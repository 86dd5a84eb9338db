from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "Docs Editor"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str = Field("dev-secret", alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(120, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    autosave_debounce_seconds: float = Field(1.0, alias="AUTOSAVE_DEBOUNCE_SECONDS")
    relative_time_refresh_seconds: float = Field(60.0, alias="RELATIVE_TIME_REFRESH_SECONDS")
    display_timezone: str = Field("UTC", alias="DISPLAY_TIMEZONE")

    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(30, alias="RATE_LIMIT_MAX_CALLS")

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

settings = Settings()

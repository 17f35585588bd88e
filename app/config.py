import secrets
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator

class Settings(BaseSettings):
    app_name: str = "Store Ratings API"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str | None = Field(default=None, alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(120, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(30, alias="RATE_LIMIT_MAX_CALLS")

    recent_activity_limit: int = 10
    recent_ratings_limit: int = 10
    recent_stores_limit: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"

    @model_validator(mode="after")
    def require_secret_in_prod(self):
        if not self.secret_key:
            if self.app_env == "prod":
                raise ValueError("SECRET_KEY must be set when APP_ENV=prod")
            # tokens from a dev process stop validating once it restarts
            self.secret_key = secrets.token_urlsafe(32)
        return self

settings = Settings()

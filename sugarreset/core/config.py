from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://sugarreset:sugarreset@db:5432/sugarreset"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://sugarreset.app,https://api.sugarreset.app"
    CORS_ORIGINS: str = "*"

    # Upper bound on user records read by a single aggregation run.
    AGGREGATION_READ_LIMIT: int = 500
    # A user counts as active if their stats changed within this many days.
    ACTIVE_WINDOW_DAYS: int = 7
    LEADERBOARD_DEFAULT_LIMIT: int = 10

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DEBUG: bool = False
    APP_NAME: str = "Coupon Marketplace API"
    APP_DOMAIN: str = "example.com"
    APP_DATABASE_DSN: str = "sqlite:////tmp/marketplace.db"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Read caches
    COUPONS_CACHE_TTL_SECONDS: int = 30
    STORES_CACHE_TTL_SECONDS: int = 60

    @property
    def version(self) -> str:
        return "1.0.0"


settings = Settings()

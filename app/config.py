from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # ─── Application ───────────────────────────────────────────────────────────
    APP_NAME: str = "MTS Operations API"
    APP_ENV:  str = "development"
    APP_DEBUG: bool = True
    APP_HOST:  str = "0.0.0.0"
    APP_PORT:  int = 8000

    # ─── Database (backend-managed Postgres) ───────────────────────────────────
    DATABASE_URL:          str
    DATABASE_POOL_SIZE:    int  = 10
    DATABASE_MAX_OVERFLOW: int  = 20
    DATABASE_POOL_TIMEOUT: int  = 30
    DATABASE_ECHO:         bool = False

    # ─── Backend auth (tokens are issued remotely, only verified here) ─────────
    SUPABASE_URL:          str | None = None
    SUPABASE_JWT_SECRET:   str
    SUPABASE_JWT_AUDIENCE: str = "authenticated"
    ALGORITHM:             str = "HS256"

    # ─── Business constants ────────────────────────────────────────────────────
    LOW_STOCK_THRESHOLD: int   = 5
    LOW_STOCK_LIMIT:     int   = 5
    ON_TIME_TOLERANCE:   float = 1.1
    CURRENCY:            str   = "UGX"
    RECENT_LOG_LIMIT:    int   = 10

    # ─── CORS ──────────────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


settings = Settings()

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "PG Manager API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Frontend (owner / tenant dashboards)
    # -------------------------------------------------
    FRONTEND_ORIGINS: List[str] = []
    FRONTEND_LOGIN_URL: Optional[str] = Field(
        None,
        description="Where clients are sent when a session is missing or expired",
    )

    # -------------------------------------------------
    # CORS (built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (DB + owner auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # -------------------------------------------------
    # Property rules
    # -------------------------------------------------
    ROOM_COUNT: int = Field(15, description="Rooms are numbered 1..ROOM_COUNT")
    CURRENCY_SYMBOL: str = "₹"

    # -------------------------------------------------
    # UI timing hints
    # -------------------------------------------------
    NOTICE_DISMISS_SECONDS: int = Field(5, description="Auto-dismiss delay for notices")
    PAYMENT_CLOSE_DELAY_SECONDS: int = Field(2, description="Delay before the payment view closes")

    # -------------------------------------------------
    # Tenant sessions
    # -------------------------------------------------
    TENANT_SESSION_TTL_SECONDS: int = Field(12 * 60 * 60, description="Tenant session lifetime")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list after loading settings
# -------------------------------------------------
cors_origins = []

if settings.FRONTEND_LOGIN_URL and settings.FRONTEND_LOGIN_URL.startswith("http"):
    scheme, _, rest = settings.FRONTEND_LOGIN_URL.partition("://")
    cors_origins.append(f"{scheme}://{rest.split('/')[0]}")

cors_origins.extend([o.rstrip("/") for o in settings.FRONTEND_ORIGINS])

settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))

import os
from dataclasses import dataclass, field
from typing import List, Optional

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    app_title: str = "RouteWise API (Routes, Progress, Saved Routes)"
    database_url: str = "sqlite://"
    log_path: Optional[str] = None
    seed_demo_data: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    """Build settings from environment variables."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        app_title=os.getenv("APP_TITLE", Settings.app_title),
        database_url=os.getenv("DATABASE_URL", "sqlite://"),
        log_path=os.getenv("LOG_PATH") or os.path.join(BASE_DIR, "logs", "api.log"),
        seed_demo_data=_env_flag("SEED_DEMO_DATA", True),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )

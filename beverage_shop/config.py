import os
from dataclasses import dataclass

from dotenv import load_dotenv

# -----------------------------
# Load environment variables
# -----------------------------
load_dotenv()

SALES_TABLE = "Sales"
MENU_TABLE = "Menu"
PROFILES_TABLE = "profiles"

GRANULARITIES = ("daily", "weekly", "monthly")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    signup_redirect_url: str = "http://localhost:8501"
    report_timezone: str = "UTC"
    request_timeout: float = 10.0
    cache_ttl: int = 30
    log_level: str = "INFO"
    log_dir: str = "logs"

    def require_backend(self):
        if not self.supabase_url or not self.supabase_anon_key:
            raise ConfigError("Missing Supabase URL or Anon Key")
        return self


def get_settings() -> Settings:
    """Read settings from the environment (and .env, if present)."""
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL", "").rstrip("/"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY", ""),
        signup_redirect_url=os.getenv("SIGNUP_REDIRECT_URL", "http://localhost:8501"),
        report_timezone=os.getenv("REPORT_TIMEZONE", "UTC"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", 10)),
        cache_ttl=int(os.getenv("CACHE_TTL", 30)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("LOG_DIR", "logs"),
    )

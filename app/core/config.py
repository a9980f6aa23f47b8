"""Application settings from environment."""
import os
from functools import lru_cache

# Value shipped in the sample .env; treated the same as a missing key
PLACEHOLDER_GEMINI_API_KEY = "your_actual_gemini_api_key_here"


@lru_cache
def get_settings() -> "Settings":
    return Settings()


class Settings:
    """Central config. Load .env in main/run_api before using. Key settings are @property so they read env at access time."""

    # Gemini (properties so they read after .env is loaded)
    @property
    def gemini_api_key(self) -> str:
        return os.getenv("GEMINI_API_KEY", "").strip()

    @property
    def gemini_model(self) -> str:
        return (os.getenv("GEMINI_MODEL", "") or "gemini-1.5-flash").strip()

    @property
    def gemini_api_base(self) -> str:
        raw = os.getenv("GEMINI_API_BASE", "").strip() or "https://generativelanguage.googleapis.com/v1beta"
        return raw.rstrip("/")

    @property
    def gemini_timeout_seconds(self) -> float:
        raw = os.getenv("GEMINI_TIMEOUT_SECONDS", "30").strip()
        try:
            return max(1.0, min(300.0, float(raw)))
        except ValueError:
            return 30.0

    # Supabase: use the ANON key so row-level security applies to the caller's JWT
    @property
    def supabase_url(self) -> str:
        return os.getenv("SUPABASE_URL", "").strip()

    @property
    def supabase_key(self) -> str:
        return (os.getenv("SUPABASE_ANON_KEY", "") or os.getenv("SUPABASE_KEY", "")).strip()

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    # API
    @property
    def api_title(self) -> str:
        return os.getenv("API_TITLE", "Konkan Travel API").strip()

    @property
    def api_version(self) -> str:
        return os.getenv("API_VERSION", "0.1.0").strip()

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    # CORS: comma-separated origins (e.g. http://localhost:5173) or * for all
    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

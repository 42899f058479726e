"""Application settings from environment."""
import os
from functools import lru_cache
from pathlib import Path


@lru_cache
def get_settings() -> "Settings":
    return Settings()


class Settings:
    """Central config. Load .env in main/run_api before using. Key settings are @property so they read env at access time."""

    # NVIDIA LLM (properties so they read after .env is loaded)
    @property
    def nvidia_api_key(self) -> str:
        return os.getenv("NVIDIA_API_KEY", "").strip()

    @property
    def nvidia_model(self) -> str:
        return (os.getenv("NVIDIA_MODEL", "") or "").strip()

    # Custom (Python) API called by the tool
    @property
    def custom_api_timeout_seconds(self) -> float | None:
        """None means no timeout: the request waits on the transport defaults."""
        raw = os.getenv("CUSTOM_API_TIMEOUT_SECONDS", "").strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        return value if value > 0 else None

    @property
    def simulated_api_delay_seconds(self) -> float:
        raw = os.getenv("SIMULATED_API_DELAY_SECONDS", "0.3").strip()
        try:
            return max(0.0, min(10.0, float(raw)))
        except ValueError:
            return 0.3

    @property
    def redact_api_password(self) -> bool:
        return os.getenv("REDACT_API_PASSWORD", "1").strip().lower() not in ("0", "false", "no")

    # Mock history endpoint
    @property
    def history_delay_seconds(self) -> float:
        raw = os.getenv("HISTORY_DELAY_SECONDS", "0.5").strip()
        try:
            return max(0.0, min(10.0, float(raw)))
        except ValueError:
            return 0.5

    # Local settings file used by the CLI (same document the browser keeps in localStorage)
    @property
    def settings_path(self) -> Path:
        raw = os.getenv("MINDMATE_SETTINGS_PATH", "").strip()
        if raw:
            return Path(raw).expanduser()
        return Path.home() / ".mindmate" / "settings.json"

    # API
    @property
    def api_title(self) -> str:
        return os.getenv("API_TITLE", "Mindmate Chat API").strip()

    @property
    def api_version(self) -> str:
        return os.getenv("API_VERSION", "0.1.0").strip()

    # CORS: comma-separated origins (e.g. http://localhost:3000) or * for all
    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

"""FastAPI application entrypoint."""
import logging
import os
import sys
from pathlib import Path

# Project root (parent of app/)
_ROOT = Path(__file__).resolve().parent.parent

# .env supplies NVIDIA_API_KEY for the model, CUSTOM_API_TIMEOUT_SECONDS and
# SIMULATED_API_DELAY_SECONDS for the Python API tool, HISTORY_DELAY_SECONDS for the
# mock history route and REDACT_API_PASSWORD for replies. Settings read env lazily,
# so loading here (before routes import) is enough; the reload worker gets it too.
from dotenv import load_dotenv
load_dotenv(_ROOT / ".env", override=True)

# Ensure project root is on path when run as: python app/main.py
if __name__ == "__main__" or "app" not in sys.modules:
    if str(_ROOT) not in sys.path:
        sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import get_settings

logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
_log = logging.getLogger(__name__)

# Prevent third-party HTTP libs from logging at DEBUG (the X-API-Password header must never reach logs)
for _name in ("httpx", "httpcore", "hpack", "urllib3"):
    logging.getLogger(_name).setLevel(logging.WARNING)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS", "GET"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.include_router(router)
    return app


app = create_app()

if get_settings().nvidia_api_key:
    _log.info("NVIDIA_API_KEY set: chat replies come from the model.")
else:
    _log.warning("NVIDIA_API_KEY not set: every chat turn will return the fallback reply.")

_timeout = get_settings().custom_api_timeout_seconds
_log.info(
    "Custom API timeout: %s; password redaction in replies: %s.",
    f"{_timeout}s" if _timeout else "none",
    "on" if get_settings().redact_api_password else "off",
)

if __name__ == "__main__":
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")  # 127.0.0.1 = localhost only
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("app.main:app", host=host, port=port, reload=True)

"""FastAPI application entrypoint."""
import logging
import sys
from pathlib import Path

# Project root (parent of app/)
_ROOT = Path(__file__).resolve().parent.parent

# Load .env FIRST so GEMINI_*, SUPABASE_*, etc. are set before any app code reads them.
# override=True so .env wins (important when uvicorn reload spawns a worker that may not inherit env).
from dotenv import load_dotenv
load_dotenv(_ROOT / ".env", override=True)

# Ensure project root is on path when run as: python app/main.py
if __name__ == "__main__" or "app" not in sys.modules:
    if str(_ROOT) not in sys.path:
        sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import CHAT_PATH, router as chat_router
from app.api.travel_routes import router as travel_router
from app.core.config import get_settings
from app.core.gemini_client import RelayConfig
from app.core.travel_store import StoreError

logging.basicConfig(level=getattr(logging, get_settings().log_level, logging.INFO))
_log = logging.getLogger(__name__)

# Prevent third-party HTTP libs from logging at DEBUG (the Gemini URL carries the API key)
for _name in ("httpx", "httpcore", "hpack", "urllib3"):
    logging.getLogger(_name).setLevel(logging.WARNING)


class ChatExemptCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves the chat relay alone; its router sets fixed `*` CORS headers and answers preflights itself."""

    def __init__(self, app, exempt_paths=(), **kwargs):
        super().__init__(app, **kwargs)
        self.exempt_paths = frozenset(exempt_paths)

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )
    app.add_middleware(
        ChatExemptCORSMiddleware,
        exempt_paths=(CHAT_PATH,),
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )
    app.add_exception_handler(StoreError, store_error_handler)
    app.include_router(chat_router)
    app.include_router(travel_router)
    return app


app = create_app()

# Log Gemini/Supabase status at startup
if RelayConfig.from_settings(get_settings()).configured:
    _log.info("Gemini API key present: chat relay will call %s.", get_settings().gemini_model)
else:
    _log.info("Gemini API key not configured: chat relay will answer with fallback text.")
if get_settings().supabase_enabled:
    _log.info("Supabase enabled: bookings, reviews and favorites are on.")
else:
    _log.info("Supabase disabled (SUPABASE_URL / SUPABASE_ANON_KEY not set). Travel endpoints return 503.")

if __name__ == "__main__":
    import os
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")  # 127.0.0.1 = localhost only
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("app.main:app", host=host, port=port, reload=True)

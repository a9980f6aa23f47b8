"""FastAPI routes for the KonkanBot chat relay."""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.gemini_client import RelayConfig
from app.core.relay import relay_chat
from app.models.schemas import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

CHAT_PATH = "/api/chat"

# Sent on every chat response, preflight included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def get_relay_config() -> RelayConfig:
    """Fresh Gemini config per request (reads env through Settings)."""
    return RelayConfig.from_settings(get_settings())


def _json(payload: dict, status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers=CORS_HEADERS)


def _describe(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"Invalid messages format: {loc}: {err.get('msg')}" if loc else f"Invalid messages format: {err.get('msg')}"


@router.options("/chat", include_in_schema=False)
def chat_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/chat")
async def chat(request: Request, config: RelayConfig = Depends(get_relay_config)) -> JSONResponse:
    """Send the conversation so far and get KonkanBot's reply. Upstream failures still return 200 with fallback text."""
    try:
        body = await request.json()
    except ValueError:
        logger.info("Rejected chat request: body is not JSON")
        return _json({"error": "Request body must be a JSON object"}, 400)

    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError as e:
        message = _describe(e)
        logger.info("Rejected chat request: %s", message)
        return _json({"error": message}, 400)

    reply = await run_in_threadpool(relay_chat, chat_request, config)
    return _json(reply.to_payload())


@router.api_route("/chat", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE"], include_in_schema=False)
def chat_method_not_allowed(request: Request) -> JSONResponse:
    logger.info("Invalid method on /api/chat: %s", request.method)
    return _json({"error": "Method not allowed"}, 405)


@router.get("/health")
def health() -> dict:
    """Health check."""
    return {"status": "ok"}

"""
Chat relay: persona + recent history -> Gemini, with a keyword fallback.

Fail-open: every path returns a ChatReply. Upstream, configuration and internal
errors come back as succeeded=False with canned text so the chat UI always has
something to show.
"""
import logging

from app.core import gemini_client
from app.core.fallback import (
    NOT_CONFIGURED_ERROR,
    NOT_CONFIGURED_RESPONSE,
    TECHNICAL_DIFFICULTIES_RESPONSE,
    get_fallback_response,
)
from app.core.gemini_client import RelayConfig, UpstreamError
from app.core.prompt import build_messages, to_gemini_contents
from app.models.schemas import ChatReply, ChatRequest, ChatTurn

logger = logging.getLogger(__name__)


def latest_user_message(turns: list[ChatTurn]) -> str:
    for turn in reversed(turns):
        if turn.role == "user":
            return turn.content
    return turns[-1].content if turns else ""


def relay_chat(request: ChatRequest, config: RelayConfig) -> ChatReply:
    """Answer one chat request. Never raises."""
    logger.info(
        "Relaying %d messages (location: %s)",
        len(request.messages),
        request.user_location or "Not provided",
    )
    try:
        if not config.configured:
            logger.warning("Gemini API key not configured; answering with setup notice")
            return ChatReply(text=NOT_CONFIGURED_RESPONSE, succeeded=False, error=NOT_CONFIGURED_ERROR)

        contents = to_gemini_contents(build_messages(request.messages, request.user_location))
        try:
            text = gemini_client.generate(contents, config)
        except UpstreamError as e:
            logger.warning("Gemini unavailable, using fallback: %s", e.message)
            return ChatReply(
                text=get_fallback_response(latest_user_message(request.messages)),
                succeeded=False,
                error=e.message,
                details=e.details,
            )

        logger.info("Generated response: %s...", text[:100])
        return ChatReply(text=text, succeeded=True)
    except Exception as e:
        logger.exception("Unexpected error in chat relay")
        return ChatReply(
            text=TECHNICAL_DIFFICULTIES_RESPONSE,
            succeeded=False,
            error="Internal server error",
            details=str(e),
        )

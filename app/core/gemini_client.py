"""Single-shot client for the Gemini generateContent REST endpoint."""
import logging
from dataclasses import dataclass

import requests

from app.core.config import PLACEHOLDER_GEMINI_API_KEY, Settings

logger = logging.getLogger(__name__)

# Fixed per deployment; never taken from the request
GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


class UpstreamError(Exception):
    """Gemini call failed. `details` carries upstream error text when there is any."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


@dataclass(frozen=True)
class RelayConfig:
    """Per-request Gemini settings, built from Settings and passed into the relay."""

    api_key: str
    model: str = "gemini-1.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RelayConfig":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            api_base=settings.gemini_api_base,
            timeout_seconds=settings.gemini_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key) and self.api_key != PLACEHOLDER_GEMINI_API_KEY

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"


def build_payload(contents: list[dict]) -> dict:
    return {
        "contents": contents,
        "generationConfig": dict(GENERATION_CONFIG),
        "safetySettings": [dict(s) for s in SAFETY_SETTINGS],
    }


def extract_text(data: dict) -> str:
    """Pull the first candidate's text out of a generateContent response."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        raise UpstreamError("Invalid response from Gemini API")
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        raise UpstreamError("Invalid response from Gemini API")
    parts = content.get("parts") or []
    text = parts[0].get("text") if parts and isinstance(parts[0], dict) else None
    if not text or not text.strip():
        raise UpstreamError("Empty response from Gemini API")
    return text


def generate(contents: list[dict], config: RelayConfig) -> str:
    """
    POST once to Gemini and return the reply text. No retries.
    Raises UpstreamError for network errors, non-2xx, or an unusable body.
    """
    payload = build_payload(contents)
    logger.info("Calling Gemini %s with %d contents", config.model, len(contents))
    try:
        resp = requests.post(
            config.endpoint,
            params={"key": config.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as e:
        # str(e) can include the request URL; keep the key out of logs and replies
        logger.warning("Gemini request failed: %s", type(e).__name__)
        raise UpstreamError("Gemini API request failed", details=type(e).__name__) from e

    logger.info("Gemini response status: %s", resp.status_code)
    if not resp.ok:
        logger.error("Gemini API error %s: %s", resp.status_code, resp.text[:500])
        raise UpstreamError(f"Gemini API error: {resp.status_code}", details=resp.text)

    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError("Invalid response from Gemini API") from e
    return extract_text(data)

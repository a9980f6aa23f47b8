"""CLI: ask KonkanBot a single question through the chat relay. For the API, use: uvicorn app.main:app --reload."""
import argparse

from dotenv import load_dotenv

load_dotenv()

from app.core.config import get_settings
from app.core.gemini_client import RelayConfig
from app.core.relay import relay_chat
from app.models.schemas import ChatRequest, ChatTurn

if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Ask KonkanBot a question")
    ap.add_argument("prompt", nargs="?", default="What are the best beaches near Malvan?")
    ap.add_argument("--location", default=None, help="Where the traveller is right now")
    args = ap.parse_args()

    request = ChatRequest(messages=[ChatTurn(role="user", content=args.prompt)], user_location=args.location)
    reply = relay_chat(request, RelayConfig.from_settings(get_settings()))
    print(reply.text)
    if not reply.succeeded:
        print(f"\n[fallback: {reply.error}]")

"""
KonkanBot persona and prompt assembly.

The persona is static per deployment; only the optional location clause is
interpolated. Conversation history is cut to the last CHAT_HISTORY_WINDOW turns
before it is sent upstream (callers own any longer-term memory).
"""
from typing import Iterable, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from app.models.schemas import ChatTurn

# Only the last N turns are forwarded to the model
CHAT_HISTORY_WINDOW = 10

PERSONA_PROMPT = """You are KonkanBot, an expert AI travel assistant specializing in the Konkan coast of Maharashtra, India. You have extensive knowledge about:

🏖️ BEACHES: Tarkarli, Malvan, Vengurla, Devbagh, Redi, Chivla, and other pristine beaches
🏰 HERITAGE: Sindhudurg Fort, Sawantwadi Palace, and historical sites built by Chhatrapati Shivaji Maharaj
🍽️ CUISINE: Authentic Malvani food, seafood specialties, sol kadhi, koliwada prawns, fish curry
🌊 ACTIVITIES: Scuba diving, water sports, dolphin watching, backwater cruises, fort exploration
🏞️ NATURE: Amboli waterfalls, Western Ghats, coconut groves, mangroves
🎭 CULTURE: Local festivals, traditional art, fishing communities, Konkani traditions

GUIDELINES:
- Always be enthusiastic and helpful about Konkan tourism
- Provide specific, actionable travel advice
- Include practical information like costs, timings, and contact details when relevant
- Suggest seasonal recommendations (best time to visit is October to March)
- Mention local transportation options and accommodation
- Be culturally sensitive and promote sustainable tourism
- If asked about places outside Konkan, gently redirect to Konkan alternatives
- Use emojis to make responses engaging
- Keep responses concise but informative (max 300 words)

{location_clause}

Respond in a friendly, knowledgeable manner as if you're a local guide who loves sharing the beauty of Konkan with visitors."""

PERSONA_GREETING = (
    "Namaste! 🙏 I'm KonkanBot, your friendly AI guide to the beautiful Konkan coast! "
    "I'm here to help you discover pristine beaches, historic forts, delicious Malvani cuisine, "
    "and amazing experiences along Maharashtra's stunning coastline. What would you like to know about Konkan?"
)

# Gemini only knows "user" and "model"; the persona goes in as the first user content
_LC_TYPE_TO_GEMINI_ROLE = {
    "system": "user",
    "human": "user",
    "ai": "model",
}


def get_system_prompt(user_location: Optional[str] = None) -> str:
    """Persona block, with the location clause filled in when the caller sent one."""
    clause = f"The user is currently located in: {user_location}" if user_location else ""
    return PERSONA_PROMPT.format(location_clause=clause)


def recent_turns(turns: list[ChatTurn], window: int = CHAT_HISTORY_WINDOW) -> list[ChatTurn]:
    return list(turns)[-window:]


def build_messages(turns: list[ChatTurn], user_location: Optional[str] = None) -> list[BaseMessage]:
    """Persona, greeting, then the trailing window of the conversation in order."""
    messages: list[BaseMessage] = [
        SystemMessage(content=get_system_prompt(user_location)),
        AIMessage(content=PERSONA_GREETING),
    ]
    for turn in recent_turns(turns):
        if turn.role == "user":
            messages.append(HumanMessage(content=turn.content))
        else:
            messages.append(AIMessage(content=turn.content))
    return messages


def to_gemini_contents(messages: Iterable[BaseMessage]) -> list[dict]:
    """Convert LangChain messages to the generateContent `contents` array."""
    contents = []
    for m in messages:
        role = _LC_TYPE_TO_GEMINI_ROLE.get(m.type)
        if role is None:
            raise ValueError(f"Unsupported message type for Gemini: {m.type}")
        contents.append({"role": role, "parts": [{"text": m.content}]})
    return contents

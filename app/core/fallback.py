"""Canned answers used when Gemini cannot be reached. Plain substring matching, first group wins."""

NOT_CONFIGURED_ERROR = "Gemini API key not configured. Please add your API key to the .env file."

NOT_CONFIGURED_RESPONSE = (
    "I apologize, but the AI service is not properly configured. Please contact the administrator "
    "to set up the Gemini API key. In the meantime, I can provide some basic Konkan travel information! 🏖️"
)

TECHNICAL_DIFFICULTIES_RESPONSE = (
    "I'm sorry, I'm experiencing some technical difficulties. Please try again in a moment! "
    "In the meantime, I'd love to help you plan your Konkan adventure - ask me about beaches, food, or activities! 🏖️"
)

GENERIC_RESPONSE = (
    "🤔 I'm having trouble connecting to my AI brain right now, but I'd love to help you explore the Konkan coast! "
    "Could you ask me about beaches, food, historical places, activities, or travel tips? "
    "I have lots of local knowledge to share about this beautiful region! 🌊"
)

# (keywords, answer); order matters
FALLBACK_TABLE: list[tuple[tuple[str, ...], str]] = [
    (
        ("beach", "tarkarli", "malvan"),
        "🏖️ The Konkan coast has some of India's most pristine beaches! Tarkarli Beach is famous for its "
        "crystal-clear waters and water sports. Malvan Beach offers excellent scuba diving opportunities. "
        "For a peaceful experience, try Vengurla or Devbagh beaches. The best time to visit is October to March "
        "when the weather is pleasant.",
    ),
    (
        ("food", "cuisine", "malvani"),
        "🍽️ Malvani cuisine is a treat for seafood lovers! Must-try dishes include Koliwada prawns, fish curry "
        "with coconut, sol kadhi (kokum drink), and modak. Don't miss the famous Malvani fish thali. Popular "
        "restaurants include Chaitanya Restaurant in Malvan and Athithi Bamboo in Tarkarli.",
    ),
    (
        ("fort", "sindhudurg", "history"),
        "🏰 Sindhudurg Fort is a magnificent sea fort built by Chhatrapati Shivaji Maharaj in 1664. It's located "
        "on a rocky island and showcases brilliant Maratha architecture. The fort has temples, freshwater wells, "
        "and offers stunning sea views. Entry fee is ₹25 for Indians. Best visited during early morning or evening.",
    ),
    (
        ("time", "when", "season"),
        "🌤️ The best time to visit Konkan is from October to March when the weather is pleasant and ideal for "
        "beach activities. Monsoon season (June-September) offers lush greenery and waterfalls but heavy rains. "
        "Summer (April-May) can be hot and humid. Winter months are perfect for water sports and sightseeing.",
    ),
]


def get_fallback_response(user_message: str) -> str:
    """Canned answer for the latest user message, or the generic redirect when nothing matches."""
    lower = (user_message or "").lower()
    for keywords, answer in FALLBACK_TABLE:
        if any(k in lower for k in keywords):
            return answer
    return GENERIC_RESPONSE

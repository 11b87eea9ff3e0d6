import re

# Appended to every offline reply so the user knows the model was not reached
OFFLINE_NOTE = "\n\n*(Note: Using offline mode. To enable AI responses, configure an API key for your chosen backend.)*"

# Order matters: categories overlap ("I feel down and stressed") and the first match wins
FALLBACK_RULES = [
    (
        re.compile(r"anxious|worried|stress|nervous", re.IGNORECASE),
        "I hear that you're feeling anxious. Try the 4-7-8 breathing technique: breathe in for 4 counts, "
        "hold for 7, exhale for 8. This activates your body's relaxation response. "
        "Would you like to talk about what's causing the stress?",
    ),
    (
        re.compile(r"sad|depressed|down|low|unhappy", re.IGNORECASE),
        "I'm sorry you're feeling this way. Your feelings are valid. Sometimes it helps to write down what "
        "you're feeling or talk to someone you trust. Have you considered speaking with a counselor or "
        "therapist? They can provide professional support.",
    ),
    (
        re.compile(r"angry|mad|frustrated|irritated", re.IGNORECASE),
        "It sounds like you're dealing with some frustration. It's okay to feel angry. Try taking a few deep "
        "breaths or going for a short walk. What's making you feel this way?",
    ),
    (
        re.compile(r"tired|exhausted|fatigue|sleepy", re.IGNORECASE),
        "Fatigue can really affect our mood. Are you getting enough sleep? Aim for 7-9 hours, keep a "
        "consistent schedule, and avoid screens before bed. If tiredness persists, consider talking to a doctor.",
    ),
    (
        re.compile(r"happy|good|great|wonderful|excited", re.IGNORECASE),
        "That's wonderful to hear! It's important to celebrate the good moments. "
        "What's making you feel good today?",
    ),
    (
        re.compile(r"lonely|alone|isolated", re.IGNORECASE),
        "Feeling lonely is difficult. Remember that reaching out is a sign of strength. Consider connecting "
        "with a friend, family member, or joining a support group. You don't have to go through this alone.",
    ),
]

DEFAULT_RESPONSE = (
    "Thank you for sharing that with me. I'm here to listen and support you. Remember, if you're dealing "
    "with serious mental health concerns, please reach out to a professional counselor or therapist. "
    "How else can I help you today?"
)


def match_fallback(user_message: str) -> str:
    """First matching rule's reply, or the default. No offline note."""
    text = user_message or ""
    for pattern, reply in FALLBACK_RULES:
        if pattern.search(text):
            return reply
    return DEFAULT_RESPONSE


def get_fallback_response(user_message: str) -> str:
    return match_fallback(user_message) + OFFLINE_NOTE

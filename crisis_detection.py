# -------------------------------------------------
# Crisis detection for self-harm / suicide language
# -------------------------------------------------

# Plain substrings, no word boundaries: "suicide" inside a longer word matches too
CRISIS_KEYWORDS = [
    "suicide",
    "kill myself",
    "self harm",
    "end it all",
    "want to die",
    "no reason to live",
]


def detect_crisis(text: str) -> bool:
    """
    Returns True if the text contains one of the crisis phrases.
    A miss here is not an error: the crisis lines stay visible on the
    resources screen and in the footer regardless.
    """
    if not text:
        return False

    t = text.lower()
    return any(keyword in t for keyword in CRISIS_KEYWORDS)


def get_crisis_message() -> str:
    """
    Body of the "Immediate Help Available" dialog shown when
    a crisis phrase is detected.
    """
    return (
        "I'm concerned about what you've shared. Please know that help is available right now:\n\n"
        "📞 **National Suicide Prevention Lifeline:** 988 (available 24/7, confidential support)\n\n"
        "💬 **Crisis Text Line:** Text HOME to 741741\n\n"
        "🚨 **Emergency:** 911"
    )

"""Static text for the disclaimer and resources screens."""

APP_TITLE = "Mental Wellness Companion"
APP_TAGLINE = "AI-Powered Emotional Support & Mood Tracking"

DISCLAIMER_POINTS = [
    "Diagnose mental health conditions",
    "Provide medical treatment or therapy",
    "Replace professional mental healthcare",
    "Offer emergency crisis intervention",
]

BANNER = "⚠️ This is not medical advice. Always consult healthcare professionals for diagnosis and treatment."

FOOTER = (
    "Made with 💜 for Mental Health Awareness | Not a substitute for professional care\n\n"
    "If you're in crisis, please call 988 or contact emergency services"
)

# (name, contact, note)
CRISIS_LINES = [
    ("National Suicide Prevention Lifeline", "988", "Free, confidential support 24/7"),
    ("Crisis Text Line", "Text HOME to 741741", "Text-based crisis support"),
    ("Emergency Services", "911", "For immediate life-threatening emergencies"),
]

SUPPORT_LINES = [
    ("SAMHSA Helpline", "1-800-662-4357 (Treatment referral)"),
    ("NAMI Helpline", "1-800-950-6264 (Mental health information)"),
    ("Veterans Crisis Line", "988 then press 1"),
    ("Trevor Project (LGBTQ Youth)", "1-866-488-7386"),
]

SELF_CARE_TIPS = [
    "Practice deep breathing: 4-7-8 technique (breathe in 4, hold 7, out 8)",
    "Get 7-9 hours of sleep per night",
    "Exercise for 30 minutes daily (even a walk helps!)",
    "Stay connected with friends and family",
    "Limit social media and news consumption",
    "Practice gratitude journaling",
    "Seek professional therapy - it's a sign of strength!",
]

PROFESSIONAL_HELP = [
    ("Psychology Today", "Find therapists in your area"),
    ("BetterHelp/Talkspace", "Online therapy platforms"),
    ("Open Path Collective", "Affordable therapy ($30-$80/session)"),
    ("Your Insurance Provider", "Check coverage for mental health services"),
]


def crisis_lines_markdown() -> str:
    return "\n".join(f"- **{name}:** {contact}" for name, contact, _ in CRISIS_LINES)


def bullet_list(pairs) -> str:
    return "\n".join(f"- **{name}:** {detail}" for name, detail in pairs)

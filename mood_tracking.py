from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

# -----------------------
# Mood scale
# -----------------------


@dataclass(frozen=True)
class MoodOption:
    emoji: str
    label: str
    value: int


MOOD_OPTIONS = [
    MoodOption("😢", "Very Sad", 1),
    MoodOption("😔", "Sad", 2),
    MoodOption("😐", "Neutral", 3),
    MoodOption("🙂", "Good", 4),
    MoodOption("😊", "Great", 5),
]

MIN_ENTRIES_FOR_INSIGHT = 3
TREND_WINDOW = 5
CHART_WINDOW = 10
RECENT_WINDOW = 5


def mood_option(value: int) -> MoodOption:
    if not 1 <= value <= len(MOOD_OPTIONS):
        raise ValueError(f"mood value must be between 1 and {len(MOOD_OPTIONS)}, got {value!r}")
    return MOOD_OPTIONS[value - 1]


# -----------------------
# Entries
# -----------------------


@dataclass(frozen=True)
class MoodEntry:
    date_label: str
    time_label: str
    mood_value: int
    captured_at_ms: int

    @property
    def option(self) -> MoodOption:
        return mood_option(self.mood_value)


def make_mood_entry(value: int, now: Optional[datetime] = None) -> MoodEntry:
    """Stamp a new entry with the local wall-clock time."""
    mood_option(value)
    now = now or datetime.now()
    return MoodEntry(
        date_label=now.strftime("%Y-%m-%d"),
        time_label=now.strftime("%H:%M:%S"),
        mood_value=value,
        captured_at_ms=int(now.timestamp() * 1000),
    )


def recent_entries(entries: Sequence[MoodEntry], n: int = RECENT_WINDOW) -> List[MoodEntry]:
    """Last n entries, newest first."""
    return list(reversed(entries[-n:])) if entries else []


def chart_frame(entries: Sequence[MoodEntry], n: int = CHART_WINDOW) -> pd.DataFrame:
    window = list(entries[-n:]) if entries else []
    frame = pd.DataFrame(
        {
            "captured_at": pd.to_datetime([e.captured_at_ms for e in window], unit="ms"),
            "Mood": [e.mood_value for e in window],
        }
    )
    return frame.set_index("captured_at")


# -----------------------
# Insights
# -----------------------

POSITIVE_INSIGHT = (
    "🌟 You've been feeling mostly positive lately! Keep up the good work with your self-care routines."
)
MIXED_INSIGHT = (
    "You've had some ups and downs. Remember to practice self-compassion and reach out for support when needed."
)
CONCERN_INSIGHT = (
    "It looks like you've been struggling. Please consider talking to a mental health professional "
    "who can provide personalized support."
)
IMPROVING_NOTE = " Your mood has been improving recently - that's great progress!"
DIPPING_NOTE = " Your mood has dipped recently. What self-care activities have helped you before?"
NEED_MORE_ENTRIES = "Log at least 3 mood entries to see personalized insights!"


def generate_insight(entries: Sequence[MoodEntry]) -> str:
    """
    Summarise the logged moods.

    The band comes from the mean over every entry; the trend only looks at
    the last five (first vs last of that window).
    """
    if len(entries) < MIN_ENTRIES_FOR_INSIGHT:
        return NEED_MORE_ENTRIES

    values = [e.mood_value for e in entries]
    avg = sum(values) / len(values)
    window = values[-TREND_WINDOW:]
    trend = window[-1] - window[0]

    if avg >= 4:
        insight = POSITIVE_INSIGHT
    elif avg >= 3:
        insight = MIXED_INSIGHT
    else:
        insight = CONCERN_INSIGHT

    if trend > 0:
        insight += IMPROVING_NOTE
    elif trend < 0:
        insight += DIPPING_NOTE

    return insight

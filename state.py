"""
Session state for the companion app.

Everything the UI shows lives in one frozen AppState. Each user action is a
plain function (old state + action -> new state) so the whole flow can be
exercised without a browser.
"""

import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from crisis_detection import detect_crisis
from mood_tracking import MoodEntry, make_mood_entry, mood_option

logger = logging.getLogger(__name__)


class View(str, Enum):
    DISCLAIMER = "disclaimer"
    CHAT = "chat"
    MOOD = "mood"
    RESOURCES = "resources"


TAB_VIEWS = (View.CHAT, View.MOOD, View.RESOURCES)

USER = "user"
ASSISTANT = "assistant"
SYSTEM = "system"


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" | "assistant" | "system"
    text: str


@dataclass(frozen=True)
class AppState:
    view: View = View.DISCLAIMER
    messages: Tuple[ChatMessage, ...] = field(default_factory=tuple)
    mood_entries: Tuple[MoodEntry, ...] = field(default_factory=tuple)
    crisis_alert: bool = False
    loading: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["view"] = self.view.value
        data["messages"] = [dict(m) for m in data["messages"]]
        data["mood_entries"] = [dict(e) for e in data["mood_entries"]]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppState":
        return cls(
            view=View(data.get("view", View.DISCLAIMER.value)),
            messages=tuple(ChatMessage(**m) for m in data.get("messages", [])),
            mood_entries=tuple(MoodEntry(**e) for e in data.get("mood_entries", [])),
            crisis_alert=bool(data.get("crisis_alert", False)),
            loading=bool(data.get("loading", False)),
        )


# ---------------- Navigation ----------------
def acknowledge_disclaimer(state: AppState) -> AppState:
    # The only way out of the disclaimer, and nothing leads back into it
    if state.view != View.DISCLAIMER:
        return state
    return replace(state, view=View.CHAT)


def select_view(state: AppState, view: View) -> AppState:
    view = View(view)
    if state.view == View.DISCLAIMER or view not in TAB_VIEWS:
        return state
    return replace(state, view=view)


def dismiss_crisis_alert(state: AppState) -> AppState:
    return replace(state, crisis_alert=False)


# ---------------- Chat ----------------
def submit_message(state: AppState, text: str) -> AppState:
    """
    Record a user submission and mark a request as in flight.
    Blank text and submissions while a reply is pending leave the state as is.
    """
    user_message = (text or "").strip()
    if not user_message or state.loading:
        return state

    crisis = state.crisis_alert
    if detect_crisis(user_message):
        logger.warning("Crisis phrase detected in user message; showing crisis resources")
        crisis = True

    return replace(
        state,
        messages=state.messages + (ChatMessage(USER, user_message),),
        crisis_alert=crisis,
        loading=True,
    )


def pending_message(state: AppState) -> Optional[str]:
    """
    The user message still waiting for a reply, if a request is marked in flight.
    Mood notices logged in the meantime are skipped over.
    """
    if not state.loading:
        return None
    for msg in reversed(state.messages):
        if msg.role == ASSISTANT:
            return None
        if msg.role == USER:
            return msg.text
    return None


def receive_reply(state: AppState, text: str) -> AppState:
    return replace(
        state,
        messages=state.messages + (ChatMessage(ASSISTANT, text),),
        loading=False,
    )


# ---------------- Mood ----------------
def log_mood(state: AppState, value: int, now: Optional[datetime] = None) -> AppState:
    entry = make_mood_entry(value, now)
    notice = ChatMessage(
        SYSTEM, f"Mood logged: {mood_option(value).label}. Keep tracking to see your patterns!"
    )
    return replace(
        state,
        mood_entries=state.mood_entries + (entry,),
        messages=state.messages + (notice,),
    )

import logging
import os

import streamlit as st

import resources
from crisis_detection import get_crisis_message
from mood_tracking import MOOD_OPTIONS, chart_frame, generate_insight, recent_entries
from services.backends import resolve_reply
from state import (
    ASSISTANT,
    SYSTEM,
    USER,
    AppState,
    View,
    acknowledge_disclaimer,
    dismiss_crisis_alert,
    log_mood,
    pending_message,
    receive_reply,
    select_view,
    submit_message,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title=resources.APP_TITLE, page_icon="💜")

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState()


def dispatch(action, *args):
    st.session_state.app_state = action(st.session_state.app_state, *args)
    return st.session_state.app_state


def answer_pending():
    """Resolve the unanswered user message, if any."""
    pending = pending_message(st.session_state.app_state)
    if pending is None:
        return
    with st.spinner("Thinking..."):
        reply = resolve_reply(pending)
        # record before the spinner closes: a queued rerun stops the script there
        dispatch(receive_reply, reply)


# ---------------- Screens ----------------
def render_disclaimer():
    st.title(f"💜 {resources.APP_TITLE}")
    st.caption(resources.APP_TAGLINE)

    points = "\n".join(f"- {p}" for p in resources.DISCLAIMER_POINTS)
    st.warning(
        "**Important Disclaimer**\n\n"
        "This application provides **emotional support and wellness tools only**. It does NOT:\n\n"
        f"{points}\n\n"
        "**Always consult licensed mental health professionals for diagnosis and treatment.**"
    )
    st.error("**🆘 Crisis Resources**\n\n" + resources.crisis_lines_markdown())

    if st.button("I Understand - Continue to App", key="acknowledge", type="primary"):
        dispatch(acknowledge_disclaimer)
        st.rerun()


def render_tabs(state: AppState):
    labels = {View.CHAT: "💬 Chat", View.MOOD: "📊 Mood", View.RESOURCES: "🆘 Resources"}
    cols = st.columns(len(labels))
    for col, (view, label) in zip(cols, labels.items()):
        kind = "primary" if state.view == view else "secondary"
        if col.button(label, key=f"tab_{view.value}", type=kind):
            dispatch(select_view, view)
            st.rerun()


def render_chat(state: AppState):
    st.subheader("Supportive Chat")
    st.caption("I'm here to listen and support you")

    if not state.messages:
        st.markdown("#### How are you feeling today?")
        st.write("Share what's on your mind. I'm here to listen.")

    for msg in state.messages:
        if msg.role == SYSTEM:
            st.success(msg.text)
        else:
            with st.chat_message(USER if msg.role == USER else ASSISTANT):
                st.markdown(msg.text)

    text = st.chat_input("Type your message...", disabled=state.loading, key="chat_input")
    if text:
        dispatch(submit_message, text)
        answer_pending()
        st.rerun()


def render_mood(state: AppState):
    st.subheader("How are you feeling?")
    cols = st.columns(len(MOOD_OPTIONS))
    for col, option in zip(cols, MOOD_OPTIONS):
        if col.button(f"{option.emoji}\n\n{option.label}", key=f"mood_{option.value}"):
            dispatch(log_mood, option.value)
            st.rerun()

    entries = state.mood_entries
    if not entries:
        return

    st.info("**💡 AI Insights**\n\n" + generate_insight(entries))

    st.markdown("### Your Mood Trends")
    st.line_chart(chart_frame(entries), y="Mood")

    st.markdown("#### Recent Entries")
    for entry in recent_entries(entries):
        option = entry.option
        st.markdown(f"{option.emoji} **{option.label}** · {entry.date_label} at {entry.time_label}")


def render_resources():
    st.subheader("Mental Health Resources")

    lines = "\n\n".join(
        f"**{name}**  \n### {contact}\n{note}" for name, contact, note in resources.CRISIS_LINES
    )
    st.error("#### 🆘 Crisis Support (24/7)\n\n" + lines)
    st.info("#### 💙 Mental Health Support\n\n" + resources.bullet_list(resources.SUPPORT_LINES))
    st.success(
        "#### 🌱 Self-Care Tips\n\n" + "\n".join(f"- {tip}" for tip in resources.SELF_CARE_TIPS)
    )
    st.info("#### 🔍 Find Professional Help\n\n" + resources.bullet_list(resources.PROFESSIONAL_HELP))


@st.dialog("🆘 Immediate Help Available")
def crisis_dialog():
    st.markdown(get_crisis_message())
    if st.button("I'll Reach Out for Help", key="dismiss_crisis", type="primary"):
        dispatch(dismiss_crisis_alert)
        st.rerun()


# ---------------- Page ----------------
# a request cut off by an earlier rerun is picked up again here
answer_pending()
state = st.session_state.app_state

if state.view == View.DISCLAIMER:
    render_disclaimer()
else:
    st.title("💜 Wellness Companion")
    render_tabs(state)
    st.caption(resources.BANNER)

    if state.view == View.CHAT:
        render_chat(state)
    elif state.view == View.MOOD:
        render_mood(state)
    else:
        render_resources()

    st.divider()
    st.caption(resources.FOOTER)

    if state.crisis_alert:
        crisis_dialog()

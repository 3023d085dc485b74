# Shared display helpers for the Streamlit tabs.
import streamlit as st

from dates import to_canonical_date
from models import Mood

MOOD_EMOJI = {
    Mood.HAPPY: "😊",
    Mood.CALM: "😌",
    Mood.OKAY: "🙂",
    Mood.ANXIOUS: "😟",
    Mood.SAD: "😢",
}

MESSAGES = {
    "check_in_saved": "Check-in saved! Your thoughts are safely recorded.",
    "analysis_skipped": "Entry saved without analysis. We couldn't analyze your entry right now, but it's saved.",
    "check_in_error": "Failed to save check-in. Please try again.",
    "prompt_error": "Could not get a response from the AI. Please try again.",
    "already_checked_in": "You've checked in today. Come back tomorrow for your next reflection.",
}


def mood_label(mood: Mood) -> str:
    return f"{MOOD_EMOJI.get(mood, '')} {mood.value}".strip()


def format_day(value) -> str:
    return to_canonical_date(value).strftime("%A, %B %d, %Y")


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def flash(kind: str, message: str) -> None:
    st.session_state.setdefault("flash", []).append((kind, message))


def show_flash() -> None:
    for kind, message in st.session_state.pop("flash", []):
        getattr(st, kind)(message)

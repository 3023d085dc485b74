# Reflection prompts: when to ask the model for a new one, and local fallbacks.
import random
from datetime import datetime, timedelta

from loguru import logger

import llm
from models import PromptContext, PromptResult

HISTORY_LIMIT = 10
ENGAGED_HISTORY_LENGTH = 3

FALLBACK_PROMPTS = [
    "What's one thing you're grateful for today?",
    "How are you feeling right now, and what might be contributing to that feeling?",
    "What's been on your mind lately?",
    "Describe a moment from today that stood out to you.",
    "What would you like to let go of today?",
    "What's something you learned about yourself recently?",
    "How would you describe your energy level today?",
    "What's one small thing that brought you joy today?",
]

QUICK_PROMPTS = [
    "How are you feeling right now?",
    "What's on your mind today?",
    "Take a moment to check in with yourself.",
    "What would be helpful to explore today?",
]


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return dt.astimezone().replace(tzinfo=None) if dt.tzinfo else dt


def should_generate_new_prompt(last_prompt_date, prompt_history=None, now: datetime | None = None) -> bool:
    """New prompt when none was used yet, a full day has passed, or the user is cycling through prompts."""
    if not last_prompt_date:
        return True
    now = now or datetime.now()
    if now - _as_datetime(last_prompt_date) >= timedelta(days=1):
        return True
    return len(prompt_history or []) > ENGAGED_HISTORY_LENGTH


def get_fallback_prompt(prompt_history=None) -> str:
    history = set(prompt_history or [])
    fresh = [p for p in FALLBACK_PROMPTS if p not in history]
    return random.choice(fresh or FALLBACK_PROMPTS)


def get_quick_check_in_prompt() -> str:
    return random.choice(QUICK_PROMPTS)


def remember_prompt(history, prompt: str) -> list:
    return ([*(history or []), prompt])[-HISTORY_LIMIT:]


def build_prompt_input(context: PromptContext) -> dict:
    mood = context.mood
    if not mood and context.recent_entries:
        mood = context.recent_entries[0].mood
    mood = getattr(mood, "value", mood) or "neutral"
    return {"mood": mood, "recent_thoughts": context.recent_thoughts, "prompt_type": "check-in"}


async def generate_reflection_prompt(context: PromptContext) -> PromptResult:
    try:
        prompt = await llm.generate_prompt(**build_prompt_input(context))
        return PromptResult(prompt=prompt, success=True)
    except Exception as e:
        logger.warning("Prompt generation failed, using a fallback prompt: {}", e)
        return PromptResult(
            prompt=get_fallback_prompt(context.prompt_history),
            success=False,
            error=str(e) or "Failed to generate prompt",
        )

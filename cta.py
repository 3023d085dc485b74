# Dynamic call-to-action: one next step and an encouragement line per user state.
from loguru import logger

import checkin
import db
from dates import to_canonical_date
from models import CTAAction, CTAConfig, UserContext, UserIdentity
from streak import calculate_streak

SHOW_THRESHOLD = 70
MILESTONE_DAYS = 7


def select_cta(context: UserContext) -> CTAConfig:
    """Pick the single most relevant call-to-action. First matching rule wins."""
    if context.total_entries == 0:
        return CTAConfig(
            text="Start Your First Journal Entry",
            action=CTAAction.START_JOURNAL,
            priority=100,
            context="Welcome! Begin your journaling journey.",
        )
    if not context.has_checked_in_today:
        return CTAConfig(
            text="Start Today's Reflection",
            action=CTAAction.START_JOURNAL,
            priority=90,
            context="Your daily check-in is waiting.",
        )
    streak = context.current_streak
    if streak > 0 and streak % MILESTONE_DAYS == 0:
        return CTAConfig(
            text=f"Celebrate {streak} Days!",
            action=CTAAction.VIEW_INSIGHTS,
            priority=80,
            context="Amazing consistency! See your progress.",
        )
    if context.recent_entry is not None:
        return CTAConfig(
            text="Explore Your Journey",
            action=CTAAction.VIEW_INSIGHTS,
            priority=70,
            context="Reflect on your recent thoughts and patterns.",
        )
    return CTAConfig(
        text="Continue Your Practice",
        action=CTAAction.START_JOURNAL,
        priority=60,
        context="Every entry brings new insights.",
    )


def should_show_cta(context: UserContext) -> bool:
    # Kept as an explicit OR: an outstanding check-in always shows the CTA.
    return select_cta(context).priority >= SHOW_THRESHOLD or not context.has_checked_in_today


def get_encouragement_message(context: UserContext) -> str:
    if context.has_checked_in_today and context.current_streak > 1:
        return f"{context.current_streak} day streak! You're building a powerful habit."
    if context.total_entries >= 10:
        return "Your journal is becoming a rich collection of insights."
    if context.total_entries >= 3:
        return "You're developing a meaningful practice."
    return "Every entry is a step toward better self-understanding."


def build_user_context(identity: UserIdentity, entries=None) -> UserContext:
    """Recompute the user's context from the store; nothing is cached."""
    if entries is None:
        entries = db.get_all_entries(identity)
    recent = checkin.get_recent_check_in(identity)
    context = UserContext(
        has_checked_in_today=checkin.has_today_check_in(identity),
        total_entries=len(entries),
        current_streak=calculate_streak(entries),
        recent_entry=recent,
        last_active_date=to_canonical_date(recent.date) if recent else None,
    )
    logger.debug(
        "User context for {}: checked_in={} total={} streak={}",
        identity.user_id,
        context.has_checked_in_today,
        context.total_entries,
        context.current_streak,
    )
    return context

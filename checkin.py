# Daily check-in: analyze (best effort), persist, then mark the profile.
from datetime import datetime

from loguru import logger

import db
import llm
from dates import get_today_start, get_tomorrow_start
from models import MAX_PAIN_LEVEL, MIN_PAIN_LEVEL, CheckInData, CheckInResult, JournalEntry, Mood, UserIdentity


def validate_check_in(data: CheckInData) -> CheckInData:
    text = (data.entry_text or "").strip()
    if not text:
        raise ValueError("Please write something in your journal.")
    try:
        mood = Mood(data.mood)
    except ValueError as e:
        raise ValueError(f"Unknown mood: {data.mood}") from e
    if isinstance(data.pain_level, bool) or not isinstance(data.pain_level, int):
        raise ValueError("Pain level must be a whole number.")
    if not MIN_PAIN_LEVEL <= data.pain_level <= MAX_PAIN_LEVEL:
        raise ValueError(f"Pain level must be between {MIN_PAIN_LEVEL} and {MAX_PAIN_LEVEL}.")
    return CheckInData(mood=mood, pain_level=data.pain_level, entry_text=text)


async def record_daily_check_in(identity: UserIdentity, data: CheckInData) -> CheckInResult:
    """Save a check-in. Analysis failure is reported but never blocks the save.

    Raises ValueError for invalid input before anything is called or written.
    """
    data = validate_check_in(data)

    analysis, analysis_error = None, None
    try:
        analysis = await llm.analyze_entry(data.entry_text)
    except Exception as e:
        analysis_error = str(e) or "Analysis failed"
        logger.warning("Analysis failed, saving entry without it: {}", analysis_error)

    try:
        entry = db.add_entry(identity, data, analysis)
    except Exception as e:
        logger.error("Failed to save check-in for {}: {}", identity.user_id, e)
        return CheckInResult(success=False, error=str(e) or "Failed to save check-in")

    try:
        db.merge_user_profile(identity.user_id, last_prompt_date=datetime.now().isoformat())
    except Exception as e:
        logger.warning("Could not update last prompt date for {}: {}", identity.user_id, e)

    logger.info("Recorded check-in {} for {}", entry.id, identity.user_id)
    return CheckInResult(success=True, entry=entry, analysis_error=analysis_error)


def has_today_check_in(identity: UserIdentity) -> bool:
    try:
        return bool(db.get_entries_by_date_range(identity, get_today_start(), get_tomorrow_start(), limit=1))
    except Exception as e:
        logger.error("Error checking today's entry: {}", e)
        return False


def get_recent_check_in(identity: UserIdentity) -> JournalEntry | None:
    try:
        entries = db.get_recent_entries(identity, 1)
    except Exception as e:
        logger.error("Error getting recent check-in: {}", e)
        return None
    return entries[0] if entries else None

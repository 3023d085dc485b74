from datetime import datetime, timedelta

import pytest

import cta
from models import CTAAction, UserContext


def _context(**overrides) -> UserContext:
    values = {"has_checked_in_today": True, "total_entries": 5, "current_streak": 2, "recent_entry": None}
    values.update(overrides)
    return UserContext(**values)


@pytest.mark.parametrize("checked_in", [True, False])
@pytest.mark.parametrize("streak", [0, 7, 14])
def test_first_entry_wins_regardless_of_other_fields(checked_in, streak, make_entry) -> None:
    context = _context(
        total_entries=0, has_checked_in_today=checked_in, current_streak=streak, recent_entry=make_entry(datetime.now())
    )
    config = cta.select_cta(context)
    assert config.action == CTAAction.START_JOURNAL
    assert config.priority == 100
    assert config.text == "Start Your First Journal Entry"


@pytest.mark.parametrize("streak", [0, 3, 7, 21])
def test_pending_check_in(streak) -> None:
    context = _context(has_checked_in_today=False, current_streak=streak)
    config = cta.select_cta(context)
    assert config.priority == 90
    assert config.action == CTAAction.START_JOURNAL
    assert cta.should_show_cta(context)


@pytest.mark.parametrize("streak", [7, 14, 28, 70])
def test_weekly_milestone(streak, make_entry) -> None:
    context = _context(current_streak=streak, total_entries=streak, recent_entry=make_entry(datetime.now()))
    config = cta.select_cta(context)
    assert config.priority == 80
    assert config.action == CTAAction.VIEW_INSIGHTS
    assert str(streak) in config.text


def test_milestone_scenario_mentions_fourteen() -> None:
    config = cta.select_cta(_context(current_streak=14, total_entries=20))
    assert config.action == CTAAction.VIEW_INSIGHTS
    assert config.priority == 80
    assert "14" in config.text


def test_explore_journey_with_recent_entry(make_entry) -> None:
    config = cta.select_cta(_context(current_streak=3, recent_entry=make_entry(datetime.now())))
    assert config.priority == 70
    assert config.action == CTAAction.VIEW_INSIGHTS
    assert config.text == "Explore Your Journey"


def test_fallback_is_continue_practice() -> None:
    context = _context(current_streak=3, recent_entry=None)
    config = cta.select_cta(context)
    assert config.priority == 60
    assert config.action == CTAAction.START_JOURNAL
    assert not cta.should_show_cta(context)


def test_zero_streak_is_not_a_milestone() -> None:
    assert cta.select_cta(_context(current_streak=0)).priority == 60


def test_should_show_for_high_priority(make_entry) -> None:
    assert cta.should_show_cta(_context(total_entries=0))
    assert cta.should_show_cta(_context(current_streak=7))
    assert cta.should_show_cta(_context(recent_entry=make_entry(datetime.now())))


def test_encouragement_for_new_user() -> None:
    context = _context(total_entries=0, has_checked_in_today=False, current_streak=0)
    assert cta.select_cta(context).priority == 100
    assert cta.get_encouragement_message(context) == "Every entry is a step toward better self-understanding."


def test_streak_message_takes_precedence_over_entry_count() -> None:
    message = cta.get_encouragement_message(_context(total_entries=12, current_streak=3))
    assert message == "3 day streak! You're building a powerful habit."


@pytest.mark.parametrize(
    "total, expected",
    [
        (10, "Your journal is becoming a rich collection of insights."),
        (3, "You're developing a meaningful practice."),
        (2, "Every entry is a step toward better self-understanding."),
    ],
)
def test_encouragement_by_entry_count(total, expected) -> None:
    context = _context(has_checked_in_today=False, total_entries=total, current_streak=5)
    assert cta.get_encouragement_message(context) == expected


def test_streak_of_one_does_not_get_streak_message() -> None:
    context = _context(total_entries=1, current_streak=1)
    assert cta.get_encouragement_message(context) == "Every entry is a step toward better self-understanding."


def test_build_user_context_from_store(identity, save_entry) -> None:
    now = datetime.now()
    save_entry(now - timedelta(days=1), text="yesterday")
    latest = save_entry(now, text="today")

    context = cta.build_user_context(identity)

    assert context.has_checked_in_today is True
    assert context.total_entries == 2
    assert context.current_streak == 2
    assert context.recent_entry.id == latest.id
    assert context.last_active_date.date() == now.date()
    assert cta.select_cta(context).action == CTAAction.VIEW_INSIGHTS


def test_build_user_context_without_entries(identity, store) -> None:
    context = cta.build_user_context(identity)
    assert context.has_checked_in_today is False
    assert context.total_entries == 0
    assert context.current_streak == 0
    assert context.recent_entry is None
    assert context.last_active_date is None
    config = cta.select_cta(context)
    assert (config.action, config.priority) == (CTAAction.START_JOURNAL, 100)

# Value types passed between the store, the AI collaborator and the UI.
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Union

from dates import ServerTimestamp

DateLike = Union[datetime, date, ServerTimestamp]

MIN_PAIN_LEVEL = 0
MAX_PAIN_LEVEL = 10


class Mood(str, Enum):
    HAPPY = "Happy"
    CALM = "Calm"
    OKAY = "Okay"
    ANXIOUS = "Anxious"
    SAD = "Sad"


class CTAAction(str, Enum):
    START_JOURNAL = "start_journal"
    CONTINUE_JOURNAL = "continue_journal"
    VIEW_INSIGHTS = "view_insights"
    SET_GOAL = "set_goal"


@dataclass(frozen=True)
class Analysis:
    themes: list[str]
    emotions: list[str]
    summary: str

    def to_dict(self) -> dict:
        return {"themes": list(self.themes), "emotions": list(self.emotions), "summary": self.summary}

    @classmethod
    def from_dict(cls, data: dict) -> "Analysis":
        themes = data.get("themes")
        emotions = data.get("emotions")
        summary = data.get("summary")
        if not isinstance(themes, list) or not isinstance(emotions, list) or not isinstance(summary, str):
            raise ValueError("Analysis must have list themes, list emotions and a string summary.")
        return cls(
            themes=[str(t) for t in themes],
            emotions=[str(e) for e in emotions],
            summary=summary.strip(),
        )


@dataclass
class JournalEntry:
    id: str
    date: DateLike
    mood: Mood
    pain_level: int
    entry_text: str
    user_id: str
    analysis: Analysis | None = None


@dataclass(frozen=True)
class CheckInData:
    mood: Mood
    pain_level: int
    entry_text: str


@dataclass
class CheckInResult:
    success: bool
    error: str | None = None
    entry: JournalEntry | None = None
    # Set when the entry was saved without analysis.
    analysis_error: str | None = None


@dataclass
class UserContext:
    has_checked_in_today: bool
    total_entries: int
    current_streak: int
    recent_entry: JournalEntry | None = None
    last_active_date: datetime | None = None


@dataclass(frozen=True)
class CTAConfig:
    text: str
    action: CTAAction
    priority: int
    context: str


@dataclass
class PromptContext:
    mood: Mood | str | None = None
    recent_thoughts: str | None = None
    recent_entries: list[JournalEntry] = field(default_factory=list)
    prompt_history: list[str] = field(default_factory=list)


@dataclass
class PromptResult:
    prompt: str
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class UserIdentity:
    user_id: str
    email: str
    key: bytes = field(repr=False)

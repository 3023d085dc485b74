"""Shared fixtures: a throwaway SQLite store, a signed-in identity, entry builders."""

import os
from datetime import datetime

import pytest

import config
import db
from dates import ServerTimestamp
from models import Analysis, CheckInData, JournalEntry, Mood, UserIdentity


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_PATH", tmp_path / "havyn.db")
    db.init_db()
    return tmp_path / "havyn.db"


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "SETTINGS_PATH", tmp_path / "settings.json")
    return tmp_path / "settings.json"


@pytest.fixture
def identity() -> UserIdentity:
    return UserIdentity(user_id="user_test", email="test@example.com", key=os.urandom(32))


@pytest.fixture
def make_entry():
    counter = {"n": 0}

    def _make(when, mood=Mood.OKAY, pain_level=3, text="Some thoughts.", analysis=None) -> JournalEntry:
        counter["n"] += 1
        return JournalEntry(
            id=f"entry_{counter['n']}",
            date=when,
            mood=mood,
            pain_level=pain_level,
            entry_text=text,
            user_id="user_test",
            analysis=analysis,
        )
    return _make


@pytest.fixture
def save_entry(store, identity):
    def _save(when: datetime, mood=Mood.OKAY, text="Saved thoughts.", analysis: Analysis | None = None):
        data = CheckInData(mood=mood, pain_level=2, entry_text=text)
        return db.add_entry(identity, data, analysis, at=ServerTimestamp.from_datetime(when))
    return _save

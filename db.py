# SQLite document store: accounts, per-user profiles, journal entries. Use _with_conn for DB access.
import json
import os
import sqlite3
import time

import config
import crypto
from dates import ServerTimestamp, to_canonical_date
from models import Analysis, CheckInData, JournalEntry, Mood, UserIdentity

DB_PATH = config.get_db_path()
ENTRY_ID_PREFIX = "entry_"
USER_ID_PREFIX = "user_"
ENTRY_COLS = "id, user_id, created_at, mood, pain_level, encrypted_text, iv, analysis"
PROFILE_FIELDS = ("last_prompt_date", "prompt_history")


def get_conn():
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def _with_conn(f):
    conn = get_conn()
    try:
        return f(conn)
    finally:
        conn.close()


def init_db():
    def run(c):
        c.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                salt TEXT NOT NULL,
                check_cipher TEXT NOT NULL,
                check_iv TEXT NOT NULL,
                created_at INTEGER NOT NULL
            );
            CREATE TABLE IF NOT EXISTS profiles (
                user_id TEXT PRIMARY KEY,
                last_prompt_date TEXT,
                prompt_history TEXT
            );
            CREATE TABLE IF NOT EXISTS journal_entries (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                created_at INTEGER NOT NULL,
                mood TEXT NOT NULL,
                pain_level INTEGER NOT NULL,
                encrypted_text TEXT NOT NULL,
                iv TEXT NOT NULL,
                analysis TEXT
            );
            CREATE INDEX IF NOT EXISTS idx_entries_user_created ON journal_entries(user_id, created_at);
        """)
        c.commit()
    _with_conn(run)


# Random suffix keeps ids unique within the same millisecond.
def _new_id(prefix: str) -> str:
    return f"{prefix}{int(time.time() * 1000)}_{os.urandom(4).hex()}"


# --- Accounts ---

def create_user(email: str, salt: str, check_cipher: str, check_iv: str) -> str:
    uid = _new_id(USER_ID_PREFIX)

    def run(c):
        c.execute(
            "INSERT INTO users (id, email, salt, check_cipher, check_iv, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (uid, email, salt, check_cipher, check_iv, int(time.time() * 1000)),
        )
        c.commit()
    _with_conn(run)
    return uid


def _user_dict(row) -> dict | None:
    if row is None:
        return None
    return {k: row[k] for k in row.keys()}


def get_user_by_email(email: str) -> dict | None:
    def run(c):
        return _user_dict(c.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone())
    return _with_conn(run)


# --- Profiles ---

def get_user_profile(user_id: str) -> dict:
    def run(c):
        row = c.execute(
            "SELECT last_prompt_date, prompt_history FROM profiles WHERE user_id = ?", (user_id,)
        ).fetchone()
        if row is None:
            return {"last_prompt_date": None, "prompt_history": []}
        return {
            "last_prompt_date": row["last_prompt_date"],
            "prompt_history": json.loads(row["prompt_history"]) if row["prompt_history"] else [],
        }
    return _with_conn(run)


def merge_user_profile(user_id: str, **fields) -> None:
    """Upsert only the given profile fields; other fields keep their values."""
    unknown = set(fields) - set(PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    if not fields:
        return
    cols = list(fields)
    values = [json.dumps(v) if k == "prompt_history" else v for k, v in fields.items()]
    updates = ", ".join(f"{col} = excluded.{col}" for col in cols)

    def run(c):
        c.execute(
            f"INSERT INTO profiles (user_id, {', '.join(cols)}) VALUES (?, {', '.join('?' for _ in cols)}) "
            f"ON CONFLICT(user_id) DO UPDATE SET {updates}",
            (user_id, *values),
        )
        c.commit()
    _with_conn(run)


# --- Journal entries ---

def _row_to_entry(row, key: bytes) -> JournalEntry:
    analysis = json.loads(row["analysis"]) if row["analysis"] else None
    return JournalEntry(
        id=row["id"],
        date=ServerTimestamp.from_millis(row["created_at"]),
        mood=Mood(row["mood"]),
        pain_level=row["pain_level"],
        entry_text=crypto.unseal(row["encrypted_text"], row["iv"], key),
        user_id=row["user_id"],
        analysis=Analysis.from_dict(analysis) if analysis else None,
    )


def add_entry(
    identity: UserIdentity, data: CheckInData, analysis: Analysis | None, at: ServerTimestamp | None = None
) -> JournalEntry:
    # The store assigns the timestamp; `at` is only passed for backfills.
    eid, stamp = _new_id(ENTRY_ID_PREFIX), at or ServerTimestamp.now()
    enc, iv = crypto.seal(data.entry_text, identity.key)
    analysis_json = json.dumps(analysis.to_dict()) if analysis else None

    def run(c):
        c.execute(
            f"INSERT INTO journal_entries ({ENTRY_COLS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (eid, identity.user_id, stamp.to_millis(), Mood(data.mood).value, data.pain_level, enc, iv, analysis_json),
        )
        c.commit()
    _with_conn(run)
    return JournalEntry(
        id=eid,
        date=stamp,
        mood=Mood(data.mood),
        pain_level=data.pain_level,
        entry_text=data.entry_text,
        user_id=identity.user_id,
        analysis=analysis,
    )


def _entries_query(identity: UserIdentity, sql: str, params=()):
    def run(c):
        rows = c.execute(sql, (identity.user_id, *params)).fetchall()
        return [_row_to_entry(r, identity.key) for r in rows]
    return _with_conn(run)


def get_entries_by_date_range(identity: UserIdentity, start, end, limit: int | None = None) -> list:
    """Entries with start <= date < end, newest first."""
    start_ms = int(to_canonical_date(start).timestamp() * 1000)
    end_ms = int(to_canonical_date(end).timestamp() * 1000)
    sql = (
        f"SELECT {ENTRY_COLS} FROM journal_entries WHERE user_id = ? AND created_at >= ? AND created_at < ? "
        "ORDER BY created_at DESC"
    )
    params = [start_ms, end_ms]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)
    return _entries_query(identity, sql, params)


def get_recent_entries(identity: UserIdentity, limit: int) -> list:
    sql = f"SELECT {ENTRY_COLS} FROM journal_entries WHERE user_id = ? ORDER BY created_at DESC LIMIT ?"
    return _entries_query(identity, sql, (limit,))


def get_all_entries(identity: UserIdentity) -> list:
    sql = f"SELECT {ENTRY_COLS} FROM journal_entries WHERE user_id = ? ORDER BY created_at DESC"
    return _entries_query(identity, sql)

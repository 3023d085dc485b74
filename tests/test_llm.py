from types import SimpleNamespace
from unittest.mock import AsyncMock

import openai
import pytest

import config
import llm
from models import Analysis


def test_parse_analysis() -> None:
    raw = '{"themes": ["work"], "emotions": ["stress", "hope"], "summary": " Busy week. "}'
    assert llm.parse_analysis(raw) == Analysis(themes=["work"], emotions=["stress", "hope"], summary="Busy week.")


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '["work"]',
        '{"themes": "work", "emotions": [], "summary": "x"}',
        '{"themes": [], "emotions": []}',
    ],
)
def test_parse_analysis_rejects_malformed_output(raw) -> None:
    with pytest.raises(ValueError):
        llm.parse_analysis(raw)


@pytest.mark.asyncio
async def test_disabled_ai_raises(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    with pytest.raises(llm.AIUnavailableError):
        await llm.analyze_entry("hello")


@pytest.mark.asyncio
async def test_missing_key_raises(monkeypatch) -> None:
    config.set_use_ai(True)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(llm.AIUnavailableError, match="OPENAI_API_KEY"):
        await llm.generate_prompt("Calm")


@pytest.mark.asyncio
async def test_generate_prompt_cleans_model_output(monkeypatch) -> None:
    complete = AsyncMock(return_value='Journaling prompt: "What felt steady today?"')
    monkeypatch.setattr(llm, "_complete", complete)

    prompt = await llm.generate_prompt("Calm", "slept well")

    assert prompt == "What felt steady today?"
    system, user, _ = complete.await_args.args
    assert system == llm.PROMPT_SYSTEM
    assert "Mood: Calm" in user
    assert "slept well" in user


@pytest.mark.asyncio
async def test_greeting_prompt_type(monkeypatch) -> None:
    complete = AsyncMock(return_value="Hi there, how are you doing today?")
    monkeypatch.setattr(llm, "_complete", complete)
    await llm.generate_prompt("neutral", prompt_type="greeting")
    assert complete.await_args.args[0] == llm.GREETING_SYSTEM


@pytest.mark.asyncio
async def test_unknown_prompt_type() -> None:
    with pytest.raises(ValueError):
        await llm.generate_prompt("neutral", prompt_type="essay")


@pytest.mark.asyncio
async def test_analyze_entry_uses_json_mode(monkeypatch) -> None:
    complete = AsyncMock(return_value='{"themes": [], "emotions": ["calm"], "summary": "Quiet."}')
    monkeypatch.setattr(llm, "_complete", complete)
    analysis = await llm.analyze_entry("A quiet evening.")
    assert analysis.emotions == ["calm"]
    assert complete.await_args.kwargs == {"json_mode": True}


@pytest.mark.asyncio
async def test_chat_reply_uses_unspecified_mood(monkeypatch) -> None:
    generate = AsyncMock(return_value="What made today feel heavy?")
    monkeypatch.setattr(llm, "generate_prompt", generate)
    assert await llm.chat_reply("rough day") == "What made today feel heavy?"
    generate.assert_awaited_once_with("unspecified", recent_thoughts="rough day")


def test_use_ai_setting_round_trip(settings_file) -> None:
    assert config.get_use_ai() is False
    config.set_use_ai(True)
    assert config.get_use_ai() is True
    assert settings_file.exists()


def test_unreadable_settings_fall_back_to_defaults(settings_file) -> None:
    settings_file.write_text("{not json")
    assert config.get_use_ai() is False


class _FakeClient:
    instances: list = []

    def __init__(self, api_key=None):
        self.api_key = api_key
        self.closed = False
        message = SimpleNamespace(content='{"themes": ["rest"], "emotions": ["calm"], "summary": "Slow day."}')
        create = AsyncMock(return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)]))
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=create))
        _FakeClient.instances.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True
        return False


@pytest.mark.asyncio
async def test_openai_client_is_closed_after_each_call(monkeypatch) -> None:
    _FakeClient.instances = []
    monkeypatch.setattr(openai, "AsyncOpenAI", _FakeClient)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    config.set_use_ai(True)

    assert (await llm.analyze_entry("A slow day.")).themes == ["rest"]
    assert await llm.generate_prompt("calm")

    assert len(_FakeClient.instances) == 2
    assert all(c.closed for c in _FakeClient.instances)
    assert all(c.api_key == "sk-test" for c in _FakeClient.instances)

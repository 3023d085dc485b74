# OpenAI integration: journaling prompts, entry analysis, companion chat.
import json

import config
from models import Analysis

PROMPT_TYPES = ("greeting", "check-in")
MAX_PROMPT_TOKENS = 200
MAX_ANALYSIS_TOKENS = 500


class AIUnavailableError(RuntimeError):
    pass


PROMPT_SYSTEM = """You are Havyn, a helpful assistant that writes personalized journaling prompts. Your voice is warm, calm and non-judgmental.

Based on the user's current mood and recent thoughts, write a single, specific, thought-provoking journaling prompt that helps them explore their feelings and experiences. Reply with the prompt only: one or two sentences, no greeting, no quotes."""

GREETING_SYSTEM = """You are Havyn, a personal journaling companion. Greet the user in one short, warm sentence and end with a gentle open question about how they are doing. Reply with that text only."""

ANALYSIS_SYSTEM = """You analyze journal entries and identify recurring themes and emotions.

Reply with a JSON object only, with exactly these keys:
- "themes": list of short strings, the themes in the entry
- "emotions": list of short strings, the emotions expressed
- "summary": a concise summary of the entry (one or two sentences)"""


def _client():
    key = config.get_server_api_key()
    if not config.get_use_ai():
        raise AIUnavailableError("AI is turned off in Settings.")
    if not key:
        raise AIUnavailableError("OpenAI API key not set. Set OPENAI_API_KEY in .env or environment.")
    from openai import AsyncOpenAI
    return AsyncOpenAI(api_key=key)


async def _complete(system: str, user: str, max_tokens: int, json_mode: bool = False) -> str:
    kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
    # Each call runs on its own event loop, so the client is closed before returning.
    async with _client() as client:
        r = await client.chat.completions.create(
            model=config.get_model(),
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            **kwargs,
        )
    text = (r.choices[0].message.content or "").strip()
    if not text:
        raise ValueError("Empty response from the model.")
    return text


def _clean_prompt(raw: str) -> str:
    text = raw.strip()
    if text.lower().startswith("journaling prompt:"):
        text = text[len("journaling prompt:"):].strip()
    return text.strip('"').strip()


async def generate_prompt(mood: str, recent_thoughts: str | None = None, prompt_type: str = "check-in") -> str:
    if prompt_type not in PROMPT_TYPES:
        raise ValueError(f"Unknown prompt type: {prompt_type}")
    system = GREETING_SYSTEM if prompt_type == "greeting" else PROMPT_SYSTEM
    user = f"Mood: {mood}\nRecent thoughts: {recent_thoughts or 'none shared'}"
    prompt = _clean_prompt(await _complete(system, user, MAX_PROMPT_TOKENS))
    if not prompt:
        raise ValueError("Model returned an empty prompt.")
    return prompt


def parse_analysis(raw: str) -> Analysis:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Analysis was not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Analysis must be a JSON object.")
    return Analysis.from_dict(data)


async def analyze_entry(entry_text: str) -> Analysis:
    raw = await _complete(ANALYSIS_SYSTEM, f"Journal entry: {entry_text}", MAX_ANALYSIS_TOKENS, json_mode=True)
    return parse_analysis(raw)


async def chat_reply(message: str) -> str:
    return await generate_prompt("unspecified", recent_thoughts=message)

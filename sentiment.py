# Local insights: VADER tone per entry and recurring themes across entries.
import re
from collections import Counter

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from dates import to_canonical_date

_analyzer = SentimentIntensityAnalyzer()

STOPWORDS = frozenset("""
a about above after again against all am an and any are as at be because been before being below between
both but by can could did do does doing down during each few for from further had has have having he her
here hers herself him himself his how i if in into is it its itself just me more most my myself no nor not
now of off on once only or other our ours ourselves out over own same she should so some such than that the
their theirs them themselves then there these they this those through to too under until up very was we
were what when where which while who whom why will with would you your yours yourself yourselves
im ive dont didnt cant wont isnt wasnt
day days today tomorrow yesterday time times moment thing things something nothing anything everything
really still maybe even much many lot bit kind sort actually probably always never often sometimes
feel feels felt feeling like get got going go went make made one back way
""".split())

MAX_THEMES_PER_ENTRY = 8
MIN_WORD_LENGTH = 3
TONE_THRESHOLD = 0.1


def analyze_sentiment(text: str) -> dict:
    if not (text or "").strip():
        return {"compound": 0.0, "label": "neutral"}
    compound = _analyzer.polarity_scores(text.strip())["compound"]
    label = "neutral"
    if compound > TONE_THRESHOLD:
        label = "positive"
    elif compound < -TONE_THRESHOLD:
        label = "negative"
    return {"compound": compound, "label": label}


def extract_themes(text: str) -> list:
    words = re.findall(r"[a-zA-Z][a-zA-Z']*", text or "")
    terms = [w.lower().replace("'", "") for w in words]
    counts = Counter(t for t in terms if len(t) >= MIN_WORD_LENGTH and t not in STOPWORDS)
    return [t for t, _ in counts.most_common(MAX_THEMES_PER_ENTRY)]


def entry_themes(entry) -> list:
    # AI themes when the entry was analyzed, keywords otherwise.
    if entry.analysis is not None and entry.analysis.themes:
        return entry.analysis.themes
    return extract_themes(entry.entry_text)


def aggregate_themes(entries) -> list:
    counts = Counter()
    for e in entries:
        counts.update({t.strip().lower() for t in entry_themes(e) if t.strip()})
    return [{"theme": t, "count": c} for t, c in counts.most_common()]


def daily_trend(entries) -> list:
    """Per-entry rows of date, pain level and tone, oldest first."""
    rows = []
    for e in sorted(entries, key=lambda x: to_canonical_date(x.date)):
        rows.append({
            "date": to_canonical_date(e.date),
            "pain": e.pain_level,
            "tone": analyze_sentiment(e.entry_text)["compound"],
        })
    return rows

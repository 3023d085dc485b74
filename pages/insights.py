# Insights tab: mood calendar, day detail, recurring themes, pain and tone trend.
import streamlit as st
import pandas as pd
from datetime import datetime, timedelta
from calendar import monthrange

import sentiment
import ui
from dates import day_start_ms, is_same_day, to_canonical_date

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def day_moods(entries) -> dict:
    """Day-start ms -> mood of the latest entry written that day."""
    out = {}
    for e in sorted(entries, key=lambda x: to_canonical_date(x.date), reverse=True):
        out.setdefault(day_start_ms(e.date), e.mood)
    return out


def month_cells(year: int, month: int) -> list:
    """Calendar grid rows for a month, Sunday first; None pads empty cells."""
    pad = (datetime(year, month, 1).weekday() + 1) % 7
    _, ndays = monthrange(year, month)
    cells = [None] * pad + [datetime(year, month, d) for d in range(1, ndays + 1)]
    while len(cells) % 7:
        cells.append(None)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def _shift_month(first: datetime, delta: int) -> datetime:
    if delta < 0:
        prev = first - timedelta(days=1)
        return datetime(prev.year, prev.month, 1)
    return datetime(first.year + 1, 1, 1) if first.month == 12 else datetime(first.year, first.month + 1, 1)


def _render_calendar(moods, month_first):
    st.markdown(f"**{month_first.strftime('%B %Y')}**")
    col_prev, col_next = st.columns(2)
    with col_prev:
        if st.button("← Previous month", key="cal_prev"):
            st.session_state.insights_month = _shift_month(month_first, -1)
            st.rerun()
    with col_next:
        if st.button("Next month →", key="cal_next"):
            st.session_state.insights_month = _shift_month(month_first, 1)
            st.rerun()
    header_cols = st.columns(7)
    for i, wd in enumerate(WEEKDAYS):
        with header_cols[i]:
            st.markdown(f'<p class="insights-cal-weekday">{wd}</p>', unsafe_allow_html=True)
    for row in month_cells(month_first.year, month_first.month):
        cols = st.columns(7)
        for j, cell in enumerate(row):
            with cols[j]:
                if cell is None:
                    st.write("")
                    continue
                mood = moods.get(day_start_ms(cell))
                em = ui.MOOD_EMOJI.get(mood, "") if mood else ""
                if st.button(f"{cell.day} {em}".strip(), key=f"cal_{cell.date().isoformat()}"):
                    st.session_state.insights_selected_day = cell
                    st.rerun()
    st.caption("  ".join(f"{em} {mood.value}" for mood, em in ui.MOOD_EMOJI.items()))


def _render_day(entries, day):
    st.markdown(f"### {ui.format_day(day)}")
    if st.button("× Close", key="day_close"):
        st.session_state.insights_selected_day = None
        st.rerun()
    on_day = [e for e in entries if is_same_day(e.date, day)]
    if not on_day:
        st.markdown("No entry for this day.")
    for e in on_day:
        st.markdown(f"{ui.mood_label(e.mood)} · Pain: {e.pain_level}/10")
        st.write(e.entry_text)
        if e.analysis is not None:
            st.caption(e.analysis.summary)
    nav_col1, nav_col2 = st.columns(2)
    with nav_col1:
        if st.button("← Previous day", key="day_prev"):
            st.session_state.insights_selected_day = day - timedelta(days=1)
            st.rerun()
    with nav_col2:
        if st.button("Next day →", key="day_next"):
            st.session_state.insights_selected_day = day + timedelta(days=1)
            st.rerun()


def render(identity, entries):
    if "insights_month" not in st.session_state:
        now = datetime.now()
        st.session_state.insights_month = datetime(now.year, now.month, 1)
    if "insights_selected_day" not in st.session_state:
        st.session_state.insights_selected_day = None

    st.markdown("### Your journey")
    st.caption("Your mood by day. Click a date to read that day's entry.")
    _render_calendar(day_moods(entries), st.session_state.insights_month)

    selected = st.session_state.insights_selected_day
    if selected is not None:
        st.markdown("---")
        _render_day(entries, selected)

    st.markdown("### Recurring themes")
    st.caption("Topics that appear often. Top 5 below.")
    theme_data = sentiment.aggregate_themes(entries)[:5]
    if theme_data:
        st.bar_chart(pd.DataFrame(theme_data).set_index("theme"), y="count", x_label="Theme", y_label="Count")
    else:
        st.caption("Write more entries to see themes here.")

    st.markdown("### Pain and tone over time")
    trend = sentiment.daily_trend(entries)
    if len(trend) >= 2:
        st.line_chart(pd.DataFrame(trend).set_index("date"))
    else:
        st.caption("A trend appears after a couple of check-ins.")

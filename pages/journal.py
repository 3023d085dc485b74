# Journal tab: every entry, newest first, with its analysis.
import streamlit as st

import checkin
import cta
import ui
from dates import to_canonical_date
from pages import home

PREVIEW_CHARS = 400


def _render_entry(entry):
    with st.container(border=True):
        head_col, meta_col = st.columns([3, 2])
        with head_col:
            st.markdown(f"**{ui.format_day(entry.date)}**")
        with meta_col:
            st.markdown(f"{ui.mood_label(entry.mood)} · Pain: {entry.pain_level}/10")
        st.write(ui.truncate_text(entry.entry_text, PREVIEW_CHARS))
        if len(entry.entry_text) > PREVIEW_CHARS:
            with st.expander("Read full entry"):
                st.write(entry.entry_text)
        if entry.analysis is None:
            st.caption("Saved without analysis.")
            return
        st.markdown(f"✨ _{entry.analysis.summary}_")
        if entry.analysis.themes:
            st.caption("Themes: " + ", ".join(entry.analysis.themes))
        if entry.analysis.emotions:
            st.caption("Emotions: " + ", ".join(entry.analysis.emotions))


def render(identity, entries):
    st.markdown("### Your journal")
    if not checkin.has_today_check_in(identity):
        config = cta.select_cta(cta.build_user_context(identity, entries))
        if st.button(config.text, key="journal_cta"):
            home.handle_cta_action(identity, entries, config.action)

    if not entries:
        st.info("No entries yet. Your journal entries will appear here once you start writing.")
        return
    for entry in sorted(entries, key=lambda e: to_canonical_date(e.date), reverse=True):
        _render_entry(entry)

# Check-In tab: today's prompt, mood/pain/text form.
import asyncio

import streamlit as st

import checkin
import db
import prompts
import ui
from models import CheckInData, Mood, PromptContext


def prepare_prompt(identity, entries, recent_thoughts=None, force_new=False) -> None:
    """Set the check-in prompt: a generated one when due, a quick one otherwise."""
    profile = db.get_user_profile(identity.user_id)
    history = profile["prompt_history"]
    if force_new or recent_thoughts or prompts.should_generate_new_prompt(profile["last_prompt_date"], history):
        context = PromptContext(
            recent_thoughts=recent_thoughts,
            recent_entries=entries[:5],
            prompt_history=history,
        )
        result = asyncio.run(prompts.generate_reflection_prompt(context))
        if result.success:
            db.merge_user_profile(identity.user_id, prompt_history=prompts.remember_prompt(history, result.prompt))
        st.session_state.current_prompt = result.prompt
    else:
        st.session_state.current_prompt = prompts.get_quick_check_in_prompt()


def render(identity, entries):
    if checkin.has_today_check_in(identity):
        st.info(ui.MESSAGES["already_checked_in"])
        return

    prompt = st.session_state.get("current_prompt") or prompts.get_quick_check_in_prompt()
    st.session_state.current_prompt = prompt
    st.markdown("**Today's prompt**")
    st.info(prompt)

    with st.form("check_in"):
        mood = st.radio(
            "How are you feeling?",
            list(Mood),
            index=list(Mood).index(Mood.OKAY),
            format_func=ui.mood_label,
            horizontal=True,
        )
        pain = st.slider("Pain level", min_value=0, max_value=10, value=3, help="0 = no pain, 10 = severe pain")
        text = st.text_area(
            "Your thoughts",
            placeholder="Let it all out... What's on your mind today?",
            height=180,
        )
        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("Save check-in", type="primary")
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        st.session_state.pop("current_prompt", None)
        st.session_state.page = "Home"
        st.rerun()
    if not submitted:
        return
    try:
        with st.spinner("Saving your check-in…"):
            result = asyncio.run(
                checkin.record_daily_check_in(identity, CheckInData(mood=mood, pain_level=int(pain), entry_text=text))
            )
    except ValueError as e:
        st.error(str(e))
        return
    if not result.success:
        st.error(result.error or ui.MESSAGES["check_in_error"])
        return
    ui.flash("success", ui.MESSAGES["check_in_saved"])
    if result.analysis_error:
        ui.flash("warning", ui.MESSAGES["analysis_skipped"])
    st.session_state.pop("current_prompt", None)
    st.session_state.page = "Home"
    st.rerun()

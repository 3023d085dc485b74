# Home tab: the one next step, or the companion chat once today's check-in is done.
import asyncio

import streamlit as st

import cta
import llm
import ui
from models import CTAAction
from pages import check_in

GREETING = "Hello! I'm Havyn, your personal companion. How are you feeling today? What's on your mind?"


def handle_cta_action(identity, entries, action: CTAAction) -> None:
    if action == CTAAction.START_JOURNAL:
        check_in.prepare_prompt(identity, entries)
        st.session_state.page = "Check-In"
    elif action == CTAAction.CONTINUE_JOURNAL:
        st.session_state.page = "Journal"
    elif action == CTAAction.VIEW_INSIGHTS:
        st.session_state.page = "Insights"
    else:
        st.session_state.page = "Check-In"
    st.rerun()


def _render_chat(identity, entries):
    if "chat" not in st.session_state:
        st.session_state.chat = [{"role": "assistant", "content": GREETING, "prompt": None}]
    for i, msg in enumerate(st.session_state.chat):
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])
            if msg.get("prompt"):
                if st.button("Start journaling", key=f"chat_start_{i}"):
                    check_in.prepare_prompt(identity, entries, recent_thoughts=msg["prompt"])
                    st.session_state.page = "Check-In"
                    st.rerun()

    message = st.chat_input("Share what's on your mind…")
    if message and message.strip():
        try:
            with st.spinner("Havyn is thinking…"):
                reply = asyncio.run(llm.chat_reply(message.strip()))
        except Exception as e:
            st.error(f"{ui.MESSAGES['prompt_error']} ({e})")
            return
        st.session_state.chat.append({"role": "user", "content": message.strip(), "prompt": None})
        st.session_state.chat.append({"role": "assistant", "content": f'"{reply}"', "prompt": reply})
        st.rerun()


def render(identity, entries):
    context = cta.build_user_context(identity, entries)
    if not cta.should_show_cta(context):
        _render_chat(identity, entries)
        return

    config = cta.select_cta(context)
    with st.container(border=True):
        st.markdown(f"### {config.text}")
        st.caption(config.context)
        if st.button(config.text, type="primary", key="cta_btn"):
            handle_cta_action(identity, entries, config.action)
    st.markdown(f"_{cta.get_encouragement_message(context)}_")

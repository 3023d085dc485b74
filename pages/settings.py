# Settings tab: AI toggle, export, sign out.
import json
import streamlit as st
from datetime import datetime

import auth
import config
from dates import to_canonical_date


def export_entries(entries) -> str:
    out = []
    for e in entries:
        out.append({
            "id": e.id,
            "date": to_canonical_date(e.date).isoformat(),
            "mood": e.mood.value,
            "painLevel": e.pain_level,
            "entryText": e.entry_text,
            "analysis": e.analysis.to_dict() if e.analysis else None,
        })
    return json.dumps(out, indent=2)


def render(identity, entries):
    st.markdown("### Settings")
    st.caption(f"Signed in as {identity.email}.")

    st.markdown("### AI")
    st.caption(
        "When enabled, your entries are sent to OpenAI to generate reflection prompts and "
        "to analyze themes and emotions. Check-ins are saved either way."
    )
    use_ai = st.toggle("Use AI", value=config.get_use_ai(), key="use_ai_toggle")
    if use_ai != config.get_use_ai():
        config.set_use_ai(use_ai)
        st.rerun()
    if use_ai and not config.get_server_api_key():
        st.warning("OpenAI API key not set. Set OPENAI_API_KEY in .env or environment.")

    st.markdown("### Export your data")
    st.caption("Download all of your entries as JSON. The file is not encrypted.")
    st.download_button(
        "Download JSON",
        data=export_entries(entries),
        file_name=f"havyn-export-{datetime.now().strftime('%Y-%m-%d')}.json",
        mime="application/json",
        key="download_export",
        disabled=not entries,
    )

    st.markdown("### Account")
    if st.button("Sign out", key="settings_signout"):
        auth.sign_out()
        st.rerun()

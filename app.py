# Havyn entry point: config, auth gate, header, tab routing.
import streamlit as st
from pathlib import Path

import auth
import db
import logs
import ui
from streak import calculate_streak

APP_NAME = "Havyn"
TAGLINE = "Your safe space to reflect"
FOOTER_TEXT = "Your entries are encrypted with your passphrase. Only you can read them."
NAV_TABS = ["Home", "Check-In", "Journal", "Insights", "Settings"]

st.set_page_config(
    page_title=APP_NAME,
    page_icon="🌿",
    layout="centered",
    initial_sidebar_state="collapsed",
)
_css_path = Path(__file__).resolve().parent / "styles.css"
st.markdown(f"<style>\n{_css_path.read_text()}\n</style>", unsafe_allow_html=True)

if "db_inited" not in st.session_state:
    logs.setup_logger()
    db.init_db()
    st.session_state.db_inited = True

if "page" not in st.session_state:
    st.session_state.page = "Home"


def _render_header(identity, streak):
    top_col1, top_col2 = st.columns([3, 1])
    with top_col1:
        st.markdown(f"# {APP_NAME}")
        st.markdown(f'<p class="tagline">{TAGLINE}</p>', unsafe_allow_html=True)
    with top_col2:
        streak_col, out_col = st.columns([1, 1])
        with streak_col:
            st.markdown(f"**🔥 {streak}**")
        with out_col:
            if st.button("Sign out", key="signout_btn"):
                auth.sign_out()
                st.rerun()
        st.caption(identity.email)
    with st.container(key="nav_tabs"):
        tab_cols = st.columns(len(NAV_TABS))
        for i, tab in enumerate(NAV_TABS):
            with tab_cols[i]:
                is_active = st.session_state.page == tab
                if st.button(tab, key=f"nav_{tab}", type="primary" if is_active else "secondary"):
                    st.session_state.page = tab
                    st.rerun()
    st.markdown('<hr class="nav-tabs-separator" />', unsafe_allow_html=True)


def main():
    identity = auth.current_identity()
    if identity is None:
        st.markdown(f"# {APP_NAME}")
        st.markdown(f"**{TAGLINE}**")
        with st.container(key="auth_card"):
            auth.render_auth()
        st.caption(FOOTER_TEXT)
        return

    # Recomputed from the store on every run.
    entries = db.get_all_entries(identity)
    _render_header(identity, calculate_streak(entries))
    ui.show_flash()

    page = st.session_state.page
    if page == "Home":
        from pages import home
        home.render(identity, entries)
    elif page == "Check-In":
        from pages import check_in
        check_in.render(identity, entries)
    elif page == "Journal":
        from pages import journal
        journal.render(identity, entries)
    elif page == "Insights":
        from pages import insights
        insights.render(identity, entries)
    else:
        from pages import settings
        settings.render(identity, entries)
    st.caption(FOOTER_TEXT)


if __name__ == "__main__":
    main()

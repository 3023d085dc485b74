# Email + passphrase accounts, sign-in/sign-up UI.
import sqlite3

import streamlit as st
from loguru import logger

import crypto
import db
from models import UserIdentity

MIN_PASSPHRASE_LENGTH = 8


class AuthError(Exception):
    pass


def _normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if "@" not in email:
        raise AuthError("Enter a valid email address.")
    return email


def sign_up(email: str, passphrase: str) -> UserIdentity:
    email = _normalize_email(email)
    if len(passphrase or "") < MIN_PASSPHRASE_LENGTH:
        raise AuthError(f"Passphrase must be at least {MIN_PASSPHRASE_LENGTH} characters.")
    if db.get_user_by_email(email):
        raise AuthError("An account with this email already exists.")
    salt = crypto.new_salt()
    key = crypto.derive_key(passphrase, salt)
    check_cipher, check_iv = crypto.make_check_value(key)
    try:
        uid = db.create_user(email, salt, check_cipher, check_iv)
    except sqlite3.IntegrityError as e:
        raise AuthError("An account with this email already exists.") from e
    logger.info("Created account {}", uid)
    return UserIdentity(user_id=uid, email=email, key=key)


def sign_in(email: str, passphrase: str) -> UserIdentity:
    email = _normalize_email(email)
    user = db.get_user_by_email(email)
    if not user:
        raise AuthError("Incorrect email or passphrase.")
    key = crypto.derive_key(passphrase or "", user["salt"])
    if not crypto.verify_check_value(user["check_cipher"], user["check_iv"], key):
        logger.info("Failed sign-in for {}", user["id"])
        raise AuthError("Incorrect email or passphrase.")
    return UserIdentity(user_id=user["id"], email=email, key=key)


def current_identity() -> UserIdentity | None:
    return st.session_state.get("identity")


def sign_out() -> None:
    for k in list(st.session_state.keys()):
        del st.session_state[k]


def render_auth() -> None:
    st.markdown("### Welcome to your safe space")
    sign_in_tab, sign_up_tab = st.tabs(["Sign in", "Create account"])
    with sign_in_tab:
        with st.form("sign_in"):
            email = st.text_input("Email", key="signin_email")
            p = st.text_input("Passphrase", type="password", key="signin_p")
            if st.form_submit_button("Sign in"):
                try:
                    st.session_state.identity = sign_in(email, p)
                    st.rerun()
                except AuthError as e:
                    st.error(str(e))
    with sign_up_tab:
        with st.form("sign_up"):
            email = st.text_input("Email", key="signup_email")
            p1 = st.text_input(
                "Passphrase", type="password", placeholder="At least 8 characters", key="signup_p1"
            )
            p2 = st.text_input("Confirm passphrase", type="password", key="signup_p2")
            if st.form_submit_button("Create account"):
                if p1 != p2:
                    st.error("Passphrases do not match.")
                else:
                    try:
                        st.session_state.identity = sign_up(email, p1)
                        st.rerun()
                    except AuthError as e:
                        st.error(str(e))

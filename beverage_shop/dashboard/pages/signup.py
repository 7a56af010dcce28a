import streamlit as st

from beverage_shop.backend import BackendError

from ..utils.navigation import page_link
from ..utils.session import get_auth_service, set_session


def render():
    st.title("Sign Up")

    with st.form("signup_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign Up", use_container_width=True)

    if submitted:
        if not email.strip() or not password:
            st.error("Email and password are required.")
            return
        try:
            session = get_auth_service().sign_up(email.strip(), password)
        except BackendError as e:
            st.error(f"Error signing up: {e.message}")
            return
        if session is None:
            st.success("Account created. Check your email to confirm it, then log in.")
            return
        set_session(session)
        st.rerun()

    page_link("login", label="Already have an account? Log in")

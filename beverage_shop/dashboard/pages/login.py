import streamlit as st

from beverage_shop.backend import BackendError

from ..utils.navigation import page_link
from ..utils.session import get_auth_service, set_session


def render():
    st.title("Login")

    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", use_container_width=True)

    if submitted:
        try:
            session = get_auth_service().sign_in(email.strip(), password)
        except BackendError:
            st.error("Failed to log in. Did you confirm your email?")
            return
        set_session(session)
        st.toast("Logged in successfully!")
        st.rerun()

    page_link("signup", label="Don't have an account? Sign up")

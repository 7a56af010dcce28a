import streamlit as st

from ..utils.navigation import page_link
from ..utils.session import sign_out_button


def render(session):
    st.title(f"Welcome to Your Dashboard, {session.email}")
    st.markdown("Manage your orders and admin settings seamlessly.")

    col1, col2 = st.columns(2)
    page_link("ordering", label="Place Your Order", icon="🛒", container=col1)
    if session.is_admin:
        page_link("admin", label="Admin Panel", icon="🛡️", container=col2)

    st.markdown("---")
    sign_out_button(session, key="home_sign_out")

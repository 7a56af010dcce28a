import streamlit as st

from ..utils.navigation import page_link
from ..utils.session import sign_out_button


def render(session):
    st.title("🛡️ Admin Dashboard")
    st.markdown(f"Signed in as **{session.email}**")

    col1, col2 = st.columns(2)
    page_link("add_drink", label="Add New Drink", icon="➕", container=col1)
    page_link("sales_analytics", label="Sales Analytics", icon="📊", container=col2)

    st.markdown("---")
    sign_out_button(session, key="admin_sign_out")

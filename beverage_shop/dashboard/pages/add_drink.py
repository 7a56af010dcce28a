import streamlit as st

from beverage_shop.backend import BackendError

from ..utils.data_loaders import clear_cache
from ..utils.navigation import page_link
from ..utils.session import call_with_session, get_repository


def render(session):
    page_link("admin", label="← Back to Admin")
    st.title("Add New Drink")

    with st.form("add_drink_form", clear_on_submit=True):
        name = st.text_input("Drink Name", placeholder="e.g., Classic Milk Tea")
        description = st.text_area("Description", placeholder="Describe the drink...")
        price = st.number_input("Price ($)", min_value=0.0, step=0.01, format="%.2f")
        submitted = st.form_submit_button("Add Drink", use_container_width=True)

    if not submitted:
        return
    try:
        call_with_session(
            session,
            lambda token: get_repository().add_drink(name, description, price, access_token=token),
        )
    except ValueError as e:
        st.error(str(e))
        return
    except BackendError as e:
        st.error(f"Error adding drink: {e.message}")
        return
    clear_cache()
    st.success(f'Drink "{name.strip()}" added successfully!')

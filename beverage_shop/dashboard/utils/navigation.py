import streamlit as st

PAGES_KEY = "pages"


def register_pages(pages):
    """Remember this run's st.Page objects by name so pages can link to each other."""
    st.session_state[PAGES_KEY] = pages


def page_link(name, label, icon=None, container=None):
    page = st.session_state.get(PAGES_KEY, {}).get(name)
    if page is None:
        # not visible to the current user
        return
    (container or st).page_link(page, label=label, icon=icon)

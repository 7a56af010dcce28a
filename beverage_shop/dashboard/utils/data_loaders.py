import logging

import streamlit as st

from beverage_shop.backend import BackendError, SessionExpiredError
from beverage_shop.config import ConfigError, get_settings

from .session import call_with_session, get_repository

logger = logging.getLogger(__name__)

CACHE_TTL = get_settings().cache_ttl


# -----------------------------
# Cached fetches
# -----------------------------
@st.cache_data(ttl=CACHE_TTL, show_spinner=False)
def fetch_sales(access_token=None):
    return get_repository().fetch_sales(access_token)


@st.cache_data(ttl=CACHE_TTL, show_spinner=False)
def fetch_menu(access_token=None):
    return get_repository().fetch_menu(access_token)


def clear_cache():
    """Drop cached rows after this session wrote to the backend."""
    fetch_sales.clear()
    fetch_menu.clear()


# -----------------------------
# Loaders used by the pages
# -----------------------------
def load_sales(session=None):
    """
    Returns ``(records, error)``. On failure records is empty and error is a
    message for the user; aggregation should not be attempted.
    """
    try:
        return call_with_session(session, fetch_sales), None
    except SessionExpiredError as e:
        return [], e.message
    except (BackendError, ConfigError) as e:
        logger.error("Error fetching sales data: %s", e)
        return [], "Failed to fetch sales data."


def load_menu(session=None):
    try:
        return call_with_session(session, fetch_menu), None
    except SessionExpiredError as e:
        return [], e.message
    except (BackendError, ConfigError) as e:
        logger.error("Error fetching menu: %s", e)
        return [], "Failed to fetch menu."

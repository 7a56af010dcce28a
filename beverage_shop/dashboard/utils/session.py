import logging

import streamlit as st

from beverage_shop.backend import BackendError, SessionExpiredError, get_client
from beverage_shop.backend.auth import AuthService
from beverage_shop.backend.repository import ShopRepository
from beverage_shop.cart import Cart
from beverage_shop.config import get_settings

logger = logging.getLogger(__name__)

SESSION_KEY = "session"
CART_KEY = "cart"


@st.cache_resource
def get_repository() -> ShopRepository:
    return ShopRepository(get_client())


@st.cache_resource
def get_auth_service() -> AuthService:
    return AuthService(get_client(), redirect_to=get_settings().signup_redirect_url)


# -----------------------------
# Per-browser state
# -----------------------------
def get_session():
    return st.session_state.get(SESSION_KEY)


def set_session(session):
    st.session_state[SESSION_KEY] = session


def get_cart() -> Cart:
    if CART_KEY not in st.session_state:
        st.session_state[CART_KEY] = Cart()
    return st.session_state[CART_KEY]


def end_session():
    st.session_state.pop(SESSION_KEY, None)
    st.session_state.pop(CART_KEY, None)


def call_with_session(session, call):
    """
    Run ``call(access_token)`` for the signed-in user.

    When the backend rejects the access token (401) the session is refreshed
    in place and the call retried once. If the refresh is refused the session
    is dropped, so the next run shows the login page, and
    SessionExpiredError is raised.
    """
    if session is None:
        return call(None)
    try:
        return call(session.access_token)
    except BackendError as e:
        if e.status_code != 401:
            raise
        logger.info("Access token for %s was rejected, refreshing", session.email)

    try:
        get_auth_service().refresh(session)
    except SessionExpiredError:
        end_session()
        raise
    return call(session.access_token)


def sign_out(session):
    try:
        get_auth_service().sign_out(session)
    except BackendError as e:
        logger.error("Error signing out: %s", e.message)
        st.error("Error signing out. Please try again.")
        return
    end_session()
    st.rerun()


def sign_out_button(session, key="sign_out"):
    if st.button("Sign Out", key=key, type="secondary"):
        sign_out(session)

import streamlit as st

from beverage_shop.backend.auth import allowed_pages
from beverage_shop.config import ConfigError
from beverage_shop.dashboard.pages import (
    add_drink,
    admin,
    home,
    login,
    ordering,
    sales_analytics,
    signup,
)
from beverage_shop.dashboard.utils.navigation import register_pages
from beverage_shop.dashboard.utils.session import get_repository, get_session, sign_out_button
from beverage_shop.logger import setup_logger

# ---------------- CONFIG ----------------
st.set_page_config(page_title="Beverage Shop", page_icon="🧋", layout="wide")
logger = setup_logger()

try:
    get_repository()
except ConfigError as e:
    st.error(str(e))
    st.stop()

session = get_session()


# ---------------- PAGES ----------------
def login_page():
    login.render()


def signup_page():
    signup.render()


def home_page():
    home.render(session)


def ordering_page():
    ordering.render(session)


def admin_page():
    admin.render(session)


def add_drink_page():
    add_drink.render(session)


def sales_analytics_page():
    sales_analytics.render(session)


PAGE_DEFS = {
    "login": (login_page, "Login", "🔑"),
    "signup": (signup_page, "Sign Up", "📝"),
    "home": (home_page, "Dashboard", "🏠"),
    "ordering": (ordering_page, "Order", "🛒"),
    "admin": (admin_page, "Admin", "🛡️"),
    "add_drink": (add_drink_page, "Add Drink", "➕"),
    "sales_analytics": (sales_analytics_page, "Sales Analytics", "📊"),
}

pages = {}
for name in allowed_pages(session):
    func, title, icon = PAGE_DEFS[name]
    pages[name] = st.Page(func, title=title, icon=icon, url_path=name,
                          default=not pages)
register_pages(pages)

# ---------------- SIDEBAR ----------------
with st.sidebar:
    st.markdown("## 🧋 Beverage Shop")
    if session is not None:
        st.caption(f"{session.email} ({session.role or 'no role'})")
        sign_out_button(session, key="sidebar_sign_out")

st.navigation(list(pages.values())).run()

st.markdown("---")
st.caption("Beverage Shop © 2026 | Powered by Streamlit + Supabase")

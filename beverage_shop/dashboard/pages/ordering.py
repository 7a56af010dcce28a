import pandas as pd
import streamlit as st

from beverage_shop.backend import BackendError

from ..utils.data_loaders import clear_cache, load_menu
from ..utils.session import call_with_session, get_cart, get_repository

MENU_COLUMNS = 3


def cart_frame(cart) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Drink Name": item.drink_name,
                "Quantity": item.quantity,
                "Unit Price": f"${item.unit_price:.2f}",
                "Subtotal": f"${item.subtotal:.2f}",
            }
            for item in cart.items
        ],
        columns=["Drink Name", "Quantity", "Unit Price", "Subtotal"],
    )


def render(session):
    st.title("🧋 Bubble Tea Menu")
    cart = get_cart()

    if st.session_state.pop("order_success", False):
        st.success("Order placed successfully!")

    with st.spinner("Loading menu..."):
        menu, error = load_menu(session)
    if error:
        st.error(f"Error: {error}")
    elif not menu:
        st.info("The menu is empty.")

    # ---------------- MENU ----------------
    for start in range(0, len(menu), MENU_COLUMNS):
        cols = st.columns(MENU_COLUMNS)
        for col, item in zip(cols, menu[start:start + MENU_COLUMNS]):
            with col.container(border=True):
                st.subheader(item.name)
                st.write(item.description)
                st.markdown(f"**${item.unit_price:.2f}**")
                if st.button("Add to Order", key=f"add_{item.id}_{item.name}"):
                    cart.add(item)
                    st.rerun()

    # ---------------- CART ----------------
    st.markdown("## Your Order")
    if cart.is_empty:
        st.write("No items in cart.")
        return

    st.dataframe(cart_frame(cart), hide_index=True, use_container_width=True)
    remove_cols = st.columns(len(cart.items))
    for col, item in zip(remove_cols, list(cart.items)):
        if col.button(f"− {item.drink_name}", key=f"remove_{item.drink_name}"):
            cart.remove(item.drink_name)
            st.rerun()

    st.markdown(f"### Total: ${cart.total():.2f}")
    if st.button("Place Order", type="primary"):
        try:
            call_with_session(
                session, lambda token: get_repository().place_order(cart, access_token=token)
            )
        except BackendError as e:
            st.error(f"Error placing order: {e.message}")
            return
        cart.clear()
        clear_cache()
        st.session_state["order_success"] = True
        st.rerun()

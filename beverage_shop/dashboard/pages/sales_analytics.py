import streamlit as st

from beverage_shop.config import GRANULARITIES, get_settings
from beverage_shop.reports import (
    aggregate_drink_quantities,
    aggregate_drink_revenue,
    aggregate_sales,
    summarize_sales,
)

from ..utils.charts import quantity_pie_chart, revenue_bar_chart, sales_line_chart
from ..utils.data_loaders import load_menu, load_sales


def render(session):
    st.title("📊 Sales Analytics")

    records, error = load_sales(session)
    if error:
        st.error(error)
        return
    if not records:
        st.info("No sales data available yet.")
        return

    # ---------------- KPIs ----------------
    summary = summarize_sales(records)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Gross Sales", f"${summary.gross_sales:,.2f}")
    col2.metric("Orders", summary.order_count)
    col3.metric("Drinks Sold", summary.units_sold)
    col4.metric("Avg Order Value", f"${summary.average_order_value:,.2f}")

    # ---------------- Sales over time ----------------
    st.markdown("### 📈 Sales Over Time")
    timeframe = st.radio(
        "Timeframe", GRANULARITIES, horizontal=True,
        format_func=str.capitalize, key="timeframe",
    )
    skipped = []
    points = aggregate_sales(records, timeframe, tz=get_settings().report_timezone, skipped=skipped)
    if skipped:
        st.warning(f"{len(skipped)} sale(s) with an invalid date were left out of the chart.")
    if points:
        st.plotly_chart(sales_line_chart(points, timeframe), use_container_width=True)
    else:
        st.info("No dated sales to chart.")

    # ---------------- Per drink ----------------
    col_a, col_b = st.columns(2)

    with col_a:
        menu, menu_error = load_menu(session)
        if menu_error:
            st.error(menu_error)
        elif not menu:
            st.error("Menu data is unavailable.")
        else:
            revenue = aggregate_drink_revenue(records, menu)
            if revenue:
                st.plotly_chart(revenue_bar_chart(revenue), use_container_width=True)
            else:
                st.info("No revenue data available for the Bar Chart.")

    with col_b:
        quantities = aggregate_drink_quantities(records)
        if quantities:
            st.plotly_chart(quantity_pie_chart(quantities), use_container_width=True)
        else:
            st.info("No data available for the Pie Chart.")

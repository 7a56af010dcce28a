import pandas as pd
import plotly.express as px

TIMEFRAME_TITLES = {
    "daily": "Daily Sales ($)",
    "weekly": "Weekly Sales ($)",
    "monthly": "Monthly Sales ($)",
}


# -----------------------------
# Frames
# -----------------------------
def sales_frame(points) -> pd.DataFrame:
    return pd.DataFrame(
        [{"period": p.period, "total_sales": float(p.total_sales)} for p in points],
        columns=["period", "total_sales"],
    )


def quantity_frame(rows) -> pd.DataFrame:
    return pd.DataFrame(
        [{"drink": r.drink_name, "quantity": r.quantity} for r in rows],
        columns=["drink", "quantity"],
    )


def revenue_frame(rows) -> pd.DataFrame:
    return pd.DataFrame(
        [{"drink": r.drink_name, "revenue": float(r.revenue)} for r in rows],
        columns=["drink", "revenue"],
    )


# -----------------------------
# Figures
# -----------------------------
def sales_line_chart(points, timeframe="daily"):
    df = sales_frame(points)
    fig = px.line(df, x="period", y="total_sales", markers=True,
                  title=TIMEFRAME_TITLES.get(timeframe, TIMEFRAME_TITLES["daily"]),
                  labels={"period": "Period", "total_sales": "Total Sales ($)"})
    fig.update_traces(hovertemplate="%{x}<br>$%{y:.2f}<extra></extra>")
    fig.update_xaxes(type="category")
    return fig


def revenue_bar_chart(rows):
    df = revenue_frame(rows)
    fig = px.bar(df, x="drink", y="revenue", color="drink", text_auto=".2f",
                 title="Revenue per Drink",
                 labels={"drink": "Drink", "revenue": "Revenue ($)"})
    fig.update_layout(showlegend=False)
    return fig


def quantity_pie_chart(rows):
    df = quantity_frame(rows)
    return px.pie(df, names="drink", values="quantity", title="Drinks Sold by Volume")

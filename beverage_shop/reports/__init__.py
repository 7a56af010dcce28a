from .aggregation import (
    aggregate_drink_quantities,
    aggregate_drink_revenue,
    aggregate_sales,
    period_key,
    summarize_sales,
)

__all__ = [
    "aggregate_drink_quantities",
    "aggregate_drink_revenue",
    "aggregate_sales",
    "period_key",
    "summarize_sales",
]

import logging
import re
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

import pandas as pd

from ..models import (
    DrinkQuantity,
    DrinkRevenue,
    MenuItem,
    SaleRecord,
    SalesSummary,
    TimeBucketTotal,
    round_money,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


# -----------------------------
# Name / time helpers
# -----------------------------
def display_name(name: str) -> str:
    return name.strip()


def match_key(name: str) -> str:
    return name.strip().lower()


def parse_timestamp(value, tz: str = DEFAULT_TIMEZONE) -> Optional[pd.Timestamp]:
    """
    Parse an ISO 8601 sale date. Returns None when it cannot be parsed,
    including partial dates and free-form text.

    Timestamps carrying an offset are converted to ``tz`` and made naive so
    that the day/week/month they fall in is the local one; naive timestamps
    are taken as they are.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not ISO_DATE_PREFIX.match(value):
        return None
    try:
        ts = pd.to_datetime(value, format="ISO8601", errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(tz).tz_localize(None)
    return ts


def period_key(ts: pd.Timestamp, granularity: str = "daily") -> str:
    if granularity == "weekly":
        monday = (ts - pd.Timedelta(days=ts.weekday())).date()
        iso_year, iso_week, _ = monday.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if granularity == "monthly":
        return f"{ts.year:04d}-{ts.month:02d}"
    if granularity != "daily":
        logger.debug("Unknown granularity %r, using daily", granularity)
    return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"


# -----------------------------
# Aggregators
# -----------------------------
def aggregate_sales(
    records: Sequence[SaleRecord],
    granularity: str = "daily",
    tz: str = DEFAULT_TIMEZONE,
    skipped: Optional[list] = None,
) -> List[TimeBucketTotal]:
    """
    Total sales per period (daily, weekly or monthly), ascending by period.

    Records whose timestamp cannot be parsed are left out of the totals and
    appended to ``skipped`` when the caller passes a list.
    """
    totals: Dict[str, Decimal] = {}
    for record in records:
        ts = parse_timestamp(record.timestamp, tz)
        if ts is None:
            logger.warning("Skipping sale %s: invalid sale_date %r", record.id, record.timestamp)
            if skipped is not None:
                skipped.append(record)
            continue
        key = period_key(ts, granularity)
        totals[key] = totals.get(key, Decimal("0")) + record.total_price

    return [
        TimeBucketTotal(period=key, total_sales=totals[key])
        for key in sorted(totals)
    ]


def aggregate_drink_quantities(records: Sequence[SaleRecord]) -> List[DrinkQuantity]:
    # names are trimmed but keep their casing; first-seen order
    quantities: Dict[str, int] = {}
    for record in records:
        for item in record.line_items:
            name = display_name(item.drink_name)
            quantities[name] = quantities.get(name, 0) + item.quantity

    return [DrinkQuantity(drink_name=name, quantity=qty) for name, qty in quantities.items()]


def _revenue_label(key, catalog_name, sales_name):
    if catalog_name and display_name(catalog_name) != key:
        return catalog_name
    return sales_name or catalog_name or key


def aggregate_drink_revenue(
    records: Sequence[SaleRecord],
    catalog: Sequence[MenuItem],
) -> List[DrinkRevenue]:
    """
    Revenue per known menu drink, priced at the current catalog price.

    Catalog names are matched case-insensitively after trimming. With
    duplicate names the last entry's price is used, while the first entry
    gives the display name; a catalog name written all in lower case carries
    no casing, so the name as first seen in the sales is shown instead.
    Drinks missing from the catalog are left out.
    """
    prices: Dict[str, Decimal] = {}
    names: Dict[str, str] = {}
    for menu_item in catalog:
        key = match_key(menu_item.name)
        prices[key] = menu_item.unit_price
        names.setdefault(key, menu_item.name)

    quantities: Dict[str, int] = {}
    seen_as: Dict[str, str] = {}
    for record in records:
        for item in record.line_items:
            key = match_key(item.drink_name)
            if key not in prices:
                logger.debug("Drink %r not found in menu, skipping", item.drink_name)
                continue
            quantities[key] = quantities.get(key, 0) + item.quantity
            seen_as.setdefault(key, display_name(item.drink_name))

    revenue = [
        DrinkRevenue(
            drink_name=_revenue_label(key, names.get(key), seen_as.get(key)),
            revenue=round_money(qty * prices[key]),
        )
        for key, qty in quantities.items()
    ]
    # sort is stable, ties keep first-seen order
    revenue.sort(key=lambda row: row.revenue, reverse=True)
    return revenue


def summarize_sales(records: Sequence[SaleRecord]) -> SalesSummary:
    if not records:
        return SalesSummary()

    gross = sum((record.total_price for record in records), Decimal("0"))
    units = sum(item.quantity for record in records for item in record.line_items)
    return SalesSummary(
        order_count=len(records),
        gross_sales=round_money(gross),
        units_sold=units,
        average_order_value=round_money(gross / len(records)),
    )

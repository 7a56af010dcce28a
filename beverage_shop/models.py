import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Convert a number coming from the backend to Decimal without float noise."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (Number, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}") from None
    else:
        raise ValueError(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def round_money(amount: Decimal) -> Decimal:
    # half away from zero, 2 decimals
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


# -----------------------------
# Source entities
# -----------------------------
@dataclass(frozen=True)
class MenuItem:
    name: str
    description: str
    unit_price: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class LineItem:
    drink_name: str
    quantity: int


@dataclass(frozen=True)
class SaleRecord:
    id: Any
    line_items: Tuple[LineItem, ...]
    total_price: Decimal
    # raw ISO 8601 string, parsed when bucketing
    timestamp: str


# -----------------------------
# Derived views
# -----------------------------
@dataclass(frozen=True)
class TimeBucketTotal:
    period: str
    total_sales: Decimal


@dataclass(frozen=True)
class DrinkQuantity:
    drink_name: str
    quantity: int


@dataclass(frozen=True)
class DrinkRevenue:
    drink_name: str
    revenue: Decimal


@dataclass(frozen=True)
class SalesSummary:
    order_count: int = 0
    gross_sales: Decimal = Decimal("0.00")
    units_sold: int = 0
    average_order_value: Decimal = Decimal("0.00")


# -----------------------------
# Session
# -----------------------------
@dataclass
class Session:
    user_id: str
    email: str
    access_token: str
    role: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass
class CartItem:
    drink_name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return round_money(self.unit_price * self.quantity)


# -----------------------------
# Boundary adapters
# -----------------------------
def _to_quantity(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Invalid quantity: {value!r}")


def _require_str(row: Dict[str, Any], key: str) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Missing or invalid {key!r}: {value!r}")
    return value


def parse_menu_item(row: Dict[str, Any]) -> MenuItem:
    if not isinstance(row, dict):
        raise ValueError(f"Menu row is not an object: {row!r}")
    description = row.get("description") or ""
    if not isinstance(description, str):
        raise ValueError(f"Invalid 'description': {description!r}")
    return MenuItem(
        id=row.get("id"),
        name=_require_str(row, "DrinkName"),
        description=description,
        unit_price=to_money(row.get("price")),
    )


def parse_sale_record(row: Dict[str, Any]) -> SaleRecord:
    if not isinstance(row, dict):
        raise ValueError(f"Sale row is not an object: {row!r}")
    details = row.get("Details")
    if not isinstance(details, list):
        raise ValueError(f"Missing or invalid 'Details': {details!r}")

    line_items = []
    for detail in details:
        if not isinstance(detail, dict):
            raise ValueError(f"Invalid order detail: {detail!r}")
        line_items.append(LineItem(
            drink_name=_require_str(detail, "DrinkName"),
            quantity=_to_quantity(detail.get("quantity")),
        ))

    return SaleRecord(
        id=row.get("id"),
        line_items=tuple(line_items),
        total_price=to_money(row.get("price")),
        timestamp=_require_str(row, "sale_date"),
    )


def _parse_rows(rows: Optional[Iterable[Dict[str, Any]]], parser, kind: str) -> list:
    parsed = []
    for row in rows or []:
        try:
            parsed.append(parser(row))
        except ValueError as e:
            logger.warning("Skipping malformed %s row: %s", kind, e)
    return parsed


def parse_menu_items(rows) -> List[MenuItem]:
    return _parse_rows(rows, parse_menu_item, "menu")


def parse_sale_records(rows) -> List[SaleRecord]:
    return _parse_rows(rows, parse_sale_record, "sales")

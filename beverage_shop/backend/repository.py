import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..cart import Cart
from ..config import MENU_TABLE, SALES_TABLE
from ..models import MenuItem, SaleRecord, parse_menu_items, parse_sale_records, round_money, to_money

logger = logging.getLogger(__name__)


class ShopRepository:
    """Reads and writes the shop's Menu and Sales tables."""

    def __init__(self, client):
        self.client = client

    # -----------------------------
    # Menu
    # -----------------------------
    def fetch_menu(self, access_token: Optional[str] = None) -> List[MenuItem]:
        rows = self.client.select(MENU_TABLE, "id,DrinkName,description,price",
                                  access_token=access_token)
        return parse_menu_items(rows)

    def add_drink(self, name: str, description: str, price, access_token: Optional[str] = None) -> Dict[str, Any]:
        name = (name or "").strip()
        description = (description or "").strip()
        try:
            amount = to_money(price)
        except ValueError:
            amount = None
        if not name or not description or amount is None or amount <= 0:
            raise ValueError("Please fill in all fields with valid data.")

        row = {
            "DrinkName": name,
            "description": description,
            "price": float(round_money(amount)),
        }
        created = self.client.insert(MENU_TABLE, [row], access_token=access_token)
        logger.info("Added drink %r at %s", name, row["price"])
        return created[0] if created else row

    # -----------------------------
    # Sales
    # -----------------------------
    def fetch_sales(self, access_token: Optional[str] = None) -> List[SaleRecord]:
        rows = self.client.select(SALES_TABLE, "*", access_token=access_token)
        return parse_sale_records(rows)

    def place_order(self, cart: Cart, access_token: Optional[str] = None, now: Optional[datetime] = None) -> Dict[str, Any]:
        if cart.is_empty:
            raise ValueError("Your cart is empty!")

        now = now or datetime.now(timezone.utc)
        row = {
            "Details": cart.details(),
            "price": float(cart.total()),
            "sale_date": now.isoformat(),
        }
        created = self.client.insert(SALES_TABLE, [row], access_token=access_token)
        logger.info("Order placed: %d line(s), total %s", len(row["Details"]), row["price"])
        return created[0] if created else row

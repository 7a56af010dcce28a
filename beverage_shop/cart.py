from decimal import Decimal
from typing import Dict, List, Optional

from .models import CartItem, MenuItem, round_money


class Cart:
    """Drinks picked on the ordering page, one line per drink name."""

    def __init__(self):
        self.items: List[CartItem] = []

    def _find(self, drink_name: str) -> Optional[CartItem]:
        return next((x for x in self.items if x.drink_name == drink_name), None)

    def add(self, menu_item: MenuItem) -> CartItem:
        existing = self._find(menu_item.name)
        if existing:
            existing.quantity += 1
            return existing
        item = CartItem(drink_name=menu_item.name, quantity=1, unit_price=menu_item.unit_price)
        self.items.append(item)
        return item

    def remove(self, drink_name: str) -> None:
        existing = self._find(drink_name)
        if existing is None:
            return
        if existing.quantity > 1:
            existing.quantity -= 1
        else:
            self.items.remove(existing)

    def total(self) -> Decimal:
        return round_money(sum((x.unit_price * x.quantity for x in self.items), Decimal("0")))

    def details(self) -> List[Dict[str, object]]:
        # shape stored in the Sales.Details column
        return [{"DrinkName": x.drink_name, "quantity": x.quantity} for x in self.items]

    @property
    def is_empty(self) -> bool:
        return not self.items

    def clear(self) -> None:
        self.items.clear()

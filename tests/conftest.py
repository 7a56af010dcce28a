from decimal import Decimal

import pytest

from beverage_shop.models import LineItem, MenuItem, SaleRecord


class FakeClient:
    """Stands in for SupabaseClient; records calls and serves canned rows."""

    def __init__(self, tables=None):
        self.tables = tables or {}
        self.selects = []
        self.inserts = []
        self.signed_out = []
        self.fail_on = set()
        self.sign_up_response = {}
        self.sign_in_response = {}
        self.refresh_response = {}
        self.refreshed = []

    def _maybe_fail(self, op):
        from beverage_shop.backend import BackendError

        if op in self.fail_on:
            raise BackendError(f"{op} failed", 500)

    def select(self, table, columns="*", filters=None, access_token=None):
        self._maybe_fail("select")
        self.selects.append((table, columns, filters, access_token))
        rows = self.tables.get(table, [])
        for column, value in (filters or {}).items():
            rows = [r for r in rows if r.get(column) == value]
        return rows

    def insert(self, table, rows, access_token=None):
        self._maybe_fail("insert")
        self.inserts.append((table, rows, access_token))
        created = [dict(r, id=i + 1) for i, r in enumerate(rows)]
        self.tables.setdefault(table, []).extend(created)
        return created

    def sign_up(self, email, password, redirect_to=None):
        self._maybe_fail("sign_up")
        return self.sign_up_response

    def sign_in_with_password(self, email, password):
        self._maybe_fail("sign_in")
        return self.sign_in_response

    def refresh_session(self, refresh_token):
        from beverage_shop.backend import AuthError

        if "refresh" in self.fail_on:
            raise AuthError("Invalid Refresh Token", 400)
        self.refreshed.append(refresh_token)
        return self.refresh_response

    def sign_out(self, access_token):
        self._maybe_fail("sign_out")
        self.signed_out.append(access_token)


def make_sale(items, price, sale_date="2024-03-01", sale_id=1):
    return SaleRecord(
        id=sale_id,
        line_items=tuple(LineItem(name, qty) for name, qty in items),
        total_price=Decimal(str(price)),
        timestamp=sale_date,
    )


def make_menu_item(name, price, description=""):
    return MenuItem(name=name, description=description, unit_price=Decimal(str(price)))


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def sample_sales():
    return [
        make_sale([("Milk Tea", 2), ("Taro Latte", 1)], "14.00", "2024-03-01T09:15:00", 1),
        make_sale([("milk tea ", 1)], "4.50", "2024-03-01T18:40:00", 2),
        make_sale([("Matcha", 3)], "15.00", "2024-03-04T12:00:00", 3),
        make_sale([("Taro Latte", 2), ("Mystery Brew", 1)], "13.00", "2024-04-10T08:00:00", 4),
    ]


@pytest.fixture
def sample_menu():
    return [
        make_menu_item("Milk Tea", "4.50"),
        make_menu_item("Taro Latte", "5.00"),
        make_menu_item("Matcha", "5.00"),
    ]

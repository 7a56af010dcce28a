from decimal import Decimal

import pytest

from beverage_shop.models import (
    LineItem,
    parse_menu_item,
    parse_menu_items,
    parse_sale_record,
    parse_sale_records,
    round_money,
    to_money,
)


def test_to_money_keeps_decimal_digits():
    assert to_money(1.005) == Decimal("1.005")
    assert to_money("4.50") == Decimal("4.50")
    assert to_money(3) == Decimal("3")


@pytest.mark.parametrize("value", [None, True, "abc", [], float("nan")])
def test_to_money_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_money(value)


def test_round_money_half_away_from_zero():
    assert round_money(Decimal("3.015")) == Decimal("3.02")
    assert round_money(Decimal("-3.015")) == Decimal("-3.02")
    assert round_money(Decimal("3.014")) == Decimal("3.01")


def test_parse_sale_record():
    record = parse_sale_record({
        "id": 7,
        "Details": [{"DrinkName": "Milk Tea", "quantity": 2}, {"DrinkName": "Matcha", "quantity": 1.0}],
        "price": 14.0,
        "sale_date": "2024-03-01T10:00:00+00:00",
    })
    assert record.id == 7
    assert record.line_items == (LineItem("Milk Tea", 2), LineItem("Matcha", 1))
    assert record.total_price == Decimal("14.0")
    assert record.timestamp == "2024-03-01T10:00:00+00:00"


@pytest.mark.parametrize("row", [
    {"Details": None, "price": 1, "sale_date": "2024-03-01"},
    {"Details": [{"quantity": 1}], "price": 1, "sale_date": "2024-03-01"},
    {"Details": [{"DrinkName": "A", "quantity": "2"}], "price": 1, "sale_date": "2024-03-01"},
    {"Details": [{"DrinkName": "A", "quantity": 1.5}], "price": 1, "sale_date": "2024-03-01"},
    {"Details": [{"DrinkName": "A", "quantity": True}], "price": 1, "sale_date": "2024-03-01"},
    {"Details": [], "price": None, "sale_date": "2024-03-01"},
    {"Details": [], "price": 1},
    "not a row",
])
def test_parse_sale_record_rejects_bad_shapes(row):
    with pytest.raises(ValueError):
        parse_sale_record(row)


def test_parse_sale_records_skips_bad_rows(caplog):
    rows = [
        {"id": 1, "Details": [{"DrinkName": "A", "quantity": 1}], "price": 2, "sale_date": "2024-03-01"},
        {"id": 2, "Details": "oops", "price": 2, "sale_date": "2024-03-01"},
    ]
    records = parse_sale_records(rows)
    assert [r.id for r in records] == [1]
    assert "Skipping malformed sales row" in caplog.text


def test_parse_sale_records_accepts_none():
    assert parse_sale_records(None) == []


def test_parse_menu_item():
    item = parse_menu_item({"id": 3, "DrinkName": "Taro Latte", "description": "Purple", "price": 5})
    assert item.name == "Taro Latte"
    assert item.unit_price == Decimal("5")
    assert item.description == "Purple"


def test_parse_menu_items_skips_rows_without_name():
    rows = [{"DrinkName": "A", "price": 1}, {"price": 2}, {"DrinkName": "B", "price": "x"}]
    assert [i.name for i in parse_menu_items(rows)] == ["A"]

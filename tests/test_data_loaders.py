import pytest

from beverage_shop.backend import BackendError
from beverage_shop.backend.auth import AuthService
from beverage_shop.dashboard.utils import data_loaders
from beverage_shop.dashboard.utils import session as session_utils
from beverage_shop.models import Session
from conftest import FakeClient, make_menu_item, make_sale


@pytest.fixture
def auth_client(monkeypatch):
    client = FakeClient()
    client.refresh_response = {"access_token": "fresh", "refresh_token": "r2"}
    monkeypatch.setattr(session_utils, "get_auth_service", lambda: AuthService(client))
    return client


@pytest.fixture
def ended(monkeypatch):
    calls = []
    monkeypatch.setattr(session_utils, "end_session", lambda: calls.append(True))
    return calls


def expiring_fetch(rows, seen):
    def fetch(token=None):
        seen.append(token)
        if token != "fresh":
            raise BackendError("JWT expired", 401)
        return rows

    return fetch


def test_load_sales_returns_records(monkeypatch):
    records = [make_sale([("Milk Tea", 1)], "4.50")]
    seen = []
    monkeypatch.setattr(data_loaders, "fetch_sales", lambda token=None: seen.append(token) or records)
    assert data_loaders.load_sales(Session("u1", "a@b.c", "tok")) == (records, None)
    assert seen == ["tok"]


def test_load_sales_failure_gives_empty_state(monkeypatch):
    def boom(token=None):
        raise BackendError("timeout")

    monkeypatch.setattr(data_loaders, "fetch_sales", boom)
    assert data_loaders.load_sales(Session("u1", "a@b.c", "tok")) == ([], "Failed to fetch sales data.")


def test_load_menu(monkeypatch):
    menu = [make_menu_item("Milk Tea", "4.50")]
    monkeypatch.setattr(data_loaders, "fetch_menu", lambda token=None: menu)
    assert data_loaders.load_menu() == (menu, None)


def test_load_menu_failure(monkeypatch):
    def boom(token=None):
        raise BackendError("down", 503)

    monkeypatch.setattr(data_loaders, "fetch_menu", boom)
    assert data_loaders.load_menu() == ([], "Failed to fetch menu.")


def test_expired_token_is_refreshed_and_retried(monkeypatch, auth_client, ended):
    records = [make_sale([("Milk Tea", 1)], "4.50")]
    seen = []
    monkeypatch.setattr(data_loaders, "fetch_sales", expiring_fetch(records, seen))
    session = Session("u1", "a@b.c", "stale", refresh_token="r1")

    assert data_loaders.load_sales(session) == (records, None)
    assert seen == ["stale", "fresh"]
    assert session.access_token == "fresh"
    assert session.refresh_token == "r2"
    assert auth_client.refreshed == ["r1"]
    assert ended == []


def test_refused_refresh_ends_session(monkeypatch, auth_client, ended):
    auth_client.fail_on.add("refresh")
    seen = []
    monkeypatch.setattr(data_loaders, "fetch_menu", expiring_fetch([], seen))
    session = Session("u1", "a@b.c", "stale", refresh_token="r1")

    assert data_loaders.load_menu(session) == ([], "Your session has expired. Please log in again.")
    assert seen == ["stale"]
    assert ended == [True]


def test_other_errors_do_not_refresh(monkeypatch, auth_client, ended):
    def boom(token=None):
        raise BackendError("forbidden", 403)

    monkeypatch.setattr(data_loaders, "fetch_sales", boom)
    session = Session("u1", "a@b.c", "tok", refresh_token="r1")
    assert data_loaders.load_sales(session) == ([], "Failed to fetch sales data.")
    assert auth_client.refreshed == []
    assert ended == []


def test_write_is_retried_after_refresh(auth_client, ended):
    session = Session("u1", "a@b.c", "stale", refresh_token="r1")
    seen = []
    assert session_utils.call_with_session(session, expiring_fetch("ok", seen)) == "ok"
    assert seen == ["stale", "fresh"]

import random

import requests

import pytest

from artvista.client import ApiClient, ArtVistaApp
from artvista.client.api_client import ApiError
from artvista.client.checkout import generate_order_number, shipping_fee


@pytest.fixture
def make_app(client):
    def _make():
        return ArtVistaApp(ApiClient(base_url="/api", session=client))

    return _make


@pytest.fixture
def seller_app(make_app):
    app = make_app()
    assert app.auth.register("Seller", "seller@example.com", "secret123")
    return app


@pytest.fixture
def buyer_app(make_app):
    app = make_app()
    app.auth.register("Buyer", "buyer@example.com", "secret123")
    return app


def test_auth_state_login_and_me(make_app, seller_app):
    app = make_app()

    assert app.login("seller@example.com", "secret123") is True
    assert app.auth.is_authenticated
    assert app.auth.fetch_me()["email"] == "seller@example.com"

    app.logout()
    assert app.auth.user is None
    assert app.cart.cart == {"items": [], "totalPrice": 0}


def test_auth_state_surfaces_server_message(make_app):
    app = make_app()

    assert app.login("ghost@example.com", "whatever1") is False
    assert app.auth.error == "Invalid credentials"
    assert not app.auth.is_authenticated


def test_fetch_me_with_bad_token_logs_out(make_app):
    app = make_app()
    app.client.token = "garbage"

    assert app.auth.fetch_me() is None
    assert app.auth.token is None


def test_catalog_create_list_and_delete(seller_app):
    art = seller_app.catalog.create(
        title="Dune",
        price=400,
        categories=["Painting", "Desert"],
        images=[("dune.png", b"png")],
    )

    assert art["categories"] == ["painting", "desert"]
    assert [a["title"] for a in seller_app.catalog.load(category="painting")] == ["Dune"]
    assert seller_app.catalog.categories == ["desert", "painting"]
    assert seller_app.catalog.total_pages == 1
    assert seller_app.catalog.update(art["id"], price=450)["price"] == 450
    assert [a["id"] for a in seller_app.catalog.mine()] == [art["id"]]

    assert seller_app.catalog.delete(art["id"]) is True
    assert seller_app.catalog.get(art["id"]) is None
    assert seller_app.catalog.error == "Art not found"


def test_cart_state_reconciles_with_server(seller_app, buyer_app):
    art = seller_app.catalog.create(title="A", price=100)

    cart = buyer_app.cart.add(art["id"], 2)

    assert cart["totalPrice"] == 200
    assert buyer_app.cart.total_items() == 2
    assert buyer_app.cart.is_in_cart(art["id"])
    assert buyer_app.cart.item_quantity(art["id"]) == 2
    assert buyer_app.cart.cart["items"][0]["art"]["title"] == "A"

    buyer_app.cart.update_quantity(art["id"], 5)
    assert buyer_app.cart.cart["totalPrice"] == 500

    buyer_app.cart.update_quantity(art["id"], 0)
    assert buyer_app.cart.cart["items"] == []


def test_cart_state_rolls_back_on_failure(seller_app, buyer_app):
    art = seller_app.catalog.create(title="A", price=100)
    buyer_app.cart.add(art["id"], 1)
    snapshot = buyer_app.cart.cart

    assert buyer_app.cart.add(99999, 1) is None

    assert buyer_app.cart.cart == snapshot
    assert buyer_app.cart.error == "Art not found"
    assert not buyer_app.cart.is_operation_loading("add", 99999)


def test_cart_state_requires_login(make_app):
    app = make_app()

    assert app.cart.add(1) is None
    assert app.cart.error == "Please login to modify cart"


def test_cart_state_applies_optimistically_before_remote(buyer_app, monkeypatch):
    seen = {}

    def fake_add(art_id, quantity):
        seen["during_call"] = buyer_app.cart.item_quantity(art_id)
        seen["loading"] = buyer_app.cart.is_operation_loading("add", art_id)
        raise ApiError(None, "Network error")

    monkeypatch.setattr(buyer_app.client, "add_to_cart", fake_add)

    assert buyer_app.cart.add(5, 3) is None
    assert seen == {"during_call": 3, "loading": True}
    assert buyer_app.cart.cart["items"] == []
    assert buyer_app.cart.error == "Network error"


def test_wishlist_state_toggle(seller_app, buyer_app):
    art = seller_app.catalog.create(title="Star", price=10)

    assert buyer_app.wishlist.toggle(art["id"]) is True
    assert buyer_app.wishlist.is_in_wishlist(art["id"])
    assert buyer_app.wishlist.items[0]["title"] == "Star"

    assert buyer_app.wishlist.toggle(art["id"]) is True
    assert buyer_app.wishlist.items == []


def test_wishlist_state_rolls_back_duplicate(seller_app, buyer_app):
    art = seller_app.catalog.create(title="Star", price=10)
    buyer_app.wishlist.add(art["id"])
    before = list(buyer_app.wishlist.items)

    # lokalny stan nie wie o wpisie, serwer odrzuca duplikat
    buyer_app.wishlist.state = []
    assert buyer_app.wishlist.add(art["id"]) is False
    assert buyer_app.wishlist.error == "Art already in wishlist"
    assert buyer_app.wishlist.items == []

    buyer_app.wishlist.refresh()
    assert buyer_app.wishlist.items == before


def test_checkout_simulation_clears_cart(seller_app, buyer_app):
    a = seller_app.catalog.create(title="A", price=100)
    b = seller_app.catalog.create(title="B", price=40)
    buyer_app.cart.add(a["id"], 2)
    buyer_app.cart.add(b["id"], 1)

    order = buyer_app.checkout("express", processing_delay=0, rng=random.Random(1))

    assert order.subtotal == 240
    assert order.shipping == 100
    assert order.total == 340
    assert order.order_number.startswith("ORD-")
    assert len(order.order_number) == 10
    assert buyer_app.cart.cart["items"] == []
    assert buyer_app.cart.refresh()["items"] == []


def test_checkout_empty_cart_rejected(buyer_app):
    with pytest.raises(ValueError):
        buyer_app.checkout(processing_delay=0)


def test_shipping_fees_and_order_number():
    assert shipping_fee("standard") == 50
    assert shipping_fee("premium") == 150
    assert shipping_fee("teleport") == 50
    number = generate_order_number(random.Random(7))
    assert 100000 <= int(number[4:]) <= 999999


class FailingSession:
    def __init__(self, error):
        self.error = error
        self.calls = 0

    def request(self, method, url, **kwargs):
        self.calls += 1
        raise self.error


def test_get_retries_connection_errors_then_reports_network_error():
    session = FailingSession(requests.ConnectionError("refused"))
    api = ApiClient(base_url="http://artvista.invalid/api", session=session)

    with pytest.raises(ApiError) as exc:
        api.get_cart()

    assert exc.value.status is None
    assert exc.value.message == "Network error"
    assert session.calls == 3


def test_other_request_errors_are_not_retried():
    session = FailingSession(requests.Timeout("slow"))
    api = ApiClient(base_url="http://artvista.invalid/api", session=session)

    with pytest.raises(ApiError) as exc:
        api.get_cart()

    assert exc.value.message == "Network error"
    assert session.calls == 1

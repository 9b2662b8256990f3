import pytest
from sqlalchemy import update

from artvista.data.database import SessionLocal
from artvista.data.models.cart import CartModel
from artvista.domain.errors import ConflictError
from artvista.services.cart_service import CartService


@pytest.fixture
def seller(register, create_art):
    _, headers = register(name="Seller", email="seller@example.com")

    def _art(title="Piece", price="1000"):
        return create_art(headers, title=title, price=price)

    _art.headers = headers
    return _art


@pytest.fixture
def buyer(register):
    user_id, headers = register(name="Buyer", email="buyer@example.com")
    return user_id, headers


def test_get_without_cart_returns_empty_shape(client, buyer, db):
    _, headers = buyer

    resp = client.get("/api/cart", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["items"] == []
    assert resp.json()["totalPrice"] == 0
    # odczyt nie tworzy koszyka
    assert db.query(CartModel).count() == 0


def test_cart_requires_auth(client):
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/cart/add", json={"artId": 1}).status_code == 401


def test_add_creates_cart_and_computes_total(client, buyer, seller):
    _, headers = buyer
    a = seller(title="A", price="1000")
    b = seller(title="B", price="250.50")

    client.post("/api/cart/add", json={"artId": a["id"], "quantity": 2}, headers=headers)
    resp = client.post("/api/cart/add", json={"artId": b["id"]}, headers=headers)

    cart = resp.json()
    assert resp.status_code == 200
    assert cart["totalPrice"] == pytest.approx(2250.50)
    assert [(i["artId"], i["quantity"]) for i in cart["items"]] == [(a["id"], 2), (b["id"], 1)]
    assert cart["items"][0]["art"]["title"] == "A"


def test_add_same_art_increments_instead_of_duplicating(client, buyer, seller):
    _, headers = buyer
    art = seller(price="100")

    client.post("/api/cart/add", json={"artId": art["id"], "quantity": 2}, headers=headers)
    resp = client.post("/api/cart/add", json={"artId": art["id"], "quantity": 3}, headers=headers)

    items = resp.json()["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 5
    assert resp.json()["totalPrice"] == 500


def test_add_unknown_art_not_found(client, buyer):
    _, headers = buyer
    resp = client.post("/api/cart/add", json={"artId": 777}, headers=headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Art not found"


def test_add_negative_quantity_rejected(client, buyer, seller):
    _, headers = buyer
    art = seller()
    resp = client.post("/api/cart/add", json={"artId": art["id"], "quantity": -2}, headers=headers)
    assert resp.status_code == 400


def test_remove_item_and_missing_cart(client, buyer, seller):
    _, headers = buyer
    a = seller(title="A", price="100")
    b = seller(title="B", price="50")

    # brak koszyka
    assert client.request("DELETE", "/api/cart/remove", json={"artId": a["id"]}, headers=headers).status_code == 404

    client.post("/api/cart/add", json={"artId": a["id"]}, headers=headers)
    client.post("/api/cart/add", json={"artId": b["id"]}, headers=headers)

    resp = client.request("DELETE", "/api/cart/remove", json={"artId": a["id"]}, headers=headers)
    assert resp.status_code == 200
    assert [i["artId"] for i in resp.json()["items"]] == [b["id"]]
    assert resp.json()["totalPrice"] == 50

    # pozycji juz nie ma, ale koszyk istnieje
    again = client.request("DELETE", "/api/cart/remove", json={"artId": a["id"]}, headers=headers)
    assert again.status_code == 200
    assert again.json()["totalPrice"] == 50


def test_update_item_quantity_zero_equals_remove(client, buyer, seller):
    _, headers = buyer
    a = seller(title="A", price="100")
    b = seller(title="B", price="10")
    client.post("/api/cart/add", json={"artId": a["id"], "quantity": 2}, headers=headers)
    client.post("/api/cart/add", json={"artId": b["id"]}, headers=headers)

    resp = client.post("/api/cart/update", json={"artId": a["id"], "quantity": 0}, headers=headers)

    assert [i["artId"] for i in resp.json()["items"]] == [b["id"]]
    assert resp.json()["totalPrice"] == 10


def test_update_item_sets_and_inserts(client, buyer, seller):
    _, headers = buyer
    a = seller(title="A", price="100")
    b = seller(title="B", price="10")
    client.post("/api/cart/add", json={"artId": a["id"]}, headers=headers)

    client.post("/api/cart/update", json={"artId": a["id"], "quantity": 4}, headers=headers)
    resp = client.post("/api/cart/update", json={"artId": b["id"], "quantity": 3}, headers=headers)

    assert [(i["artId"], i["quantity"]) for i in resp.json()["items"]] == [(a["id"], 4), (b["id"], 3)]
    assert resp.json()["totalPrice"] == 430


def test_update_item_requires_art_and_cart(client, buyer, seller):
    _, headers = buyer
    art = seller()

    no_cart = client.post("/api/cart/update", json={"artId": art["id"], "quantity": 1}, headers=headers)
    no_art = client.post("/api/cart/update", json={"artId": 999, "quantity": 1}, headers=headers)

    assert no_cart.status_code == 404
    assert no_cart.json()["message"] == "Cart not found"
    assert no_art.status_code == 404
    assert no_art.json()["message"] == "Art not found"


def test_clear_cart(client, buyer, seller):
    _, headers = buyer
    art = seller()

    assert client.delete("/api/cart/clear", headers=headers).status_code == 404

    client.post("/api/cart/add", json={"artId": art["id"]}, headers=headers)
    resp = client.delete("/api/cart/clear", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Cart cleared successfully", "items": [], "totalPrice": 0}

    cart = client.get("/api/cart", headers=headers).json()
    assert cart["items"] == []
    assert cart["totalPrice"] == 0
    # koszyk nadal istnieje
    assert cart["id"] is not None


def test_total_is_snapshot_until_next_mutation(client, register, create_art):
    _, alice = register(name="A", email="a@example.com")
    listing = create_art(alice, title="L", price="1000")
    _, bob = register(name="B", email="b@example.com")

    cart = client.post("/api/cart/add", json={"artId": listing["id"], "quantity": 2}, headers=bob).json()
    assert cart["totalPrice"] == 2000

    client.put(f"/api/arts/{listing['id']}", data={"price": "1500"}, headers=alice)
    assert client.get("/api/cart", headers=bob).json()["totalPrice"] == 2000

    resp = client.post("/api/cart/update", json={"artId": listing["id"], "quantity": 2}, headers=bob)
    assert resp.json()["totalPrice"] == 3000


def test_locked_cart_returns_conflict(client, buyer, seller, redis_client, lock_service):
    user_id, headers = buyer
    art = seller()
    redis_client.store[lock_service.cart_key(user_id)] = "someone-else"

    resp = client.post("/api/cart/add", json={"artId": art["id"]}, headers=headers)

    assert resp.status_code == 409
    assert client.get("/api/cart", headers=headers).json()["items"] == []


def test_lock_released_after_mutation(client, buyer, seller, redis_client):
    _, headers = buyer
    art = seller()

    client.post("/api/cart/add", json={"artId": art["id"]}, headers=headers)

    assert redis_client.store == {}


def test_stale_version_rejected_and_nothing_persisted(db, lock_service, buyer, seller):
    user_id, _ = buyer
    art = seller(price="100")
    svc = CartService(db, lock_service)
    svc.add_item(user_id, art["id"], 1)

    original = svc.repo.update_cart_version

    def concurrent_write_first(cart_id, old_version, new_data):
        other = SessionLocal()
        try:
            other.execute(
                update(CartModel).where(CartModel.id == cart_id).values(version=CartModel.version + 1)
            )
            other.commit()
        finally:
            other.close()
        return original(cart_id, old_version, new_data)

    svc.repo.update_cart_version = concurrent_write_first

    with pytest.raises(ConflictError):
        svc.add_item(user_id, art["id"], 5)

    check = SessionLocal()
    try:
        fresh = CartService(check, lock_service).get_cart(user_id)
    finally:
        check.close()
    assert fresh["items"][0]["quantity"] == 1
    assert fresh["total_price"] == 100

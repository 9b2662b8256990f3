# artvista/client/state.py
from typing import Any, Dict, List, Tuple

from artvista.client.api_client import ApiClient, ApiError
from artvista.client.optimistic import OptimisticCommand, OptimisticStore
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


def _empty_cart() -> Dict[str, Any]:
    return {"items": [], "totalPrice": 0}


def _normalize_cart(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        return _empty_cart()
    cart = dict(data)
    cart["items"] = data.get("items") if isinstance(data.get("items"), list) else []
    return cart


def _item_art_id(item: Dict[str, Any]) -> int | None:
    art = item.get("art") or {}
    return item.get("artId", art.get("id"))


class AuthState:
    """Token i zalogowany uzytkownik; token jest wspoldzielony z ApiClient."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.user: Dict[str, Any] | None = None
        self.error: str | None = None

    @property
    def token(self) -> str | None:
        return self.client.token

    @property
    def is_authenticated(self) -> bool:
        return self.client.token is not None

    def _accept(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self.client.token = data["token"]
        self.user = data["user"]
        self.error = None
        return data

    def register(self, name: str, email: str, password: str) -> Dict[str, Any] | None:
        try:
            return self._accept(self.client.register(name, email, password))
        except ApiError as e:
            self.error = e.message
            return None

    def login(self, email: str, password: str) -> Dict[str, Any] | None:
        try:
            return self._accept(self.client.login(email, password))
        except ApiError as e:
            self.error = e.message
            return None

    def fetch_me(self) -> Dict[str, Any] | None:
        if not self.client.token:
            return None
        try:
            self.user = self.client.me()["user"]
        except ApiError as e:
            # token wygasl albo niewazny: wyloguj
            if e.status is not None:
                self.logout()
            self.error = e.message
            return None
        return self.user

    def logout(self) -> None:
        self.client.token = None
        self.user = None


class CartState(OptimisticStore):
    """Lokalna, optymistyczna kopia koszyka; zrodlem prawdy jest serwer."""

    def __init__(self, client: ApiClient):
        super().__init__(_empty_cart())
        self.client = client

    @property
    def cart(self) -> Dict[str, Any]:
        return self.state

    def _require_login(self) -> bool:
        if not self.client.token:
            self.error = "Please login to modify cart"
            return False
        return True

    def refresh(self) -> Dict[str, Any]:
        if not self.client.token:
            self.state = _empty_cart()
            return self.state
        try:
            self.state = _normalize_cart(self.client.get_cart())
            self.error = None
        except ApiError as e:
            self.error = e.message
            self.state = _empty_cart()
        return self.state

    def add(self, art_id: int, quantity: int = 1) -> Dict[str, Any] | None:
        if not self._require_login():
            return None

        def apply(cart):
            for item in cart["items"]:
                if _item_art_id(item) == art_id:
                    item["quantity"] += quantity
                    return cart
            cart["items"].append({"artId": art_id, "quantity": quantity, "art": {"id": art_id}})
            return cart

        return OptimisticCommand(
            key=f"add_{art_id}",
            apply=apply,
            remote=lambda: self.client.add_to_cart(art_id, quantity),
            reconcile=lambda _, response: _normalize_cart(response),
        ).execute(self)

    def remove(self, art_id: int) -> Dict[str, Any] | None:
        if not self._require_login():
            return None

        def apply(cart):
            cart["items"] = [i for i in cart["items"] if _item_art_id(i) != art_id]
            return cart

        return OptimisticCommand(
            key=f"remove_{art_id}",
            apply=apply,
            remote=lambda: self.client.remove_from_cart(art_id),
            reconcile=lambda _, response: _normalize_cart(response),
        ).execute(self)

    def update_quantity(self, art_id: int, quantity: int) -> Dict[str, Any] | None:
        if not self._require_login():
            return None
        if quantity < 1:
            return self.remove(art_id)

        def apply(cart):
            for item in cart["items"]:
                if _item_art_id(item) == art_id:
                    item["quantity"] = quantity
            return cart

        return OptimisticCommand(
            key=f"update_{art_id}",
            apply=apply,
            remote=lambda: self.client.update_cart_item(art_id, quantity),
            reconcile=lambda _, response: _normalize_cart(response),
        ).execute(self)

    def clear(self) -> Dict[str, Any] | None:
        if not self._require_login():
            return None

        return OptimisticCommand(
            key="clear",
            apply=lambda cart: {**cart, "items": [], "totalPrice": 0},
            remote=self.client.clear_cart,
            reconcile=lambda cart, _: cart,
        ).execute(self)

    def total_items(self) -> int:
        return sum(i.get("quantity") or 0 for i in self.state["items"])

    def is_in_cart(self, art_id: int) -> bool:
        return any(_item_art_id(i) == art_id for i in self.state["items"])

    def item_quantity(self, art_id: int) -> int:
        item = next((i for i in self.state["items"] if _item_art_id(i) == art_id), None)
        return item["quantity"] if item else 0


class WishlistState(OptimisticStore):
    def __init__(self, client: ApiClient):
        super().__init__([])
        self.client = client

    @property
    def items(self) -> List[Dict[str, Any]]:
        return self.state

    def refresh(self) -> List[Dict[str, Any]]:
        if not self.client.token:
            self.state = []
            return self.state
        try:
            self.state = self.client.get_wishlist()
            self.error = None
        except ApiError as e:
            self.error = e.message
        return self.state

    def _reconcile(self, local, response):
        # serwer zwraca tylko id, szczegoly dociagamy
        try:
            return self.client.get_wishlist()
        except ApiError:
            ids = response.get("wishlist", []) if isinstance(response, dict) else []
            return [a for a in local if a.get("id") in ids]

    def add(self, art_id: int) -> bool:
        if not self.client.token:
            self.error = "You must be logged in to add to wishlist"
            return False

        result = OptimisticCommand(
            key=f"wishlist_add_{art_id}",
            apply=lambda items: items + [{"id": art_id}],
            remote=lambda: self.client.add_to_wishlist(art_id),
            reconcile=self._reconcile,
        ).execute(self)
        return result is not None

    def remove(self, art_id: int) -> bool:
        if not self.client.token:
            self.error = "You must be logged in to remove from wishlist"
            return False

        result = OptimisticCommand(
            key=f"wishlist_remove_{art_id}",
            apply=lambda items: [a for a in items if a.get("id") != art_id],
            remote=lambda: self.client.remove_from_wishlist(art_id),
            reconcile=self._reconcile,
        ).execute(self)
        return result is not None

    def toggle(self, art_id: int) -> bool:
        if self.is_in_wishlist(art_id):
            return self.remove(art_id)
        return self.add(art_id)

    def is_in_wishlist(self, art_id: int) -> bool:
        return any(a.get("id") == art_id for a in self.state)


class ArtCatalog:
    """Odczyt katalogu i zarzadzanie wlasnymi dzielami (bez stanu optymistycznego)."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.arts: List[Dict[str, Any]] = []
        self.categories: List[str] = []
        self.total_pages = 0
        self.current_page = 1
        self.error: str | None = None

    def load(self, category: str | None = None, page: int = 1, limit: int = 12) -> List[Dict[str, Any]]:
        try:
            data = self.client.list_arts(category=category, page=page, limit=limit)
        except ApiError as e:
            self.error = e.message
            return self.arts
        self.arts = data["arts"]
        self.categories = data["allCategories"]
        self.total_pages = data["totalPages"]
        self.current_page = data["currentPage"]
        self.error = None
        return self.arts

    def get(self, art_id: int) -> Dict[str, Any] | None:
        try:
            return self.client.get_art(art_id)
        except ApiError as e:
            self.error = e.message
            return None

    def mine(self) -> List[Dict[str, Any]]:
        try:
            return self.client.my_arts()
        except ApiError as e:
            self.error = e.message
            return []

    def create(self, images: List[Tuple[str, bytes]] | None = None, **fields) -> Dict[str, Any] | None:
        try:
            return self.client.create_art(images=images, **fields)["art"]
        except ApiError as e:
            self.error = e.message
            return None

    def update(self, art_id: int, images: List[Tuple[str, bytes]] | None = None, **fields) -> Dict[str, Any] | None:
        try:
            return self.client.update_art(art_id, images=images, **fields)["art"]
        except ApiError as e:
            self.error = e.message
            return None

    def delete(self, art_id: int) -> bool:
        try:
            self.client.delete_art(art_id)
        except ApiError as e:
            self.error = e.message
            return False
        self.arts = [a for a in self.arts if a["id"] != art_id]
        return True

# artvista/client/__init__.py
from artvista.client.api_client import ApiClient, ApiError
from artvista.client.checkout import OrderConfirmation, simulate_checkout
from artvista.client.state import ArtCatalog, AuthState, CartState, WishlistState


class ArtVistaApp:
    """Korzen kompozycji: jeden klient API wspoldzielony przez wszystkie stany."""

    def __init__(self, client: ApiClient | None = None):
        self.client = client or ApiClient()
        self.auth = AuthState(self.client)
        self.cart = CartState(self.client)
        self.wishlist = WishlistState(self.client)
        self.catalog = ArtCatalog(self.client)

    def login(self, email: str, password: str) -> bool:
        if self.auth.login(email, password) is None:
            return False
        self.cart.refresh()
        self.wishlist.refresh()
        return True

    def logout(self) -> None:
        self.auth.logout()
        self.cart.refresh()
        self.wishlist.refresh()

    def checkout(self, shipping_method: str = "standard", **kwargs) -> OrderConfirmation:
        return simulate_checkout(self.cart, shipping_method, **kwargs)


__all__ = [
    "ApiClient",
    "ApiError",
    "ArtVistaApp",
    "ArtCatalog",
    "AuthState",
    "CartState",
    "WishlistState",
    "OrderConfirmation",
    "simulate_checkout",
]

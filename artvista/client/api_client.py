# artvista/client/api_client.py
from typing import Any, Dict, List, Tuple

import requests

from artvista.utils.retry import http_retry
from artvista.utils.settings import API_BASE_URL
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Blad zwrocony przez API (status) albo blad sieci (status=None)."""

    def __init__(self, status: int | None, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class ApiClient:
    """
    Cienki klient REST ArtVista.

    ``session`` to dowolny obiekt z ``request(method, url, **kwargs)``:
    domyslnie ``requests.Session``, w testach TestClient FastAPI.
    """

    def __init__(self, base_url: str | None = None, session=None, token: str | None = None, timeout: int = 10):
        self.base_url = (API_BASE_URL if base_url is None else base_url).rstrip("/")
        self.session = session or requests.Session()
        self.token = token
        self.timeout = timeout

    # =====================================================
    # transport
    # =====================================================
    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _send(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.info(f"ApiClient {method} {url}")

        try:
            kwargs.setdefault("headers", {}).update(self._headers())
            if isinstance(self.session, requests.Session):
                kwargs.setdefault("timeout", self.timeout)
            resp = self.session.request(method, url, **kwargs)
        except requests.ConnectionError:
            raise
        except requests.RequestException as e:
            raise ApiError(None, "Network error") from e

        return self._decode(resp)

    @staticmethod
    def _decode(resp) -> Any:
        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code >= 400:
            message = None
            if isinstance(data, dict):
                message = data.get("message") or data.get("error")
            raise ApiError(resp.status_code, message or f"Request failed: {resp.status_code}")

        return data

    @http_retry()
    def _get_with_retry(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        return self._send("GET", path, params=params)

    def get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        # GET jest idempotentny wiec ponawiamy przy bledach polaczenia
        try:
            return self._get_with_retry(path, params)
        except requests.ConnectionError as e:
            raise ApiError(None, "Network error") from e

    def _call(self, method: str, path: str, **kwargs) -> Any:
        try:
            return self._send(method, path, **kwargs)
        except requests.ConnectionError as e:
            raise ApiError(None, "Network error") from e

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self._call("POST", path, json=json, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self._call("PUT", path, **kwargs)

    def delete(self, path: str, json: Any = None) -> Any:
        return self._call("DELETE", path, json=json)

    # =====================================================
    # endpointy
    # =====================================================
    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self.post("/auth/register", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self.post("/auth/login", json={"email": email, "password": password})

    def me(self) -> Dict[str, Any]:
        return self.get("/auth/me")

    def list_arts(self, category: str | None = None, page: int = 1, limit: int = 12) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        return self.get("/arts", params=params)

    def art_categories(self) -> List[str]:
        return self.get("/arts/categories")

    def my_arts(self) -> List[Dict[str, Any]]:
        return self.get("/arts/my")

    def get_art(self, art_id: int) -> Dict[str, Any]:
        return self.get(f"/arts/{art_id}")

    @staticmethod
    def _art_form(fields: Dict[str, Any], images: List[Tuple[str, bytes]] | None):
        data = {k: v for k, v in fields.items() if v is not None}
        if isinstance(data.get("categories"), (list, tuple)):
            data["categories"] = ",".join(data["categories"])
        files = [("images", (name, content)) for name, content in (images or [])]
        return data, files

    def create_art(self, images: List[Tuple[str, bytes]] | None = None, **fields) -> Dict[str, Any]:
        data, files = self._art_form(fields, images)
        return self.post("/arts", data=data, files=files or None)

    def update_art(self, art_id: int, images: List[Tuple[str, bytes]] | None = None, **fields) -> Dict[str, Any]:
        data, files = self._art_form(fields, images)
        return self.put(f"/arts/{art_id}", data=data, files=files or None)

    def delete_art(self, art_id: int) -> Dict[str, Any]:
        return self.delete(f"/arts/{art_id}")

    def get_cart(self) -> Dict[str, Any]:
        return self.get("/cart")

    def add_to_cart(self, art_id: int, quantity: int = 1) -> Dict[str, Any]:
        return self.post("/cart/add", json={"artId": art_id, "quantity": quantity})

    def update_cart_item(self, art_id: int, quantity: int) -> Dict[str, Any]:
        return self.post("/cart/update", json={"artId": art_id, "quantity": quantity})

    def remove_from_cart(self, art_id: int) -> Dict[str, Any]:
        return self.delete("/cart/remove", json={"artId": art_id})

    def clear_cart(self) -> Dict[str, Any]:
        return self.delete("/cart/clear")

    def get_wishlist(self) -> List[Dict[str, Any]]:
        return self.get("/wishlist")

    def add_to_wishlist(self, art_id: int) -> Dict[str, Any]:
        return self.post("/wishlist/add", json={"artId": art_id})

    def remove_from_wishlist(self, art_id: int) -> Dict[str, Any]:
        return self.post("/wishlist/remove", json={"artId": art_id})

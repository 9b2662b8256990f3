# artvista/client/optimistic.py
import copy
from typing import Any, Callable

from artvista.client.api_client import ApiError
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


class OptimisticCommand:
    """
    Jedna mutacja stanu klienta:
    1. snapshot stanu
    2. tymczasowe przejscie lokalne (apply)
    3. wywolanie API (remote)
    4. uzgodnienie z odpowiedzia serwera (reconcile) albo przywrocenie snapshotu
    """

    def __init__(
        self,
        key: str,
        apply: Callable[[Any], Any],
        remote: Callable[[], Any],
        reconcile: Callable[[Any, Any], Any],
    ):
        self.key = key
        self.apply = apply
        self.remote = remote
        self.reconcile = reconcile

    def execute(self, store) -> Any:
        if store.is_operation_loading(self.key):
            return None

        snapshot = copy.deepcopy(store.state)
        store.error = None
        store.in_flight.add(self.key)

        try:
            store.state = self.apply(copy.deepcopy(snapshot))
            response = self.remote()
        except ApiError as e:
            logger.warning(f"{self.key} failed ({e.status}): {e.message}, rolling back")
            store.error = e.message
            store.state = snapshot
            return None
        finally:
            store.in_flight.discard(self.key)

        store.state = self.reconcile(store.state, response)
        return store.state


class OptimisticStore:
    """Baza dla stanow klienta (koszyk, wishlist)."""

    def __init__(self, initial_state: Any):
        self.state = initial_state
        self.error: str | None = None
        self.in_flight: set[str] = set()

    def is_operation_loading(self, operation: str, art_id: int | None = None) -> bool:
        key = f"{operation}_{art_id}" if art_id is not None else operation
        return key in self.in_flight

    def clear_error(self) -> None:
        self.error = None

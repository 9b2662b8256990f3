from decimal import Decimal
from typing import Any, Dict, Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artvista.data.models.cart import CartModel
from artvista.data.models.cart_item import CartItemModel
from artvista.domain.errors import ConflictError, NotFound, ValidationError
from artvista.domain.serializers import art_to_dict
from artvista.repos.art_repo import ArtRepo
from artvista.repos.cart_repo import CartRepo
from artvista.services.lock_service import LockService
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


def calculate_total(art_repo: ArtRepo, items: Iterable[CartItemModel]) -> Decimal:
    """
    Suma (aktualna cena dziela * ilosc). Pozycje bez istniejacego dziela licza sie jako 0.
    """
    items = list(items)
    prices = art_repo.get_prices([i.art_id for i in items])
    return sum(
        (Decimal(prices[i.art_id]) * i.quantity for i in items if i.art_id in prices),
        Decimal("0.00"),
    )


class CartService:
    """
    Prosta implementacja cqrs dla koszyka uzytkownika
    commands (add, remove, update, clear) modyfikuja stan i przeliczaja total
    query (get) tylko odczyt

    Kazda komenda:
    - lock w redisie na koszyk uzytkownika (serializacja mutacji)
    - optimistic locking na polu version (odrzuca nieaktualny zapis)
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.art_repo = ArtRepo(db)
        self.lock_service = lock_service

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)

        if not cart:
            #pusty koszyk tylko przy odczycie, nic nie zapisujemy
            return {"id": None, "user": user_id, "items": [], "total_price": 0, "version": None}

        arts = self.art_repo.get_arts([i.art_id for i in cart.items])

        return {
            "id": cart.id,
            "user": cart.user_id,
            "items": [
                {
                    "art_id": i.art_id,
                    "quantity": i.quantity,
                    "art": art_to_dict(arts[i.art_id]) if i.art_id in arts else None,
                }
                for i in cart.items
            ],
            "total_price": float(cart.total_price),
            "version": cart.version,
        }

    #commands
    def add_item(self, user_id: int, art_id: int, quantity: int | None = None) -> Dict[str, Any]:
        quantity = quantity or 1
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        if not self.art_repo.get_art(art_id):
            raise NotFound("Art not found")

        with self.lock_service.cart_lock(user_id):
            cart = self._get_or_create_cart(user_id)
            item = self._find_item(cart, art_id)

            if item:
                logger.info(
                    f"Art {art_id} already in cart {cart.id}, quantity "
                    f"{item.quantity} -> {item.quantity + quantity}"
                )
                item.quantity += quantity
            else:
                logger.info(f"Adding art {art_id} x{quantity} to cart {cart.id}")
                cart.items.append(CartItemModel(art_id=art_id, quantity=quantity))

            self._save(cart)

        return self.get_cart(user_id)

    def remove_item(self, user_id: int, art_id: int) -> Dict[str, Any]:
        with self.lock_service.cart_lock(user_id):
            cart = self._require_cart(user_id)

            #brak pozycji w istniejacym koszyku to nie blad
            item = self._find_item(cart, art_id)
            if item:
                cart.items.remove(item)
                logger.info(f"Removed art {art_id} from cart {cart.id}")

            self._save(cart)

        return self.get_cart(user_id)

    def update_item(self, user_id: int, art_id: int, quantity: int) -> Dict[str, Any]:
        if not self.art_repo.get_art(art_id):
            raise NotFound("Art not found")

        with self.lock_service.cart_lock(user_id):
            cart = self._require_cart(user_id)
            item = self._find_item(cart, art_id)

            if item and quantity > 0:
                item.quantity = quantity
            elif item:
                cart.items.remove(item)
            elif quantity > 0:
                cart.items.append(CartItemModel(art_id=art_id, quantity=quantity))

            logger.info(f"Set quantity of art {art_id} in cart {cart.id} to {max(quantity, 0)}")
            self._save(cart)

        return self.get_cart(user_id)

    def clear_cart(self, user_id: int) -> Dict[str, Any]:
        with self.lock_service.cart_lock(user_id):
            cart = self._require_cart(user_id)
            cart.items.clear()
            self._save(cart)

        logger.info(f"Cart of user {user_id} cleared")
        return {"message": "Cart cleared successfully", "items": [], "total_price": 0}

    # helpers
    def _require_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFound("Cart not found")
        return cart

    def _get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        try:
            cart = self.repo.create_cart(CartModel(user_id=user_id, total_price=0, version=1))
            logger.info(f"Created cart {cart.id} for user {user_id}")
            return cart
        except IntegrityError:
            #unique na user_id, ktos utworzyl koszyk rownolegle
            self.repo.rollback()
            return self._require_cart(user_id)

    @staticmethod
    def _find_item(cart: CartModel, art_id: int) -> CartItemModel | None:
        return next((i for i in cart.items if i.art_id == art_id), None)

    def _save(self, cart: CartModel) -> None:
        old_version = cart.version
        total = calculate_total(self.art_repo, cart.items)

        # Optimistic locking
        # np w bazie update set version 2 where id 1 and version 1
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=old_version,
            new_data={"version": old_version + 1, "total_price": total},
        )

        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Version conflict on cart {cart.id} (version {old_version})")
            raise ConflictError("Cart was modified by another operation, try again")

        self.repo.commit()
        logger.info(f"Cart {cart.id} saved, total {total}, version {old_version + 1}")

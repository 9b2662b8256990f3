# artvista/repos/cart_repo.py
from typing import List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, selectinload

from artvista.data.models.cart import CartModel
from artvista.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .options(selectinload(CartModel.items))
            .where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .options(selectinload(CartModel.items))
            .where(CartModel.id == cart_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def add_cart_item(self, item: CartItemModel) -> None:
        self.db.add(item)

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)

    def get_cart_ids_with_art(self, art_id: int) -> List[int]:
        return list(
            self.db.execute(
                select(CartItemModel.cart_id).where(CartItemModel.art_id == art_id).distinct()
            ).scalars().all()
        )

    def delete_items_for_art(self, cart_id: int, art_id: int) -> int:
        res = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.art_id == art_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        """
        UPDATE carts SET ... WHERE id = :id AND version = :old
        0 zmienionych wierszy = ktos zapisal koszyk w miedzyczasie.
        """
        self.db.flush()
        res = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

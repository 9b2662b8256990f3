from typing import List

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from artvista.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_art_ids(self, user_id: int) -> List[int]:
        return list(
            self.db.execute(
                select(WishlistItemModel.art_id)
                .where(WishlistItemModel.user_id == user_id)
                .order_by(WishlistItemModel.position, WishlistItemModel.id)
            ).scalars().all()
        )

    def contains(self, user_id: int, art_id: int) -> bool:
        return self.db.execute(
            select(WishlistItemModel.id).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.art_id == art_id,
            )
        ).first() is not None

    def add(self, user_id: int, art_id: int) -> None:
        last = self.db.execute(
            select(func.max(WishlistItemModel.position)).where(WishlistItemModel.user_id == user_id)
        ).scalar()
        self.db.add(
            WishlistItemModel(
                user_id=user_id,
                art_id=art_id,
                position=0 if last is None else last + 1,
            )
        )
        self.db.commit()

    def remove(self, user_id: int, art_id: int) -> int:
        res = self.db.execute(
            delete(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.art_id == art_id,
            )
        )
        self.db.commit()
        return res.rowcount

    def remove_art_everywhere(self, art_id: int) -> int:
        res = self.db.execute(
            delete(WishlistItemModel).where(WishlistItemModel.art_id == art_id)
        )
        return res.rowcount

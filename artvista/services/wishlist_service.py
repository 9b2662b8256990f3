from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artvista.domain.errors import BadRequest, NotFound
from artvista.domain.serializers import art_to_dict
from artvista.repos.art_repo import ArtRepo
from artvista.repos.wishlist_repo import WishlistRepo
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.art_repo = ArtRepo(db)

    def get_wishlist(self, user_id: int) -> List[Dict[str, Any]]:
        art_ids = self.repo.get_art_ids(user_id)
        arts = self.art_repo.get_arts(art_ids)
        # wlasciciel tylko z nazwa, referencje do usunietych dziel pomijamy
        return [art_to_dict(arts[a], owner_email=False) for a in art_ids if a in arts]

    def add(self, user_id: int, art_id: int) -> Dict[str, Any]:
        if not self.art_repo.get_art(art_id):
            raise NotFound("Art not found")

        if self.repo.contains(user_id, art_id):
            raise BadRequest("Art already in wishlist")

        try:
            self.repo.add(user_id, art_id)
        except IntegrityError:
            self.repo.db.rollback()
            raise BadRequest("Art already in wishlist")

        logger.info(f"Art {art_id} added to wishlist of user {user_id}")

        return {"message": "Art added to wishlist", "wishlist": self.repo.get_art_ids(user_id)}

    def remove(self, user_id: int, art_id: int) -> Dict[str, Any]:
        removed = self.repo.remove(user_id, art_id)
        if removed:
            logger.info(f"Art {art_id} removed from wishlist of user {user_id}")

        return {"message": "Art removed from wishlist", "wishlist": self.repo.get_art_ids(user_id)}

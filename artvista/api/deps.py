# artvista/api/deps.py
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from artvista.data.database import get_db
from artvista.domain.errors import AppError
from artvista.services.art_service import ArtService
from artvista.services.auth_service import AuthService
from artvista.services.cart_service import CartService
from artvista.services.image_storage import ImageStorage
from artvista.services.lock_service import LockService
from artvista.services.wishlist_service import WishlistService
from artvista.utils.security import decode_access_token


def get_current_user(authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    """Principal {id, role} z naglowka Authorization: Bearer <jwt>."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        return decode_access_token(token)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


@lru_cache
def get_image_storage() -> ImageStorage:
    return ImageStorage()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_art_service(
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_image_storage),
) -> ArtService:
    return ArtService(db, storage=storage)


def get_cart_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, lock_service=lock_service)


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db)

# artvista/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from artvista.api.deps import get_current_user, get_wishlist_service
from artvista.domain.errors import AppError
from artvista.domain.schemas import ArtOut, ArtRefIn, WishlistOut
from artvista.services.wishlist_service import WishlistService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.post("/add", response_model=WishlistOut)
def add_to_wishlist(
    payload: ArtRefIn,
    current_user: dict = Depends(get_current_user),
    svc: WishlistService = Depends(get_wishlist_service),
):
    try:
        return svc.add(current_user["id"], payload.art_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/remove", response_model=WishlistOut)
def remove_from_wishlist(
    payload: ArtRefIn,
    current_user: dict = Depends(get_current_user),
    svc: WishlistService = Depends(get_wishlist_service),
):
    return svc.remove(current_user["id"], payload.art_id)


@router.get("", response_model=List[ArtOut])
def get_wishlist(
    current_user: dict = Depends(get_current_user),
    svc: WishlistService = Depends(get_wishlist_service),
):
    return svc.get_wishlist(current_user["id"])

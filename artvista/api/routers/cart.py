# artvista/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException

from artvista.api.deps import get_cart_service, get_current_user
from artvista.domain.errors import AppError
from artvista.domain.schemas import ArtRefIn, CartAddIn, CartClearedOut, CartOut, CartUpdateIn
from artvista.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.post("/add", response_model=CartOut)
def add_to_cart(
    payload: CartAddIn,
    current_user: dict = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(current_user["id"], payload.art_id, payload.quantity)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=CartOut)
def get_cart(
    current_user: dict = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(current_user["id"])


@router.delete("/remove", response_model=CartOut)
def remove_from_cart(
    payload: ArtRefIn,
    current_user: dict = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.remove_item(current_user["id"], payload.art_id)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/update", response_model=CartOut)
def update_cart_item(
    payload: CartUpdateIn,
    current_user: dict = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_item(current_user["id"], payload.art_id, payload.quantity)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/clear", response_model=CartClearedOut)
def clear_cart(
    current_user: dict = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.clear_cart(current_user["id"])
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

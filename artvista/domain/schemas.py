# artvista/domain/schemas.py
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Pola snake_case w pythonie, camelCase w JSON (artId, totalPrice...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# AUTH
# =====================================================
class RegisterIn(ApiModel):
    """Schema dla rejestracji; walidacja tresci w AuthService."""

    name: str = ""
    email: str = ""
    password: str = ""


class LoginIn(ApiModel):
    email: str = ""
    password: str = ""


class UserSummary(ApiModel):
    id: int
    name: str
    email: str
    role: str


class UserOut(UserSummary):
    created_at: datetime
    updated_at: datetime


class AuthOut(ApiModel):
    user: UserSummary
    token: str


class MeOut(ApiModel):
    user: UserOut


# =====================================================
# ART
# =====================================================
class OwnerOut(ApiModel):
    id: int
    name: str
    email: str | None = None


class ArtOut(ApiModel):
    id: int
    title: str
    description: str | None = None
    price: float
    images: List[str] = []
    categories: List[str] = []
    created_by: OwnerOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArtMessageOut(ApiModel):
    message: str
    art: ArtOut


class ArtListOut(ApiModel):
    arts: List[ArtOut]
    total_pages: int
    current_page: int
    total: int
    all_categories: List[str]


class MessageOut(ApiModel):
    message: str


# =====================================================
# CART
# =====================================================
class CartAddIn(ApiModel):
    art_id: int
    quantity: int | None = Field(None, description="Domyslnie 1")


class CartUpdateIn(ApiModel):
    art_id: int
    quantity: int


class ArtRefIn(ApiModel):
    art_id: int


class CartItemOut(ApiModel):
    art_id: int
    quantity: int
    art: ArtOut | None = None


class CartOut(ApiModel):
    id: int | None = None
    user: int
    items: List[CartItemOut]
    total_price: float
    version: int | None = None


class CartClearedOut(ApiModel):
    message: str
    items: List[CartItemOut] = []
    total_price: float = 0


# =====================================================
# WISHLIST
# =====================================================
class WishlistOut(ApiModel):
    message: str
    wishlist: List[int]

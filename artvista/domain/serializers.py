# artvista/domain/serializers.py
from typing import Any, Dict

from artvista.data.models.art import ArtModel
from artvista.data.models.user import UserModel


def user_summary(user: UserModel) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }


def user_detail(user: UserModel) -> Dict[str, Any]:
    return {
        **user_summary(user),
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def art_to_dict(art: ArtModel, owner_email: bool = True) -> Dict[str, Any]:
    owner = None
    if art.owner is not None:
        owner = {"id": art.owner.id, "name": art.owner.name}
        if owner_email:
            owner["email"] = art.owner.email

    return {
        "id": art.id,
        "title": art.title,
        "description": art.description,
        "price": float(art.price),
        "images": [i.url for i in art.images],
        "categories": [c.name for c in art.categories],
        "created_by": owner,
        "created_at": art.created_at,
        "updated_at": art.updated_at,
    }

#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from artvista.data.models.user import UserModel
from artvista.data.models.art import ArtModel, ArtImageModel, ArtCategoryModel
from artvista.data.models.cart import CartModel
from artvista.data.models.cart_item import CartItemModel
from artvista.data.models.wishlist_item import WishlistItemModel

__all__ = [
    "UserModel",
    "ArtModel",
    "ArtImageModel",
    "ArtCategoryModel",
    "CartModel",
    "CartItemModel",
    "WishlistItemModel",
]

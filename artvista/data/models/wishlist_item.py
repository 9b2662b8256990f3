from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from artvista.data.database import Base


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    art_id = Column(Integer, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (UniqueConstraint("user_id", "art_id", name="u_wishlist_art"),)

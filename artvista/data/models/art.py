#artvista/data/models/art.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from artvista.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ArtModel(Base):
    __tablename__ = "arts"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)

    owner = relationship("UserModel")
    images = relationship(
        "ArtImageModel",
        order_by="ArtImageModel.position",
        cascade="all, delete-orphan",
    )
    categories = relationship(
        "ArtCategoryModel",
        order_by="ArtCategoryModel.id",
        cascade="all, delete-orphan",
    )


class ArtImageModel(Base):
    __tablename__ = "art_images"

    id = Column(Integer, primary_key=True)
    art_id = Column(Integer, ForeignKey("arts.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    url = Column(String(1024), nullable=False)


class ArtCategoryModel(Base):
    __tablename__ = "art_categories"

    id = Column(Integer, primary_key=True)
    art_id = Column(Integer, ForeignKey("arts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    __table_args__ = (UniqueConstraint("art_id", "name", name="u_art_category"),)

# artvista/repos/art_repo.py
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from artvista.data.models.art import ArtModel, ArtCategoryModel


class ArtRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self):
        return select(ArtModel).options(
            selectinload(ArtModel.owner),
            selectinload(ArtModel.images),
            selectinload(ArtModel.categories),
        )

    def get_art(self, art_id: int) -> ArtModel | None:
        return self.db.execute(
            self._with_relations().where(ArtModel.id == art_id)
        ).scalar_one_or_none()

    def get_arts(self, art_ids: List[int]) -> dict:
        """Zwraca {id: art} dla istniejacych dziel (brakujace pomija)."""
        if not art_ids:
            return {}
        rows = self.db.execute(
            self._with_relations().where(ArtModel.id.in_(set(art_ids)))
        ).scalars().all()
        return {a.id: a for a in rows}

    def get_prices(self, art_ids: List[int]) -> dict:
        if not art_ids:
            return {}
        rows = self.db.execute(
            select(ArtModel.id, ArtModel.price).where(ArtModel.id.in_(set(art_ids)))
        ).all()
        return {art_id: price for art_id, price in rows}

    def list_arts(self, category: str | None, offset: int, limit: int) -> Tuple[List[ArtModel], int]:
        query = self._with_relations()
        count_query = select(func.count(ArtModel.id))

        if category:
            matching = select(ArtCategoryModel.art_id).where(ArtCategoryModel.name == category)
            query = query.where(ArtModel.id.in_(matching))
            count_query = count_query.where(ArtModel.id.in_(matching))

        arts = self.db.execute(
            query.order_by(ArtModel.created_at.desc(), ArtModel.id.desc()).offset(offset).limit(limit)
        ).scalars().all()
        total = self.db.execute(count_query).scalar_one()
        return list(arts), total

    def list_by_owner(self, owner_id: int) -> List[ArtModel]:
        return list(
            self.db.execute(
                self._with_relations()
                .where(ArtModel.created_by == owner_id)
                .order_by(ArtModel.created_at.desc(), ArtModel.id.desc())
            ).scalars().all()
        )

    def distinct_categories(self) -> List[str]:
        rows = self.db.execute(
            select(ArtCategoryModel.name).distinct().order_by(ArtCategoryModel.name)
        ).scalars().all()
        return list(rows)

    def save(self, art: ArtModel) -> ArtModel:
        self.db.add(art)
        self.db.commit()
        return self.get_art(art.id)

    def delete(self, art: ArtModel) -> None:
        self.db.delete(art)
        self.db.commit()

    def replace_categories(self, art: ArtModel, names: List[str]) -> None:
        # flush po wyczyszczeniu: UOW robi INSERT przed DELETE, a (art_id, name) jest unique
        art.categories = []
        self.db.flush()
        art.categories = [ArtCategoryModel(name=n) for n in names]

# artvista/services/art_service.py
import math
from decimal import Decimal, InvalidOperation
from typing import Any, BinaryIO, Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from artvista.data.models.art import ArtModel, ArtImageModel, ArtCategoryModel
from artvista.domain.categories import normalize_categories, normalize_category
from artvista.domain.errors import Forbidden, NotFound, ValidationError
from artvista.domain.serializers import art_to_dict
from artvista.repos.art_repo import ArtRepo
from artvista.services.image_storage import ImageStorage
from artvista.tasks.sweep import sweep_art_references
from artvista.utils.settings import MAX_IMAGES_PER_ART
from artvista.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100

UploadedFiles = List[Tuple[str, BinaryIO]]


def _parse_price(raw: Any) -> Decimal:
    try:
        price = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number")
    if not price.is_finite() or price < 0:
        raise ValidationError("Price must be a non-negative number")
    return price


class ArtService:
    """
    Katalog dziel: CRUD, filtrowanie po kategorii i stronicowanie.
    Modyfikowac i usuwac moze tylko wlasciciel (created_by).
    """

    def __init__(self, db: Session, storage: ImageStorage | None = None):
        self.repo = ArtRepo(db)
        self.storage = storage or ImageStorage()

    # =====================================================
    # QUERY
    # =====================================================
    def list_arts(self, category: str | None = None, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Dict[str, Any]:
        page = max(int(page or 1), 1)
        limit = min(max(int(limit or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)

        wanted = normalize_category(category)
        if wanted == "all":
            wanted = ""

        all_categories = self.repo.distinct_categories()
        arts, total = self.repo.list_arts(wanted or None, (page - 1) * limit, limit)

        return {
            "arts": [art_to_dict(a) for a in arts],
            "total_pages": math.ceil(total / limit),
            "current_page": page,
            "total": total,
            "all_categories": all_categories,
        }

    def categories(self) -> List[str]:
        return self.repo.distinct_categories()

    def get_art(self, art_id: int) -> Dict[str, Any]:
        art = self.repo.get_art(art_id)
        if not art:
            raise NotFound("Art not found")
        return art_to_dict(art)

    def get_my_arts(self, owner_id: int) -> List[Dict[str, Any]]:
        return [art_to_dict(a) for a in self.repo.list_by_owner(owner_id)]

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_art(
        self,
        owner_id: int,
        title: str | None,
        description: str | None,
        price: Any,
        categories: str | Iterable[str] | None = None,
        images: UploadedFiles | None = None,
    ) -> Dict[str, Any]:
        if not title or not str(title).strip():
            raise ValidationError("Title is required")
        if price is None or str(price).strip() == "":
            raise ValidationError("Price is required")

        parsed_price = _parse_price(price)
        urls = self._store_images(images or [])

        art = ArtModel(
            title=str(title).strip(),
            description=description,
            price=parsed_price,
            created_by=owner_id,
            images=[ArtImageModel(position=i, url=u) for i, u in enumerate(urls)],
            categories=[ArtCategoryModel(name=c) for c in normalize_categories(categories)],
        )
        created = self.repo.save(art)

        logger.info(f"Art {created.id} created by user {owner_id}")
        return {"message": "Art added successfully", "art": art_to_dict(created)}

    def update_art(
        self,
        art_id: int,
        owner_id: int,
        title: str | None = None,
        description: str | None = None,
        price: Any = None,
        categories: str | Iterable[str] | None = None,
        images: UploadedFiles | None = None,
    ) -> Dict[str, Any]:
        art = self._owned_art(art_id, owner_id)

        # puste / brakujace pola zachowuja poprzednia wartosc
        if title and str(title).strip():
            art.title = str(title).strip()
        if description:
            art.description = description
        if price not in (None, ""):
            new_price = _parse_price(price)
            if new_price:
                art.price = new_price

        if images:
            urls = self._store_images(images)
            art.images = [ArtImageModel(position=i, url=u) for i, u in enumerate(urls)]

        normalized = normalize_categories(categories)
        if normalized:
            self.repo.replace_categories(art, normalized)

        updated = self.repo.save(art)

        logger.info(f"Art {art_id} updated by owner {owner_id}")
        return {"message": "Art updated", "art": art_to_dict(updated)}

    def delete_art(self, art_id: int, owner_id: int) -> Dict[str, Any]:
        art = self._owned_art(art_id, owner_id)
        self.repo.delete(art)

        logger.info(f"Art {art_id} deleted by owner {owner_id}, scheduling reference sweep")
        try:
            sweep_art_references.delay(art_id)
        except Exception as e:
            # dzielo juz usuniete, osierocone pozycje licza sie jako 0 do nastepnego sweepa
            logger.warning(f"Failed to schedule reference sweep for art {art_id}: {e}")

        return {"message": "Art deleted"}

    # =====================================================
    # HELPERS
    # =====================================================
    def _owned_art(self, art_id: int, owner_id: int) -> ArtModel:
        art = self.repo.get_art(art_id)
        if not art:
            raise NotFound("Art not found")
        if art.created_by != owner_id:
            logger.warning(f"User {owner_id} tried to modify art {art_id} owned by {art.created_by}")
            raise Forbidden("Not authorized")
        return art

    def _store_images(self, images: UploadedFiles) -> List[str]:
        if len(images) > MAX_IMAGES_PER_ART:
            raise ValidationError(f"At most {MAX_IMAGES_PER_ART} images are allowed")
        return self.storage.save_all(images)

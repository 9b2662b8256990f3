# artvista/tasks/sweep.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from artvista.celery_worker import celery_app
from artvista.data.database import SessionLocal
from artvista.domain.errors import ConflictError
from artvista.repos.art_repo import ArtRepo
from artvista.repos.cart_repo import CartRepo
from artvista.repos.wishlist_repo import WishlistRepo
from artvista.services.cart_service import calculate_total
from artvista.utils.logging import get_logger

logger = get_logger(__name__)


@retry(
    reraise=True,
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    retry=retry_if_exception_type(ConflictError),
)
def _purge_from_cart(db, cart_id: int, art_id: int) -> None:
    repo = CartRepo(db)
    cart = repo.get_cart(cart_id)
    if not cart:
        return

    repo.delete_items_for_art(cart_id, art_id)
    remaining = [i for i in cart.items if i.art_id != art_id]
    total = calculate_total(ArtRepo(db), remaining)

    rowcount = repo.update_cart_version(
        cart_id=cart.id,
        old_version=cart.version,
        new_data={"version": cart.version + 1, "total_price": total},
    )
    if rowcount == 0:
        repo.rollback()
        raise ConflictError(f"Cart {cart_id} changed during sweep")

    repo.commit()


@celery_app.task(name="artvista.tasks.sweep.sweep_art_references")
def sweep_art_references(art_id: int):
    """
    Po usunieciu dziela: usuwa je ze wszystkich koszykow (z przeliczeniem totala)
    i ze wszystkich wishlist.
    """
    logger.info(f"Sweeping references to deleted art {art_id}")

    db = SessionLocal()
    try:
        removed_wishlist = WishlistRepo(db).remove_art_everywhere(art_id)
        db.commit()

        cart_ids = CartRepo(db).get_cart_ids_with_art(art_id)
        for cart_id in cart_ids:
            _purge_from_cart(db, cart_id, art_id)

        logger.info(
            f"Art {art_id} removed from {len(cart_ids)} carts and {removed_wishlist} wishlists"
        )
        return {"art_id": art_id, "carts": len(cart_ids), "wishlists": removed_wishlist}
    finally:
        db.close()

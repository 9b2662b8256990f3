# artvista/client/checkout.py
import random
import time
from typing import List

from pydantic import BaseModel

from artvista.client.state import CartState
from artvista.utils.logging import get_logger

logger = get_logger(__name__)

SHIPPING_FEES = {"standard": 50, "express": 100, "premium": 150}
PROCESSING_DELAY_SECONDS = 3.0


class OrderLine(BaseModel):
    art_id: int | None
    title: str | None
    price: float
    quantity: int


class OrderConfirmation(BaseModel):
    """Potwierdzenie generowane po stronie klienta; nic nie jest zapisywane w API."""

    order_number: str
    shipping_method: str
    lines: List[OrderLine]
    subtotal: float
    shipping: float
    total: float


def generate_order_number(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"ORD-{rng.randint(100000, 999999)}"


def shipping_fee(method: str) -> float:
    #nieznana metoda = standard
    return SHIPPING_FEES.get(method, SHIPPING_FEES["standard"])


def simulate_checkout(
    cart_state: CartState,
    shipping_method: str = "standard",
    processing_delay: float = PROCESSING_DELAY_SECONDS,
    rng: random.Random | None = None,
) -> OrderConfirmation:
    items = cart_state.cart["items"]
    if not items:
        raise ValueError("Cart is empty")

    lines = []
    for item in items:
        art = item.get("art") or {}
        lines.append(
            OrderLine(
                art_id=item.get("artId", art.get("id")),
                title=art.get("title"),
                price=art.get("price") or 0,
                quantity=item["quantity"],
            )
        )

    subtotal = sum(line.price * line.quantity for line in lines)
    shipping = shipping_fee(shipping_method)

    if processing_delay:
        time.sleep(processing_delay)

    confirmation = OrderConfirmation(
        order_number=generate_order_number(rng),
        shipping_method=shipping_method if shipping_method in SHIPPING_FEES else "standard",
        lines=lines,
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
    )
    logger.info(f"Simulated order {confirmation.order_number}, total {confirmation.total}")

    cart_state.clear()
    return confirmation

"""Cart operations. A user has at most one cart, created on first add."""

import structlog
from bson import ObjectId

from errors import NotFoundError, ValidationError
from schemas import SIZES, Cart, CartItem
from store import Store

logger = structlog.get_logger(__name__)


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be a whole number of at least 1")


def get_cart(store: Store, user_id: str) -> Cart:
    return store.carts.get(user_id) or Cart(user_id=user_id)


def add_item(store: Store, user_id: str, product_id: str, size: str, quantity: int = 1) -> Cart:
    if size not in SIZES:
        raise ValidationError(f"Invalid size '{size}'. Choose one of: {', '.join(SIZES)}")
    _validate_quantity(quantity)

    product = store.products.get(product_id)
    if not product:
        raise NotFoundError("Product not found")

    cart = get_cart(store, user_id)
    existing = next(
        (item for item in cart.items if item.product_id == product.id and item.size == size),
        None,
    )
    if existing:
        existing.quantity += quantity
    else:
        cart.items.append(
            CartItem(
                id=str(ObjectId()),
                product_id=product.id,
                name=product.name,
                price=product.price,
                image_url=product.image_url,
                size=size,
                quantity=quantity,
            )
        )
    cart = store.carts.save(cart)
    logger.info("Item added to cart", user_id=user_id, product_id=product.id, size=size, quantity=quantity)
    return cart


def update_item(store: Store, user_id: str, item_id: str, quantity: int) -> Cart:
    _validate_quantity(quantity)
    cart = store.carts.get(user_id)
    item = cart.find_item(item_id) if cart else None
    if not item:
        raise NotFoundError("Item not found in cart")
    item.quantity = quantity
    return store.carts.save(cart)


def remove_item(store: Store, user_id: str, item_id: str) -> Cart:
    """Remove a line item. Unknown items are ignored."""
    cart = store.carts.get(user_id)
    if not cart:
        return Cart(user_id=user_id)
    remaining = [item for item in cart.items if item.id != item_id]
    if len(remaining) == len(cart.items):
        return cart
    cart.items = remaining
    return store.carts.save(cart)


def clear_cart(store: Store, user_id: str) -> Cart:
    cart = store.carts.get(user_id)
    if not cart:
        return Cart(user_id=user_id)
    store.carts.clear(user_id)
    return get_cart(store, user_id)

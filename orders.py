"""Checkout and order retrieval."""

from decimal import Decimal
from typing import Callable, List

import structlog

from errors import AuthorizationError, EmptyCartError, NotFoundError, NotificationDispatchFailure
from schemas import Order, OrderItem, User, money
from store import Store

logger = structlog.get_logger(__name__)

Notify = Callable[[Order, User], None]


def checkout(store: Store, user_id: str, notify: Notify) -> Order:
    """Turn the user's cart into a confirmed order.

    The order insert is the commit point. Everything after it (the
    confirmation email and emptying the cart) is best-effort: failures are
    logged and the committed order is still returned.
    """
    cart = store.carts.get(user_id)
    if not cart or not cart.items:
        raise EmptyCartError()

    total = Decimal("0")
    items: List[OrderItem] = []
    for line in cart.items:
        total += line.line_total()
        items.append(
            OrderItem(
                product_id=line.product_id,
                product_name=line.name,
                size=line.size,
                quantity=line.quantity,
                price=line.price,
            )
        )

    uow = store.unit_of_work("checkout")
    order = uow.commit(
        "order_created",
        store.orders.create,
        Order(user_id=user_id, items=items, total_amount=float(money(total)), status="confirmed"),
    )
    logger.info("Order created", order_id=order.id, user_id=user_id, total_amount=order.total_amount)

    try:
        user = store.users.get(user_id)
        if not user:
            raise NotificationDispatchFailure("No contact record for user", error=user_id)
        notify(order, user)
    except Exception as e:
        logger.warning(
            "Order confirmation not dispatched",
            order_id=order.id,
            user_id=user_id,
            error=getattr(e, "error", None) or str(e),
        )

    try:
        uow.commit("cart_cleared", store.carts.clear, user_id)
    except Exception as e:
        logger.error("Cart not cleared after checkout", order_id=order.id, user_id=user_id, error=str(e))

    return order


def get_order(store: Store, order_id: str, user_id: str) -> Order:
    order = store.orders.get(order_id)
    if not order:
        raise NotFoundError("Order not found")
    if order.user_id != user_id:
        raise AuthorizationError("Unauthorized: This order does not belong to you")
    return order


def list_my_orders(store: Store, user_id: str) -> List[Order]:
    return store.orders.for_user(user_id)

import os
from typing import Optional

import structlog
from fastapi import BackgroundTasks, Depends, FastAPI, Header, Query
from fastapi.middleware.cors import CORSMiddleware

import auth
import cart as carts
import catalog
import orders
import settings
from database import db
from errors import PersistenceError, StorefrontError, register_error_handlers
from notifications import OrderNotifier, SmtpEmailAdapter
from schemas import (
    AddToCartRequest,
    ChangePasswordRequest,
    CheckoutRequest,
    LoginRequest,
    ProfileUpdateRequest,
    SeedRequest,
    SignupRequest,
    UpdateCartItemRequest,
    User,
)
from seed import seed_products
from store import Store

structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(settings.log_level(settings.LOG_LEVEL)),
)
logger = structlog.get_logger(__name__)

app = FastAPI(title="Canvas Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# ---------- Dependencies ----------

def get_store() -> Store:
    return Store(db)


def get_notifier() -> OrderNotifier:
    return OrderNotifier(SmtpEmailAdapter.from_settings())


def get_current_user(
    authorization: Optional[str] = Header(None),
    x_auth_token: Optional[str] = Header(None),
    store: Store = Depends(get_store),
) -> User:
    return auth.resolve_user(store, auth.token_from_headers(authorization, x_auth_token))


def server_error(message: str, e: Exception) -> PersistenceError:
    logger.exception(message)
    return PersistenceError(message, error=str(e))


# ---------- Health ----------

@app.get("/")
def read_root():
    return {"message": "Canvas storefront API is running"}


@app.get("/test")
def test_database(store: Store = Depends(get_store)):
    response = {
        "backend": "running",
        "database": "not-connected",
        "database_url": "set" if os.getenv("DATABASE_URL") else "default",
        "database_name": store.database.name,
        "collections": [],
    }
    try:
        response["collections"] = store.database.list_collection_names()[:10]
        response["database"] = "connected"
    except Exception as e:
        response["database"] = f"error: {str(e)[:50]}"
    return response


# ---------- Catalog ----------

@app.post("/seed")
def seed(payload: Optional[SeedRequest] = None, store: Store = Depends(get_store)):
    try:
        count = seed_products(store, force=bool(payload and payload.force))
        return {"success": True, "seeded": True, "count": count}
    except Exception as e:
        raise server_error("Error seeding products", e)


@app.get("/products")
def list_products(
    category: Optional[str] = None,
    size: Optional[str] = None,
    price_min: Optional[float] = Query(None, alias="priceMin", ge=0),
    price_max: Optional[float] = Query(None, alias="priceMax", ge=0),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    store: Store = Depends(get_store),
):
    try:
        filters = catalog.ProductFilter(
            category=category, size=size, price_min=price_min, price_max=price_max, search=search
        )
        result = catalog.list_products(store, filters, page=page, limit=limit)
        return {
            "success": True,
            "count": result.count,
            "total": result.total,
            "pages": result.pages,
            "current_page": result.current_page,
            "products": [p.model_dump() for p in result.products],
        }
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error fetching products", e)


@app.get("/products/featured")
def featured_products(store: Store = Depends(get_store)):
    try:
        products = catalog.featured_products(store)
        return {"success": True, "count": len(products), "products": [p.model_dump() for p in products]}
    except Exception as e:
        raise server_error("Error fetching featured products", e)


@app.get("/products/search")
def search_products(q: Optional[str] = None, store: Store = Depends(get_store)):
    try:
        products = catalog.search_products(store, q)
        return {"success": True, "count": len(products), "products": [p.model_dump() for p in products]}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error searching products", e)


@app.get("/products/category/{category}")
def products_by_category(category: str, store: Store = Depends(get_store)):
    try:
        products = catalog.products_by_category(store, category)
        return {"success": True, "count": len(products), "products": [p.model_dump() for p in products]}
    except Exception as e:
        raise server_error("Error fetching products by category", e)


@app.get("/products/{product_id}")
def get_product(product_id: str, store: Store = Depends(get_store)):
    try:
        return {"success": True, "product": catalog.get_product(store, product_id).model_dump()}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error fetching product", e)


# ---------- Cart ----------

@app.get("/cart")
def get_cart(user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        return {"success": True, "cart": carts.get_cart(store, user.id).view()}
    except Exception as e:
        raise server_error("Error fetching cart", e)


@app.post("/cart/add")
def add_to_cart(payload: AddToCartRequest, user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        cart = carts.add_item(store, user.id, payload.product_id, payload.size, payload.quantity)
        return {"success": True, "message": "Item added to cart", "cart": cart.view()}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error adding item to cart", e)


@app.put("/cart/item/{item_id}")
def update_cart_item(
    item_id: str,
    payload: UpdateCartItemRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        cart = carts.update_item(store, user.id, item_id, payload.quantity)
        return {"success": True, "message": "Cart updated", "cart": cart.view()}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error updating cart", e)


@app.delete("/cart/item/{item_id}")
def remove_cart_item(item_id: str, user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        cart = carts.remove_item(store, user.id, item_id)
        return {"success": True, "message": "Item removed from cart", "cart": cart.view()}
    except Exception as e:
        raise server_error("Error removing item from cart", e)


@app.delete("/cart/clear")
def clear_cart(user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        cart = carts.clear_cart(store, user.id)
        return {"success": True, "message": "Cart cleared", "cart": cart.view()}
    except Exception as e:
        raise server_error("Error clearing cart", e)


# ---------- Orders ----------

@app.post("/orders/checkout", status_code=201)
def checkout(
    background_tasks: BackgroundTasks,
    payload: Optional[CheckoutRequest] = None,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
    notifier: OrderNotifier = Depends(get_notifier),
):
    # payload.payment, when present, has already been validated; it is not kept.
    def notify(order, contact):
        background_tasks.add_task(notifier.send_order_confirmation, order, contact)

    try:
        order = orders.checkout(store, user.id, notify)
        return {"success": True, "message": "Order placed successfully!", "order": order.model_dump()}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error processing checkout", e)


@app.get("/orders/my-orders")
def my_orders(user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        found = orders.list_my_orders(store, user.id)
        return {"success": True, "count": len(found), "orders": [o.model_dump() for o in found]}
    except Exception as e:
        raise server_error("Error fetching orders", e)


@app.get("/orders/{order_id}")
def get_order(order_id: str, user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        return {"success": True, "order": orders.get_order(store, order_id, user.id).model_dump()}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error fetching order", e)


# ---------- Accounts ----------

@app.post("/auth/signup", status_code=201)
def signup(payload: SignupRequest, store: Store = Depends(get_store)):
    try:
        user = auth.signup(store, payload.name, payload.email, payload.password)
        return {"success": True, "token": auth.create_token(user), "user": auth.public_profile(user)}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error creating account", e)


@app.post("/auth/login")
def login(payload: LoginRequest, store: Store = Depends(get_store)):
    try:
        user = auth.login(store, payload.email, payload.password)
        return {"success": True, "token": auth.create_token(user), "user": auth.public_profile(user)}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error logging in", e)


@app.get("/auth/profile")
def get_profile(user: User = Depends(get_current_user)):
    return {"success": True, "user": auth.public_profile(user)}


@app.put("/auth/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        updated = auth.update_profile(store, user, name=payload.name, profile_image=payload.profile_image)
        return {"success": True, "message": "Profile updated successfully!", "user": auth.public_profile(updated)}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error updating profile", e)


@app.post("/auth/change-password")
def change_password(
    payload: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
):
    try:
        auth.change_password(store, user, payload.current_password, payload.new_password)
        return {"success": True, "message": "Password changed successfully!"}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error changing password", e)


@app.delete("/auth/profile")
def delete_account(user: User = Depends(get_current_user), store: Store = Depends(get_store)):
    try:
        auth.delete_account(store, user)
        return {"success": True, "message": "Account deleted"}
    except StorefrontError:
        raise
    except Exception as e:
        raise server_error("Error deleting account", e)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

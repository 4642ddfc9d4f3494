"""Collection repositories and the write boundary used by multi-step operations.

MongoDB gives us atomic writes per document only. ``UnitOfWork`` does not
pretend otherwise: each write it performs is committed immediately and
nothing is rolled back, but every committed step is recorded so callers
(and tests) can see exactly where an operation stopped.
"""

from typing import Any, Callable, Dict, List, Optional

import structlog
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from database import create_document, get_documents, now, to_str_id
from schemas import Cart, Order, Product, User

logger = structlog.get_logger(__name__)


def as_object_id(id_str: str) -> Optional[ObjectId]:
    return ObjectId(id_str) if ObjectId.is_valid(id_str) else None


class ProductRepository:
    collection_name = "product"

    def __init__(self, database: Database):
        self.database = database
        self.collection = database[self.collection_name]

    def get(self, product_id: str) -> Optional[Product]:
        oid = as_object_id(product_id)
        doc = self.collection.find_one({"_id": oid}) if oid else None
        return Product(**to_str_id(doc)) if doc else None

    def count(self, filt: Dict[str, Any]) -> int:
        return self.collection.count_documents(filt)

    def find(
        self,
        filt: Dict[str, Any],
        sort: List[tuple],
        skip: int = 0,
        limit: int = 0,
    ) -> List[Product]:
        cursor = self.collection.find(filt).sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [Product(**to_str_id(d)) for d in cursor]

    def find_all(self, filt: Dict[str, Any]) -> List[Product]:
        return [Product(**d) for d in get_documents(self.collection_name, filt, database=self.database)]

    def add(self, product: Product) -> str:
        return create_document(self.collection_name, product, database=self.database)

    def delete_all(self) -> int:
        return self.collection.delete_many({}).deleted_count


class CartRepository:
    collection_name = "cart"

    def __init__(self, database: Database):
        self.collection = database[self.collection_name]

    def get(self, user_id: str) -> Optional[Cart]:
        doc = self.collection.find_one({"user_id": user_id})
        return Cart(**to_str_id(doc)) if doc else None

    def save(self, cart: Cart) -> Cart:
        items = [item.model_dump() for item in cart.items]
        doc = self.collection.find_one_and_update(
            {"user_id": cart.user_id},
            {
                "$set": {"items": items, "updated_at": now()},
                "$setOnInsert": {"created_at": now()},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return Cart(**to_str_id(doc))

    def clear(self, user_id: str) -> None:
        self.collection.update_one(
            {"user_id": user_id},
            {"$set": {"items": [], "updated_at": now()}},
        )


class OrderRepository:
    """Orders are inserted once and only read afterwards."""

    collection_name = "order"

    def __init__(self, database: Database):
        self.database = database
        self.collection = database[self.collection_name]

    def create(self, order: Order) -> Order:
        doc = {
            "user_id": order.user_id,
            "items": [item.model_dump() for item in order.items],
            "total_amount": order.total_amount,
            "status": order.status,
        }
        order_id = create_document(self.collection_name, doc, database=self.database)
        return self.get(order_id)

    def get(self, order_id: str) -> Optional[Order]:
        oid = as_object_id(order_id)
        doc = self.collection.find_one({"_id": oid}) if oid else None
        return Order(**to_str_id(doc)) if doc else None

    def count(self, filt: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(filt or {})

    def for_user(self, user_id: str) -> List[Order]:
        cursor = self.collection.find({"user_id": user_id}).sort("created_at", DESCENDING)
        return [Order(**to_str_id(d)) for d in cursor]


class UserRepository:
    collection_name = "user"

    def __init__(self, database: Database):
        self.database = database
        self.collection = database[self.collection_name]

    def get(self, user_id: str) -> Optional[User]:
        oid = as_object_id(user_id)
        doc = self.collection.find_one({"_id": oid}) if oid else None
        return User(**to_str_id(doc)) if doc else None

    def get_by_email(self, email: str) -> Optional[User]:
        doc = self.collection.find_one({"email": email.lower()})
        return User(**to_str_id(doc)) if doc else None

    def add(self, user: User) -> User:
        user_id = create_document(self.collection_name, user, database=self.database)
        return self.get(user_id)

    def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        oid = as_object_id(user_id)
        if not oid:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**changes, "updated_at": now()}},
            return_document=ReturnDocument.AFTER,
        )
        return User(**to_str_id(doc)) if doc else None

    def delete(self, user_id: str) -> bool:
        oid = as_object_id(user_id)
        return bool(oid) and self.collection.delete_one({"_id": oid}).deleted_count > 0


class Store:
    def __init__(self, database: Database):
        self.database = database
        self.products = ProductRepository(database)
        self.carts = CartRepository(database)
        self.orders = OrderRepository(database)
        self.users = UserRepository(database)

    def unit_of_work(self, operation: str) -> "UnitOfWork":
        return UnitOfWork(operation)


class UnitOfWork:
    """Runs the named writes of one operation, one committed document at a time."""

    def __init__(self, operation: str):
        self.operation = operation
        self.committed: List[str] = []

    def commit(self, step: str, write: Callable[..., Any], *args: Any) -> Any:
        result = write(*args)
        self.committed.append(step)
        logger.debug("Write committed", operation=self.operation, step=step)
        return result

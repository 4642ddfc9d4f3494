"""Read-only catalog queries."""

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from errors import NotFoundError, ValidationError
from schemas import Product
from store import Store

FEATURED_LIMIT = 6
NEWEST_FIRST = [("created_at", DESCENDING)]
# Equal ratings fall back to review count, then recency.
TOP_RATED = [("rating", DESCENDING), ("reviews", DESCENDING), ("created_at", DESCENDING)]


@dataclass
class ProductFilter:
    category: Optional[str] = None
    size: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    search: Optional[str] = None

    def to_query(self) -> Dict[str, Any]:
        filt: Dict[str, Any] = {}
        if self.category:
            filt["category"] = self.category
        if self.size:
            filt["sizes"] = self.size
        if self.price_min is not None or self.price_max is not None:
            price_cond: Dict[str, Any] = {}
            if self.price_min is not None:
                price_cond["$gte"] = float(self.price_min)
            if self.price_max is not None:
                price_cond["$lte"] = float(self.price_max)
            filt["price"] = price_cond
        if self.search:
            filt.update(text_match(self.search))
        return filt


@dataclass
class ProductPage:
    products: List[Product]
    total: int
    pages: int
    current_page: int

    @property
    def count(self) -> int:
        return len(self.products)


def text_match(term: str) -> Dict[str, Any]:
    pattern = re.escape(term.strip())
    return {
        "$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }


def list_products(store: Store, filters: ProductFilter, page: int = 1, limit: int = 10) -> ProductPage:
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive integers")
    filt = filters.to_query()
    total = store.products.count(filt)
    products = store.products.find(filt, NEWEST_FIRST, skip=(page - 1) * limit, limit=limit)
    return ProductPage(
        products=products,
        total=total,
        pages=math.ceil(total / limit),
        current_page=page,
    )


def featured_products(store: Store, limit: int = FEATURED_LIMIT) -> List[Product]:
    return store.products.find({}, TOP_RATED, limit=limit)


def search_products(store: Store, q: Optional[str]) -> List[Product]:
    if not q or not q.strip():
        raise ValidationError("Search query is required")
    return store.products.find_all(text_match(q))


def products_by_category(store: Store, category: str) -> List[Product]:
    return store.products.find_all({"category": category})


def get_product(store: Store, product_id: str) -> Product:
    product = store.products.get(product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product

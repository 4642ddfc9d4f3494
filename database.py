"""
Database helpers

Thin wrappers around pymongo. The collection name for a schema is the
lowercase of its class name:
- Product -> "product"
- Cart -> "cart"
- Order -> "order"
- User -> "user"
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.database import Database

import settings

client = MongoClient(settings.DATABASE_URL)
db: Database = client[settings.DATABASE_NAME]


def now() -> datetime:
    return datetime.now(timezone.utc)


def to_str_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    d = dict(doc)
    if d.get("_id"):
        d["id"] = str(d.pop("_id"))
    return d


def create_document(
    collection_name: str,
    data: Union[BaseModel, Dict[str, Any]],
    database: Optional[Database] = None,
) -> str:
    """Insert a document, stamping created_at/updated_at, and return its id."""
    database = db if database is None else database
    doc = data.model_dump(exclude={"id"}) if isinstance(data, BaseModel) else dict(data)
    doc.pop("id", None)
    stamp = now()
    if not doc.get("created_at"):
        doc["created_at"] = stamp
    doc["updated_at"] = stamp
    result = database[collection_name].insert_one(doc)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
    database: Optional[Database] = None,
) -> List[Dict[str, Any]]:
    database = db if database is None else database
    cursor = database[collection_name].find(filter_dict or {})
    if limit:
        cursor = cursor.limit(limit)
    return [to_str_id(d) for d in cursor]

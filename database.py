"""
Database helpers

Holds the shared MongoDB client for the storefront. Collections are named
after the lowercase schema class (User -> "user", Product -> "product").
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/aaro"

_client = None
db = None

database_url = os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI)
database_name = os.getenv("DATABASE_NAME")

if database_url:
    _client = MongoClient(database_url)
    if database_name:
        db = _client[database_name]
    else:
        db = _client.get_default_database("aaro")


def _now():
    return datetime.now(timezone.utc)


def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a single document, stamping createdAt/updatedAt.

    Pydantic models are dumped by alias so stored keys match the wire format.
    """
    if db is None:
        raise RuntimeError("Database not available. Check MONGODB_URI.")

    if isinstance(data, BaseModel):
        data_dict = data.model_dump(by_alias=True)
    else:
        data_dict = data.copy()

    now = _now()
    data_dict["createdAt"] = now
    data_dict["updatedAt"] = now

    result = db[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
    sort: Optional[List] = None,
) -> List[Dict[str, Any]]:
    if db is None:
        raise RuntimeError("Database not available. Check MONGODB_URI.")

    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


UNIQUE_INDEXES = [
    ("user", "email"),
    ("category", "slug"),
    ("brand", "slug"),
]


def ensure_indexes():
    if db is None:
        return
    for collection_name, field in UNIQUE_INDEXES:
        try:
            db[collection_name].create_index([(field, ASCENDING)], unique=True)
        except PyMongoError as exc:
            logger.warning("Unable to ensure unique index on %s.%s: %s", collection_name, field, exc)
    try:
        db["order"].create_index([("userId", ASCENDING), ("createdAt", -1)])
        db["variant"].create_index([("productId", ASCENDING)])
        db["review"].create_index([("productId", ASCENDING), ("createdAt", -1)])
    except PyMongoError as exc:
        logger.warning("Unable to ensure lookup indexes: %s", exc)

"""
MongoDB-backed record store for contact messages.

The store owns identifiers and creation timestamps: `insert` adds `created_at`
and Mongo assigns `_id`. Records handed back to callers expose `_id` as a
string `id` and `created_at` as an ISO-8601 string.
"""

from datetime import datetime, timezone
from typing import Dict, Any, List
import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from contact_api.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def serialize_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored document into its JSON-ready form"""
    record = {key: value for key, value in doc.items() if key != "_id"}
    if "_id" in doc:
        record = {"id": str(doc["_id"]), **record}
    created_at = record.get("created_at")
    if isinstance(created_at, datetime):
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        record["created_at"] = created_at.isoformat()
    return record


class MongoRecordStore:
    def __init__(self, collection):
        self.collection = collection

    async def insert(self, document: Dict[str, Any]) -> str:
        """
        Insert one contact message.

        Returns:
            str: The id the store assigned

        Raises:
            PersistenceError: if MongoDB rejects the write
        """
        doc = {**document, "created_at": datetime.now(timezone.utc)}
        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return str(result.inserted_id)

    async def list_all(self) -> List[Dict[str, Any]]:
        """All contact messages, most recent first"""
        try:
            cursor = self.collection.find({}).sort("created_at", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return [serialize_record(doc) for doc in docs]

    async def delete_by_id(self, record_id: str) -> int:
        """
        Delete the message with the given id. Unknown or malformed ids match nothing.

        Returns:
            int: Number of deleted documents (0 or 1)
        """
        try:
            object_id = ObjectId(record_id)
        except (InvalidId, TypeError):
            logger.info(f"Ignoring delete for malformed contact message id: {record_id}")
            return 0

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise PersistenceError(str(e)) from e
        return result.deleted_count

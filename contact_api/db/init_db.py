#!/usr/bin/env python3
"""
Database initialization module for the contact form backend.
Ensures the contact messages collection and its indexes exist when the
backend starts. Safe to run repeatedly.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from contact_api.core.config import get_settings
from contact_api.db.mongo import get_db

# Set up logger
logger = logging.getLogger(__name__)


def required_collections() -> List[Dict[str, Any]]:
    return [
        {
            "name": get_settings().contact_collection,
            "description": "Backup copy of every contact form submission",
            "indexes": [
                {"keys": [("created_at", -1)], "unique": False}
            ]
        }
    ]


async def collection_exists(db, collection_name):
    """
    Check if a collection exists in the database.

    Args:
        db: MongoDB database connection
        collection_name (str): Name of the collection to check

    Returns:
        bool: True if collection exists, False otherwise
    """
    try:
        collections = await db.list_collection_names()
        return collection_name in collections
    except Exception as e:
        logger.error(f"Error checking if collection '{collection_name}' exists: {str(e)}")
        return False


async def ensure_indexes(collection, collection_name, indexes):
    for index_config in indexes:
        keys = index_config["keys"]
        options = {k: v for k, v in index_config.items() if k != "keys"}
        try:
            await collection.create_index(keys, **options)
            logger.info(f"✅ Index {keys} ensured for '{collection_name}'")
        except Exception as e:
            logger.warning(f"Failed to create index {keys} for '{collection_name}': {str(e)}")


async def create_collection_with_indexes(db, collection_config):
    """
    Create a collection with its required indexes if it doesn't exist.

    Returns:
        bool: True if successful, False otherwise
    """
    collection_name = collection_config["name"]
    description = collection_config.get("description", "")
    indexes = collection_config.get("indexes", [])

    try:
        if await collection_exists(db, collection_name):
            logger.info(f"✅ Collection '{collection_name}' already exists")
        else:
            logger.info(f"🔄 Creating collection '{collection_name}': {description}")
            await db.create_collection(collection_name)
            logger.info(f"✅ Collection '{collection_name}' created successfully")

        # Still try to create indexes in case they're missing
        await ensure_indexes(db[collection_name], collection_name, indexes)
        return True

    except Exception as e:
        logger.error(f"❌ Failed to create collection '{collection_name}': {str(e)}")
        return False


async def initialize_database(db=None):
    """
    Initialize the database by creating all required collections and indexes.

    Returns:
        bool: True if initialization completed successfully, False otherwise
    """
    start_time = datetime.now(timezone.utc)
    logger.info("🚀 Starting database initialization...")

    try:
        if db is None:
            db = get_db()
        logger.info(f"📊 Initializing database: {db.name}")

        error_count = 0
        for collection_config in required_collections():
            if not await create_collection_with_indexes(db, collection_config):
                error_count += 1

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()

        if error_count == 0:
            logger.info(f"🎉 Database initialization completed in {duration:.2f}s")
            return True

        logger.warning(f"⚠️ Database initialization completed with {error_count} errors in {duration:.2f}s")
        return False

    except PyMongoError as e:
        logger.error(f"❌ MongoDB error during database initialization: {str(e)}")
        return False
    except Exception as e:
        logger.error(f"❌ Unexpected error during database initialization: {str(e)}")
        return False


if __name__ == "__main__":
    import asyncio
    from dotenv import load_dotenv

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    load_dotenv()

    success = asyncio.run(initialize_database())
    exit(0 if success else 1)

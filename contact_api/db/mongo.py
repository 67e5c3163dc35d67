import motor.motor_asyncio
import logging
from typing import Optional, Tuple

from contact_api.core.config import get_settings

# Set up logger
logger = logging.getLogger(__name__)

client: Optional[motor.motor_asyncio.AsyncIOMotorClient] = None
db = None


def mask_mongo_uri(uri: str) -> str:
    """Replace the password in a MongoDB URI with asterisks for logging"""
    masked_uri = uri
    if '@' in uri and ':' in uri:
        parts = uri.split('@')
        if len(parts) > 1:
            credentials_part = parts[0]
            if ':' in credentials_part:
                user_pass = credentials_part.split('://')[-1]
                if ':' in user_pass:
                    user, password = user_pass.split(':', 1)
                    masked_credentials = f"{user}:{'*' * len(password)}"
                    masked_uri = uri.replace(user_pass, masked_credentials)
    return masked_uri


def split_database_name(uri: str) -> Tuple[str, str]:
    """
    Split a MongoDB URI into (connection_uri, db_name).

    Raises:
        ValueError: if the URI carries no database name
    """
    db_name = None
    connection_uri = uri

    if '/' in uri:
        uri_parts = uri.split('/')
        if len(uri_parts) > 3:  # mongodb://host:port/database format
            potential_db_name = uri_parts[-1]
            query = ''
            if '?' in potential_db_name:
                potential_db_name, query = potential_db_name.split('?', 1)
            if potential_db_name.strip():
                db_name = potential_db_name
                connection_uri = '/'.join(uri_parts[:-1]) + '/'
                if query:
                    connection_uri += '?' + query

    if not db_name:
        raise ValueError("Database name not found in MongoDB URI. Please ensure your MONGODB_URL includes the database name.")

    return connection_uri, db_name


def connect(uri: Optional[str] = None):
    """Create the shared Motor client and select the database. Returns the database."""
    global client, db

    if db is not None:
        return db

    mongo_uri = uri or get_settings().effective_mongo_uri
    logger.info(f"MongoDB URI configured: {mask_mongo_uri(mongo_uri)}")

    try:
        connection_uri, db_name = split_database_name(mongo_uri)

        # Connect without database name to avoid authentication issues
        logger.info(f"Connecting to MongoDB server: {mask_mongo_uri(connection_uri)}")
        client = motor.motor_asyncio.AsyncIOMotorClient(
            connection_uri,
            maxPoolSize=10,
            minPoolSize=2,
            maxIdleTimeMS=30000,         # Close idle connections after 30 seconds
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=10000
        )

        db = client[db_name]
        logger.info(f"MongoDB connection established successfully to database: {db_name}")

    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {str(e)}")
        raise

    return db


def get_db():
    """Returns the database connection"""
    if db is None:
        return connect()
    return db


def close():
    global client, db
    if client is not None:
        client.close()
        logger.info("MongoDB connections closed successfully")
    client = None
    db = None

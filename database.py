# database.py
import logging
from mongoengine import connect, disconnect
from mongoengine.connection import get_connection, get_db

logger = logging.getLogger(__name__)

DB_ALIAS = 'default'


def init_db(config):
    """Open the mongoengine connection described by a Config class."""
    kwargs = {
        'db': config.MONGODB_DB,
        'host': config.MONGODB_URI,
        'alias': DB_ALIAS,
        'uuidRepresentation': 'standard',
    }
    if config.MONGO_CLIENT_CLASS is not None:
        kwargs['mongo_client_class'] = config.MONGO_CLIENT_CLASS

    # Re-initialising (tests, reloads) must not trip over an existing alias
    disconnect(alias=DB_ALIAS)
    try:
        logger.info(f"Connecting to MongoDB database '{config.MONGODB_DB}'...")
        client = connect(**kwargs)
        logger.info("MongoDB connection configured")
        return client
    except Exception as e:
        logger.error(f"Error connecting to MongoDB: {str(e)}")
        raise


def close_db():
    disconnect(alias=DB_ALIAS)
    logger.info("MongoDB connection closed")


def ping():
    """Round-trip to the server, used by the health check."""
    get_connection(DB_ALIAS).admin.command('ping')
    return get_db(DB_ALIAS).name

import logging

import mongoengine # Import the MongoEngine library used to define models and manage MongoDB connections.

logger = logging.getLogger(__name__)

"""
Initialize MongoEngine and register the application's connection.

- Registers a connection alias named 'core' that points to the configured database.
- Call this once during startup before using data.collections.StoredCollection,
    which declares `meta = {'db_alias': 'core'}`.
- Only needed for the 'mongo' storage backend.
"""
def global_init(config):
    logger.debug("Registering MongoDB connection 'core' -> %s", config.MONGO_DB)
    mongoengine.register_connection(alias='core', name=config.MONGO_DB, host=config.MONGO_HOST)

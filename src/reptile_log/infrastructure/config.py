"""
Runtime configuration read from environment variables.

The console program loads a `.env` file (python-dotenv) before building a
Config, so the same variables can live there instead of the shell.
"""

import os

DEFAULT_DATA_DIR = os.path.join(os.path.expanduser("~"), ".reptile_log")


class Config:
    """Settings shared by every environment."""
    # Storage backend: 'json' (local files) or 'mongo' (MongoDB through MongoEngine).
    STORAGE = os.getenv('REPTILE_LOG_STORAGE', 'json')
    # Directory holding reptiles.json / entries.json for the json backend.
    DATA_DIR = os.getenv('REPTILE_LOG_DATA_DIR', DEFAULT_DATA_DIR)

    MONGO_DB = os.getenv('REPTILE_LOG_MONGO_DB', 'reptile_log')
    # None lets MongoEngine fall back to the local server.
    MONGO_HOST = os.getenv('REPTILE_LOG_MONGO_HOST')

    LOG_LEVEL = os.getenv('REPTILE_LOG_LOG_LEVEL', 'WARNING')

    def __init__(self, **overrides):
        # Re-read the environment so a Config built after load_dotenv() sees the new values.
        self.STORAGE = os.getenv('REPTILE_LOG_STORAGE', type(self).STORAGE)
        self.DATA_DIR = os.getenv('REPTILE_LOG_DATA_DIR', type(self).DATA_DIR)
        self.MONGO_DB = os.getenv('REPTILE_LOG_MONGO_DB', type(self).MONGO_DB)
        self.MONGO_HOST = os.getenv('REPTILE_LOG_MONGO_HOST', type(self).MONGO_HOST)
        self.LOG_LEVEL = os.getenv('REPTILE_LOG_LOG_LEVEL', type(self).LOG_LEVEL)

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown config setting: {name}")
            setattr(self, name, value)


class TestingConfig(Config):
    """Configuration for tests: in-memory storage unless a test overrides it."""
    STORAGE = 'memory'
    MONGO_DB = 'reptile_log_test'
    LOG_LEVEL = 'DEBUG'

    def __init__(self, **overrides):
        # Ignore the environment entirely so a developer's settings never leak into tests.
        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown config setting: {name}")
            setattr(self, name, value)


# Maps an environment name to its Config class.
config_by_name = dict(
    default=Config,
    testing=TestingConfig
)

"""MongoDB connection handling for the repositories."""

from ghent.mongo.connection import MongoConnection, ensure_indexes
from ghent.mongo.settings import MongoSettings

__all__ = [
    "MongoConnection",
    "MongoSettings",
    "ensure_indexes",
]

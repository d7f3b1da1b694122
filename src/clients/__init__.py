"""Client modules for external services."""

from src.clients.mongodb_client import (
    CONTACTS,
    MANUFACTURERS,
    PRODUCTS,
    MongoDBClient,
)

__all__ = [
    "CONTACTS",
    "MANUFACTURERS",
    "PRODUCTS",
    "MongoDBClient",
]

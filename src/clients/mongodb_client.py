"""MongoDB client for the inventory collections."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.client_session import AsyncClientSession
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

logger = logging.getLogger(__name__)

PRODUCTS = "products"
MANUFACTURERS = "manufacturers"
CONTACTS = "contacts"


class MongoDBClient:
    """Async MongoDB client with connection management.

    Wraps the collections used by the inventory services and hands out
    transactional sessions. Multi-document transactions need the server to
    run as a replica set.
    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        server_selection_timeout_ms: int = 5000,
    ):
        """Initialize the MongoDB client.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
            server_selection_timeout_ms: How long to wait for a reachable server
        """
        self._uri = uri
        self._database_name = database_name
        self._server_selection_timeout_ms = server_selection_timeout_ms

        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None

    async def connect(self) -> None:
        """Establish connection and ensure collections and unique indexes exist."""
        self._client = AsyncMongoClient(
            self._uri,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
        )
        self._database = self._client[self._database_name]
        await self._ensure_indexes()
        logger.info(f"Connected to MongoDB database '{self._database_name}'")

    async def _ensure_indexes(self) -> None:
        """Create the collections and the indexes backing the uniqueness rules.

        Collections are created up front because older servers refuse to
        create them implicitly inside a transaction.
        """
        existing = set(await self._database.list_collection_names())
        for name in (PRODUCTS, MANUFACTURERS, CONTACTS):
            if name not in existing:
                await self._database.create_collection(name)

        await self._database[PRODUCTS].create_index([("sku", ASCENDING)], unique=True)
        await self._database[PRODUCTS].create_index([("manufacturer", ASCENDING)])
        await self._database[PRODUCTS].create_index([("amountInStock", ASCENDING)])
        await self._database[MANUFACTURERS].create_index([("name", ASCENDING)], unique=True)
        logger.debug("MongoDB indexes ensured")

    async def close(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None

    async def __aenter__(self) -> "MongoDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    def collection(self, name: str) -> AsyncCollection:
        """Get a collection handle.

        Raises:
            RuntimeError: If client is not connected.
        """
        if self._database is None:
            raise RuntimeError("MongoDB client not connected. Call connect() first.")
        return self._database[name]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncClientSession]:
        """Run the enclosed block as one multi-document transaction.

        Commits when the block exits normally. Any exception aborts the
        transaction and is re-raised; no retry is attempted.

        Raises:
            RuntimeError: If client is not connected.
        """
        if self._client is None:
            raise RuntimeError("MongoDB client not connected. Call connect() first.")

        async with self._client.start_session() as session:
            async with await session.start_transaction():
                yield session

    async def insert_one(
        self,
        collection: str,
        document: dict[str, Any],
        session: Optional[AsyncClientSession] = None,
    ) -> InsertOneResult:
        """Insert a document. Unique index violations raise DuplicateKeyError."""
        return await self.collection(collection).insert_one(document, session=session)

    async def find_one(
        self,
        collection: str,
        filter: dict[str, Any],
        session: Optional[AsyncClientSession] = None,
    ) -> Optional[dict[str, Any]]:
        """Find a single document matching the filter, or None."""
        return await self.collection(collection).find_one(filter, session=session)

    async def update_one(
        self,
        collection: str,
        filter: dict[str, Any],
        update: dict[str, Any],
        session: Optional[AsyncClientSession] = None,
    ) -> UpdateResult:
        """Apply an update document to the first match."""
        return await self.collection(collection).update_one(filter, update, session=session)

    async def delete_one(
        self,
        collection: str,
        filter: dict[str, Any],
        session: Optional[AsyncClientSession] = None,
    ) -> DeleteResult:
        """Delete the first document matching the filter."""
        return await self.collection(collection).delete_one(filter, session=session)

    async def aggregate(
        self,
        collection: str,
        pipeline: list[dict[str, Any]],
        session: Optional[AsyncClientSession] = None,
    ) -> list[dict[str, Any]]:
        """Run an aggregation pipeline and collect the results.

        Args:
            collection: Collection the pipeline starts from
            pipeline: List of aggregation stages
            session: Optional session to run inside a transaction

        Returns:
            List of result documents.
        """
        items = []
        cursor = await self.collection(collection).aggregate(pipeline, session=session)
        async for item in cursor:
            items.append(dict(item))

        return items

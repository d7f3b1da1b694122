from typing import List

from ..clients import MANUFACTURERS, MongoDBClient
from ..models import Manufacturer
from .pipelines import lookup_contact_stages


class ManufacturerService:
    _store: MongoDBClient

    def __init__(self, store: MongoDBClient):
        self._store = store

    async def list_manufacturers(self) -> List[Manufacturer]:
        """All manufacturers by name, each with its contact inlined."""
        pipeline = [
            {"$sort": {"name": 1, "_id": 1}},
            *lookup_contact_stages("contact", "contact"),
        ]
        documents = await self._store.aggregate(MANUFACTURERS, pipeline)
        return [Manufacturer.from_document(document) for document in documents]

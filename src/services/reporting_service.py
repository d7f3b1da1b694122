"""Stock reporting over the product collection.

Provides four read-only views:
- Total stock value (sum of price × amountInStock)
- Stock value per manufacturer
- Low stock products (full records)
- Critical stock products (who to call to reorder)

Each view is an aggregation pipeline built by a pure function below and run
by ReportingService against the store.
"""

import logging
from typing import Any, Dict, List, Optional

from ..clients import PRODUCTS, MongoDBClient
from ..errors import MalformedInputError
from ..models import CriticalStockItem, Manufacturer, ManufacturerStockValue, Product
from .pipelines import (
    STOCK_VALUE_EXPRESSION,
    lookup_contact_stages,
    lookup_manufacturer_stages,
    resolved_product_stages,
)

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_CRITICAL_STOCK_THRESHOLD = 5


def total_stock_value_pipeline() -> List[Dict[str, Any]]:
    return [{"$group": {"_id": None, "total": {"$sum": STOCK_VALUE_EXPRESSION}}}]


def stock_value_by_manufacturer_pipeline() -> List[Dict[str, Any]]:
    """Group products by manufacturer; manufacturers without products never appear."""
    return [
        *lookup_manufacturer_stages(),
        {
            "$group": {
                "_id": "$manufacturer._id",
                "manufacturer": {"$first": "$manufacturer"},
                "totalStockValue": {"$sum": STOCK_VALUE_EXPRESSION},
            }
        },
        *lookup_contact_stages("manufacturer.contact", "manufacturer.contact"),
        {"$sort": {"totalStockValue": -1, "manufacturer.name": 1}},
    ]


def low_stock_pipeline(threshold: int) -> List[Dict[str, Any]]:
    return [
        {"$match": {"amountInStock": {"$lt": threshold}}},
        {"$sort": {"amountInStock": 1, "name": 1, "_id": 1}},
        *resolved_product_stages(),
    ]


def critical_stock_pipeline(threshold: int) -> List[Dict[str, Any]]:
    """Products below the threshold, projected to the reorder contact fields only."""
    return [
        {"$match": {"amountInStock": {"$lt": threshold}}},
        {"$sort": {"amountInStock": 1, "name": 1, "_id": 1}},
        *lookup_manufacturer_stages(),
        *lookup_contact_stages("manufacturer.contact", "contact"),
        {
            "$project": {
                "_id": 0,
                "productName": "$name",
                "manufacturerName": "$manufacturer.name",
                "contactName": "$contact.name",
                "contactPhone": "$contact.phone",
                "contactEmail": "$contact.email",
            }
        },
    ]


def _check_threshold(threshold: Any) -> int:
    if not isinstance(threshold, int) or isinstance(threshold, bool) or threshold < 0:
        raise MalformedInputError(
            f"Invalid stock threshold: {threshold!r}",
            errors={"threshold": ["must be a non-negative integer"]},
        )
    return threshold


class ReportingService:
    """Service computing aggregate stock metrics."""

    def __init__(
        self,
        store: MongoDBClient,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        critical_stock_threshold: int = DEFAULT_CRITICAL_STOCK_THRESHOLD,
    ):
        """Initialize the reporting service.

        Args:
            store: Connected MongoDB client.
            low_stock_threshold: Default threshold for low stock listings.
            critical_stock_threshold: Default threshold for critical stock listings.
        """
        self._store = store
        self._low_stock_threshold = _check_threshold(low_stock_threshold)
        self._critical_stock_threshold = _check_threshold(critical_stock_threshold)

    async def total_stock_value(self) -> float:
        """Sum of price × amountInStock over all products; 0 when there are none."""
        result = await self._store.aggregate(PRODUCTS, total_stock_value_pipeline())
        if not result:
            return 0
        return result[0]["total"]

    async def total_stock_value_by_manufacturer(self) -> List[ManufacturerStockValue]:
        """Stock value per manufacturer, highest value first."""
        documents = await self._store.aggregate(PRODUCTS, stock_value_by_manufacturer_pipeline())
        return [
            ManufacturerStockValue(
                manufacturer=Manufacturer.from_document(document["manufacturer"]),
                total_stock_value=document["totalStockValue"],
            )
            for document in documents
        ]

    async def low_stock_products(self, threshold: Optional[int] = None) -> List[Product]:
        """Products with amountInStock below the threshold (default 10)."""
        if threshold is None:
            threshold = self._low_stock_threshold
        pipeline = low_stock_pipeline(_check_threshold(threshold))
        documents = await self._store.aggregate(PRODUCTS, pipeline)
        return [Product.from_document(document) for document in documents]

    async def critical_stock_products(self, threshold: Optional[int] = None) -> List[CriticalStockItem]:
        """Products with amountInStock below the threshold (default 5), compact form."""
        if threshold is None:
            threshold = self._critical_stock_threshold
        pipeline = critical_stock_pipeline(_check_threshold(threshold))
        documents = await self._store.aggregate(PRODUCTS, pipeline)
        logger.debug(f"{len(documents)} products below critical stock threshold {threshold}")
        return [CriticalStockItem.from_document(document) for document in documents]

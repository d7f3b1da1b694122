"""Product reads, listing, updates and deletion."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import OperationFailure

from ..clients import MANUFACTURERS, PRODUCTS, MongoDBClient
from ..errors import ConflictError, ContractViolationError, MalformedInputError, NotFoundError
from ..models import Product
from ..schemas import validate_product_update
from .ids import parse_object_id
from .pipelines import fetch_resolved_product, resolved_product_stages
from .store_errors import conflict_from_write_error

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 1000

SORT_OPTIONS = {
    "priceAsc": {"price": 1, "_id": 1},
    "priceDesc": {"price": -1, "_id": 1},
}
DEFAULT_SORT = {"name": 1, "_id": 1}


@dataclass(frozen=True)
class ProductFilters:
    """Listing filters; every filter that is set must match."""

    category: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    search: Optional[str] = None
    manufacturer_id: Optional[str] = None
    sort: Optional[str] = None
    limit: Optional[int] = None


def build_product_match(filters: ProductFilters) -> Dict[str, Any]:
    """Translate listing filters into a $match document.

    Raises:
        MalformedInputError: On an invalid manufacturer id or price range.
    """
    match: Dict[str, Any] = {}

    if filters.category:
        match["category"] = filters.category

    if filters.price_min is not None and filters.price_max is not None:
        if filters.price_min > filters.price_max:
            raise MalformedInputError(
                "priceMin must not be greater than priceMax",
                errors={"priceMin": ["must not be greater than priceMax"]},
            )

    price: Dict[str, float] = {}
    if filters.price_min is not None:
        price["$gte"] = filters.price_min
    if filters.price_max is not None:
        price["$lte"] = filters.price_max
    if price:
        match["price"] = price

    if filters.manufacturer_id:
        match["manufacturer"] = parse_object_id(filters.manufacturer_id, "manufacturerId")

    if filters.search:
        pattern = {"$regex": re.escape(filters.search), "$options": "i"}
        match["$or"] = [
            {"name": pattern},
            {"description": pattern},
            {"sku": pattern},
        ]

    return match


def build_product_sort(sort: Optional[str]) -> Dict[str, int]:
    if sort is None:
        return DEFAULT_SORT
    if sort not in SORT_OPTIONS:
        raise MalformedInputError(
            f"Unknown sort {sort!r}",
            errors={"sort": [f"must be one of: {', '.join(SORT_OPTIONS)}"]},
        )
    return SORT_OPTIONS[sort]


class ProductService:
    """Service for reading and changing existing products."""

    def __init__(self, store: MongoDBClient, default_limit: int = DEFAULT_LIST_LIMIT):
        """Initialize the product service.

        Args:
            store: Connected MongoDB client.
            default_limit: Result cap when a listing does not ask for one.
        """
        self._store = store
        self._default_limit = default_limit

    def build_list_pipeline(self, filters: ProductFilters) -> List[Dict[str, Any]]:
        limit = self._default_limit if filters.limit is None else filters.limit
        if limit <= 0:
            raise MalformedInputError(
                "limit must be a positive integer", errors={"limit": ["must be positive"]}
            )

        return [
            {"$match": build_product_match(filters)},
            {"$sort": build_product_sort(filters.sort)},
            {"$limit": limit},
            *resolved_product_stages(),
        ]

    async def list_products(self, filters: Optional[ProductFilters] = None) -> List[Product]:
        """List products matching all supplied filters, manufacturer inlined."""
        pipeline = self.build_list_pipeline(filters or ProductFilters())
        documents = await self._store.aggregate(PRODUCTS, pipeline)
        return [Product.from_document(document) for document in documents]

    async def get_product(self, product_id: str) -> Product:
        """Get a product by id.

        Raises:
            MalformedInputError: If the id is not a valid ObjectId.
            NotFoundError: If no product has this id.
        """
        object_id = parse_object_id(product_id)
        return await self._get_resolved(object_id)

    async def update_product(self, product_id: str, data: Any) -> Product:
        """Apply a partial update to a product.

        Only supplied fields change. A new manufacturer can be referenced by
        ``manufacturerId``; creating a manufacturer inline is only supported
        when creating a product.

        Raises:
            MalformedInputError: If the id or any supplied field is invalid.
            ContractViolationError: If an inline manufacturer is supplied.
            NotFoundError: If the product or the referenced manufacturer is absent.
            ConflictError: If the new sku belongs to another product.
        """
        object_id = parse_object_id(product_id)
        update = validate_product_update(data)

        if update.manufacturer is not None:
            raise ContractViolationError(
                "Inline manufacturer creation is only supported when creating a product",
                details={"manufacturer": ["use manufacturerId to change the manufacturer"]},
            )

        changes = update.model_dump(
            by_alias=True, exclude_unset=True, exclude={"manufacturer", "manufacturer_id"}
        )
        manufacturer_id: Optional[ObjectId] = None
        if update.manufacturer_id is not None:
            manufacturer_id = parse_object_id(update.manufacturer_id, "manufacturerId")

        try:
            async with self._store.transaction() as session:
                existing = await self._store.find_one(PRODUCTS, {"_id": object_id}, session=session)
                if existing is None:
                    raise NotFoundError(f"Product with id {product_id} not found")

                if manufacturer_id is not None:
                    manufacturer = await self._store.find_one(
                        MANUFACTURERS, {"_id": manufacturer_id}, session=session
                    )
                    if manufacturer is None:
                        raise NotFoundError(
                            f"Manufacturer with id {manufacturer_id} not found",
                            details={"manufacturerId": [str(manufacturer_id)]},
                        )
                    changes["manufacturer"] = manufacturer_id

                if "sku" in changes and changes["sku"] != existing["sku"]:
                    duplicate = await self._store.find_one(
                        PRODUCTS, {"sku": changes["sku"], "_id": {"$ne": object_id}}, session=session
                    )
                    if duplicate is not None:
                        raise ConflictError(
                            f"A product with sku {changes['sku']!r} already exists",
                            details={"sku": ["duplicate sku"]},
                        )

                if changes:
                    await self._store.update_one(
                        PRODUCTS, {"_id": object_id}, {"$set": changes}, session=session
                    )
        except OperationFailure as e:
            conflict = conflict_from_write_error(e)
            if conflict is None:
                raise
            raise conflict from e

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return await self._get_resolved(object_id)

    async def delete_product(self, product_id: str) -> Product:
        """Delete a product and return it as it was.

        The product's manufacturer and contact are left in place.

        Raises:
            MalformedInputError: If the id is not a valid ObjectId.
            NotFoundError: If no product has this id.
        """
        object_id = parse_object_id(product_id)
        product = await self._get_resolved(object_id)

        result = await self._store.delete_one(PRODUCTS, {"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"Product with id {product_id} not found")

        logger.info(f"Deleted product {product_id} (sku {product.sku!r})")
        return product

    async def _get_resolved(self, object_id: ObjectId) -> Product:
        document = await fetch_resolved_product(self._store, object_id)
        if document is None:
            raise NotFoundError(f"Product with id {object_id} not found")
        return Product.from_document(document)

"""Product creation workflow.

Creates a product together with, optionally, a new manufacturer and that
manufacturer's contact. All writes happen in one transaction:
- the manufacturer is resolved (looked up, or created with its contact)
- the sku is checked for uniqueness
- the product is inserted
Any failure aborts the transaction, so an inline manufacturer never outlives
a product insert that failed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

from bson import ObjectId
from pymongo.errors import OperationFailure

from ..clients import CONTACTS, MANUFACTURERS, PRODUCTS, MongoDBClient
from ..errors import ConflictError, ContractViolationError, NotFoundError
from ..models import Product
from ..schemas import ManufacturerInput, ProductCreateInput, validate_product_create
from .ids import parse_object_id
from .pipelines import fetch_resolved_product
from .store_errors import conflict_from_write_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExistingManufacturer:
    """The product references a manufacturer that is already stored."""

    manufacturer_id: ObjectId


@dataclass(frozen=True)
class NewManufacturer:
    """The product brings its own manufacturer (and contact) to create."""

    data: ManufacturerInput


ManufacturerReference = Union[ExistingManufacturer, NewManufacturer]


def manufacturer_reference_from_input(product: ProductCreateInput) -> ManufacturerReference:
    """Pick the manufacturer source of a validated product payload.

    Raises:
        ContractViolationError: If both or neither of ``manufacturer`` and
            ``manufacturerId`` are supplied.
        MalformedInputError: If ``manufacturerId`` is not a valid ObjectId.
    """
    has_inline = product.manufacturer is not None
    has_reference = product.manufacturer_id is not None

    if has_inline and has_reference:
        raise ContractViolationError(
            "Provide either 'manufacturer' or 'manufacturerId', not both",
            details={"manufacturer": ["cannot be combined with manufacturerId"]},
        )
    if not has_inline and not has_reference:
        raise ContractViolationError(
            "Either 'manufacturer' or 'manufacturerId' is required",
            details={"manufacturer": ["manufacturer or manufacturerId is required"]},
        )

    if has_reference:
        return ExistingManufacturer(parse_object_id(product.manufacturer_id, "manufacturerId"))
    return NewManufacturer(product.manufacturer)


class ProductCreationService:
    """Service running the transactional product creation workflow."""

    def __init__(self, store: MongoDBClient):
        """Initialize the workflow.

        Args:
            store: Connected MongoDB client.
        """
        self._store = store

    async def create_product(self, data: Any) -> Product:
        """Validate and create a product.

        Args:
            data: Untrusted product payload (camelCase keys).

        Returns:
            The created product with manufacturer and contact inlined.

        Raises:
            MalformedInputError: If the payload or manufacturerId is invalid.
            ContractViolationError: If the manufacturer fields are misused.
            NotFoundError: If manufacturerId matches no manufacturer.
            ConflictError: If the sku or the new manufacturer's name is taken.
        """
        product_input = validate_product_create(data)
        reference = manufacturer_reference_from_input(product_input)

        document = product_input.model_dump(
            by_alias=True, exclude={"manufacturer", "manufacturer_id"}
        )

        try:
            async with self._store.transaction() as session:
                document["manufacturer"] = await self.resolve_manufacturer(reference, session)
                await self._ensure_sku_available(product_input.sku, session)
                result = await self._store.insert_one(PRODUCTS, document, session=session)
        except OperationFailure as e:
            conflict = conflict_from_write_error(e)
            if conflict is None:
                raise
            logger.warning(f"Product creation for sku {product_input.sku!r} conflicted: {conflict.message}")
            raise conflict from e

        logger.info(f"Created product {result.inserted_id} with sku {product_input.sku!r}")

        created = await fetch_resolved_product(self._store, result.inserted_id)
        if created is None:
            raise NotFoundError(f"Product with id {result.inserted_id} not found")
        return Product.from_document(created)

    async def resolve_manufacturer(self, reference: ManufacturerReference, session: Any) -> ObjectId:
        """Return the id of the manufacturer a new product will reference.

        An inline manufacturer is created after its contact, inside the
        caller's transaction. There is no reuse by name; a taken name fails
        on the unique index.
        """
        if isinstance(reference, ExistingManufacturer):
            existing = await self._store.find_one(
                MANUFACTURERS, {"_id": reference.manufacturer_id}, session=session
            )
            if existing is None:
                raise NotFoundError(
                    f"Manufacturer with id {reference.manufacturer_id} not found",
                    details={"manufacturerId": [str(reference.manufacturer_id)]},
                )
            return reference.manufacturer_id

        data = reference.data
        contact = await self._store.insert_one(CONTACTS, data.contact.model_dump(), session=session)

        manufacturer_document = data.model_dump(exclude={"contact"}, exclude_none=True)
        manufacturer_document["contact"] = contact.inserted_id
        manufacturer = await self._store.insert_one(
            MANUFACTURERS, manufacturer_document, session=session
        )

        logger.info(f"Created manufacturer {manufacturer.inserted_id} ({data.name!r}) with contact {contact.inserted_id}")
        return manufacturer.inserted_id

    async def _ensure_sku_available(self, sku: str, session: Any) -> None:
        existing = await self._store.find_one(PRODUCTS, {"sku": sku}, session=session)
        if existing is not None:
            raise ConflictError(
                f"A product with sku {sku!r} already exists",
                details={"sku": ["duplicate sku"]},
            )

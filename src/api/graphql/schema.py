"""GraphQL schema and resolvers.

Resolvers call the same services as the REST controllers. Service errors
propagate as GraphQL error entries whose extensions carry the error code
and field details; any other failure is masked.
"""

import dataclasses
import logging
from functools import partial
from typing import Any, Dict, List, Optional

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from pydantic.alias_generators import to_camel
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext, Info

from src.api.dependencies import (
    get_manufacturer_service,
    get_product_creation_service,
    get_product_service,
    get_reporting_service,
)
from src.errors import InventoryError
from src.services import (
    ManufacturerService,
    ProductCreationService,
    ProductService,
    ReportingService,
)

from .types import (
    CriticalStockProduct,
    Manufacturer,
    Product,
    ProductInput,
    StockValueByManufacturer,
    UpdateProductInput,
)

logger = logging.getLogger(__name__)


def input_to_payload(value: Any) -> Any:
    """Turn a strawberry input into the camelCase payload the validators expect.

    Fields left UNSET are dropped so partial updates stay partial.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        payload = {}
        for field in dataclasses.fields(value):
            field_value = getattr(value, field.name)
            if field_value is strawberry.UNSET:
                continue
            payload[to_camel(field.name)] = input_to_payload(field_value)
        return payload
    if isinstance(value, list):
        return [input_to_payload(item) for item in value]
    return value


@strawberry.type
class Query:
    @strawberry.field
    async def products(self, info: Info) -> List[Product]:
        products = await info.context["product_service"].list_products()
        return [Product.from_model(product) for product in products]

    @strawberry.field
    async def product(self, info: Info, id: strawberry.ID) -> Product:
        product = await info.context["product_service"].get_product(str(id))
        return Product.from_model(product)

    @strawberry.field
    async def total_stock_value(self, info: Info) -> float:
        return await info.context["reporting_service"].total_stock_value()

    @strawberry.field
    async def total_stock_value_by_manufacturer(self, info: Info) -> List[StockValueByManufacturer]:
        rows = await info.context["reporting_service"].total_stock_value_by_manufacturer()
        return [StockValueByManufacturer.from_model(row) for row in rows]

    @strawberry.field
    async def manufacturers(self, info: Info) -> List[Manufacturer]:
        manufacturers = await info.context["manufacturer_service"].list_manufacturers()
        return [Manufacturer.from_model(manufacturer) for manufacturer in manufacturers]

    @strawberry.field
    async def low_stock_products(self, info: Info, threshold: Optional[int] = None) -> List[Product]:
        products = await info.context["reporting_service"].low_stock_products(threshold)
        return [Product.from_model(product) for product in products]

    @strawberry.field
    async def critical_stock_products(
        self, info: Info, threshold: Optional[int] = None
    ) -> List[CriticalStockProduct]:
        items = await info.context["reporting_service"].critical_stock_products(threshold)
        return [CriticalStockProduct.from_model(item) for item in items]


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def add_product(self, info: Info, input: ProductInput) -> Product:
        product = await info.context["product_creation_service"].create_product(
            input_to_payload(input)
        )
        return Product.from_model(product)

    @strawberry.mutation
    async def update_product(self, info: Info, id: strawberry.ID, input: UpdateProductInput) -> Product:
        product = await info.context["product_service"].update_product(
            str(id), input_to_payload(input)
        )
        return Product.from_model(product)

    @strawberry.mutation
    async def delete_product_by_id(self, info: Info, id: strawberry.ID) -> Product:
        product = await info.context["product_service"].delete_product(str(id))
        return Product.from_model(product)


def _should_mask_error(error: GraphQLError) -> bool:
    # Query syntax and validation errors carry no original error and stay visible
    original = error.original_error
    return original is not None and not isinstance(original, InventoryError)


class InventorySchema(strawberry.Schema):
    """Schema that only logs failures the caller did not cause."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if original is None or isinstance(original, InventoryError):
                continue
            logger.error(f"Unhandled error in GraphQL resolver: {original}", exc_info=original)


schema = InventorySchema(
    query=Query,
    mutation=Mutation,
    extensions=[partial(MaskErrors, should_mask_error=_should_mask_error)],
)


async def get_context(
    product_service: ProductService = Depends(get_product_service),
    product_creation_service: ProductCreationService = Depends(get_product_creation_service),
    reporting_service: ReportingService = Depends(get_reporting_service),
    manufacturer_service: ManufacturerService = Depends(get_manufacturer_service),
) -> Dict[str, Any]:
    return {
        "product_service": product_service,
        "product_creation_service": product_creation_service,
        "reporting_service": reporting_service,
        "manufacturer_service": manufacturer_service,
    }


def create_graphql_router() -> GraphQLRouter:
    """Create the FastAPI router serving the GraphQL endpoint."""
    return GraphQLRouter(schema, context_getter=get_context)

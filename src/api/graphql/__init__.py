"""GraphQL surface over the inventory services."""

from .schema import create_graphql_router, input_to_payload, schema
from .types import (
    Contact,
    CriticalStockProduct,
    Manufacturer,
    Product,
    StockValueByManufacturer,
)

__all__ = [
    "schema",
    "create_graphql_router",
    "input_to_payload",
    "Contact",
    "CriticalStockProduct",
    "Manufacturer",
    "Product",
    "StockValueByManufacturer",
]

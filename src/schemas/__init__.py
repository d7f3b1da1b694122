"""Input validation schemas."""

from src.schemas.manufacturer_schema import ContactInput, ManufacturerInput
from src.schemas.product_schema import ProductCreateInput, ProductUpdateInput
from src.schemas.validation import (
    validate_manufacturer_create,
    validate_product_create,
    validate_product_update,
    validation_errors_to_dict,
)

__all__ = [
    "ContactInput",
    "ManufacturerInput",
    "ProductCreateInput",
    "ProductUpdateInput",
    "validate_manufacturer_create",
    "validate_product_create",
    "validate_product_update",
    "validation_errors_to_dict",
]

"""Validation of untrusted payloads before they reach the services.

Every function here is pure: it either returns a typed model or raises
MalformedInputError carrying one entry per violated field path.
"""

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import MalformedInputError
from .manufacturer_schema import ManufacturerInput
from .product_schema import ProductCreateInput, ProductUpdateInput

GLOBAL_ERROR_KEY = "_global"

ModelT = TypeVar("ModelT", bound=BaseModel)


def validation_errors_to_dict(error: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic issues by dotted field path.

    Issues that are not tied to a field (e.g. the payload is not an object)
    are collected under ``_global``.
    """
    out: Dict[str, List[str]] = {}
    for issue in error.errors():
        key = ".".join(str(part) for part in issue["loc"]) or GLOBAL_ERROR_KEY
        out.setdefault(key, []).append(issue["msg"])
    return out


def _validate(model: Type[ModelT], data: Any, what: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedInputError(
            f"Invalid {what} input", errors=validation_errors_to_dict(e)
        ) from e


def validate_product_create(data: Any) -> ProductCreateInput:
    return _validate(ProductCreateInput, data, "product")


def validate_product_update(data: Any) -> ProductUpdateInput:
    return _validate(ProductUpdateInput, data, "product update")


def validate_manufacturer_create(data: Any) -> ManufacturerInput:
    return _validate(ManufacturerInput, data, "manufacturer")

"""Input schemas for creating and updating products."""

from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field, field_validator

from .manufacturer_schema import InputModel, ManufacturerInput, RequiredText

ProductName = Annotated[str, Field(min_length=2)]
Sku = Annotated[str, Field(min_length=2)]
Price = Annotated[float, Field(gt=0, strict=True)]


def _reject_non_numeric(value: Any) -> Any:
    # Lax int coercion accepts 5.0 but would also accept "5" and True
    if isinstance(value, (str, bool)):
        raise ValueError("must be a number")
    return value


AmountInStock = Annotated[int, BeforeValidator(_reject_non_numeric), Field(ge=0)]


class ProductCreateInput(InputModel):
    """Payload for creating a product.

    Exactly one of ``manufacturer_id`` and ``manufacturer`` has to be set; that
    rule is enforced by the creation workflow, not here.
    """

    name: ProductName
    sku: Sku
    description: RequiredText
    price: Price
    category: RequiredText
    amount_in_stock: AmountInStock
    manufacturer_id: Optional[str] = None
    manufacturer: Optional[ManufacturerInput] = None


class ProductUpdateInput(InputModel):
    """Partial product payload; only the supplied fields are validated."""

    name: Optional[ProductName] = None
    sku: Optional[Sku] = None
    description: Optional[RequiredText] = None
    price: Optional[Price] = None
    category: Optional[RequiredText] = None
    amount_in_stock: Optional[AmountInStock] = None
    manufacturer_id: Optional[str] = None
    manufacturer: Optional[ManufacturerInput] = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value

"""GraphQL object and input types."""

from typing import Optional

import strawberry

from src import models


@strawberry.type
class Contact:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    email: str
    phone: str

    @classmethod
    def from_model(cls, contact: models.Contact) -> "Contact":
        return cls(id=strawberry.ID(contact.id), name=contact.name, email=contact.email, phone=contact.phone)


@strawberry.type
class Manufacturer:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    country: str
    website: str
    description: Optional[str]
    address: Optional[str]
    contact: Optional[Contact]

    @classmethod
    def from_model(cls, manufacturer: models.Manufacturer) -> "Manufacturer":
        return cls(
            id=strawberry.ID(manufacturer.id),
            name=manufacturer.name,
            country=manufacturer.country,
            website=manufacturer.website,
            description=manufacturer.description,
            address=manufacturer.address,
            contact=Contact.from_model(manufacturer.contact) if manufacturer.contact else None,
        )


@strawberry.type
class Product:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    sku: str
    description: str
    price: float
    category: str
    amount_in_stock: int
    manufacturer: Manufacturer

    @classmethod
    def from_model(cls, product: models.Product) -> "Product":
        return cls(
            id=strawberry.ID(product.id),
            name=product.name,
            sku=product.sku,
            description=product.description,
            price=product.price,
            category=product.category,
            amount_in_stock=product.amount_in_stock,
            manufacturer=Manufacturer.from_model(product.manufacturer),
        )


@strawberry.type
class StockValueByManufacturer:
    id: strawberry.ID = strawberry.field(name="_id")
    manufacturer: Manufacturer
    total_stock_value: float

    @classmethod
    def from_model(cls, row: models.ManufacturerStockValue) -> "StockValueByManufacturer":
        return cls(
            id=strawberry.ID(row.manufacturer.id),
            manufacturer=Manufacturer.from_model(row.manufacturer),
            total_stock_value=row.total_stock_value,
        )


@strawberry.type
class CriticalStockProduct:
    product_name: str
    manufacturer_name: str
    contact_name: Optional[str]
    contact_phone: Optional[str]
    contact_email: Optional[str]

    @classmethod
    def from_model(cls, item: models.CriticalStockItem) -> "CriticalStockProduct":
        return cls(
            product_name=item.product_name,
            manufacturer_name=item.manufacturer_name,
            contact_name=item.contact_name,
            contact_phone=item.contact_phone,
            contact_email=item.contact_email,
        )


@strawberry.input
class ContactInput:
    name: str
    email: str
    phone: str


@strawberry.input
class ManufacturerInput:
    name: str
    country: str
    website: str
    contact: ContactInput
    description: Optional[str] = strawberry.UNSET
    address: Optional[str] = strawberry.UNSET


@strawberry.input
class ProductInput:
    name: str
    sku: str
    description: str
    price: float
    category: str
    amount_in_stock: int
    manufacturer: Optional[ManufacturerInput] = strawberry.UNSET
    manufacturer_id: Optional[strawberry.ID] = strawberry.UNSET


@strawberry.input
class UpdateProductInput:
    name: Optional[str] = strawberry.UNSET
    sku: Optional[str] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    price: Optional[float] = strawberry.UNSET
    category: Optional[str] = strawberry.UNSET
    amount_in_stock: Optional[int] = strawberry.UNSET
    manufacturer: Optional[ManufacturerInput] = strawberry.UNSET
    manufacturer_id: Optional[strawberry.ID] = strawberry.UNSET

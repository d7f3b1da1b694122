"""Product model for database representation."""

from dataclasses import dataclass
from typing import Any, Dict

from .manufacturer import Manufacturer


@dataclass(frozen=True)
class Product:
    """Product record with its manufacturer (and contact) inlined."""

    id: str
    name: str
    sku: str
    description: str
    price: float
    category: str
    amount_in_stock: int
    manufacturer: Manufacturer

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Product":
        """Build from a product document joined with its manufacturer."""
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            sku=document["sku"],
            description=document["description"],
            price=float(document["price"]),
            category=document["category"],
            amount_in_stock=int(document["amountInStock"]),
            manufacturer=Manufacturer.from_document(document["manufacturer"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "name": self.name,
            "sku": self.sku,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "amountInStock": self.amount_in_stock,
            "manufacturer": self.manufacturer.to_dict(),
        }

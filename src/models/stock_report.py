"""Read models produced by the stock reporting queries."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .manufacturer import Manufacturer


@dataclass(frozen=True)
class ManufacturerStockValue:
    """Summed stock value of every product made by one manufacturer."""

    manufacturer: Manufacturer
    total_stock_value: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "manufacturer": self.manufacturer.to_dict(),
            "totalStockValue": self.total_stock_value,
        }


@dataclass(frozen=True)
class CriticalStockItem:
    """Who to call to reorder a product that is nearly out of stock.

    Carries no ids, sku or price.
    """

    product_name: str
    manufacturer_name: str
    contact_name: Optional[str]
    contact_phone: Optional[str]
    contact_email: Optional[str]

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "CriticalStockItem":
        return cls(
            product_name=document["productName"],
            manufacturer_name=document["manufacturerName"],
            contact_name=document.get("contactName"),
            contact_phone=document.get("contactPhone"),
            contact_email=document.get("contactEmail"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productName": self.product_name,
            "manufacturerName": self.manufacturer_name,
            "contactName": self.contact_name,
            "contactPhone": self.contact_phone,
            "contactEmail": self.contact_email,
        }

"""Data models module."""

from src.models.contact import Contact
from src.models.manufacturer import Manufacturer
from src.models.product import Product
from src.models.stock_report import CriticalStockItem, ManufacturerStockValue

__all__ = [
    "Contact",
    "Manufacturer",
    "Product",
    "CriticalStockItem",
    "ManufacturerStockValue",
]

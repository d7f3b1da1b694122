"""Inventory services shared by the REST and GraphQL surfaces."""

from src.services.manufacturer_service import ManufacturerService
from src.services.product_creation import (
    ExistingManufacturer,
    ManufacturerReference,
    NewManufacturer,
    ProductCreationService,
    manufacturer_reference_from_input,
)
from src.services.product_service import ProductFilters, ProductService
from src.services.reporting_service import ReportingService

__all__ = [
    "ExistingManufacturer",
    "ManufacturerReference",
    "ManufacturerService",
    "NewManufacturer",
    "ProductCreationService",
    "ProductFilters",
    "ProductService",
    "ReportingService",
    "manufacturer_reference_from_input",
]

"""REST controller for products and stock reports."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from src.api.dependencies import (
    get_product_creation_service,
    get_product_service,
    get_reporting_service,
)
from src.services import ProductCreationService, ProductFilters, ProductService, ReportingService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
async def get_all_products(
    category: Optional[str] = Query(None),
    price_min: Optional[float] = Query(None, alias="priceMin"),
    price_max: Optional[float] = Query(None, alias="priceMax"),
    search: Optional[str] = Query(None),
    manufacturer_id: Optional[str] = Query(None, alias="manufacturerId"),
    sort: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    service: ProductService = Depends(get_product_service),
) -> list:
    """List products; filters are combined with AND."""
    filters = ProductFilters(
        category=category,
        price_min=price_min,
        price_max=price_max,
        search=search,
        manufacturer_id=manufacturer_id,
        sort=sort,
        limit=limit,
    )
    products = await service.list_products(filters)
    return [product.to_dict() for product in products]


# Report routes are registered before /{product_id} so they are not captured by it
@router.get("/total-stock-value")
async def get_total_stock_value(
    service: ReportingService = Depends(get_reporting_service),
) -> float:
    return await service.total_stock_value()


@router.get("/total-stock-value-by-manufacturer")
async def get_total_stock_value_by_manufacturer(
    service: ReportingService = Depends(get_reporting_service),
) -> list:
    rows = await service.total_stock_value_by_manufacturer()
    return [row.to_dict() for row in rows]


@router.get("/low-stock")
async def get_low_stock_products(
    threshold: Optional[int] = Query(None, ge=0),
    service: ReportingService = Depends(get_reporting_service),
) -> list:
    products = await service.low_stock_products(threshold)
    return [product.to_dict() for product in products]


@router.get("/critical-stock")
async def get_critical_stock_products(
    threshold: Optional[int] = Query(None, ge=0),
    service: ReportingService = Depends(get_reporting_service),
) -> list:
    items = await service.critical_stock_products(threshold)
    return [item.to_dict() for item in items]


@router.get("/{product_id}")
async def get_product_by_id(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict:
    product = await service.get_product(product_id)
    return product.to_dict()


@router.post("", status_code=201)
async def create_product(
    payload: Any = Body(...),
    service: ProductCreationService = Depends(get_product_creation_service),
) -> dict:
    """
    Create a product.

    The payload carries either ``manufacturerId`` (existing manufacturer) or
    ``manufacturer`` (new manufacturer with contact), never both.
    """
    product = await service.create_product(payload)
    return product.to_dict()


@router.put("/{product_id}")
async def update_product_by_id(
    product_id: str,
    payload: Any = Body(...),
    service: ProductService = Depends(get_product_service),
) -> dict:
    product = await service.update_product(product_id, payload)
    return product.to_dict()


@router.delete("/{product_id}")
async def delete_product_by_id(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict:
    product = await service.delete_product(product_id)
    return product.to_dict()
